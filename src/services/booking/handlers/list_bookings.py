from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.booking.applications.list_bookings import ListBookingsService
from services.booking.domain import BookingStatus
from services.booking.handlers.errors import domain_error_response
from services.booking.handlers.path_params import resource_type_from
from services.booking.handlers.response_models import to_list_response
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.shared.domain.exception import DomainException, ValidationException
from services.shared.utils import ActingContext, api_response, error_response

logger = Logger()

service = ListBookingsService(repository=DynamoDBBookingRepository())


def _status_from(value: str | None) -> BookingStatus | None:
    if not value:
        return None
    try:
        return BookingStatus(value)
    except ValueError:
        raise ValidationException(f"Unknown status: {value}", field="status") from None


@logger.inject_lambda_context(clear_state=True)
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約一覧取得 Lambda Handler（GET /bookings/{resource_type}）

    - contactEmail 指定: ゲストの予約一覧
    - 指定なし: スタッフの管理画面（スタッフのみ）
    """
    params = event.query_string_parameters or {}
    acting = ActingContext.from_authorizer(
        event.raw_event.get("requestContext", {}).get("authorizer")
    )

    try:
        resource_type = resource_type_from(event)
        status = _status_from(params.get("status"))
        email = params.get("contactEmail")

        if email:
            logger.info("Listing bookings by contact", extra={"resource_type": resource_type.value})
            bookings = service.by_contact(email, resource_type, status)
        elif acting.is_staff:
            logger.info("Listing bookings by type", extra={"resource_type": resource_type.value})
            bookings = service.by_filter(resource_type, status)
        else:
            return error_response(403, "Forbidden", "contactEmail is required")
    except DomainException as e:
        return domain_error_response(e)
    except Exception:
        logger.exception("Failed to list bookings")
        return api_response(500, {"message": "Internal server error"})

    return api_response(200, to_list_response(bookings))
