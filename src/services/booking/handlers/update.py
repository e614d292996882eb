from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from services.booking.applications.update_booking import BookingChanges, UpdateBookingService
from services.booking.handlers.errors import domain_error_response, request_error_response
from services.booking.handlers.path_params import (
    booking_id_from,
    json_body,
    resource_type_from,
)
from services.booking.handlers.request_models import UpdateBookingRequest
from services.booking.handlers.response_models import to_response
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.shared.domain import Money
from services.shared.domain.exception import DomainException
from services.shared.utils import ActingContext, api_response, error_response

logger = Logger()

repository = DynamoDBBookingRepository()
update_service = UpdateBookingService(repository=repository)


@logger.inject_lambda_context(clear_state=True)
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約更新 Lambda Handler（PATCH /bookings/{resource_type}/{booking_id}）

    スタッフのみ。指定された変更はすべて適用されるか、何も適用されないかのどちらか。
    """
    acting = ActingContext.from_authorizer(
        event.raw_event.get("requestContext", {}).get("authorizer")
    )
    if not acting.is_staff:
        logger.info("Rejected booking update from non-staff", extra={"actor": acting.actor})
        return error_response(403, "Forbidden", "Only staff can update bookings")

    try:
        resource_type = resource_type_from(event)
        booking_id = booking_id_from(event)
        logger.append_keys(resource_type=resource_type.value, booking_id=str(booking_id))
        request = UpdateBookingRequest.model_validate(json_body(event))

        changes = BookingChanges(
            status=request.status,
            record_payment=request.payment_status is not None,
            total_amount=(
                Money.etb(request.total_amount)
                if request.total_amount is not None
                else None
            ),
        )
        booking = update_service.apply(resource_type, booking_id, changes, acting)
    except ValidationError as e:
        return request_error_response(e)
    except DomainException as e:
        return domain_error_response(e)
    except Exception:
        logger.exception("Failed to update booking")
        return api_response(500, {"message": "Internal server error"})

    logger.info(
        "Booking updated",
        extra={
            "status": booking.status.value,
            "payment_status": booking.payment_status.value,
            "version": booking.version,
            "actor": acting.actor,
        },
    )
    return api_response(200, to_response(booking))
