from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from services.booking.applications.build_draft import BuildDraftService
from services.booking.applications.create_booking import CreateBookingService
from services.booking.applications.submit_booking import SubmitBookingService
from services.booking.applications.submit_inquiry import SubmitInquiryService
from services.booking.domain import Booking, BookingFactory
from services.booking.handlers.errors import domain_error_response, request_error_response
from services.booking.handlers.path_params import json_body, resource_type_from
from services.booking.handlers.request_models import CreateBookingRequest
from services.booking.handlers.response_models import to_response
from services.booking.infrastructure.dynamodb_booking_repository import (
    DynamoDBBookingRepository,
)
from services.payment.applications.settle_payment import SettlePaymentService
from services.payment.infrastructure.dynamodb_settlement_ledger import (
    DynamoDBSettlementLedger,
)
from services.payment.infrastructure.simulated_payment_gateway import (
    SimulatedPaymentGateway,
)
from services.pricing.infrastructure.dynamodb_catalog_repository import (
    DynamoDBCatalogRepository,
)
from services.shared.domain.exception import DomainException, MissingFieldException
from services.shared.utils import api_response

logger = Logger()

repository = DynamoDBBookingRepository()
factory = BookingFactory()
draft_builder = BuildDraftService(catalog=DynamoDBCatalogRepository())
submit_service = SubmitBookingService(
    settlement=SettlePaymentService(gateway=SimulatedPaymentGateway()),
    creator=CreateBookingService(repository=repository, factory=factory),
    ledger=DynamoDBSettlementLedger(),
)
inquiry_service = SubmitInquiryService(repository=repository, factory=factory)


def _log_events(booking: Booking) -> None:
    for domain_event in booking.flush_domain_events():
        logger.info(
            "Domain event",
            extra={"event_type": type(domain_event).__name__, "booking_id": str(booking.id)},
        )


@logger.inject_lambda_context(clear_state=True)
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """予約申込み Lambda Handler（POST /bookings/{resource_type}）"""
    try:
        resource_type = resource_type_from(event)
        logger.append_keys(resource_type=resource_type.value)
        request = CreateBookingRequest.model_validate(json_body(event))

        draft = draft_builder.build(resource_type, request.to_details())
        if draft.requires_payment:
            if request.payment is None:
                raise MissingFieldException("payment")
            logger.info(
                "Submitting booking",
                extra={"payment_method": request.payment.method.value},
            )
            booking = submit_service.submit(
                draft, request.payment.to_details(), idempotency_key=request.request_id
            )
        else:
            logger.info("Submitting inquiry")
            booking = inquiry_service.submit(draft, request.request_id)
    except ValidationError as e:
        return request_error_response(e)
    except DomainException as e:
        return domain_error_response(e)
    except Exception:
        logger.exception("Failed to create booking")
        return api_response(500, {"message": "Internal server error"})

    _log_events(booking)
    logger.info(
        "Booking created",
        extra={"booking_id": str(booking.id), "status": booking.status.value},
    )
    return api_response(201, to_response(booking))
