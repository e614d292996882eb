from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities.data_classes import (
    APIGatewayProxyEvent,
    event_source,
)
from aws_lambda_powertools.utilities.typing import LambdaContext

from services.payment.domain import PaymentMethodRegistry
from services.payment.handlers.response_models import to_response
from services.shared.utils import api_response

logger = Logger()

registry = PaymentMethodRegistry()


@logger.inject_lambda_context
@event_source(data_class=APIGatewayProxyEvent)
def lambda_handler(event: APIGatewayProxyEvent, context: LambdaContext) -> dict:
    """支払い方法一覧 Lambda Handler（GET /payment-methods）"""
    methods = registry.methods_for()
    logger.info("Listing payment methods", extra={"count": len(methods)})
    return api_response(200, to_response(methods))
