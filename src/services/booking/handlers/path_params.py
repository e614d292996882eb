from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent

from services.booking.domain import BookingId
from services.pricing.domain import ResourceType
from services.shared.domain.exception import ResourceNotFoundException, ValidationException


def resource_type_from(event: APIGatewayProxyEvent) -> ResourceType:
    """パスパラメータ resource_type を解決する（未知の種別は 404）"""
    value = (event.path_parameters or {}).get("resource_type", "")
    try:
        return ResourceType(value.replace("-", "_"))
    except ValueError:
        raise ResourceNotFoundException(f"Unknown booking type: {value}") from None


def booking_id_from(event: APIGatewayProxyEvent) -> BookingId:
    value = (event.path_parameters or {}).get("booking_id")
    try:
        return BookingId(value=value or "")
    except ValueError:
        raise ValidationException("booking_id is required", field="booking_id") from None


def json_body(event: APIGatewayProxyEvent) -> dict:
    """リクエストボディを辞書として取り出す（空なら空辞書）"""
    if not event.body:
        return {}
    try:
        body = event.json_body
    except ValueError as e:
        raise ValidationException(f"Request body is not valid JSON: {e}") from e
    if not isinstance(body, dict):
        raise ValidationException("Request body must be a JSON object")
    return body
