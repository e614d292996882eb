from .acting_context import ActingContext, ActorRole
from .clock import hotel_today
from .http_response import api_response, error_response
from .validators import to_decimal

__all__ = [
    "ActingContext",
    "ActorRole",
    "api_response",
    "error_response",
    "hotel_today",
    "to_decimal",
]
