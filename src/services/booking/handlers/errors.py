from aws_lambda_powertools import Logger
from pydantic import ValidationError

from services.shared.domain.exception import (
    BusinessRuleViolationException,
    DomainException,
    DraftIncompleteException,
    InfrastructureException,
    InvalidRangeException,
    InvalidTransitionException,
    MissingFieldException,
    OptimisticLockException,
    PaymentDeclinedException,
    ResourceNotFoundException,
    SettlementCancelledException,
    SettlementTimeoutException,
    ValidationException,
)
from services.shared.utils import error_response

logger = Logger(child=True)

# 具体的な例外から順に照合する
_ERROR_MAPPING: tuple[tuple[type[DomainException], int, str], ...] = (
    (MissingFieldException, 400, "MissingField"),
    (InvalidRangeException, 400, "InvalidRange"),
    (DraftIncompleteException, 400, "DraftIncomplete"),
    (ValidationException, 400, "ValidationError"),
    (ResourceNotFoundException, 404, "NotFound"),
    (OptimisticLockException, 409, "Conflict"),
    (SettlementCancelledException, 409, "SubmissionCancelled"),
    (PaymentDeclinedException, 402, "PaymentDeclined"),
    (InvalidTransitionException, 422, "InvalidTransition"),
    (BusinessRuleViolationException, 422, "BusinessRuleViolation"),
    (SettlementTimeoutException, 502, "SettlementTimeout"),
    (InfrastructureException, 502, "InfrastructureError"),
)


def domain_error_response(exc: DomainException) -> dict:
    """ドメイン例外を HTTP エラーレスポンスに変換する"""
    for exc_type, status_code, error in _ERROR_MAPPING:
        if isinstance(exc, exc_type):
            break
    else:
        status_code, error = 500, "InternalError"

    if status_code >= 500:
        logger.exception("Booking request failed", extra={"error": error})
    else:
        logger.info(
            "Booking request rejected",
            extra={"error": error, "reason": str(exc)},
        )
    return error_response(status_code, error, exc)


def request_error_response(exc: ValidationError) -> dict:
    """リクエストボディの検証エラーを 400 に変換する（先頭の項目名を返す）"""
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = [str(part) for part in first.get("loc", ())]
    field = ".".join(location) or None
    logger.info("Invalid request body", extra={"errors": errors})
    return error_response(
        400,
        "ValidationError",
        ValidationException(first.get("msg", "Invalid request"), field=field),
    )
