import json

from services.shared.domain.exception import ValidationException


def api_response(status_code: int, body: dict) -> dict:
    """API Gateway Lambda Proxy Integration のレスポンス形式を生成する"""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def error_response(status_code: int, error: str, exc: Exception | str) -> dict:
    """エラーレスポンスを生成する（検証エラーは項目名を含める）"""
    body: dict = {"status": "error", "error": error, "message": str(exc)}
    if isinstance(exc, ValidationException) and exc.field is not None:
        body["field"] = exc.field
    return api_response(status_code, body)
