from __future__ import annotations

from pydantic import BaseModel

from services.payment.domain import PaymentMethodSpec


class PaymentMethodData(BaseModel):
    """支払い方法のレスポンスモデル"""

    method: str
    display_name: str
    description: str
    required_fields: list[str]
    resulting_status: str


class SuccessResponse(BaseModel):
    """成功レスポンスモデル"""

    status: str = "success"
    data: list[PaymentMethodData]


def to_response(methods: list[PaymentMethodSpec]) -> dict:
    """支払い方法の一覧をレスポンス辞書に変換する（定義順を保つ）"""
    return SuccessResponse(
        data=[
            PaymentMethodData(
                method=spec.method.value,
                display_name=spec.display_name,
                description=spec.description,
                required_fields=sorted(spec.required_fields),
                resulting_status=spec.resulting_status.value,
            )
            for spec in methods
        ]
    ).model_dump()
