from __future__ import annotations

import secrets
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class TransactionReference:
    """決済の取引参照番号

    高分解能タイムスタンプ + 乱数サフィックスで生成する。
    連番にはしない（推測されないように）。
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value or len(self.value.strip()) == 0:
            raise ValueError("Transaction reference cannot be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> TransactionReference:
        return cls(value=f"TXN{time.time_ns()}{secrets.token_hex(6).upper()}")
