from abc import ABC, abstractmethod

from services.payment.domain.value_object import SettlementOutcome


class SettlementLedger(ABC):
    """冪等キーごとの決済結果の台帳

    予約の保存に失敗しても決済結果は残るため、同じキーでの再送は
    決済をやり直さずに記録済みの結果から予約を作成できる。
    """

    @abstractmethod
    def find(self, idempotency_key: str) -> SettlementOutcome | None:
        raise NotImplementedError

    @abstractmethod
    def record(self, idempotency_key: str, outcome: SettlementOutcome) -> None:
        """決済結果を記録する（同じキーが記録済みなら DuplicateResourceException）"""
        raise NotImplementedError
