import threading
from abc import ABC, abstractmethod

from services.payment.domain.value_object import PaymentDetails, TransactionReference
from services.shared.domain import Money


class PaymentGateway(ABC):
    """決済レールのインターフェース

    シミュレーターと実決済ゲートウェイのアダプターが同じ契約を実装する。
    実ゲートウェイは拒否時に PaymentDeclinedException を送出すること。
    """

    @abstractmethod
    def authorize(
        self,
        amount: Money,
        details: PaymentDetails,
        cancel_event: threading.Event,
    ) -> TransactionReference:
        """オーソリを行い取引参照番号を返す

        cancel_event がセットされたら結果を確定させずに
        SettlementCancelledException を送出する。
        """
        raise NotImplementedError
