from .payment_details import PaymentDetails
from .settlement_outcome import SettlementOutcome
from .submission_context import SubmissionContext
from .transaction_reference import TransactionReference

__all__ = [
    "PaymentDetails",
    "SettlementOutcome",
    "SubmissionContext",
    "TransactionReference",
]
