from .enum import PaymentMethod as PaymentMethod
from .enum import PaymentStatus as PaymentStatus
from .gateway import PaymentGateway as PaymentGateway
from .registry import PaymentMethodRegistry as PaymentMethodRegistry
from .registry import PaymentMethodSpec as PaymentMethodSpec
from .repository import SettlementLedger as SettlementLedger
from .value_object import PaymentDetails as PaymentDetails
from .value_object import SettlementOutcome as SettlementOutcome
from .value_object import SubmissionContext as SubmissionContext
from .value_object import TransactionReference as TransactionReference
