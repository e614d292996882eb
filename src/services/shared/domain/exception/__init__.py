from .exceptions import (
    BusinessRuleViolationException,
    DomainException,
    DraftIncompleteException,
    DuplicateResourceException,
    InfrastructureException,
    InvalidRangeException,
    InvalidTransitionException,
    MissingFieldException,
    OptimisticLockException,
    PaymentDeclinedException,
    PersistenceException,
    ResourceNotFoundException,
    SettlementCancelledException,
    SettlementTimeoutException,
    ValidationException,
)

__all__ = [
    "BusinessRuleViolationException",
    "DomainException",
    "DraftIncompleteException",
    "DuplicateResourceException",
    "InfrastructureException",
    "InvalidRangeException",
    "InvalidTransitionException",
    "MissingFieldException",
    "OptimisticLockException",
    "PaymentDeclinedException",
    "PersistenceException",
    "ResourceNotFoundException",
    "SettlementCancelledException",
    "SettlementTimeoutException",
    "ValidationException",
]
