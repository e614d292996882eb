from .calculator import PricingCalculator
from .enum import ResourceType, UnitBasis
from .repository import CatalogRepository
from .resource_rules import RESOURCE_RULES, ResourceRules, rules_for
from .value_object import CartLine, CatalogEntry, RoomServiceCart, StayPeriod

__all__ = [
    "CartLine",
    "CatalogEntry",
    "CatalogRepository",
    "PricingCalculator",
    "RESOURCE_RULES",
    "ResourceRules",
    "ResourceType",
    "RoomServiceCart",
    "StayPeriod",
    "UnitBasis",
    "rules_for",
]
