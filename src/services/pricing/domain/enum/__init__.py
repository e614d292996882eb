from .resource_type import ResourceType
from .unit_basis import UnitBasis

__all__ = ["ResourceType", "UnitBasis"]
