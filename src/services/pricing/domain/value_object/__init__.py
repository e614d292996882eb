from .cart import CartLine, RoomServiceCart
from .catalog_entry import CatalogEntry
from .stay_period import StayPeriod

__all__ = ["CartLine", "CatalogEntry", "RoomServiceCart", "StayPeriod"]
