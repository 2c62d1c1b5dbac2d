from .database import Base, get_db, engine, HOUSEHOLD_ID
from .fridge_layout import FridgeLayout
from .wine import Wine, WineStatus, BottleSize
from .cellar_slot import CellarSlot
from .movement import SlotMovement, MovementType

__all__ = [
    "Base", "get_db", "engine", "HOUSEHOLD_ID",
    "FridgeLayout", "Wine", "WineStatus", "BottleSize",
    "CellarSlot", "SlotMovement", "MovementType",
]
