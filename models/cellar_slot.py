from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from services.codecs import Depth, SlotAddress, format_address
from .database import Base, HOUSEHOLD_ID


class CellarSlot(Base):
    """Alocação de um vinho a um endereço (shelf, column, depth) de uma adega"""
    __tablename__ = "cellar_slots"

    id = Column(Integer, primary_key=True, index=True)
    household_id = Column(String, nullable=False, default=HOUSEHOLD_ID, index=True)
    wine_id = Column(Integer, ForeignKey("wines.id"), nullable=False)
    fridge_id = Column(Integer, ForeignKey("fridge_layouts.id"), nullable=False, index=True)
    shelf = Column(Integer, nullable=False)
    column_position = Column(Integer, nullable=False)
    depth = Column(SQLEnum(Depth), nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    fridge = relationship("FridgeLayout", back_populates="slots")
    wine = relationship("Wine", back_populates="slot")

    __table_args__ = (
        UniqueConstraint("wine_id", name="uq_cellar_slot_wine"),
        UniqueConstraint(
            "fridge_id", "shelf", "column_position", "depth",
            name="uq_cellar_slot_position"
        ),
    )

    @property
    def address(self) -> SlotAddress:
        return SlotAddress(self.shelf, self.column_position, self.depth)

    @property
    def human_code(self) -> str:
        return format_address(self.shelf, self.column_position, self.depth)
