from sqlalchemy import Column, Integer, String, DateTime, JSON, Enum as SQLEnum
from sqlalchemy.sql import func
from .database import Base
import enum


class MovementType(str, enum.Enum):
    PLACE = "PLACE"
    MOVE = "MOVE"
    REMOVE = "REMOVE"


class SlotMovement(Base):
    """Auditoria de movimentos de garrafas entre slots"""
    __tablename__ = "slot_movements"

    id = Column(Integer, primary_key=True, index=True)
    # Sem FK: o histórico sobrevive à exclusão do vinho ou da adega
    wine_id = Column(Integer, nullable=False, index=True)
    from_fridge_id = Column(Integer, nullable=True)
    from_code = Column(String, nullable=True)  # "S2·C3·Front"
    to_fridge_id = Column(Integer, nullable=True)
    to_code = Column(String, nullable=True)
    type = Column(SQLEnum(MovementType), nullable=False)
    ts = Column(DateTime, server_default=func.now(), nullable=False)
    meta_json = Column(JSON, nullable=True)
