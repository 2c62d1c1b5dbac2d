from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from .database import Base, HOUSEHOLD_ID


class FridgeLayout(Base):
    """Adega física (shelves × columns, duas profundidades por célula)"""
    __tablename__ = "fridge_layouts"

    id = Column(Integer, primary_key=True, index=True)
    household_id = Column(String, nullable=False, default=HOUSEHOLD_ID, index=True)
    name = Column(String, nullable=False)
    shelves = Column(Integer, nullable=False)  # 6..14
    columns = Column(Integer, nullable=False)  # 5..10
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    slots = relationship("CellarSlot", back_populates="fridge", cascade="all, delete-orphan")
