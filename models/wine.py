from sqlalchemy import Column, Integer, String, Float, Boolean, Date, DateTime, Text, JSON, Enum as SQLEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from .database import Base, HOUSEHOLD_ID
import enum


class WineStatus(str, enum.Enum):
    CELLARED = "Cellared"
    DRUNK = "Drunk"


class BottleSize(str, enum.Enum):
    SMALL_375ML = "375ml"
    MEDIUM_500ML = "500ml"
    STANDARD_750ML = "750ml"
    MAGNUM_1_5L = "1.5L"
    DOUBLE_MAGNUM_3L = "3L"
    OTHER = "Other"


class Wine(Base):
    """Garrafas registradas pelo household"""
    __tablename__ = "wines"

    id = Column(Integer, primary_key=True, index=True)
    household_id = Column(String, nullable=False, default=HOUSEHOLD_ID, index=True)
    producer = Column(String, nullable=False, index=True)
    wine_name = Column(String, nullable=True)
    vintage = Column(Integer, nullable=True)
    region = Column(String, nullable=True)
    country_code = Column(String(2), nullable=True)
    bottle_size = Column(SQLEnum(BottleSize), default=BottleSize.STANDARD_750ML, nullable=False)
    status = Column(SQLEnum(WineStatus), default=WineStatus.CELLARED, nullable=False, index=True)
    drank_on = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)

    score_wine_spectator = Column(Float, nullable=True)
    score_james_suckling = Column(Float, nullable=True)
    drink_window_from = Column(Integer, nullable=True)
    drink_window_to = Column(Integer, nullable=True)
    drink_now = Column(Boolean, nullable=True)

    # Sugestões de IA pendentes (tasting_notes, drink_window, critic_scores)
    ai_enrichment = Column(JSON, nullable=True)
    ai_confidence = Column(Float, nullable=True)
    ai_last_error = Column(String, nullable=True)

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now(), nullable=False)

    slot = relationship("CellarSlot", back_populates="wine", uselist=False, cascade="all, delete-orphan")
