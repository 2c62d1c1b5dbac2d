from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from datetime import date, datetime
from typing import Any, Dict, List, Optional
from models.wine import WineStatus, BottleSize


def _check_vintage(value: Optional[int]) -> Optional[int]:
    if value is None:
        return value
    max_year = date.today().year + 10
    if value < 1800 or value > max_year:
        raise ValueError(f"vintage deve estar entre 1800 e {max_year}")
    return value


def _check_drink_window(data):
    start = data.drink_window_from
    end = data.drink_window_to
    if start is not None and end is not None and start > end:
        raise ValueError("drink_window_from deve ser <= drink_window_to")
    return data


class WineCreate(BaseModel):
    """Request para cadastrar vinho"""
    producer: str = Field(..., min_length=1, max_length=200)
    wine_name: Optional[str] = Field(None, max_length=200)
    vintage: Optional[int] = None
    region: Optional[str] = Field(None, max_length=200)
    country_code: Optional[str] = Field(None, min_length=2, max_length=2)
    bottle_size: BottleSize = BottleSize.STANDARD_750ML
    status: WineStatus = WineStatus.CELLARED
    notes: Optional[str] = None
    score_wine_spectator: Optional[float] = Field(None, ge=0, le=100)
    score_james_suckling: Optional[float] = Field(None, ge=0, le=100)
    drink_window_from: Optional[int] = Field(None, ge=1800)
    drink_window_to: Optional[int] = Field(None, ge=1800)
    drink_now: Optional[bool] = None

    @field_validator("vintage")
    @classmethod
    def check_vintage_range(cls, value: Optional[int]) -> Optional[int]:
        return _check_vintage(value)

    @field_validator("producer")
    @classmethod
    def strip_producer(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("producer não pode ser vazio")
        return value

    @model_validator(mode="after")
    def check_drink_window(self):
        return _check_drink_window(self)


class WineUpdate(BaseModel):
    """Patch parcial: somente campos enviados são alterados"""
    producer: Optional[str] = Field(None, min_length=1, max_length=200)
    wine_name: Optional[str] = Field(None, max_length=200)
    vintage: Optional[int] = None
    region: Optional[str] = Field(None, max_length=200)
    country_code: Optional[str] = Field(None, min_length=2, max_length=2)
    bottle_size: Optional[BottleSize] = None
    status: Optional[WineStatus] = None
    drank_on: Optional[date] = None
    notes: Optional[str] = None
    score_wine_spectator: Optional[float] = Field(None, ge=0, le=100)
    score_james_suckling: Optional[float] = Field(None, ge=0, le=100)
    drink_window_from: Optional[int] = Field(None, ge=1800)
    drink_window_to: Optional[int] = Field(None, ge=1800)
    drink_now: Optional[bool] = None

    @field_validator("vintage")
    @classmethod
    def check_vintage_range(cls, value: Optional[int]) -> Optional[int]:
        return _check_vintage(value)

    # Colunas NOT NULL: podem ser omitidas no patch, mas não enviadas como null
    @field_validator("producer", "status", "bottle_size")
    @classmethod
    def reject_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} não pode ser null")
        if info.field_name == "producer":
            value = value.strip()
            if not value:
                raise ValueError("producer não pode ser vazio")
        return value

    @model_validator(mode="after")
    def check_drink_window(self):
        return _check_drink_window(self)


class WineResponse(BaseModel):
    """Response de um vinho"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    producer: str
    wine_name: Optional[str] = None
    vintage: Optional[int] = None
    region: Optional[str] = None
    country_code: Optional[str] = None
    bottle_size: BottleSize
    status: WineStatus
    drank_on: Optional[date] = None
    notes: Optional[str] = None
    score_wine_spectator: Optional[float] = None
    score_james_suckling: Optional[float] = None
    drink_window_from: Optional[int] = None
    drink_window_to: Optional[int] = None
    drink_now: Optional[bool] = None
    ai_enrichment: Optional[Dict[str, Any]] = None
    ai_confidence: Optional[float] = None
    ai_last_error: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MarkDrunkRequest(BaseModel):
    drank_on: Optional[date] = None


class FieldChange(BaseModel):
    field: str
    previous: Any = None
    current: Any = None


class UndoChangeResponse(BaseModel):
    """Entrada do histórico de undo"""
    change_id: str
    timestamp: datetime
    changes: List[FieldChange]


class UndoResult(BaseModel):
    """Resultado de um undo aplicado"""
    wine: WineResponse
    restored: List[FieldChange]
