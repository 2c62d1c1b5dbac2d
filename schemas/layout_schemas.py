from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class LayoutCreate(BaseModel):
    """Request para criar adega (limites validados no LayoutService)"""
    name: str
    shelves: int
    columns: int


class LayoutUpdate(BaseModel):
    """Request parcial: campos ausentes mantêm o valor atual"""
    name: Optional[str] = None
    shelves: Optional[int] = None
    columns: Optional[int] = None


class LayoutResponse(BaseModel):
    """Response de uma adega"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    household_id: str
    name: str
    shelves: int
    columns: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ActiveLayoutRequest(BaseModel):
    """Seleção da adega ativa do cliente"""
    layout_id: int
