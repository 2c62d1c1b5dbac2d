from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import List, Optional
from services.codecs import Depth
from models.movement import MovementType


class WineSummary(BaseModel):
    """Resumo de vinho usado em listagens e no grid"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    producer: str
    vintage: Optional[int] = None
    wine_name: Optional[str] = None


class CellarSlotResponse(BaseModel):
    """Response de uma alocação"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    wine_id: int
    fridge_id: int
    shelf: int
    column_position: int
    depth: Depth
    human_code: str


class PlacedWine(BaseModel):
    """Alocação + resumo do vinho"""
    assignment_id: int
    fridge_id: int
    shelf: int
    column_position: int
    depth: Depth
    human_code: str
    wine: WineSummary


class OccupancySlot(BaseModel):
    """Um endereço do grid com seu estado"""
    shelf: int
    column: int
    depth: Depth
    is_occupied: bool
    assignment_id: Optional[int] = None
    wine: Optional[WineSummary] = None


class FridgeOccupancy(BaseModel):
    """Grid completo de ocupação de uma adega"""
    fridge_id: Optional[int] = None
    shelves: int
    columns: int
    slots: List[OccupancySlot]
    total_slots: int
    occupied_slots: int
    free_slots: int
    occupancy_percentage: int


class AssignRequest(BaseModel):
    """Request para alocar vinho em um slot"""
    wine_id: int
    fridge_id: int
    shelf: int
    column_position: int
    depth: Depth


class MoveRequest(BaseModel):
    """Request para mover vinho entre slots"""
    wine_id: int
    from_assignment_id: int
    to_fridge_id: int
    to_shelf: int
    to_column_position: int
    to_depth: Depth


class RemoveResponse(BaseModel):
    removed: bool


class MovementResponse(BaseModel):
    """Movimento auditado"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    wine_id: int
    type: MovementType
    from_fridge_id: Optional[int] = None
    from_code: Optional[str] = None
    to_fridge_id: Optional[int] = None
    to_code: Optional[str] = None
    ts: Optional[datetime] = None
