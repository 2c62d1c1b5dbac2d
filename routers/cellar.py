"""
Rotas para alocação de vinhos nos slots e ocupação da adega
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List
from models.database import get_db
from schemas.cellar_schemas import (
    AssignRequest,
    CellarSlotResponse,
    FridgeOccupancy,
    MoveRequest,
    MovementResponse,
    PlacedWine,
    RemoveResponse,
    WineSummary,
)
from services.layout_service import LayoutService
from services.occupancy_service import OccupancyService
from services.placement_service import PlacementService

router = APIRouter(prefix="/cellar", tags=["cellar"])


@router.get("/unassigned", response_model=List[WineSummary])
async def list_unassigned_wines(db: Session = Depends(get_db)):
    """
    Vinhos na adega (Cellared) que ainda não têm slot
    """
    return PlacementService.list_unassigned_wines(db)


@router.get("/movements", response_model=List[MovementResponse])
async def list_movements(
    limit: int = Query(20, ge=1, le=500),
    db: Session = Depends(get_db)
):
    return PlacementService.list_recent_movements(db, limit)


@router.get("/{fridge_id}/occupancy", response_model=FridgeOccupancy)
async def get_occupancy(fridge_id: int, db: Session = Depends(get_db)):
    """
    Grid completo (shelves × columns × 2) com totais e percentual
    """
    return OccupancyService.get_fridge_occupancy(db, fridge_id)


@router.get("/{fridge_id}/wines", response_model=List[PlacedWine])
async def list_wines_in_fridge(fridge_id: int, db: Session = Depends(get_db)):
    LayoutService.get(db, fridge_id)
    return PlacementService.list_wines_in_fridge(db, fridge_id)


@router.post("/assign", response_model=CellarSlotResponse, status_code=201)
async def assign_wine(request: AssignRequest, db: Session = Depends(get_db)):
    """
    Aloca vinho em slot livre; 409 se o slot já estiver ocupado
    """
    return PlacementService.assign(
        db,
        wine_id=request.wine_id,
        fridge_id=request.fridge_id,
        shelf=request.shelf,
        column=request.column_position,
        depth=request.depth
    )


@router.post("/move", response_model=CellarSlotResponse)
async def move_wine(request: MoveRequest, db: Session = Depends(get_db)):
    """
    Move vinho para outro slot; em caso de falha permanece na origem
    """
    return PlacementService.move(
        db,
        wine_id=request.wine_id,
        from_assignment_id=request.from_assignment_id,
        to_fridge_id=request.to_fridge_id,
        to_shelf=request.to_shelf,
        to_column=request.to_column_position,
        to_depth=request.to_depth
    )


@router.delete("/slots/{assignment_id}", response_model=RemoveResponse)
async def remove_assignment(assignment_id: int, db: Session = Depends(get_db)):
    """
    Remove alocação; id inexistente retorna removed=false
    """
    return RemoveResponse(removed=PlacementService.remove(db, assignment_id))
