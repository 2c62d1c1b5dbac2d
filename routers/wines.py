"""
Rotas para cadastro de vinhos e undo de edições
"""
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from typing import List, Optional
from models.database import get_db
from models.wine import WineStatus, BottleSize
from schemas.wine_schemas import (
    FieldChange,
    MarkDrunkRequest,
    UndoChangeResponse,
    UndoResult,
    WineCreate,
    WineResponse,
    WineUpdate,
)
from services.wine_service import WineService

router = APIRouter(prefix="/wines", tags=["wines"])


@router.get("", response_model=List[WineResponse])
async def list_wines(
    status: Optional[WineStatus] = Query(None),
    country_code: Optional[str] = Query(None, min_length=2, max_length=2),
    region: Optional[str] = Query(None),
    bottle_size: Optional[BottleSize] = Query(None),
    vintage_min: Optional[int] = Query(None),
    vintage_max: Optional[int] = Query(None),
    search: Optional[str] = Query(None, description="Busca em producer, wine_name e region"),
    sort: str = Query("created_at"),
    direction: str = Query("desc"),
    db: Session = Depends(get_db)
):
    return WineService.list_wines(
        db,
        status=status,
        country_code=country_code,
        region=region,
        bottle_size=bottle_size,
        vintage_min=vintage_min,
        vintage_max=vintage_max,
        search=search,
        sort_field=sort,
        sort_direction=direction
    )


@router.post("", response_model=WineResponse, status_code=201)
async def create_wine(request: WineCreate, db: Session = Depends(get_db)):
    return WineService.create_wine(db, request.model_dump())


@router.get("/{wine_id}", response_model=WineResponse)
async def get_wine(wine_id: int, db: Session = Depends(get_db)):
    return WineService.get_wine(db, wine_id)


@router.patch("/{wine_id}", response_model=WineResponse)
async def update_wine(wine_id: int, request: WineUpdate, db: Session = Depends(get_db)):
    """
    Atualização parcial; a edição fica disponível para undo
    """
    return WineService.update_wine(db, wine_id, request.model_dump(exclude_unset=True))


@router.post("/{wine_id}/drunk", response_model=WineResponse)
async def mark_drunk(
    wine_id: int,
    request: Optional[MarkDrunkRequest] = None,
    db: Session = Depends(get_db)
):
    """
    Marca como bebido (data padrão: hoje) e libera o slot na adega
    """
    drank_on = request.drank_on if request else None
    return WineService.mark_drunk(db, wine_id, drank_on)


@router.delete("/{wine_id}", status_code=204)
async def delete_wine(wine_id: int, db: Session = Depends(get_db)):
    WineService.delete_wine(db, wine_id)
    return Response(status_code=204)


@router.get("/{wine_id}/history", response_model=List[UndoChangeResponse])
async def get_undo_history(wine_id: int, db: Session = Depends(get_db)):
    WineService.get_wine(db, wine_id)
    return [
        UndoChangeResponse(
            change_id=change.change_id,
            timestamp=change.timestamp,
            changes=[
                FieldChange(field=field, previous=previous, current=current)
                for field, (previous, current) in change.fields.items()
            ]
        )
        for change in WineService.registry.history(wine_id)
    ]


@router.post("/{wine_id}/undo", response_model=UndoResult)
async def undo_last_change(wine_id: int, db: Session = Depends(get_db)):
    """
    Desfaz a última edição se ainda estiver dentro da janela de undo
    """
    wine, restored = WineService.undo_last_change(db, wine_id)
    return UndoResult(
        wine=WineResponse.model_validate(wine),
        restored=[
            FieldChange(field=field, previous=current, current=previous)
            for field, (previous, current) in restored.items()
        ]
    )
