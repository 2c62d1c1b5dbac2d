"""
Rotas para gerenciamento de adegas (layouts) e da adega ativa
"""
from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session
from typing import List
import os
from dotenv import load_dotenv
from models.database import get_db
from schemas.layout_schemas import LayoutCreate, LayoutUpdate, LayoutResponse, ActiveLayoutRequest
from services.layout_service import LayoutService, ActiveLayoutSelector

load_dotenv()

ACTIVE_LAYOUT_COOKIE = os.getenv("ACTIVE_LAYOUT_COOKIE", "active_layout_id")

router = APIRouter(prefix="/layouts", tags=["layouts"])


def cookie_selector(request: Request, response: Response) -> ActiveLayoutSelector:
    """Seletor com o ponteiro persistido em cookie do cliente"""

    def set_stored(value):
        if value is None:
            response.delete_cookie(ACTIVE_LAYOUT_COOKIE)
        else:
            response.set_cookie(ACTIVE_LAYOUT_COOKIE, value, samesite="lax")

    return ActiveLayoutSelector(
        lambda: request.cookies.get(ACTIVE_LAYOUT_COOKIE),
        set_stored
    )


@router.get("", response_model=List[LayoutResponse])
async def list_layouts(db: Session = Depends(get_db)):
    """
    Lista adegas do household (cria a padrão se não houver nenhuma)
    """
    return LayoutService.list_all(db)


@router.post("", response_model=LayoutResponse, status_code=201)
async def create_layout(request: LayoutCreate, db: Session = Depends(get_db)):
    return LayoutService.create(db, request.model_dump())


@router.get("/active", response_model=LayoutResponse)
async def get_active_layout(
    selector: ActiveLayoutSelector = Depends(cookie_selector),
    db: Session = Depends(get_db)
):
    """
    Adega ativa do cliente; ponteiro obsoleto cai para a primeira adega
    """
    layouts = LayoutService.list_all(db)
    return selector.resolve(layouts)


@router.put("/active", response_model=LayoutResponse)
async def set_active_layout(
    request: ActiveLayoutRequest,
    selector: ActiveLayoutSelector = Depends(cookie_selector),
    db: Session = Depends(get_db)
):
    layouts = LayoutService.list_all(db)
    return selector.choose(layouts, request.layout_id)


@router.get("/{layout_id}", response_model=LayoutResponse)
async def get_layout(layout_id: int, db: Session = Depends(get_db)):
    return LayoutService.get(db, layout_id)


@router.patch("/{layout_id}", response_model=LayoutResponse)
async def update_layout(layout_id: int, request: LayoutUpdate, db: Session = Depends(get_db)):
    """
    Atualização parcial: campos ausentes mantêm o valor atual
    """
    return LayoutService.update(db, layout_id, request.model_dump(exclude_unset=True))


@router.delete("/{layout_id}", status_code=204)
async def delete_layout(layout_id: int, db: Session = Depends(get_db)):
    """
    Remove a adega e suas alocações (a última adega não pode ser removida)
    """
    LayoutService.delete(db, layout_id)
    return Response(status_code=204)
