"""
Registro de adegas (FridgeLayout) e seleção da adega ativa
"""
from sqlalchemy.orm import Session
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from models.fridge_layout import FridgeLayout
from models.cellar_slot import CellarSlot
from models.database import HOUSEHOLD_ID
from services.errors import BackendError, LastLayoutError, NotFoundError, ValidationError
from services.placement_service import PlacementService
from typing import Callable, Dict, List, Optional
import os
import logging
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


class LayoutService:
    """CRUD de adegas com validação de dimensões"""

    # Limites padrão (podem ser sobrescritos via .env)
    MIN_SHELVES = int(os.getenv("LAYOUT_MIN_SHELVES", "6"))
    MAX_SHELVES = int(os.getenv("LAYOUT_MAX_SHELVES", "14"))
    MIN_COLUMNS = int(os.getenv("LAYOUT_MIN_COLUMNS", "5"))
    MAX_COLUMNS = int(os.getenv("LAYOUT_MAX_COLUMNS", "10"))

    DEFAULT_NAME = os.getenv("DEFAULT_LAYOUT_NAME", "Default Layout")
    DEFAULT_SHELVES = int(os.getenv("DEFAULT_LAYOUT_SHELVES", "6"))
    DEFAULT_COLUMNS = int(os.getenv("DEFAULT_LAYOUT_COLUMNS", "5"))

    @staticmethod
    def validate_layout_config(name, shelves, columns) -> Dict[str, str]:
        """
        Valida nome e dimensões; levanta ValidationError listando
        todos os campos inválidos de uma vez.
        """
        errors = {}
        if name is None or not str(name).strip():
            errors["name"] = "name é obrigatório"

        if not isinstance(shelves, int) or isinstance(shelves, bool) or not (
            LayoutService.MIN_SHELVES <= shelves <= LayoutService.MAX_SHELVES
        ):
            errors["shelves"] = (
                f"shelves deve estar entre {LayoutService.MIN_SHELVES} "
                f"e {LayoutService.MAX_SHELVES}"
            )

        if not isinstance(columns, int) or isinstance(columns, bool) or not (
            LayoutService.MIN_COLUMNS <= columns <= LayoutService.MAX_COLUMNS
        ):
            errors["columns"] = (
                f"columns deve estar entre {LayoutService.MIN_COLUMNS} "
                f"e {LayoutService.MAX_COLUMNS}"
            )

        if errors:
            raise ValidationError(errors)
        return {"name": str(name).strip(), "shelves": shelves, "columns": columns}

    @staticmethod
    def _commit(db: Session, action: str):
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Erro de banco ao %s: %s", action, e)
            raise BackendError(f"Erro ao {action}") from e

    @staticmethod
    def get(db: Session, layout_id: int) -> FridgeLayout:
        layout = db.query(FridgeLayout).filter(FridgeLayout.id == layout_id).first()
        if not layout:
            raise NotFoundError("Adega", layout_id)
        return layout

    @staticmethod
    def list_all(db: Session, household_id: str = HOUSEHOLD_ID) -> List[FridgeLayout]:
        """
        Lista as adegas do household em ordem de criação.
        Se não houver nenhuma, cria a adega padrão.
        """
        layouts = db.query(FridgeLayout).filter(
            FridgeLayout.household_id == household_id
        ).order_by(FridgeLayout.created_at, FridgeLayout.id).all()

        if not layouts:
            layout = LayoutService.create(db, {
                "name": LayoutService.DEFAULT_NAME,
                "shelves": LayoutService.DEFAULT_SHELVES,
                "columns": LayoutService.DEFAULT_COLUMNS
            }, household_id=household_id)
            logger.info("Nenhuma adega encontrada; adega padrão %s criada", layout.id)
            layouts = [layout]

        return layouts

    @staticmethod
    def create(db: Session, config: dict, household_id: str = HOUSEHOLD_ID) -> FridgeLayout:
        clean = LayoutService.validate_layout_config(
            config.get("name"), config.get("shelves"), config.get("columns")
        )
        layout = FridgeLayout(household_id=household_id, **clean)
        db.add(layout)
        LayoutService._commit(db, "criar adega")
        db.refresh(layout)

        logger.info("Adega %s criada (%sx%s)", layout.id, layout.shelves, layout.columns)
        return layout

    @staticmethod
    def update(db: Session, layout_id: int, partial: dict) -> FridgeLayout:
        """Mescla o patch sobre o registro existente e revalida"""
        layout = LayoutService.get(db, layout_id)

        merged = {
            "name": layout.name,
            "shelves": layout.shelves,
            "columns": layout.columns
        }
        merged.update({k: v for k, v in partial.items() if k in merged and v is not None})
        clean = LayoutService.validate_layout_config(
            merged["name"], merged["shelves"], merged["columns"]
        )

        # Não permitir encolher a adega para fora de garrafas já alocadas
        errors = {}
        if clean["shelves"] < layout.shelves or clean["columns"] < layout.columns:
            outside = db.query(CellarSlot).filter(
                CellarSlot.fridge_id == layout_id,
                or_(
                    CellarSlot.shelf > clean["shelves"],
                    CellarSlot.column_position > clean["columns"]
                )
            ).all()
            if any(s.shelf > clean["shelves"] for s in outside):
                errors["shelves"] = "existem garrafas alocadas nas prateleiras removidas"
            if any(s.column_position > clean["columns"] for s in outside):
                errors["columns"] = "existem garrafas alocadas nas colunas removidas"
        if errors:
            raise ValidationError(errors)

        layout.name = clean["name"]
        layout.shelves = clean["shelves"]
        layout.columns = clean["columns"]
        LayoutService._commit(db, "atualizar adega")
        db.refresh(layout)

        logger.info("Adega %s atualizada", layout_id)
        return layout

    @staticmethod
    def delete(db: Session, layout_id: int):
        """Remove a adega (e suas alocações); a última do household é preservada"""
        layout = LayoutService.get(db, layout_id)

        remaining = db.query(func.count(FridgeLayout.id)).filter(
            FridgeLayout.household_id == layout.household_id
        ).scalar() or 0
        if remaining <= 1:
            raise LastLayoutError(layout_id)

        released = PlacementService.release_fridge(db, layout)
        db.delete(layout)
        LayoutService._commit(db, "remover adega")
        logger.info("Adega %s removida (%s garrafas liberadas)", layout_id, released)


def select_active_layout(layouts: List[FridgeLayout], stored_id) -> Optional[FridgeLayout]:
    """
    Retorna a adega apontada por stored_id se ainda existir,
    senão a primeira disponível (ou None se a lista estiver vazia).
    """
    if stored_id is not None:
        for layout in layouts:
            if str(layout.id) == str(stored_id):
                return layout
    return layouts[0] if layouts else None


class ActiveLayoutSelector:
    """
    Ponteiro da adega ativa do cliente. A persistência (cookie, storage local)
    é injetada via get/set; o registro de adegas não conhece esse estado.
    """

    def __init__(self, get_stored: Callable[[], Optional[str]], set_stored: Callable[[Optional[str]], None]):
        self._get_stored = get_stored
        self._set_stored = set_stored

    def resolve(self, layouts: List[FridgeLayout]) -> Optional[FridgeLayout]:
        """Resolve a adega ativa e corrige ponteiro ausente ou obsoleto"""
        stored_id = self._get_stored()
        active = select_active_layout(layouts, stored_id)
        active_id = str(active.id) if active else None
        if active_id != (str(stored_id) if stored_id is not None else None):
            self._set_stored(active_id)
        return active

    def choose(self, layouts: List[FridgeLayout], layout_id) -> FridgeLayout:
        for layout in layouts:
            if str(layout.id) == str(layout_id):
                self._set_stored(str(layout.id))
                return layout
        raise NotFoundError("Adega", layout_id)
