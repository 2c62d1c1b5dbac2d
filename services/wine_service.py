"""
Serviço de registros de vinho (listagem, cadastro, edição com undo)
"""
from sqlalchemy.orm import Session
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from models.wine import Wine, WineStatus
from models.database import HOUSEHOLD_ID
from services.errors import BackendError, NotFoundError, ValidationError
from services.placement_service import PlacementService
from services.undo_service import UndoRegistry, undo_registry
from typing import List, Optional
from datetime import date
import logging

logger = logging.getLogger(__name__)

SORT_FIELDS = {
    "created_at": Wine.created_at,
    "vintage": Wine.vintage,
    "producer": Wine.producer,
}

# Campos que não entram no histórico de undo
UNTRACKED_FIELDS = {"id", "household_id", "created_at", "updated_at"}

# Colunas NOT NULL que um patch não pode limpar
REQUIRED_FIELDS = ("producer", "status", "bottle_size")


class WineService:
    """Gerencia o cadastro de vinhos do household"""

    registry: UndoRegistry = undo_registry

    @staticmethod
    def _commit(db: Session, action: str):
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Erro de banco ao %s: %s", action, e)
            raise BackendError(f"Erro ao {action}") from e

    @staticmethod
    def list_wines(
        db: Session,
        status: Optional[WineStatus] = None,
        country_code: Optional[str] = None,
        region: Optional[str] = None,
        bottle_size: Optional[str] = None,
        vintage_min: Optional[int] = None,
        vintage_max: Optional[int] = None,
        search: Optional[str] = None,
        sort_field: str = "created_at",
        sort_direction: str = "desc",
        household_id: str = HOUSEHOLD_ID
    ) -> List[Wine]:
        """Lista vinhos com filtros opcionais e ordenação"""
        if sort_field not in SORT_FIELDS:
            raise ValidationError({"sort": f"sort deve ser um de {', '.join(SORT_FIELDS)}"})
        if sort_direction not in ("asc", "desc"):
            raise ValidationError({"direction": "direction deve ser asc ou desc"})

        query = db.query(Wine).filter(Wine.household_id == household_id)

        if status:
            query = query.filter(Wine.status == status)
        if country_code:
            query = query.filter(Wine.country_code == country_code.upper())
        if region:
            query = query.filter(Wine.region.ilike(f"%{region}%"))
        if bottle_size:
            query = query.filter(Wine.bottle_size == bottle_size)
        if vintage_min is not None:
            query = query.filter(Wine.vintage >= vintage_min)
        if vintage_max is not None:
            query = query.filter(Wine.vintage <= vintage_max)
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(
                Wine.producer.ilike(pattern),
                Wine.wine_name.ilike(pattern),
                Wine.region.ilike(pattern)
            ))

        column = SORT_FIELDS[sort_field]
        order = column.asc() if sort_direction == "asc" else column.desc()
        return query.order_by(order, Wine.id).all()

    @staticmethod
    def get_wine(db: Session, wine_id: int) -> Wine:
        wine = db.query(Wine).filter(Wine.id == wine_id).first()
        if not wine:
            raise NotFoundError("Vinho", wine_id)
        return wine

    @staticmethod
    def create_wine(db: Session, data: dict, household_id: str = HOUSEHOLD_ID) -> Wine:
        if data.get("country_code"):
            data["country_code"] = data["country_code"].upper()
        wine = Wine(household_id=household_id, **data)
        db.add(wine)
        WineService._commit(db, "cadastrar vinho")
        db.refresh(wine)

        logger.info("Vinho %s cadastrado (%s)", wine.id, wine.producer)
        return wine

    @staticmethod
    def update_wine(db: Session, wine_id: int, patch: dict, record_undo: bool = True) -> Wine:
        """
        Aplica o patch e registra os valores anteriores no histórico de undo
        (somente campos que realmente mudaram).
        """
        wine = WineService.get_wine(db, wine_id)

        if patch.get("country_code"):
            patch["country_code"] = patch["country_code"].upper()

        nulls = {f: f"{f} não pode ser null" for f in REQUIRED_FIELDS if f in patch and patch[f] is None}
        if nulls:
            raise ValidationError(nulls)

        changes = {}
        for field, value in patch.items():
            if field in UNTRACKED_FIELDS or not hasattr(Wine, field):
                continue
            changes[field] = (getattr(wine, field), value)
            setattr(wine, field, value)

        if wine.drink_window_from is not None and wine.drink_window_to is not None \
                and wine.drink_window_from > wine.drink_window_to:
            db.rollback()
            raise ValidationError({"drink_window_from": "drink_window_from deve ser <= drink_window_to"})

        # Garrafa bebida não ocupa slot
        if "status" in changes and wine.status == WineStatus.DRUNK:
            if PlacementService.release_wine(db, wine):
                logger.info("Slot do vinho %s liberado ao marcar como bebido", wine_id)

        WineService._commit(db, "atualizar vinho")
        db.refresh(wine)

        if record_undo:
            WineService.registry.record(wine_id, changes)

        logger.info("Vinho %s atualizado: %s", wine_id, ", ".join(sorted(changes)) or "sem mudanças")
        return wine

    @staticmethod
    def mark_drunk(db: Session, wine_id: int, drank_on: Optional[date] = None) -> Wine:
        """Marca como bebido e libera o slot ocupado na adega"""
        return WineService.update_wine(db, wine_id, {
            "status": WineStatus.DRUNK,
            "drank_on": drank_on or date.today()
        })

    @staticmethod
    def delete_wine(db: Session, wine_id: int):
        wine = WineService.get_wine(db, wine_id)
        PlacementService.release_wine(db, wine)
        db.delete(wine)
        WineService._commit(db, "remover vinho")
        WineService.registry.clear(wine_id)
        logger.info("Vinho %s removido", wine_id)

    @staticmethod
    def undo_last_change(db: Session, wine_id: int):
        """
        Restaura os valores anteriores da última edição dentro da janela.
        Retorna (vinho, {campo: (valor restaurado, valor descartado)}).
        """
        WineService.get_wine(db, wine_id)
        change = WineService.registry.peek_latest(wine_id)

        restore = {field: previous for field, (previous, _) in change.fields.items()}
        wine = WineService.update_wine(db, wine_id, restore, record_undo=False)
        WineService.registry.discard(wine_id, change.change_id)

        logger.info("Undo aplicado no vinho %s: %s", wine_id, ", ".join(sorted(restore)))
        return wine, {field: (previous, current) for field, (previous, current) in change.fields.items()}
