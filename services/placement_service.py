"""
Serviço de alocação de vinhos em slots da adega.
Único ponto que altera cellar_slots: garante no máximo um vinho
por (fridge, shelf, column, depth) e no máximo um slot por vinho.
"""
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from models.fridge_layout import FridgeLayout
from models.cellar_slot import CellarSlot
from models.wine import Wine, WineStatus
from models.movement import SlotMovement, MovementType
from models.database import HOUSEHOLD_ID
from schemas.cellar_schemas import PlacedWine, WineSummary
from services.codecs import Depth, SlotAddress, format_address, is_within_layout, sort_key
from services.errors import (
    BackendError,
    NotFoundError,
    SlotOccupiedError,
    ValidationError,
    WineAlreadyPlacedError,
)
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)


class PlacementService:
    """Gerencia alocação, remoção e movimentação de garrafas"""

    @staticmethod
    def _get_layout(db: Session, fridge_id: int) -> FridgeLayout:
        layout = db.query(FridgeLayout).filter(FridgeLayout.id == fridge_id).first()
        if not layout:
            raise NotFoundError("Adega", fridge_id)
        return layout

    @staticmethod
    def _address(shelf: int, column: int, depth) -> SlotAddress:
        try:
            return SlotAddress(shelf, column, Depth(depth))
        except ValueError:
            raise ValidationError({"depth": "depth deve ser FRONT ou BACK"})

    @staticmethod
    def _check_bounds(layout: FridgeLayout, address: SlotAddress):
        if is_within_layout(address, layout):
            return
        errors = {}
        if not 1 <= address.shelf <= layout.shelves:
            errors["shelf"] = f"shelf deve estar entre 1 e {layout.shelves}"
        if not 1 <= address.column <= layout.columns:
            errors["column_position"] = f"column_position deve estar entre 1 e {layout.columns}"
        raise ValidationError(errors)

    @staticmethod
    def find_collision(
        db: Session,
        fridge_id: int,
        address: SlotAddress,
        exclude_wine_id: Optional[int] = None
    ) -> Optional[CellarSlot]:
        """
        Retorna a alocação existente no endereço, ignorando o próprio vinho.
        Verificação antecipada apenas: a constraint única do banco é a fonte da verdade.
        """
        query = db.query(CellarSlot).filter(
            CellarSlot.fridge_id == fridge_id,
            CellarSlot.shelf == address.shelf,
            CellarSlot.column_position == address.column,
            CellarSlot.depth == address.depth
        )
        if exclude_wine_id is not None:
            query = query.filter(CellarSlot.wine_id != exclude_wine_id)
        return query.first()

    @staticmethod
    def _commit(db: Session, fridge_id: int, address: SlotAddress, wine_id: int):
        """Commit traduzindo violações de unicidade em erros de domínio"""
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            detail = str(e.orig)
            if "uq_cellar_slot_wine" in detail or "cellar_slots.wine_id" in detail:
                raise WineAlreadyPlacedError(wine_id) from e
            logger.info(
                "Colisão detectada pelo banco em %s (fridge %s)",
                format_address(*address), fridge_id
            )
            raise SlotOccupiedError(address, fridge_id) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Erro de banco ao gravar alocação: %s", e)
            raise BackendError("Erro ao gravar alocação") from e

    @staticmethod
    def assign(
        db: Session,
        wine_id: int,
        fridge_id: int,
        shelf: int,
        column: int,
        depth: Depth
    ) -> CellarSlot:
        """Aloca um vinho ainda não alocado em um slot livre"""
        address = PlacementService._address(shelf, column, depth)
        layout = PlacementService._get_layout(db, fridge_id)
        PlacementService._check_bounds(layout, address)

        wine = db.query(Wine).filter(Wine.id == wine_id).first()
        if not wine:
            raise NotFoundError("Vinho", wine_id)

        if wine.slot is not None:
            raise WineAlreadyPlacedError(wine_id, wine.slot.address)

        if PlacementService.find_collision(db, fridge_id, address):
            raise SlotOccupiedError(address, fridge_id)

        assignment = CellarSlot(
            household_id=layout.household_id,
            wine=wine,
            fridge=layout,
            shelf=address.shelf,
            column_position=address.column,
            depth=address.depth
        )
        db.add(assignment)

        db.add(SlotMovement(
            wine_id=wine_id,
            to_fridge_id=fridge_id,
            to_code=format_address(*address),
            type=MovementType.PLACE
        ))

        PlacementService._commit(db, fridge_id, address, wine_id)
        db.refresh(assignment)

        logger.info("Vinho %s alocado em %s (fridge %s)", wine_id, assignment.human_code, fridge_id)
        return assignment

    @staticmethod
    def remove(db: Session, assignment_id: int) -> bool:
        """
        Remove a alocação. Id inexistente é no-op idempotente:
        retorna False para o chamador distinguir de uma remoção real.
        """
        assignment = db.query(CellarSlot).filter(CellarSlot.id == assignment_id).first()
        if not assignment:
            logger.debug("Alocação %s não existe; nada a remover", assignment_id)
            return False

        PlacementService._delete_with_movement(db, assignment)
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Erro de banco ao remover alocação %s: %s", assignment_id, e)
            raise BackendError("Erro ao remover alocação") from e

        logger.info("Alocação %s removida", assignment_id)
        return True

    @staticmethod
    def _delete_with_movement(db: Session, assignment: CellarSlot):
        db.add(SlotMovement(
            wine_id=assignment.wine_id,
            from_fridge_id=assignment.fridge_id,
            from_code=assignment.human_code,
            type=MovementType.REMOVE
        ))
        if assignment.wine is not None:
            assignment.wine.slot = None
        db.delete(assignment)

    @staticmethod
    def release_wine(db: Session, wine: Wine) -> bool:
        """Libera o slot do vinho sem commit (usado por mark_drunk e delete)"""
        if wine.slot is None:
            return False
        PlacementService._delete_with_movement(db, wine.slot)
        db.flush()
        return True

    @staticmethod
    def release_fridge(db: Session, layout: FridgeLayout) -> int:
        """Libera todos os slots da adega sem commit (usado ao remover a adega)"""
        assignments = list(layout.slots)
        for assignment in assignments:
            PlacementService._delete_with_movement(db, assignment)
        db.flush()
        return len(assignments)

    @staticmethod
    def move(
        db: Session,
        wine_id: int,
        from_assignment_id: int,
        to_fridge_id: int,
        to_shelf: int,
        to_column: int,
        to_depth: Depth
    ) -> CellarSlot:
        """
        Move um vinho para outro slot em uma única transação:
        remove a origem e cria o destino; qualquer falha faz rollback
        e o vinho permanece no endereço original.
        """
        source = db.query(CellarSlot).filter(CellarSlot.id == from_assignment_id).first()
        if not source:
            raise NotFoundError("Alocação", from_assignment_id)
        if source.wine_id != wine_id:
            raise ValidationError({
                "from_assignment_id": f"alocação {from_assignment_id} não pertence ao vinho {wine_id}"
            })

        address = PlacementService._address(to_shelf, to_column, to_depth)
        layout = PlacementService._get_layout(db, to_fridge_id)
        PlacementService._check_bounds(layout, address)

        # Exclui o próprio vinho do conjunto de colisão
        if PlacementService.find_collision(db, to_fridge_id, address, exclude_wine_id=wine_id):
            raise SlotOccupiedError(address, to_fridge_id)

        from_fridge_id = source.fridge_id
        from_code = source.human_code

        wine = source.wine
        try:
            wine.slot = None
            db.delete(source)
            # Flush da remoção antes do insert para liberar as constraints únicas
            db.flush()

            destination = CellarSlot(
                household_id=layout.household_id,
                wine=wine,
                fridge=layout,
                shelf=address.shelf,
                column_position=address.column,
                depth=address.depth
            )
            db.add(destination)
            db.add(SlotMovement(
                wine_id=wine_id,
                from_fridge_id=from_fridge_id,
                from_code=from_code,
                to_fridge_id=to_fridge_id,
                to_code=format_address(*address),
                type=MovementType.MOVE
            ))
            db.flush()
        except IntegrityError as e:
            db.rollback()
            raise SlotOccupiedError(address, to_fridge_id) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Erro de banco ao mover vinho %s: %s", wine_id, e)
            raise BackendError("Erro ao mover vinho") from e

        PlacementService._commit(db, to_fridge_id, address, wine_id)
        db.refresh(destination)

        logger.info("Vinho %s movido de %s para %s", wine_id, from_code, destination.human_code)
        return destination

    @staticmethod
    def list_unassigned_wines(db: Session, household_id: str = HOUSEHOLD_ID) -> List[WineSummary]:
        """Vinhos com status Cellared que não estão em nenhum slot"""
        wines = db.query(Wine).outerjoin(
            CellarSlot, CellarSlot.wine_id == Wine.id
        ).filter(
            Wine.household_id == household_id,
            Wine.status == WineStatus.CELLARED,
            CellarSlot.id.is_(None)
        ).order_by(Wine.producer, Wine.vintage, Wine.id).all()

        return [WineSummary.model_validate(w) for w in wines]

    @staticmethod
    def list_wines_in_fridge(db: Session, fridge_id: int) -> List[PlacedWine]:
        """Alocações da adega com o resumo de cada vinho, em ordem de grid"""
        assignments = db.query(CellarSlot).filter(
            CellarSlot.fridge_id == fridge_id
        ).all()
        assignments.sort(key=lambda a: sort_key(a.shelf, a.column_position, a.depth))

        return [
            PlacedWine(
                assignment_id=a.id,
                fridge_id=a.fridge_id,
                shelf=a.shelf,
                column_position=a.column_position,
                depth=a.depth,
                human_code=a.human_code,
                wine=WineSummary.model_validate(a.wine)
            )
            for a in assignments
        ]

    @staticmethod
    def list_recent_movements(db: Session, limit: int = 10) -> List[SlotMovement]:
        return db.query(SlotMovement).order_by(
            SlotMovement.ts.desc(), SlotMovement.id.desc()
        ).limit(limit).all()
