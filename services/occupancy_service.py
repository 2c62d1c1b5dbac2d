"""
Serviço para cálculo do grid de ocupação de uma adega
(shelves × columns × 2 profundidades)
"""
from sqlalchemy.orm import Session
from models.fridge_layout import FridgeLayout
from models.cellar_slot import CellarSlot
from schemas.cellar_schemas import FridgeOccupancy, OccupancySlot, WineSummary
from services.codecs import address_key, iter_addresses
from services.errors import NotFoundError


class OccupancyService:
    """Monta a visão derivada (não persistida) de ocupação"""

    @staticmethod
    def occupancy_percentage(occupied_slots: int, total_slots: int) -> int:
        if total_slots <= 0:
            return 0
        # Arredondamento half-up (12.5 -> 13), sem o banker's rounding de round()
        return (occupied_slots * 200 + total_slots) // (2 * total_slots)

    @staticmethod
    def build_occupancy(layout, assignments, fridge_id=None) -> FridgeOccupancy:
        """
        Gera um registro por endereço, em ordem shelf -> column -> FRONT/BACK.

        `assignments` são objetos com shelf, column_position, depth, id e
        wine (opcional). Alocações fora das dimensões são ignoradas.
        """
        by_key = {
            address_key(a.shelf, a.column_position, a.depth): a
            for a in assignments
        }

        slots = []
        occupied = 0
        for address in iter_addresses(layout.shelves, layout.columns):
            assignment = by_key.get(address_key(*address))
            if assignment is None:
                slots.append(OccupancySlot(
                    shelf=address.shelf,
                    column=address.column,
                    depth=address.depth,
                    is_occupied=False
                ))
                continue

            occupied += 1
            wine = getattr(assignment, "wine", None)
            slots.append(OccupancySlot(
                shelf=address.shelf,
                column=address.column,
                depth=address.depth,
                is_occupied=True,
                assignment_id=getattr(assignment, "id", None),
                wine=WineSummary.model_validate(wine) if wine is not None else None
            ))

        total = len(slots)
        return FridgeOccupancy(
            fridge_id=fridge_id,
            shelves=layout.shelves,
            columns=layout.columns,
            slots=slots,
            total_slots=total,
            occupied_slots=occupied,
            free_slots=total - occupied,
            occupancy_percentage=OccupancyService.occupancy_percentage(occupied, total)
        )

    @staticmethod
    def get_fridge_occupancy(db: Session, fridge_id: int) -> FridgeOccupancy:
        """Carrega adega e alocações e monta o grid"""
        layout = db.query(FridgeLayout).filter(FridgeLayout.id == fridge_id).first()
        if not layout:
            raise NotFoundError("Adega", fridge_id)

        assignments = db.query(CellarSlot).filter(
            CellarSlot.fridge_id == fridge_id
        ).all()

        return OccupancyService.build_occupancy(layout, assignments, fridge_id=layout.id)
