"""
Erros de domínio da adega, convertidos em JSON pelo handler em main.py
"""
from typing import Dict, Optional
from services.codecs import SlotAddress, format_address


class CellarError(Exception):
    """Erro base com status HTTP e código estável"""
    status_code = 400
    code = "cellar_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}


class ValidationError(CellarError):
    status_code = 422
    code = "validation_error"

    def __init__(self, fields: Dict[str, str]):
        self.fields = dict(fields)
        message = "; ".join(f"{name}: {msg}" for name, msg in self.fields.items())
        super().__init__(message)

    def to_payload(self) -> dict:
        payload = super().to_payload()
        payload["error"]["fields"] = self.fields
        return payload


class SlotOccupiedError(CellarError):
    status_code = 409
    code = "slot_occupied"

    def __init__(self, address: SlotAddress, fridge_id: Optional[int] = None):
        self.address = address
        self.fridge_id = fridge_id
        super().__init__(
            f"Slot {format_address(*address)} já está ocupado"
        )


class WineAlreadyPlacedError(CellarError):
    status_code = 409
    code = "wine_already_placed"

    def __init__(self, wine_id: int, address: Optional[SlotAddress] = None):
        self.wine_id = wine_id
        where = f" em {format_address(*address)}" if address else ""
        super().__init__(
            f"Vinho {wine_id} já está alocado{where}; use mover"
        )


class LastLayoutError(CellarError):
    status_code = 409
    code = "last_layout"

    def __init__(self, layout_id: int):
        self.layout_id = layout_id
        super().__init__(
            f"Adega {layout_id} é a última do household e não pode ser removida"
        )


class NotFoundError(CellarError):
    status_code = 404
    code = "not_found"

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} não encontrado")


class UndoUnavailableError(CellarError):
    status_code = 409
    code = "undo_unavailable"


class BackendError(CellarError):
    status_code = 503
    code = "backend_error"
