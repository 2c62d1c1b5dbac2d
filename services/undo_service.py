"""
Histórico de undo das edições de vinho (em memória, por vinho)
"""
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
import os
import time
import uuid
from dotenv import load_dotenv
from services.errors import UndoUnavailableError

load_dotenv()

UNDO_WINDOW_SECONDS = float(os.getenv("UNDO_WINDOW_SECONDS", "5"))
UNDO_MAX_STACK = int(os.getenv("UNDO_MAX_STACK", "10"))


class UndoChange:
    """Uma edição: {campo: (valor anterior, valor novo)}"""

    def __init__(self, fields: Dict[str, Tuple[Any, Any]], recorded_at: float):
        self.change_id = uuid.uuid4().hex
        self.fields = fields
        self.recorded_at = recorded_at
        self.timestamp = datetime.now(timezone.utc)


class UndoRegistry:
    """Pilhas de undo por vinho, mais recente primeiro, com janela de tempo"""

    def __init__(
        self,
        window_seconds: float = UNDO_WINDOW_SECONDS,
        max_size: int = UNDO_MAX_STACK,
        clock: Callable[[], float] = time.monotonic
    ):
        self.window_seconds = window_seconds
        self.max_size = max_size
        self._clock = clock
        self._stacks: Dict[int, List[UndoChange]] = {}

    def record(self, wine_id: int, fields: Dict[str, Tuple[Any, Any]]) -> Optional[UndoChange]:
        """Registra somente campos que realmente mudaram"""
        changed = {name: pair for name, pair in fields.items() if pair[0] != pair[1]}
        if not changed:
            return None

        change = UndoChange(changed, self._clock())
        stack = self._stacks.setdefault(wine_id, [])
        stack.insert(0, change)
        del stack[self.max_size:]
        return change

    def history(self, wine_id: int) -> List[UndoChange]:
        return list(self._stacks.get(wine_id, []))

    def peek_latest(self, wine_id: int) -> UndoChange:
        """Última mudança ainda dentro da janela de undo"""
        stack = self._stacks.get(wine_id)
        if not stack:
            raise UndoUnavailableError(f"Nenhuma alteração para desfazer no vinho {wine_id}")

        latest = stack[0]
        if self._clock() - latest.recorded_at > self.window_seconds:
            raise UndoUnavailableError(
                f"Janela de undo de {self.window_seconds:g}s expirou para o vinho {wine_id}"
            )
        return latest

    def discard(self, wine_id: int, change_id: str):
        stack = self._stacks.get(wine_id, [])
        self._stacks[wine_id] = [c for c in stack if c.change_id != change_id]

    def clear(self, wine_id: Optional[int] = None):
        if wine_id is None:
            self._stacks.clear()
        else:
            self._stacks.pop(wine_id, None)


# Guardar histórico em memória (single-user, uma instância do app)
undo_registry = UndoRegistry()
