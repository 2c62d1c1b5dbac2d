"""
Endereçamento de slots da adega: (shelf, column, depth)
"""
from typing import Iterator, NamedTuple
import enum


class Depth(str, enum.Enum):
    FRONT = "FRONT"
    BACK = "BACK"


# Ordem de exibição: frente antes de fundo
DEPTH_ORDER = (Depth.FRONT, Depth.BACK)

DEPTH_LABELS = {Depth.FRONT: "Front", Depth.BACK: "Back"}


class SlotAddress(NamedTuple):
    shelf: int
    column: int
    depth: Depth


def address_key(shelf: int, column: int, depth: Depth) -> str:
    """Chave canônica para lookup: "2:3:FRONT"."""
    return f"{shelf}:{column}:{Depth(depth).value}"


def format_address(shelf: int, column: int, depth: Depth) -> str:
    """Código legível do slot: "S2·C3·Front"."""
    return f"S{shelf}·C{column}·{DEPTH_LABELS[Depth(depth)]}"


def is_within_layout(address: SlotAddress, layout) -> bool:
    """Verifica se o endereço cabe nas dimensões da adega"""
    try:
        Depth(address.depth)
    except ValueError:
        return False
    return (
        1 <= address.shelf <= layout.shelves
        and 1 <= address.column <= layout.columns
    )


def iter_addresses(shelves: int, columns: int) -> Iterator[SlotAddress]:
    """Todos os endereços em ordem shelf -> column -> FRONT/BACK"""
    for shelf in range(1, shelves + 1):
        for column in range(1, columns + 1):
            for depth in DEPTH_ORDER:
                yield SlotAddress(shelf, column, depth)


def sort_key(shelf: int, column: int, depth: Depth) -> tuple:
    return (shelf, column, DEPTH_ORDER.index(Depth(depth)))
