"""Testes do endereçamento de slots."""
from types import SimpleNamespace

from services.codecs import (
    Depth,
    SlotAddress,
    address_key,
    format_address,
    is_within_layout,
    iter_addresses,
)


def test_address_key_is_stable_for_identical_triples():
    assert address_key(2, 3, Depth.FRONT) == address_key(2, 3, Depth.FRONT)
    assert address_key(2, 3, Depth.FRONT) == address_key(2, 3, "FRONT")


def test_address_key_differs_when_any_component_differs():
    base = address_key(2, 3, Depth.FRONT)
    assert address_key(3, 3, Depth.FRONT) != base
    assert address_key(2, 4, Depth.FRONT) != base
    assert address_key(2, 3, Depth.BACK) != base
    # "1:11" vs "11:1" não podem colidir
    assert address_key(1, 11, Depth.FRONT) != address_key(11, 1, Depth.FRONT)


def test_address_keys_are_unique_across_a_grid():
    keys = {address_key(*a) for a in iter_addresses(14, 10)}
    assert len(keys) == 14 * 10 * 2


def test_format_address():
    assert format_address(2, 3, Depth.FRONT) == "S2·C3·Front"
    assert format_address(3, 4, Depth.BACK) == "S3·C4·Back"


def test_is_within_layout_bounds():
    layout = SimpleNamespace(shelves=6, columns=5)
    assert is_within_layout(SlotAddress(1, 1, Depth.FRONT), layout)
    assert is_within_layout(SlotAddress(6, 5, Depth.BACK), layout)
    assert not is_within_layout(SlotAddress(0, 1, Depth.FRONT), layout)
    assert not is_within_layout(SlotAddress(7, 1, Depth.FRONT), layout)
    assert not is_within_layout(SlotAddress(1, 6, Depth.FRONT), layout)
    assert not is_within_layout(SlotAddress(1, 1, "MIDDLE"), layout)


def test_is_within_layout_accepts_depth_strings():
    layout = SimpleNamespace(shelves=6, columns=5)
    assert is_within_layout(SlotAddress(1, 1, "FRONT"), layout)
    assert is_within_layout(SlotAddress(6, 5, "BACK"), layout)
    assert not is_within_layout(SlotAddress(7, 1, "FRONT"), layout)


def test_iter_addresses_order():
    addresses = list(iter_addresses(2, 2))
    assert addresses == [
        SlotAddress(1, 1, Depth.FRONT),
        SlotAddress(1, 1, Depth.BACK),
        SlotAddress(1, 2, Depth.FRONT),
        SlotAddress(1, 2, Depth.BACK),
        SlotAddress(2, 1, Depth.FRONT),
        SlotAddress(2, 1, Depth.BACK),
        SlotAddress(2, 2, Depth.FRONT),
        SlotAddress(2, 2, Depth.BACK),
    ]
