from __future__ import annotations

import pytest

from roi_stack.collection import RoiCollection, delete_all
from roi_stack.models import ALL_PLANES, Region, SpecificPlane
from roi_stack.resolver import is_active_on_all_planes, resolve_plane


def _regions(n: int) -> list:
    return [Region(i, i, 5, 5, label=f"{i + 1:04d}-0000-0001") for i in range(n)]


@pytest.mark.parametrize("size", [0, 1, 2, 7])
def test_delete_all_empties_collection(size: int) -> None:
    collection = RoiCollection(_regions(size))

    delete_all(collection)

    assert collection.count == 0
    assert list(collection) == []


def test_remove_at_shifts_later_regions() -> None:
    regions = _regions(3)
    collection = RoiCollection(regions)

    removed = collection.remove_at(0)

    assert removed is regions[0]
    assert collection[0] is regions[1]
    assert len(collection) == 2


def test_regions_returns_snapshot() -> None:
    collection = RoiCollection(_regions(2))

    snapshot = collection.regions()
    collection.add(Region(0, 0, 1, 1, label="x"))

    assert len(snapshot) == 2
    assert collection.count == 3


def test_resolve_plane_uses_label() -> None:
    collection = RoiCollection()

    assert resolve_plane(Region(0, 0, 1, 1, label="0002-0000-0001"), collection) == SpecificPlane(2)
    assert resolve_plane(Region(0, 0, 1, 1, label="NO_SLICE"), collection) is ALL_PLANES


@pytest.mark.parametrize("label", [None, ""])
def test_resolve_plane_without_label_is_all_planes(label) -> None:
    assert resolve_plane(Region(0, 0, 1, 1, label=label), RoiCollection()) is ALL_PLANES


def test_resolve_plane_uses_injected_parser() -> None:
    collection = RoiCollection(label_parser=lambda label: SpecificPlane(len(label)))

    assert resolve_plane(Region(0, 0, 1, 1, label="abc"), collection) == SpecificPlane(3)


def test_is_active_on_all_planes() -> None:
    collection = RoiCollection()

    assert is_active_on_all_planes(Region(0, 0, 1, 1, label=""), collection)
    assert is_active_on_all_planes(Region(0, 0, 1, 1, label="NO_SLICE"), collection)
    assert not is_active_on_all_planes(Region(0, 0, 1, 1, label="0001-0000-0001"), collection)
    assert not is_active_on_all_planes(Region(0, 0, 1, 1, label=None), collection)


def test_region_rejects_mismatched_mask() -> None:
    with pytest.raises(ValueError):
        Region(0, 0, 3, 2, label="x", mask=[[1, 1], [1, 1]])
