"""Ordered ROI collection."""

from typing import Callable, Iterable, Iterator, List, Optional
from loguru import logger
from roi_stack.labels import parse_plane_label
from roi_stack.models import PlaneAssociation, Region


class RoiCollection:
    """Ordered set of regions with a label-to-plane lookup.

    Insertion order is kept: it decides output order of per-plane selection
    and which region wins where regions overlap during cropping.
    """

    def __init__(
        self,
        regions: Optional[Iterable[Region]] = None,
        label_parser: Callable[[Optional[str]], PlaneAssociation] = parse_plane_label,
    ):
        """Create a collection.

        Args:
            regions: Initial regions, in order
            label_parser: Pure function mapping a label to its plane association
        """
        self._regions: List[Region] = list(regions) if regions is not None else []
        self._label_parser = label_parser

    def __len__(self) -> int:
        return len(self._regions)

    def __iter__(self) -> Iterator[Region]:
        return iter(self._regions)

    def __getitem__(self, index: int) -> Region:
        return self._regions[index]

    @property
    def count(self) -> int:
        return len(self._regions)

    def regions(self) -> List[Region]:
        """Snapshot of the regions in stored order."""
        return list(self._regions)

    def add(self, region: Region) -> None:
        self._regions.append(region)

    def remove_at(self, index: int) -> Region:
        """Remove and return the region at ``index``; later regions shift down."""
        return self._regions.pop(index)

    def plane_for_label(self, label: Optional[str]) -> PlaneAssociation:
        return self._label_parser(label)


def delete_all(collection: RoiCollection) -> None:
    """Remove every region from ``collection``.

    Removal shifts indices, so the first remaining region is removed until
    the collection reports it is empty.
    """
    removed = 0
    while collection.count > 0:
        collection.remove_at(0)
        removed += 1
    logger.debug(f"Deleted {removed} region(s)")
