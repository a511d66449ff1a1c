"""Per-plane region selection."""

from typing import List, Optional
from loguru import logger
from roi_stack.collection import RoiCollection
from roi_stack.models import Region, Volume
from roi_stack.resolver import matches_plane


def select_for_plane(
    collection: Optional[RoiCollection],
    volume: Optional[Volume],
    plane_index: int,
) -> List[Region]:
    """Return the regions active on a plane, in collection order.

    Regions without a plane in their label are active on every plane. Missing
    inputs or a plane outside ``1..depth`` give an empty list so callers can
    loop over plane indices without checking bounds first.

    Args:
        collection: Regions to choose from
        volume: Volume the plane index refers to
        plane_index: 1-based plane index

    Returns:
        Matching regions; overlapping matches are all returned
    """
    if collection is None or volume is None:
        return []

    if plane_index < 1 or plane_index > volume.depth:
        return []

    selected = []
    for region in collection.regions():
        # unnamed regions cannot be matched
        if region.label is None:
            continue
        if matches_plane(region, collection, plane_index):
            selected.append(region)

    logger.debug(f"Plane {plane_index}: {len(selected)} of {len(collection)} regions")
    return selected
