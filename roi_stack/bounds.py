"""Bounding box of the regions in a collection."""

from typing import Optional, Tuple
from loguru import logger
from roi_stack.collection import RoiCollection
from roi_stack.models import ALL_PLANES, BoundingBox, Region, Volume
from roi_stack.resolver import resolve_plane

INT_MAX = 2**31 - 1


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def safe_bounds(
    x: int, y: int, width: int, height: int, plane_width: int, plane_height: int
) -> Tuple[Tuple[int, int, int, int], bool]:
    """Clamp a rectangle to the area ``[0, plane_width] x [0, plane_height]``.

    Args:
        x, y, width, height: Rectangle to fit
        plane_width: Width of the plane
        plane_height: Height of the plane

    Returns:
        ``((x, y, width, height), valid)`` for the clamped rectangle. ``valid``
        is False when the rectangle has no area left inside the plane.
    """
    x_min = _clamp(x, 0, plane_width)
    x_max = _clamp(x + width, 0, plane_width)
    y_min = _clamp(y, 0, plane_height)
    y_max = _clamp(y + height, 0, plane_height)
    new_width = x_max - x_min
    new_height = y_max - y_min
    return (x_min, y_min, new_width, new_height), new_width > 0 and new_height > 0


def region_safe_bounds(region: Region, volume: Volume):
    return safe_bounds(
        region.x, region.y, region.width, region.height, volume.width, volume.height
    )


def get_limits(
    collection: Optional[RoiCollection], volume: Optional[Volume]
) -> Optional[BoundingBox]:
    """Find the x, y and z limits of the regions in a collection.

    Rectangles are clamped to the plane first; regions left with no area are
    ignored. A region only makes the result valid if its label names a plane
    inside the volume or names no plane at all. Regions with an out-of-range
    plane still widen the xy extent.

    If any region is active on all planes the z range is the whole volume.

    Args:
        collection: Regions to measure
        volume: Volume the regions were drawn on

    Returns:
        BoundingBox, or None when there is nothing valid to bound
    """
    if collection is None or len(collection) == 0:
        return None

    if volume is None or volume.depth == 0:
        return None

    depth = volume.depth

    xmin = INT_MAX
    xmax = 0
    ymin = INT_MAX
    ymax = 0
    zmin = depth
    zmax = 1
    spans_all_planes = False
    has_valid_region = False

    for region in collection.regions():
        (x, y, width, height), valid = region_safe_bounds(region, volume)
        if not valid:
            logger.debug(f"Region {region.label!r} lies outside the plane, skipping")
            continue

        xmin = min(x, xmin)
        xmax = max(x + width, xmax)
        ymin = min(y, ymin)
        ymax = max(y + height, ymax)

        association = resolve_plane(region, collection)
        if association is ALL_PLANES:
            spans_all_planes = True
            has_valid_region = True
        elif 1 <= association.index <= depth:
            zmin = min(association.index, zmin)
            zmax = max(association.index, zmax)
            has_valid_region = True
        else:
            logger.debug(
                f"Region {region.label!r} is on plane {association.index}, "
                f"outside 1..{depth}"
            )

    if not has_valid_region:
        logger.debug("No valid regions found")
        return None

    if spans_all_planes:
        zmin, zmax = 1, depth

    limits = BoundingBox(xmin, xmax, ymin, ymax, zmin, zmax)
    logger.debug(f"Region limits: {limits.as_tuple()}")
    return limits
