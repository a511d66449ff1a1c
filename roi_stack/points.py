"""Calibrated coordinates of point regions."""

from typing import Optional
import numpy as np
from roi_stack.collection import RoiCollection
from roi_stack.models import Volume

POINT_KIND = "point"


def get_point_coordinates(collection, volume):
    # type: (RoiCollection, Volume) -> Optional[np.ndarray]
    """Get the calibrated 3D coordinates of point regions.

    The z coordinate comes from each point's position attribute; points with
    no recorded position sit at z = 0.

    :param collection: Regions to scan; non-point regions are ignored
    :param volume: Volume providing the calibration
    :return: Array of shape (n, 3) holding (x, y, z) rows, or None if the
        collection has no points
    """
    points = [region for region in collection.regions() if region.kind == POINT_KIND]
    if not points:
        return None

    cal = volume.calibration
    coordinates = np.zeros((len(points), 3), dtype=np.float64)
    for i, region in enumerate(points):
        position = region.position if region.position is not None else 0
        coordinates[i] = (
            region.x * cal.pixel_width,
            region.y * cal.pixel_height,
            position * cal.pixel_depth,
        )
    return coordinates
