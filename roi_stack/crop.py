"""Crop a volume to the regions drawn on it."""

from dataclasses import replace
from typing import Optional
import numpy as np
from loguru import logger
from roi_stack.bounds import region_safe_bounds, get_limits
from roi_stack.collection import RoiCollection
from roi_stack.models import CropSettings, Region, Volume
from roi_stack.selection import select_for_plane

PADDING_LABEL = "padding"


class NoRoiBoundsError(ValueError):
    """Raised when cropping to a collection that has no valid bounding box."""


def _copy_region(region, source, target, x_off, y_off, volume):
    # type: (Region, np.ndarray, np.ndarray, int, int, Volume) -> None
    """Copy the pixels of ``source`` under ``region`` into ``target``."""
    (x, y, width, height), valid = region_safe_bounds(region, volume)
    if not valid:
        return

    src = source[y : y + height, x : x + width]
    dst = target[y + y_off : y + y_off + height, x + x_off : x + x_off + width]

    if region.mask is None:
        dst[...] = src
        return

    mask = region.mask[
        y - region.y : y - region.y + height, x - region.x : x - region.x + width
    ]
    dst[mask] = src[mask]


def crop_stack(
    collection: RoiCollection,
    volume: Volume,
    fill_background: bool = False,
    fill_value: int = 0,
    padding: int = 0,
) -> Volume:
    """Crop a volume to the limits of the regions in a collection.

    Each output plane holds only the pixels under the regions active on the
    matching source plane; later regions overwrite earlier ones where they
    overlap. Planes that fall outside the source volume are filled with
    ``fill_value``.

    Args:
        collection: Regions to crop to
        volume: Source volume, left untouched
        fill_background: If True, pixels outside every region are set to
            ``fill_value`` instead of 0
        fill_value: Background and padding value
        padding: Number of pixels added to each face of the cropped volume

    Returns:
        New cropped Volume with the source dtype and calibration

    Raises:
        NoRoiBoundsError: If the collection has no valid bounding box
        ValueError: If padding is negative or fill_value does not fit the
            volume dtype
    """
    if padding < 0:
        raise ValueError(f"Padding must be >= 0, got {padding}")

    if np.issubdtype(volume.dtype, np.integer):
        info = np.iinfo(volume.dtype)
        if not info.min <= fill_value <= info.max:
            raise ValueError(
                f"Fill value {fill_value} outside {volume.dtype} range "
                f"{info.min}..{info.max}"
            )

    limits = get_limits(collection, volume)
    if limits is None:
        raise NoRoiBoundsError("No valid regions to crop to")

    zmax = min(limits.zmax, volume.depth)

    # target volume dimensions
    w = limits.xmax - limits.xmin + 2 * padding
    h = limits.ymax - limits.ymin + 2 * padding
    d = zmax - limits.zmin + 2 * padding

    # origin of the source volume in the target frame
    x_off = padding - limits.xmin
    y_off = padding - limits.ymin
    z_off = padding - limits.zmin

    logger.debug(
        f"Cropping {volume.data.shape} to {(max(d, 0), h, w)} "
        f"with offset {(z_off, y_off, x_off)}"
    )

    out = np.zeros((max(d, 0), h, w), dtype=volume.dtype)
    labels = []

    for z in range(1, d + 1):
        target = out[z - 1]
        source_index = z - z_off

        if source_index < 1 or source_index > volume.depth:
            target[...] = fill_value
            labels.append(PADDING_LABEL)
            continue

        if fill_background:
            target[...] = fill_value

        source = volume.plane(source_index)
        for region in select_for_plane(collection, volume, source_index):
            _copy_region(region, source, target, x_off, y_off, volume)

        labels.append(volume.plane_label(source_index))

    return Volume(out, labels=labels, calibration=replace(volume.calibration))


def crop_with_settings(collection, volume, settings=None):
    # type: (RoiCollection, Volume, Optional[CropSettings]) -> Volume
    """Run :func:`crop_stack` with options taken from a ``CropSettings``."""
    settings = settings or CropSettings()
    return crop_stack(
        collection,
        volume,
        fill_background=settings.fill_background,
        fill_value=settings.fill_value,
        padding=settings.padding,
    )
