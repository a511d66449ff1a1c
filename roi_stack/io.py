# -*- coding: utf-8 -*-
"""Reading volumes and ROI sets, writing cropped volumes.

Volumes are read with BioIO (any format a BioIO reader plugin handles) or
from ``.npy`` arrays. ROI sets are JSON documents of the form::

    {"rois": [{"label": "0003-0040-0050", "x": 30, "y": 40,
               "width": 20, "height": 20, "position": 3,
               "kind": "rectangle", "mask": [[0, 1, ...], ...]}]}
"""

import json
from pathlib import Path
from typing import Any, Dict, Union
import bioio
import numpy as np
from loguru import logger
from PIL import Image
from roi_stack.collection import RoiCollection
from roi_stack.models import Calibration, Region, Volume

_REQUIRED_ROI_KEYS = ("x", "y", "width", "height")


def load_volume(image, channel=0, timepoint=0, scene=0):
    # type: (Union[str, Path], int, int, int) -> Volume
    """Load a single-channel, single-timepoint Z stack.

    :param image: Path to a ``.npy`` array (Z, Y, X) or any BioIO-readable file
    :param channel: Channel index (0-based), ignored for ``.npy``
    :param timepoint: Time point index (0-based), ignored for ``.npy``
    :param scene: Scene index (0-based), ignored for ``.npy``
    :return: Volume with calibration from the file metadata when available
    """
    path = Path(image)
    image_name = path.name

    if path.suffix == ".npy":
        data = np.load(path)
        if data.ndim == 2:
            data = data[np.newaxis]
        logger.debug(f"{image_name} - loaded array {data.shape} {data.dtype}")
        return Volume(data)

    img = bioio.BioImage(path)
    if scene:
        img.set_scene(scene)
        logger.debug(f"{image_name} - using scene {scene}: {img.scenes[scene]}")

    dim_order = img.dims.order
    kwargs = {}
    if "C" in dim_order:
        kwargs["C"] = channel
    if "T" in dim_order:
        kwargs["T"] = timepoint

    # Load only the requested channel/time point
    data = img.get_image_dask_data("ZYX", **kwargs).compute()
    logger.debug(f"{image_name} - loaded {data.shape} {data.dtype} with {kwargs}")

    sizes = img.physical_pixel_sizes
    calibration = Calibration(
        pixel_width=sizes.X or 1.0,
        pixel_height=sizes.Y or 1.0,
        pixel_depth=sizes.Z or 1.0,
        unit="micron" if sizes.X else "pixel",
    )
    return Volume(data, calibration=calibration)


def region_from_dict(entry):
    # type: (Dict[str, Any]) -> Region
    """Build a Region from one JSON ROI entry."""
    missing = [key for key in _REQUIRED_ROI_KEYS if key not in entry]
    if missing:
        raise ValueError(f"ROI entry {entry.get('label')!r} is missing {missing}")

    mask = entry.get("mask")
    position = entry.get("position")
    return Region(
        x=int(entry["x"]),
        y=int(entry["y"]),
        width=int(entry["width"]),
        height=int(entry["height"]),
        label=entry.get("label"),
        position=int(position) if position is not None else None,
        mask=np.asarray(mask, dtype=bool) if mask is not None else None,
        kind=entry.get("kind", "rectangle"),
    )


def load_rois(path):
    # type: (Union[str, Path]) -> RoiCollection
    """Load an ROI set from a JSON file, keeping the file order."""
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        document = json.load(f)

    if "rois" not in document:
        raise ValueError(f"{path.name} has no 'rois' list")

    regions = [region_from_dict(entry) for entry in document["rois"]]
    logger.debug(f"{path.name} - loaded {len(regions)} ROI(s)")
    return RoiCollection(regions)


def save_volume(volume, path):
    # type: (Volume, Union[str, Path]) -> Path
    """Save a volume as ``.npy`` or, for any other suffix, a multi-page TIFF."""
    path = Path(path)

    if path.suffix == ".npy":
        np.save(path, volume.data)
        return path

    if volume.depth == 0:
        raise ValueError("Cannot write a TIFF with no planes")

    frames = [Image.fromarray(plane) for plane in volume.data]
    frames[0].save(path, format="TIFF", save_all=True, append_images=frames[1:])
    logger.debug(f"Saved {volume.depth} planes to {path}")
    return path
