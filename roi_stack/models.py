"""Data structures shared by ROI selection, bounds and cropping."""

from dataclasses import dataclass, field
from typing import List, Optional, Union
import numpy as np


@dataclass(frozen=True)
class SpecificPlane:
    """Association of a region with one plane.

    :ivar index: 1-based plane index as parsed from the label. May lie outside
        the volume; callers range-check against the volume depth.
    """

    index: int


class AllPlanes:
    """Association of a region with every plane of a volume."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "ALL_PLANES"


ALL_PLANES = AllPlanes()

PlaneAssociation = Union[SpecificPlane, AllPlanes]


@dataclass
class Region:
    """A rectangular region of interest drawn on a plane.

    Attributes:
        x: Left edge in plane pixel units
        y: Top edge in plane pixel units
        width: Rectangle width
        height: Rectangle height
        label: Free-text name, usually encoding the plane ("0003-0120-0045")
        position: Explicit 1-based plane the region was drawn on, if recorded
        mask: Optional boolean array (height, width); True marks pixels inside
        kind: Region type ("rectangle", "polygon", "point", ...)
    """

    x: int
    y: int
    width: int
    height: int
    label: Optional[str] = None
    position: Optional[int] = None
    mask: Optional[np.ndarray] = None
    kind: str = "rectangle"

    def __post_init__(self):
        if self.mask is not None:
            self.mask = np.asarray(self.mask, dtype=bool)
            if self.mask.shape != (self.height, self.width):
                raise ValueError(
                    f"Mask shape {self.mask.shape} does not match region "
                    f"size {(self.height, self.width)}"
                )


@dataclass(frozen=True)
class BoundingBox:
    """3D extent of a set of regions.

    x and y maxima are exclusive pixel edges; z values are inclusive 1-based
    plane indices.
    """

    xmin: int
    xmax: int
    ymin: int
    ymax: int
    zmin: int
    zmax: int

    def as_tuple(self):
        return (self.xmin, self.xmax, self.ymin, self.ymax, self.zmin, self.zmax)


@dataclass
class Calibration:
    """Physical voxel size."""

    pixel_width: float = 1.0
    pixel_height: float = 1.0
    pixel_depth: float = 1.0
    unit: str = "pixel"


@dataclass
class CropSettings:
    """Defaults for :func:`roi_stack.crop.crop_stack`."""

    fill_background: bool = False
    fill_value: int = 0
    padding: int = 0


@dataclass
class Volume:
    """3D image volume with 1-based plane access.

    :ivar data: Pixel array with (Z, Y, X) dimensions
    :ivar labels: Optional per-plane labels, one per Z plane
    :ivar calibration: Physical voxel size
    """

    data: np.ndarray
    labels: Optional[List[str]] = None
    calibration: Calibration = field(default_factory=Calibration)

    def __post_init__(self):
        if self.data.ndim != 3:
            raise ValueError(f"Expected 3D volume (Z, Y, X), got {self.data.ndim}D")
        if self.labels is None:
            self.labels = [""] * self.depth
        elif len(self.labels) != self.depth:
            raise ValueError(
                f"Got {len(self.labels)} plane labels for {self.depth} planes"
            )

    @property
    def depth(self) -> int:
        return self.data.shape[0]

    @property
    def height(self) -> int:
        return self.data.shape[1]

    @property
    def width(self) -> int:
        return self.data.shape[2]

    @property
    def dtype(self):
        return self.data.dtype

    def plane(self, index):
        # type: (int) -> np.ndarray
        """Return plane ``index`` (1-based) as a view into the volume."""
        if index < 1 or index > self.depth:
            raise IndexError(f"Plane {index} outside 1..{self.depth}")
        return self.data[index - 1]

    def plane_label(self, index):
        # type: (int) -> str
        return self.labels[index - 1]
