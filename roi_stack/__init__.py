from roi_stack.models import (
    ALL_PLANES,
    BoundingBox,
    Calibration,
    CropSettings,
    Region,
    SpecificPlane,
    Volume,
)
from roi_stack.labels import parse_plane_label
from roi_stack.collection import RoiCollection, delete_all
from roi_stack.resolver import is_active_on_all_planes, resolve_plane
from roi_stack.selection import select_for_plane
from roi_stack.bounds import get_limits, safe_bounds
from roi_stack.crop import NoRoiBoundsError, crop_stack
from roi_stack.points import get_point_coordinates

__version__ = "0.1.0"
