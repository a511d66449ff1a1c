"""Plane lookup from ROI labels.

ROI managers name regions "ssss-yyyy-xxxx", where the leading token is the
plane the region was drawn on and the other two are its centre coordinates.
Wider stacks use five or six digit fields ("sssss-yyyyy-xxxxx").
"""

from typing import Optional
from roi_stack.models import ALL_PLANES, PlaneAssociation, SpecificPlane

# (plane field width, second delimiter position)
_LABEL_LAYOUTS = ((4, 9), (5, 11), (6, 13))


def _parse_number(token):
    # type: (str) -> Optional[int]
    try:
        return int(float(token))
    except (ValueError, OverflowError):
        return None


def parse_plane_label(label):
    # type: (Optional[str]) -> PlaneAssociation
    """Extract the plane encoded at the start of an ROI label.

    :param label: ROI label, may be empty or None
    :return: ``SpecificPlane`` for a recognised label, ``ALL_PLANES`` otherwise
    """
    if not label:
        return ALL_PLANES

    for width, second in _LABEL_LAYOUTS:
        min_length = second + width + 1
        if (
            len(label) >= min_length
            and label[width] == "-"
            and label[second] == "-"
        ):
            plane = _parse_number(label[:width])
            if plane is None:
                return ALL_PLANES
            return SpecificPlane(plane)

    return ALL_PLANES
