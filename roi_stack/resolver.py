"""Plane association of individual regions."""

from roi_stack.collection import RoiCollection
from roi_stack.models import ALL_PLANES, PlaneAssociation, Region


def resolve_plane(region, collection):
    # type: (Region, RoiCollection) -> PlaneAssociation
    """Resolve the plane a region's label associates it with.

    An empty or missing label, or one the collection cannot parse, means the
    region is active on every plane. Resolution never fails.

    :param region: Region to resolve
    :param collection: Collection providing the label lookup
    :return: ``SpecificPlane`` or ``ALL_PLANES``
    """
    if not region.label:
        return ALL_PLANES
    return collection.plane_for_label(region.label)


def is_active_on_all_planes(region, collection):
    # type: (Region, RoiCollection) -> bool
    """Whether a named region applies to every plane. Unnamed regions never do."""
    if region.label is None:
        return False
    return resolve_plane(region, collection) is ALL_PLANES


def matches_plane(region, collection, plane_index):
    # type: (Region, RoiCollection, int) -> bool
    """Whether ``region`` is active on ``plane_index``.

    The label-derived plane and the region's own position attribute are both
    honoured; either one matching is enough.
    """
    association = resolve_plane(region, collection)
    if association is ALL_PLANES:
        return True
    if association.index == plane_index:
        return True
    return region.position is not None and region.position == plane_index
