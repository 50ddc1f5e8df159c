# =============================================================================
# Area/Linear Filters
# =============================================================================
# Closed ways can be either closed lines or areas. These filters use the
# `area` tag and the global area/linear key hints to drop closed ways from
# the table kind they do not belong to.
# =============================================================================

from typing import Iterable, Mapping

from ..models import Key
from .base import ElementFilter

__all__ = ["AreaTagsFilter", "LinearTagsFilter"]


class AreaTagsFilter(ElementFilter):
    """
    Linestring table filter: drop closed ways that are areas.

    A closed way is an area when tagged `area=yes`, or when it is not tagged
    `area=no` and the routing key is one of `area_tags`.
    """

    def __init__(self, area_tags: Iterable[Key]):
        self.area_tags = frozenset(area_tags)

    def keep(self, tags: Mapping[str, str], key: Key, closed: bool) -> bool:
        if not closed:
            return True
        area = tags.get("area")
        if area == "yes":
            return False
        if area != "no" and key in self.area_tags:
            return False
        return True


class LinearTagsFilter(ElementFilter):
    """
    Polygon table filter: drop closed ways that are lines.

    A closed way is a line when tagged `area=no`, or when it is not tagged
    `area=yes` and the routing key is one of `linear_tags`.
    """

    def __init__(self, linear_tags: Iterable[Key]):
        self.linear_tags = frozenset(linear_tags)

    def keep(self, tags: Mapping[str, str], key: Key, closed: bool) -> bool:
        if not closed:
            return True
        area = tags.get("area")
        if area == "no":
            return False
        if area != "yes" and key in self.linear_tags:
            return False
        return True
