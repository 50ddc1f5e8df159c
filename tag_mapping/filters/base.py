# =============================================================================
# Base Classes for Element Filters
# =============================================================================
# Abstract base classes for the predicates applied to an element after it
# was routed to a table.
# =============================================================================

from abc import ABC, abstractmethod
from typing import Mapping

from ..models import Key

__all__ = ["ElementFilter", "ValueFilter"]


class ElementFilter(ABC):
    """
    Base class for all element filters.

    A filter decides whether an element routed to a table is kept for that
    table. Filters hold no mutable state once built and can be shared by any
    number of threads.
    """

    @abstractmethod
    def keep(self, tags: Mapping[str, str], key: Key, closed: bool) -> bool:
        """
        Decide whether to keep the element.

        Args:
            tags: Tags of the element
            key: Tag key that routed the element to the table
            closed: Whether the element is a closed way

        Returns:
            True to keep the element for the table, False to drop it
        """
        pass

    def __call__(self, tags: Mapping[str, str], key: Key, closed: bool) -> bool:
        return self.keep(tags, key, closed)

    def __repr__(self) -> str:
        attrs = ", ".join(f"{name}={value!r}" for name, value in vars(self).items())
        return f"{type(self).__name__}({attrs})"


class ValueFilter(ElementFilter):
    """
    Base class for filters that test the value of one tag key.

    When the element carries `tag_key` with a matching value the filter
    returns `keep_on_match`, otherwise the opposite. Require filters keep on
    match, reject filters drop on match.
    """

    def __init__(self, tag_key: Key, keep_on_match: bool):
        self.tag_key = tag_key
        self.keep_on_match = keep_on_match

    @abstractmethod
    def matches(self, value: str) -> bool:
        """Return True if `value` of `tag_key` matches this filter."""
        pass

    def keep(self, tags: Mapping[str, str], key: Key, closed: bool) -> bool:
        if self.tag_key in tags and self.matches(tags[self.tag_key]):
            return self.keep_on_match
        return not self.keep_on_match
