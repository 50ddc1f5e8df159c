# =============================================================================
# Tag Value Filters
# =============================================================================
# Concrete require/reject filters on the value of one tag key.
# =============================================================================

import re
from typing import Iterable

from ..errors import MappingFormatError
from ..models import Key, Value
from .base import ValueFilter

__all__ = ["AnyValueFilter", "SingleValueFilter", "ValueSetFilter", "RegexpFilter"]


class AnyValueFilter(ValueFilter):
    """Matches whenever the key is present, whatever its value."""

    def matches(self, value: str) -> bool:
        return True


class SingleValueFilter(ValueFilter):
    """Matches one configured value."""

    def __init__(self, tag_key: Key, value: Value, keep_on_match: bool):
        super().__init__(tag_key, keep_on_match)
        self.value = value

    def matches(self, value: str) -> bool:
        return value == self.value


class ValueSetFilter(ValueFilter):
    """Matches any of several configured values."""

    def __init__(self, tag_key: Key, values: Iterable[Value], keep_on_match: bool):
        super().__init__(tag_key, keep_on_match)
        self.values = frozenset(values)

    def matches(self, value: str) -> bool:
        return value in self.values


class RegexpFilter(ValueFilter):
    """
    Matches values the configured regular expression finds a match in.

    The pattern is compiled when the filter is built, so an invalid pattern
    fails while compiling the mapping, not while filtering elements.
    """

    def __init__(self, tag_key: Key, pattern: str, keep_on_match: bool):
        super().__init__(tag_key, keep_on_match)
        try:
            self.pattern = re.compile(pattern)
        except re.error as e:
            raise MappingFormatError(
                f"invalid regular expression {pattern!r} for key '{tag_key}': {e}"
            ) from e

    def matches(self, value: str) -> bool:
        return self.pattern.search(value) is not None
