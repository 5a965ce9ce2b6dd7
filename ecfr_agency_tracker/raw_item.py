"""
Read-only access to one raw JSON object from a search response.

Search API items do not follow a fixed schema, so every accessor returns
None instead of raising when a field is missing or has an unexpected type.
"""

import re
from typing import Any, Dict, List, Optional


_INTEGER_PATTERN = re.compile(r'^\s*[+-]?[0-9]+\s*$')
_INT32_MIN = -2 ** 31
_INT32_MAX = 2 ** 31 - 1


def is_pure_integer(value: Optional[str]) -> bool:
    """
    Check whether a string is a plain 32-bit integer such as "12" or " -3 ".

    Agency fields sometimes hold numeric category codes instead of names;
    those values are rejected as agency names.
    """
    if value is None or not _INTEGER_PATTERN.match(value):
        return False
    return _INT32_MIN <= int(value) <= _INT32_MAX


class RawItem:
    """Typed accessors over a raw JSON object."""

    def __init__(self, data: Any):
        """
        Args:
            data: Decoded JSON value; anything that is not an object is
                treated as an empty item
        """
        self._data: Dict[str, Any] = data if isinstance(data, dict) else {}

    def __contains__(self, name: str) -> bool:
        return name in self._data

    def keys(self) -> List[str]:
        return list(self._data.keys())

    def get_string(self, name: str) -> Optional[str]:
        """
        Get a field as a string.

        Strings are returned as-is, numbers and booleans are stringified,
        null, objects and arrays count as absent.
        """
        value = self._data.get(name)
        if value is None or isinstance(value, (dict, list)):
            return None
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if isinstance(value, str):
            return value
        return str(value)

    def get_object(self, name: str) -> Optional['RawItem']:
        """Get a nested object field, or None if it is absent or not an object."""
        value = self._data.get(name)
        if isinstance(value, dict):
            return RawItem(value)
        return None

    def get_array(self, name: str) -> Optional[List[Any]]:
        """Get an array field, or None if it is absent or not an array."""
        value = self._data.get(name)
        if isinstance(value, list):
            return value
        return None

    def first_string(self, *names: str) -> Optional[str]:
        """Return the first present, non-empty string among the given fields."""
        for name in names:
            value = self.get_string(name)
            if value:
                return value
        return None
