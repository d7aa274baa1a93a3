"""Resource criteria - predicates over resource names."""

import re
from abc import ABC
from abc import abstractmethod
from pathlib import Path


class ResourceCriteria(ABC):
    """Decides whether a named resource should be included in a listing."""

    @abstractmethod
    def matches(self, resource_name: str | None) -> bool:
        """Return True if the resource name satisfies this criteria."""


class RegexResourceCriteria(ResourceCriteria):
    """Matches the file name of a resource against a regular expression.

    Only the final path segment is tested, and the whole segment must match.
    The compiled pattern is never mutated, so one instance can be shared
    between threads.

    Example:
        >>> criteria = RegexResourceCriteria(r"^Test[0-9]+.txt")
        >>> criteria.matches("foo/bar/Test12.txt")
        True
        >>> criteria.matches("foo/bar/Test.txt")
        False
    """

    def __init__(self, regex: str):
        """Compile the pattern.

        Args:
            regex: Regular expression the resource file name must match

        Raises:
            re.error: The pattern is not a valid regular expression
        """
        self._pattern = re.compile(regex)

    @property
    def pattern(self) -> re.Pattern:
        return self._pattern

    def matches(self, resource_name: str | None) -> bool:
        if resource_name is None:
            return False
        return self._pattern.fullmatch(Path(resource_name).name) is not None

    def __repr__(self) -> str:
        return f"RegexResourceCriteria({self._pattern.pattern!r})"
