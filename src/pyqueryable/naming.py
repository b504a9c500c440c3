"""
Dynamic finder name parsing.

Decomposes names such as ``find_by_name_and_age`` or ``find_all_by_city``
into structured searches, and bare names such as ``bob``, ``bob!`` or
``bob?`` into default-finder lookups.
"""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

FINDER_PATTERN = re.compile(r"^find_(by|all_by)_(.+?)([!?])?$")
NAME_PATTERN = re.compile(r"^(.+?)([!?])?$")
ATTRIBUTE_SEPARATOR = "_and_"


class FinderMethodName(BaseModel):
    """
    Structured decomposition of a dynamically dispatched name.

    Parameters:
        name: The raw name as it was requested
        kind: ``single`` returns the first match, ``all`` returns every match
        attributes: Attribute names parsed from a ``find_*_by_*`` name, empty for bare names
        token: The name without its modifier suffix
        suffix: Trailing ``!`` or ``?`` modifier, if any
        exact: Whether the lookup compares literally instead of by case-insensitive pattern
        boolean_result: Whether the lookup reports a match as ``True``/``False``
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: Literal["single", "all"] = "single"
    attributes: list[str] = Field(default_factory=list)
    token: str
    suffix: Literal["!", "?"] | None = None
    exact: bool = False
    boolean_result: bool = False

    @property
    def is_finder(self) -> bool:
        """Whether this name follows the ``find_by_*``/``find_all_by_*`` grammar."""
        return bool(self.attributes)


def parse_finder(name: str) -> FinderMethodName | None:
    """
    Parse a ``find_by_*`` or ``find_all_by_*`` name.

    >>> parse_finder("find_by_first_name_and_last_name").attributes
    ['first_name', 'last_name']
    >>> parse_finder("find_all_by_city").kind
    'all'
    >>> parse_finder("find_first_by_name") is None
    True

    Args:
        name: Requested attribute or method name

    Returns:
        FinderMethodName | None: the decomposition, or ``None`` if ``name`` is not a finder
    """
    match = FINDER_PATTERN.match(name)
    if match is None:
        return None
    prefix, segment, suffix = match.groups()
    attributes = [
        attribute for attribute in segment.split(ATTRIBUTE_SEPARATOR) if attribute
    ]
    if not attributes:
        return None
    return FinderMethodName(
        name=name,
        kind="single" if prefix == "by" else "all",
        attributes=attributes,
        token=name[: len(name) - len(suffix)] if suffix else name,
        suffix=suffix,
        exact=True,
    )


def parse_name(name: str) -> FinderMethodName:
    """
    Parse any dynamically requested name.

    Finder names are decomposed by :func:`parse_finder`; everything else is
    split into a bare token and an optional ``!``/``?`` modifier.

    >>> parse_name("bob?").boolean_result
    True
    >>> parse_name("bob!").exact
    True

    Args:
        name: Requested attribute or method name

    Returns:
        FinderMethodName: the decomposition
    """
    parsed = parse_finder(name)
    if parsed is not None:
        return parsed
    match = NAME_PATTERN.match(name)
    if match is None:
        # only the empty string ends up here
        return FinderMethodName(name=name, token=name)
    token, suffix = match.groups()
    return FinderMethodName(
        name=name,
        token=token,
        suffix=suffix,
        exact=suffix == "!",
        boolean_result=suffix == "?",
    )


__all__ = (
    "FinderMethodName",
    "parse_finder",
    "parse_name",
)
