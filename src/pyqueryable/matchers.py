"""
Attribute matchers and search specifications.

Provides the Pydantic classes that turn a mapping of attribute names to
expected values into a predicate over records. Each expected value is
classified once into one of a closed set of matchers:

- **Text patterns** (``re.Pattern[str]``) → searched against ``str(value)``
- **Classes** (``type``) → ``isinstance`` check
- **Ranges** (``range``) → membership check
- **Callables** → called with the value, truthy result matches
- **Anything else** → equality

Every matcher also accepts plain equality, so a record whose attribute *is*
the pattern, class or callable is still found.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Mapping
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    RootModel,
    field_validator,
)

from pyqueryable.typing.aliases import Predicate, Record
from pyqueryable.typing_compat import Annotated, TypeAlias

log = logging.getLogger(__name__)


class _Missing:
    """Sentinel for attributes a record does not expose."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def attribute_value(record: Record, name: str) -> Any:
    """
    Read an attribute from a record without raising when it is absent.

    Mapping records are read by key, everything else with ``getattr``.

    Args:
        record: The record to inspect
        name: Attribute (or key) name

    Returns:
        The attribute value, or ``MISSING`` if the record does not expose it
    """
    if isinstance(record, Mapping):
        return record.get(name, MISSING)
    return getattr(record, name, MISSING)


class Matcher(BaseModel, ABC):
    """Base class for a single expected-value descriptor."""

    model_config = ConfigDict(frozen=True)

    kind: str

    @property
    @abstractmethod
    def expected(self) -> Any:
        """The raw expected value this matcher was built from."""

    @abstractmethod
    def _check(self, actual: Any) -> bool: ...

    def matches(self, actual: Any) -> bool:
        """Whether ``actual`` equals or otherwise satisfies the expected value."""
        return bool(self.expected == actual) or self._check(actual)


class LiteralMatcher(Matcher):
    """Matches values equal to ``value``."""

    kind: Literal["literal"] = "literal"
    value: Any = None

    @property
    def expected(self) -> Any:
        return self.value

    def _check(self, actual: Any) -> bool:  # noqa: ARG002
        return False


class PatternMatcher(Matcher):
    """Matches values whose string form contains a match for ``pattern``."""

    kind: Literal["pattern"] = "pattern"
    pattern: re.Pattern[str]

    @property
    def expected(self) -> Any:
        return self.pattern

    def _check(self, actual: Any) -> bool:
        if actual is None:
            return False
        return self.pattern.search(str(actual)) is not None


class TypeMatcher(Matcher):
    """Matches instances of ``expected_type``."""

    kind: Literal["type"] = "type"
    expected_type: type[Any]

    @property
    def expected(self) -> Any:
        return self.expected_type

    def _check(self, actual: Any) -> bool:
        return isinstance(actual, self.expected_type)


class RangeMatcher(Matcher):
    """Matches values contained in ``span``."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    kind: Literal["range"] = "range"
    span: range

    @property
    def expected(self) -> Any:
        return self.span

    def _check(self, actual: Any) -> bool:
        return actual in self.span


class PredicateMatcher(Matcher):
    """Matches values for which ``function`` returns a truthy result."""

    kind: Literal["predicate"] = "predicate"
    function: Callable[[Any], Any]

    @property
    def expected(self) -> Any:
        return self.function

    def _check(self, actual: Any) -> bool:
        return bool(self.function(actual))


# Type alias for all matcher types using discriminated union
MatcherType: TypeAlias = Annotated[
    LiteralMatcher | PatternMatcher | TypeMatcher | RangeMatcher | PredicateMatcher,
    Field(discriminator="kind"),
]


def expectation(expected: Any) -> Matcher:
    """
    Classify a raw expected value into its matcher.

    Matcher instances are returned unchanged, which lets callers force a
    literal comparison for values that would otherwise be classified
    differently.

    Args:
        expected: Raw expected value from a search mapping

    Returns:
        Matcher: the matcher for ``expected``
    """
    if isinstance(expected, Matcher):
        return expected
    if isinstance(expected, re.Pattern):
        if not isinstance(expected.pattern, str):
            msg = f"Only text patterns can be matched, got {expected!r}"
            raise TypeError(msg)
        return PatternMatcher(pattern=expected)
    if isinstance(expected, type):
        return TypeMatcher(expected_type=expected)
    if isinstance(expected, range):
        return RangeMatcher(span=expected)
    if callable(expected):
        return PredicateMatcher(function=expected)
    return LiteralMatcher(value=expected)


class Search(RootModel[dict[str, MatcherType]]):
    """
    Search specification mapping attribute names to matchers.

    A record matches when every attribute matches (logical AND). An empty
    search matches every record.

    Examples:
        >>> search = Search.model_validate({"name": "bob"})
        >>> search.matches({"name": "bob"})
        True
        >>> search.matches({"name": "steve"})
        False
        >>> search.matches({})
        False
    """

    root: dict[str, MatcherType] = Field(default_factory=dict)

    @field_validator("root", mode="before")
    @classmethod
    def _classify(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {name: expectation(expected) for name, expected in value.items()}
        return value

    def matches(self, record: Record) -> bool:
        """Whether ``record`` satisfies every matcher in this search."""
        for name, matcher in self.root.items():
            actual = attribute_value(record, name)
            if not matcher.matches(None if actual is MISSING else actual):
                return False
        return True

    def __iter__(self) -> Iterator[str]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, name: str) -> Matcher:
        return self.root[name]


def finder(search: Search | Mapping[str, Any]) -> Predicate:
    """
    Build a predicate that checks a record against ``search``.

    Example:

    >>> query = finder({"name": "bob"})
    >>> query({"name": "steve"})
    False
    >>> query({"name": "bob"})
    True

    Args:
        search: A search specification or a mapping of attribute names to expected values

    Returns:
        Callable: predicate returning ``True`` for matching records
    """
    if not isinstance(search, Search):
        search = Search.model_validate(dict(search))
    if log.isEnabledFor(logging.DEBUG):
        log.debug("Built finder for attributes %s", list(search))
    return search.matches


__all__ = (
    "MISSING",
    "LiteralMatcher",
    "Matcher",
    "MatcherType",
    "PatternMatcher",
    "PredicateMatcher",
    "RangeMatcher",
    "Search",
    "TypeMatcher",
    "attribute_value",
    "expectation",
    "finder",
)
