"""Queryable collection of records sharing a common attribute surface."""

from __future__ import annotations

import functools
import logging
import re
from collections.abc import Iterable, Iterator, Mapping, MutableSequence
from typing import Any, TypeVar, overload

from pydantic import Field, PrivateAttr, RootModel, SkipValidation

from pyqueryable.config import FinderConfig
from pyqueryable.exceptions import UnrecognizedMethodError, UnsupportedKeyError
from pyqueryable.matchers import LiteralMatcher, Search, finder
from pyqueryable.naming import FinderMethodName, parse_name
from pyqueryable.typing.aliases import Key, Predicate
from pyqueryable.typing_compat import Self

log = logging.getLogger(__name__)

T = TypeVar("T")


def is_query(key: Key) -> bool:
    """
    Whether ``key`` is used as search criteria directly.

    Mappings and :class:`~pyqueryable.matchers.Search` instances are attribute
    searches, other callables (except classes) are whole-record predicates.
    Neither goes through the default finders.
    """
    if isinstance(key, (Mapping, Search)):
        return True
    return callable(key) and not isinstance(key, type)


class QueryableList(RootModel[list[T]], MutableSequence):  # type: ignore[type-arg]
    """Ordered collection of records that can be searched by attribute.

    Behaves like a ``list`` for integer and slice access and for in-place
    mutation. Any other key is treated as a query:

    - **Mappings** (``{"uri": "/"}``) → first record matching every attribute
    - **Callables** → first record for which the callable is truthy
    - **One-element lists** (``[key]``) → every match, as a new collection
    - **Anything else** → looked up against the default finders in order

    Examples:
        Lookups through default finders::

            pages = QueryableList(Page.all(), ["uri", "name"])

            pages["/"]                      # Page(uri='/', name='Home')
            pages["Home"]                   # Page(uri='/', name='Home')
            pages[re.compile("home", re.I)] # Page(uri='/', name='Home')
            pages["missing"]                # None

        Attribute searches::

            pages[{"uri": "/", "name": "Home"}]     # Page(uri='/', name='Home')
            pages[[{"uri": re.compile("users")}]]   # QueryableList([...])
            pages.find_by(uri="/")                  # Page(uri='/', name='Home')
            pages.find_all(lambda page: page.uri.startswith("/users"))

        Dynamic finders and dot notation::

            pages.find_by_name("Home")              # Page(uri='/', name='Home')
            pages.find_all_by_uri_and_name("/", "Home")
            pages.home                              # Page(uri='/', name='Home')
            getattr(pages, "home?")                 # True

    Attributes:
        default_finders (tuple[str, ...]): Attribute names consulted, in order,
            when the collection is indexed by a bare value.
    """

    # records are held by reference and never validated
    root: list[SkipValidation[T]] = Field(default_factory=list)
    _default_finders: tuple[str, ...] = PrivateAttr(default=())

    def __init__(
        self,
        root: Iterable[T] = (),
        default_finders: str | Iterable[str] | None = None,
    ) -> None:
        """
        Initialize the collection.

        Args:
            root: Initial records, kept by reference
            default_finders: Attribute name or names used by bare-value lookups,
                ``None`` disables them
        """
        super().__init__(list(root))
        self._default_finders = FinderConfig.from_value(default_finders).default_finders

    @property
    def default_finders(self) -> tuple[str, ...]:
        """Attribute names consulted, in order, by bare-value lookups."""
        return self._default_finders

    def _spawn(self, records: Iterable[T]) -> Self:
        return type(self)(records, self._default_finders)

    # sequence protocol

    @overload
    def __getitem__(self, key: int) -> T | None: ...

    @overload
    def __getitem__(self, key: slice) -> Self: ...

    @overload
    def __getitem__(self, key: Any) -> Any: ...

    def __getitem__(self, key: Any) -> Any:
        # Try to handle integer indexes, slices, and anything else that is
        # natively supported by list first
        try:
            value = self.root[key]
        except IndexError:
            return None
        except TypeError as error:
            return self._query_item(key, error)
        if isinstance(key, slice):
            return self._spawn(value)
        return value

    def _query_item(self, key: Key, error: TypeError) -> Any:
        if isinstance(key, (list, tuple)):
            if len(key) != 1:
                msg = f"Expected a single key wrapped in a list to find all matches, got {len(key)}"
                raise UnsupportedKeyError(msg) from error
            (inner,) = key
            if is_query(inner):
                return self.find_all(inner)
            self._check_default_finders(inner, error)
            return self.lookup_all(inner)
        if is_query(key):
            return self.find_by(key)
        self._check_default_finders(key, error)
        return self.lookup(key)

    def _check_default_finders(self, key: Key, error: TypeError) -> None:
        if not self._default_finders:
            msg = f"{error}; configure default_finders to look up records by {type(key).__name__}"
            raise UnsupportedKeyError(msg) from error

    def __setitem__(self, key: Any, value: Any) -> None:
        self.root[key] = value

    def __delitem__(self, key: int | slice) -> None:
        del self.root[key]

    def __len__(self) -> int:
        return len(self.root)

    def __iter__(self) -> Iterator[T]:  # type: ignore[override]
        return iter(self.root)

    def __contains__(self, value: object) -> bool:
        return value in self.root

    def insert(self, index: int, value: T) -> None:
        self.root.insert(index, value)

    def pop(self, index: int = -1) -> T:
        return self.root.pop(index)

    def index(self, value: Any, start: int = 0, stop: int | None = None) -> int:
        if stop is None:
            return self.root.index(value, start)
        return self.root.index(value, start, stop)

    def count(self, value: Any) -> int:
        return self.root.count(value)

    def __add__(self, other: Iterable[T]) -> Self:
        return self._spawn([*self.root, *other])

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QueryableList):
            return self.root == other.root
        if isinstance(other, list):
            return self.root == other
        return NotImplemented

    def __repr__(self) -> str:
        if self._default_finders:
            return f"{type(self).__name__}({self.root!r}, default_finders={list(self._default_finders)!r})"
        return f"{type(self).__name__}({self.root!r})"

    __str__ = __repr__

    # searching

    def finder(self, search: Search | Mapping[str, Any]) -> Predicate:
        """
        Build a predicate checking that a record matches every attribute of ``search``.

        It can be passed to :meth:`find_by`, :meth:`find_all` or ``filter``.

        Args:
            search: Mapping of attribute names to expected values

        Returns:
            Callable: predicate over records
        """
        return finder(search)

    def _predicate(
        self, search: Search | Mapping[str, Any] | Predicate | None, attributes: dict[str, Any]
    ) -> Predicate:
        if search is None:
            return finder(attributes)
        if isinstance(search, Search):
            return finder({**search.root, **attributes}) if attributes else finder(search)
        if isinstance(search, Mapping):
            return finder({**search, **attributes})
        if callable(search):
            if attributes:
                msg = "Cannot combine a predicate with attribute criteria"
                raise TypeError(msg)
            return search
        msg = f"Expected a mapping, Search or callable, got {type(search).__name__}"
        raise TypeError(msg)

    def find_by(
        self,
        search: Search | Mapping[str, Any] | Predicate | None = None,
        /,
        **attributes: Any,
    ) -> T | None:
        """
        Return the first record matching ``search``, or ``None``.

        ``search`` is either a mapping of attribute names to expected values
        (merged with any keyword arguments) or a predicate over whole records.
        With no criteria at all the first record is returned.

        Example::

            users.find_by(age=25)                        # User(age=25)
            users.find_by({"name": "missing"})           # None
            users.find_by(lambda user: user.age < 30)    # User(age=22)
        """
        predicate = self._predicate(search, attributes)
        return next((record for record in self.root if predicate(record)), None)

    def find_all(
        self,
        search: Search | Mapping[str, Any] | Predicate | None = None,
        /,
        **attributes: Any,
    ) -> Self:
        """
        Return a new collection of every record matching ``search``.

        Behaves like :meth:`find_by` but keeps every match, in order. The
        result carries the same default finders. With no criteria the whole
        collection is duplicated.
        """
        predicate = self._predicate(search, attributes)
        return self._spawn(record for record in self.root if predicate(record))

    find_all_by = find_all

    # default finders

    def _require_default_finders(self, key: Key) -> tuple[str, ...]:
        if not self._default_finders:
            msg = f"Cannot look up {key!r}: no default finders configured"
            raise UnsupportedKeyError(msg)
        return self._default_finders

    def lookup(self, key: Key) -> T | None:
        """
        Return the first record whose default finder attributes match ``key``.

        Default finders are tried in the configured order; the first one that
        matches any record wins. Mappings and callables are searched directly.

        Raises:
            UnsupportedKeyError: ``key`` is a plain value and no default finders are configured
        """
        if is_query(key):
            return self.find_by(key)
        for attribute in self._require_default_finders(key):
            match = self.find_by({attribute: key})
            if match is not None:
                log.debug("Found %r by default finder %r", key, attribute)
                return match
        return None

    def lookup_all(self, key: Key) -> Self:
        """
        Return every record matching ``key`` on the first default finder that matches.

        Raises:
            UnsupportedKeyError: ``key`` is a plain value and no default finders are configured
        """
        if is_query(key):
            return self.find_all(key)
        for attribute in self._require_default_finders(key):
            matches = self.find_all({attribute: key})
            if matches:
                log.debug("Found %d records for %r by default finder %r", len(matches), key, attribute)
                return matches
        return self._spawn(())

    # dynamic dispatch

    def query(self, name: str, /, *arguments: Any) -> Any:
        """
        Resolve a dynamic finder or bare name.

        ``find_by_<a>_and_<b>`` and ``find_all_by_<a>_and_<b>`` zip the
        attribute names with ``arguments`` in order and compare literally.
        Any other name is looked up through the default finders:

        - ``name`` → case-insensitive pattern lookup, ``UnrecognizedMethodError`` if nothing matches
        - ``name!`` → literal lookup, ``UnrecognizedMethodError`` if nothing matches
        - ``name?`` → ``True`` if the pattern lookup matches, ``False`` otherwise

        Example::

            users.query("find_by_name_and_age", "jim", 23)  # User(name='jim', age=23)
            users.query("bob?")                             # True
        """
        parsed = parse_name(name)
        if parsed.is_finder:
            return self._find_by_name(parsed, arguments)
        if arguments:
            msg = f"{name!r} does not accept arguments"
            raise TypeError(msg)
        return self._find_by_token(parsed)

    def _find_by_name(self, parsed: FinderMethodName, arguments: tuple[Any, ...]) -> Any:
        if len(arguments) != len(parsed.attributes):
            msg = f"{parsed.token}() takes {len(parsed.attributes)} arguments ({len(arguments)} given)"
            raise TypeError(msg)
        search = {
            attribute: LiteralMatcher(value=value)
            for attribute, value in zip(parsed.attributes, arguments, strict=True)
        }
        log.debug("Dynamic finder %r searching %s", parsed.name, parsed.attributes)
        if parsed.kind == "all":
            return self.find_all(search)
        return self.find_by(search)

    def _find_by_token(self, parsed: FinderMethodName) -> Any:
        key: Any = (
            parsed.token
            if parsed.exact
            else re.compile(re.escape(parsed.token), re.IGNORECASE)
        )
        value = None
        if parsed.token:
            try:
                value = self.lookup(key)
            except UnsupportedKeyError:
                log.debug("No default finders to resolve %r", parsed.name)
        if parsed.boolean_result:
            return value is not None
        if value is None:
            msg = f"{type(self).__name__!r} object has no attribute {parsed.name!r}"
            raise UnrecognizedMethodError(msg)
        return value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return super().__getattr__(name)  # type: ignore[misc]
        parsed = parse_name(name)
        if parsed.is_finder:
            return functools.partial(self.query, name)
        return self._find_by_token(parsed)

    def responds_to(self, name: str) -> bool:
        """
        Whether ``name`` resolves on this collection, without raising.

        Regular attributes, finder names and ``?`` names always respond.
        Bare names respond when the default finders match a record; any error
        raised while probing means the name does not respond.
        """
        if hasattr(type(self), name) or name in self.__dict__:
            return True
        if name.startswith("_"):
            return False
        parsed = parse_name(name)
        if parsed.is_finder or parsed.boolean_result:
            return True
        try:
            self._find_by_token(parsed)
        except Exception as exc:  # noqa: BLE001
            log.debug("%r does not respond to %r: %s", type(self).__name__, name, exc)
            return False
        return True


__all__ = ("QueryableList", "is_query")
