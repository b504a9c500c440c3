from __future__ import annotations

import pytest
from pydantic import BaseModel

from pyqueryable import QueryableList


class Page(BaseModel):
    """Record with the attributes used throughout the tests."""

    uri: str
    name: str


class Person(BaseModel):
    """Record whose attributes are shared by several instances."""

    name: str
    age: int


@pytest.fixture
def pages() -> list[Page]:
    """Three pages, page_1/PAGE_1 through page_3/PAGE_3."""
    return [Page(uri=f"page_{index}", name=f"PAGE_{index}") for index in range(1, 4)]


@pytest.fixture
def collection(pages: list[Page]) -> QueryableList[Page]:
    """Pages searchable by uri, then by name."""
    return QueryableList(pages, ["uri", "name"])


@pytest.fixture
def people() -> list[Person]:
    return [
        Person(name="bob", age=23),
        Person(name="steve", age=23),
        Person(name="jim", age=30),
    ]
