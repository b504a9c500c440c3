"""
Copyright (c) 2025 Giordon Stark. All rights reserved.

pyqueryable: attribute queries over ordered collections of records
"""

from __future__ import annotations

from pyqueryable._version import version as __version__
from pyqueryable.collections import QueryableList
from pyqueryable.exceptions import (
    QueryableException,
    UnrecognizedMethodError,
    UnsupportedKeyError,
)
from pyqueryable.matchers import Search, finder

__all__ = [
    "QueryableException",
    "QueryableList",
    "Search",
    "UnrecognizedMethodError",
    "UnsupportedKeyError",
    "__version__",
    "finder",
]
