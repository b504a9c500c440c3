"""
typing
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pyqueryable.typing_compat import TypeAlias

Record: TypeAlias = Any
Predicate: TypeAlias = Callable[[Any], Any]
Key: TypeAlias = Any

__all__ = (
    "Key",
    "Predicate",
    "Record",
)
