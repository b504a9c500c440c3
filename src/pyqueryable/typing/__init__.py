"""
typing
"""

from __future__ import annotations

from pyqueryable.typing.aliases import Key, Predicate, Record

__all__ = (
    "Key",
    "Predicate",
    "Record",
)
