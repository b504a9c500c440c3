"""
Default finder configuration.

Provides the Pydantic model that validates the attribute names a
collection consults, in priority order, when it is indexed by a bare value.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

from pyqueryable.exceptions import custom_error_msg
from pyqueryable.typing_compat import Annotated, TypeAlias

FinderName: TypeAlias = Annotated[str, StringConstraints(min_length=1)]


class FinderConfig(BaseModel):
    """
    Validated, ordered list of default finder attribute names.

    Parameters:
        default_finders: Attribute names consulted in order by bare-value lookups
    """

    model_config = ConfigDict(frozen=True)

    default_finders: Annotated[
        tuple[FinderName, ...],
        custom_error_msg(
            {
                "string_type": "Default finder {input} is not an attribute name",
                "string_too_short": "Default finder names cannot be empty",
            }
        ),
    ] = Field(default=())

    @classmethod
    def from_value(cls, value: str | Iterable[str] | None) -> FinderConfig:
        """
        Build a configuration from a single name, a sequence of names or ``None``.

        Args:
            value: ``None`` disables default finders, a string configures one

        Returns:
            FinderConfig: the validated configuration
        """
        if value is None:
            return cls()
        if isinstance(value, str):
            return cls(default_finders=(value,))
        return cls(default_finders=tuple(value))
