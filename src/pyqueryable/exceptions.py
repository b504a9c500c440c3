"""
Exception classes for pyqueryable.

Custom exception hierarchy for better error handling and debugging.
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    ValidationError,
    ValidationInfo,
    WrapValidator,
)
from pydantic_core import ErrorDetails, InitErrorDetails, PydanticCustomError


class QueryableException(Exception):
    """
    Base exception class for all pyqueryable-related errors.

    This serves as the root exception that all other pyqueryable exceptions inherit from,
    allowing users to catch all pyqueryable-specific errors with a single except clause.
    """


class UnsupportedKeyError(QueryableException, TypeError):
    """
    Exception raised when a key cannot be used to index a collection.

    This typically occurs when:
    - The key is not an integer or slice and no default finders are configured
    - The key wraps more or fewer than one inner key (``collection[[a, b]]``)

    Subclasses ``TypeError`` so that callers relying on plain ``list``
    semantics observe the same failure.
    """


class UnrecognizedMethodError(QueryableException, AttributeError):
    """
    Exception raised when a dynamic attribute cannot be resolved.

    The name is neither a ``find_by_*``/``find_all_by_*`` finder nor a value
    found through the default finders. Subclasses ``AttributeError`` so that
    ``hasattr`` and ``getattr(obj, name, default)`` behave as usual.
    """


def custom_error_msg(custom_messages: dict[str, str]) -> Any:
    r"""
    Customize an error message for pydantic validation errors.

    See https://github.com/pydantic/pydantic/discussions/8468.

    Example:

    >>> from typing import Annotated
    >>> from pydantic import BaseModel
    >>> from pydantic.types import StringConstraints
    >>> NameString = Annotated[
    ...     str,
    ...     StringConstraints(pattern=r"^[a-zA-Z0-9]*$"),
    ...     custom_error_msg({"string_pattern_mismatch": "The field {field_name} can only contain letters and numbers."}),
    ... ]
    >>> class Model(BaseModel):
    ...     name: NameString
    >>> Model(name="dog@123")  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
    ...
    pydantic_core._pydantic_core.ValidationError: 1 validation error for Model
    name
      The field name can only contain letters and numbers. ...
    """

    def _validator(v: Any, next_: Any, ctx: ValidationInfo) -> Any:
        try:
            return next_(v, ctx)
        except ValidationError as exc:
            new_errors: list[InitErrorDetails | ErrorDetails] = []
            for error in exc.errors():
                error["loc"] = error["loc"][1:]  # to skip current location
                custom_message = custom_messages.get(error["type"])

                if custom_message:
                    err_ctx = error.get("ctx", {}).copy()

                    # Add input and ValidationInfo data to context
                    err_ctx["input"] = error["input"]
                    if ctx.data:
                        err_ctx.update(ctx.data)

                    new_error = InitErrorDetails(
                        type=PydanticCustomError(
                            error["type"], custom_message, err_ctx
                        ),
                        loc=error["loc"],
                        input=error["input"],
                    )

                    new_errors.append(new_error)
                else:
                    new_errors.append(error)

            raise ValidationError.from_exception_data(
                title=exc.title,
                line_errors=new_errors,  # type: ignore[arg-type]
            ) from None

    return WrapValidator(_validator)
