"""
tfexplorer/models/validator.py

Turns decoded API responses into typed models, so that a response with the
wrong shape surfaces as DecodeError rather than a pydantic ValidationError.
"""

from typing import Any, Type, TypeVar
from pydantic import ValidationError, TypeAdapter

from tfexplorer.errors import DecodeError

T = TypeVar("T")


def validate_type(obj: Any, expected_type: Type[T]) -> T:
    """
    Coerce a decoded JSON body (or part of one) into `expected_type`.

    Args:
        obj (Any): Output of json.loads, or a model_dump of a JSON:API object.
        expected_type (Type[T]): A pydantic model or any type TypeAdapter accepts.

    Returns:
        T: `obj` as an instance of `expected_type`.

    Raises:
        DecodeError: If `obj` does not fit `expected_type`.
    """
    try:
        return TypeAdapter(expected_type).validate_python(obj)
    except ValidationError as exc:
        raise DecodeError(f"unexpected shape for {expected_type}: {exc}") from exc
