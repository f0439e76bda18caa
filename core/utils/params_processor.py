"""
Parameter processing utilities.

Handles preparation of transform parameters, providing unified
parameter handling across all enhancement methods.
"""

from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


def prepare_params(params: Optional[T], params_class: Type[T]) -> T:
    """
    Prepare transform parameters with default initialization.

    If params is None, creates a new instance with defaults.
    If params is already an instance, returns it unchanged.

    Args:
        params: Parameters instance or None
        params_class: Pydantic parameter class for defaults

    Returns:
        Initialized parameters instance

    Example:
        >>> prepare_params(None, ThresholdParams)
        ThresholdParams(threshold=128)
    """
    if params is None:
        return params_class()
    return params


def params_to_dict(params: Optional[BaseModel]) -> Dict[str, Any]:
    """
    Convert Pydantic params to a plain dictionary with enums as strings.

    Args:
        params: Pydantic parameter model instance, or None

    Returns:
        Dictionary representation of parameters ({} for None)
    """
    if params is None:
        return {}

    data = params.model_dump(exclude_none=True)
    for key, value in data.items():
        if hasattr(value, "value"):
            data[key] = value.value

    return data
