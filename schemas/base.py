"""
Base schema for enhancement transform parameters.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class BaseTransformParams(BaseModel):
    """
    Common base for all transform parameter models.

    Unknown fields are rejected so a typo in a request body surfaces as a
    validation error instead of silently falling back to a default.
    """

    model_config = ConfigDict(extra="forbid")

    def to_dict(self) -> Dict[str, Any]:
        """Export to dict for transform functions."""
        return self.model_dump(exclude_none=True)
