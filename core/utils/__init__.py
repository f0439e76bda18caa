"""
Utility modules for core functionality.

This package contains reusable utility helpers shared by the
enhancement engine, services and API layers.

Modules:
- decorators: Utility decorators (timer, etc.)
- enum_converter: Enum parsing and conversion
- params_processor: Parameter processing utilities
"""

from .decorators import timer
from .enum_converter import parse_enum
from .params_processor import params_to_dict, prepare_params

__all__ = [
    "timer",
    "parse_enum",
    "params_to_dict",
    "prepare_params",
]
