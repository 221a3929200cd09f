"""
selkit
------
CSS selector composition plus small value-object and JSON helpers.
"""

from selkit.selectors import (
    SelectorBuilder,
    DuplicateFragmentError,
    OrderViolationError,
    css_selector_builder,
)
from selkit.serialization import from_json, get_json
from selkit.shapes import Rectangle

__version__ = "0.1.0"

__all__ = [
    "SelectorBuilder",
    "DuplicateFragmentError",
    "OrderViolationError",
    "css_selector_builder",
    "Rectangle",
    "get_json",
    "from_json",
]
