"""
Selectors package
-----------------
Fluent CSS selector builder, its facade, and the YAML definition loader.
"""

from .builder import (
    FragmentKind,
    SelectorBuilder,
    SelectorBuildError,
    DuplicateFragmentError,
    OrderViolationError,
)
from .facade import SelectorFacade, css_selector_builder

__all__ = [
    "FragmentKind",
    "SelectorBuilder",
    "SelectorBuildError",
    "DuplicateFragmentError",
    "OrderViolationError",
    "SelectorFacade",
    "css_selector_builder",
]
