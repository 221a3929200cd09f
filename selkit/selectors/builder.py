# selkit/selectors/builder.py
from __future__ import annotations

"""CSS selector builder
--------------------
Accumulates typed selector fragments under the compound-selector grammar

    element#id.class[attr]:pseudo-class::pseudo-element

and renders them on demand. Element, id and pseudo-element occur at most once;
fragments must be added in grammar order.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Protocol

from selkit.utils.logger import get_logger, log_with_context

log = get_logger(__name__)


class SelectorBuildError(ValueError):
    pass


class DuplicateFragmentError(SelectorBuildError):
    pass


class OrderViolationError(SelectorBuildError):
    pass


DUPLICATE_MESSAGE = (
    "Element, id and pseudo-element should not occur more then one time inside the selector"
)
ORDER_MESSAGE = (
    "Selector parts should be arranged in the following order: "
    "element, id, class, attribute, pseudo-class, pseudo-element"
)


class FragmentKind(IntEnum):
    """Fragment kinds; the value is the rank in the grammar order."""

    ELEMENT = 0
    ID = 1
    CLASS = 2
    ATTRIBUTE = 3
    PSEUDO_CLASS = 4
    PSEUDO_ELEMENT = 5


# Kinds that may appear at most once per selector
SINGLE_KINDS = frozenset({FragmentKind.ELEMENT, FragmentKind.ID, FragmentKind.PSEUDO_ELEMENT})


class Stringifiable(Protocol):
    def stringify(self) -> str: ...


@dataclass
class SelectorFragment:
    element_name: Optional[str] = None
    id_name: Optional[str] = None
    class_names: List[str] = field(default_factory=list)
    attributes: List[str] = field(default_factory=list)
    pseudo_classes: List[str] = field(default_factory=list)
    pseudo_element: Optional[str] = None

    def slot(self, kind: FragmentKind):
        return getattr(self, _SLOT_NAMES[kind])

    def is_populated(self, kind: FragmentKind) -> bool:
        return bool(self.slot(kind))


_SLOT_NAMES = {
    FragmentKind.ELEMENT: "element_name",
    FragmentKind.ID: "id_name",
    FragmentKind.CLASS: "class_names",
    FragmentKind.ATTRIBUTE: "attributes",
    FragmentKind.PSEUDO_CLASS: "pseudo_classes",
    FragmentKind.PSEUDO_ELEMENT: "pseudo_element",
}


class SelectorBuilder:
    """
    Mutable accumulator for one selector chain.

    Every fragment setter returns the builder itself so calls can be chained:

        SelectorBuilder().element("a").attr('href$=".png"').pseudo_class("focus").stringify()
        # 'a[href$=".png"]:focus'

    `stringify()` takes a snapshot; the builder stays mutable afterwards.
    A builder filled by `combine()` is a finished combined selector and
    rejects further fragments.
    """

    def __init__(self) -> None:
        self._fragment = SelectorFragment()
        self._combined = False

    # ---------- Validation ----------

    def _reject(self, kind: FragmentKind, error: SelectorBuildError, reason: str) -> SelectorBuildError:
        log_with_context(log, fragment=kind.name.lower(), selector=self.stringify()).debug(
            f"Rejected {kind.name.lower()} fragment: {reason}"
        )
        return error

    def _check(self, kind: FragmentKind) -> None:
        if self._combined:
            raise self._reject(
                kind,
                OrderViolationError(f"{ORDER_MESSAGE} (a combined selector cannot be extended)"),
                "selector is already combined",
            )
        if kind in SINGLE_KINDS and self._fragment.is_populated(kind):
            raise self._reject(kind, DuplicateFragmentError(DUPLICATE_MESSAGE), "duplicate")
        for later in FragmentKind:
            if later > kind and self._fragment.is_populated(later):
                raise self._reject(kind, OrderViolationError(ORDER_MESSAGE), f"after {later.name.lower()}")

    # ---------- Fragment setters ----------

    def element(self, value: str) -> "SelectorBuilder":
        self._check(FragmentKind.ELEMENT)
        self._fragment.element_name = value
        return self

    def id(self, value: str) -> "SelectorBuilder":
        self._check(FragmentKind.ID)
        self._fragment.id_name = value
        return self

    def class_(self, value: str) -> "SelectorBuilder":
        self._check(FragmentKind.CLASS)
        self._fragment.class_names.append(value)
        return self

    def attr(self, value: str) -> "SelectorBuilder":
        self._check(FragmentKind.ATTRIBUTE)
        self._fragment.attributes.append(value)
        return self

    def pseudo_class(self, value: str) -> "SelectorBuilder":
        self._check(FragmentKind.PSEUDO_CLASS)
        self._fragment.pseudo_classes.append(value)
        return self

    def pseudo_element(self, value: str) -> "SelectorBuilder":
        self._check(FragmentKind.PSEUDO_ELEMENT)
        self._fragment.pseudo_element = value
        return self

    def add(self, kind: FragmentKind, value: str) -> "SelectorBuilder":
        """Dispatch to the setter for `kind` (used by loaders and the CLI)."""
        return _SETTERS[kind](self, value)

    # ---------- Combination ----------

    def combine(self, left: Stringifiable, combinator: str, right: Stringifiable) -> "SelectorBuilder":
        """
        Replace this builder's content with `left <combinator> right`.
        The combinator is inserted verbatim with one space on each side.
        """
        combined = f"{left.stringify()} {combinator} {right.stringify()}"
        self._fragment = SelectorFragment(element_name=combined)
        self._combined = True
        return self

    # ---------- Rendering ----------

    def stringify(self) -> str:
        f = self._fragment
        parts: List[str] = []
        if f.element_name:
            parts.append(f.element_name)
        if f.id_name:
            parts.append(f"#{f.id_name}")
        if f.class_names:
            parts.append("." + ".".join(f.class_names))
        parts.extend(f"[{a}]" for a in f.attributes)
        parts.extend(f":{p}" for p in f.pseudo_classes)
        if f.pseudo_element:
            parts.append(f"::{f.pseudo_element}")
        return "".join(parts)

    def __str__(self) -> str:
        return self.stringify()

    def __repr__(self) -> str:
        return f"SelectorBuilder({self.stringify()!r})"


_SETTERS = {
    FragmentKind.ELEMENT: SelectorBuilder.element,
    FragmentKind.ID: SelectorBuilder.id,
    FragmentKind.CLASS: SelectorBuilder.class_,
    FragmentKind.ATTRIBUTE: SelectorBuilder.attr,
    FragmentKind.PSEUDO_CLASS: SelectorBuilder.pseudo_class,
    FragmentKind.PSEUDO_ELEMENT: SelectorBuilder.pseudo_element,
}


__all__ = [
    "FragmentKind",
    "SelectorFragment",
    "SelectorBuilder",
    "SelectorBuildError",
    "DuplicateFragmentError",
    "OrderViolationError",
]
