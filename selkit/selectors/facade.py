# selkit/selectors/facade.py
from __future__ import annotations

from selkit.selectors.builder import SelectorBuilder, Stringifiable


class SelectorFacade:
    """
    Entry points that start a new selector chain without naming the builder:

        css_selector_builder.id("main").class_("container").stringify()
        # '#main.container'
    """

    def element(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().element(value)

    def id(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().id(value)

    def class_(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().class_(value)

    def attr(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().attr(value)

    def pseudo_class(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().pseudo_class(value)

    def pseudo_element(self, value: str) -> SelectorBuilder:
        return SelectorBuilder().pseudo_element(value)

    def combine(self, left: Stringifiable, combinator: str, right: Stringifiable) -> SelectorBuilder:
        return SelectorBuilder().combine(left, combinator, right)


css_selector_builder = SelectorFacade()

__all__ = ["SelectorFacade", "css_selector_builder"]
