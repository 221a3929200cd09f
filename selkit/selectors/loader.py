# selkit/selectors/loader.py
from __future__ import annotations

"""Selector definition schema and loader
---------------------------------------
Pydantic models for named selector definitions and a YAML loader
(multi-document files supported). A definition's `selector` is either an
ordered list of fragment steps or a `combine` node joining two selectors.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Union
import os
import re

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from selkit.selectors.builder import FragmentKind, SelectorBuilder
from selkit.utils.logger import get_logger

log = get_logger(__name__)


# ---------- Core enums ----------


class FragmentName(str, Enum):
    element = "element"
    id = "id"
    class_ = "class"
    attr = "attr"
    pseudo_class = "pseudo_class"
    pseudo_element = "pseudo_element"

    @property
    def kind(self) -> FragmentKind:
        return _KIND_BY_NAME[self]


_KIND_BY_NAME = {
    FragmentName.element: FragmentKind.ELEMENT,
    FragmentName.id: FragmentKind.ID,
    FragmentName.class_: FragmentKind.CLASS,
    FragmentName.attr: FragmentKind.ATTRIBUTE,
    FragmentName.pseudo_class: FragmentKind.PSEUDO_CLASS,
    FragmentName.pseudo_element: FragmentKind.PSEUDO_ELEMENT,
}


def parse_fragment_name(raw: str) -> FragmentName:
    """Accept `pseudo-class` / `pseudo_class` / `Pseudo-Class` spellings."""
    key = raw.strip().lower().replace("-", "_")
    try:
        return FragmentName(key)
    except ValueError:
        choices = ", ".join(n.value for n in FragmentName)
        raise ValueError(f"unknown fragment kind {raw!r} (expected one of: {choices})") from None


# ---------- Models ----------


class FragmentStep(BaseModel):
    kind: FragmentName
    value: str = Field(..., description="Fragment body, e.g. 'a', 'main', 'href$=\".png\"'")

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, v):
        return parse_fragment_name(v) if isinstance(v, str) else v

    @field_validator("value")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("fragment value cannot be empty")
        return v


class Combination(BaseModel):
    left: SelectorNode
    combinator: str = Field(..., description="' ', '>', '+' or '~' (inserted verbatim)")
    right: SelectorNode


class CombineNode(BaseModel):
    combine: Combination


SelectorNode = Union[list[FragmentStep], CombineNode]

Combination.model_rebuild()
CombineNode.model_rebuild()


def build_selector(node: SelectorNode) -> SelectorBuilder:
    """Turn a parsed selector node into a builder (builder errors propagate)."""
    if isinstance(node, CombineNode):
        c = node.combine
        return SelectorBuilder().combine(build_selector(c.left), c.combinator, build_selector(c.right))
    builder = SelectorBuilder()
    for step in node:
        builder.add(step.kind.kind, step.value)
    return builder


class SelectorDefinition(BaseModel):
    version: str = Field(default="1")
    name: str = Field(..., description="Selector name, e.g. 'gallery_link'")
    description: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    selector: SelectorNode

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("selector")
    @classmethod
    def _steps_non_empty(cls, v):
        if isinstance(v, list) and not v:
            raise ValueError("selector must contain at least one fragment")
        return v

    def build(self) -> SelectorBuilder:
        return build_selector(self.selector)

    def render(self) -> str:
        return self.build().stringify()


# ---------- Helpers ----------


_ENV_REF = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def _subst_env(obj):
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), m.group(0)), obj)
    if isinstance(obj, list):
        return [_subst_env(x) for x in obj]
    if isinstance(obj, dict):
        return {k: _subst_env(v) for k, v in obj.items()}
    return obj


def _format_validation_error(ve: ValidationError, header: str) -> str:
    lines = [header]
    for e in ve.errors():
        loc = ".".join(str(p) for p in e.get("loc", []))
        msg = e.get("msg", "invalid value")
        lines.append(f"  - {loc}: {msg}")
    return "\n".join(lines)


# ---------- Public API ----------


def load_selector_file(path: Path | str) -> list[SelectorDefinition]:
    """Load one or more selector definitions from a YAML file (supports multi-document)."""
    sel_path = Path(path)
    if not sel_path.exists():
        raise FileNotFoundError(f"Selector file not found: {sel_path}")
    try:
        docs = list(yaml.safe_load_all(sel_path.read_text(encoding="utf-8")))
    except yaml.YAMLError as ye:
        raise ValueError(f"YAML parse error in {sel_path}: {ye}") from ye

    out: list[SelectorDefinition] = []
    for idx, data in enumerate(docs, start=1):
        if data is None:
            continue
        if not isinstance(data, dict):
            raise ValueError(f"Document {idx} in {sel_path} must be a mapping/object.")
        try:
            out.append(SelectorDefinition.model_validate(_subst_env(data)))
        except ValidationError as ve:
            header = f"Invalid selector definition '{sel_path}' (document {idx}):"
            raise ValueError(_format_validation_error(ve, header)) from ve
    if not out:
        raise ValueError(f"No selector definitions found in {sel_path}")
    log.debug(f"Loaded {len(out)} selector definition(s) from {sel_path}")
    return out


def find_selector_files(root: Path, recursive: bool = True) -> list[Path]:
    if recursive:
        return sorted(list(root.rglob("*.yaml")) + list(root.rglob("*.yml")))
    return sorted(list(root.glob("*.yaml")) + list(root.glob("*.yml")))


__all__ = [
    "FragmentName",
    "FragmentStep",
    "Combination",
    "CombineNode",
    "SelectorDefinition",
    "build_selector",
    "parse_fragment_name",
    "load_selector_file",
    "find_selector_files",
]
