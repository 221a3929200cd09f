# selkit/serialization/json_codec.py
from __future__ import annotations

"""JSON helpers
------------
`get_json` renders values compactly (no whitespace, key order preserved);
`from_json` rebuilds an instance of a prototype's type from a flat JSON object
by passing the object's values positionally to the constructor.
"""

import json
from typing import Any, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError
from pydantic_core import to_jsonable_python

from selkit.utils.logger import get_logger

log = get_logger(__name__)

T = TypeVar("T")

_COMPACT = (",", ":")


def get_json(obj: Any) -> str:
    """
    JSON representation of `obj`.

        get_json([1, 2, 3])                 # '[1,2,3]'
        get_json(Rectangle(10, 20))         # '{"width":10,"height":20}'
    """
    return json.dumps(to_jsonable_python(obj, fallback=vars), separators=_COMPACT, ensure_ascii=False)


def from_json(proto: Union[Type[T], T], text: str) -> T:
    """
    Build an object of `proto`'s type from a JSON object string.

    `proto` may be the class itself or any instance of it. Values are taken in
    document order and passed positionally:

        from_json(Rectangle, '{"width":10,"height":20}')   # Rectangle(10, 20)
    """
    cls = proto if isinstance(proto, type) else type(proto)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as je:
        raise ValueError(f"Invalid JSON for {cls.__name__}: {je}") from je
    if not isinstance(data, dict):
        raise ValueError(f"JSON for {cls.__name__} must be an object, got {type(data).__name__}")

    values = list(data.values())
    try:
        if issubclass(cls, BaseModel):
            fields = list(cls.model_fields)
            if len(values) > len(fields):
                raise TypeError(f"{cls.__name__} takes {len(fields)} field(s) but {len(values)} were given")
            return cls.model_validate(dict(zip(fields, values)))
        return cls(*values)
    except (TypeError, ValidationError) as e:
        log.debug(f"from_json failed for {cls.__name__}: {e}")
        raise ValueError(f"Cannot build {cls.__name__} from JSON: {e}") from e


__all__ = ["get_json", "from_json"]
