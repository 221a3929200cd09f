# selkit/shapes/rectangle.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Rectangle:
    """
    Plain rectangle value object.

        r = Rectangle(10, 20)
        r.width, r.height   # (10, 20)
        r.get_area()        # 200
    """

    width: float
    height: float

    def get_area(self) -> float:
        return self.width * self.height
