"""
Utilities for selkit: settings and logging.
Import submodules directly, e.g. `from selkit.utils.logger import get_logger`.
"""

__all__: list[str] = []
