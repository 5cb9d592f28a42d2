"""Fixed-precision text rendering of numeric values for format writers."""

from ..core.types import Euler, Vector3


def format_number(n, precision: int = 4) -> str:
    return f"{float(n):.{precision}f}"


def format_vector(v: Vector3, precision: int = 4) -> str:
    """``"x y z"``"""
    return " ".join(format_number(c, precision) for c in (v.x, v.y, v.z))


def format_euler(e: Euler, precision: int = 4) -> str:
    """``"r p y"``"""
    return " ".join(format_number(c, precision) for c in (e.r, e.p, e.y))
