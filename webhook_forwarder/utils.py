import math
from typing import Any, Dict, Optional


def string_or_default(value: Any, default: Optional[str] = None) -> Optional[str]:
    if isinstance(value, str):
        return value
    return default


def nonempty_string(value: Any) -> Optional[str]:
    """Retorna a string apenas se for do tipo str e não vazia."""
    if isinstance(value, str) and value != "":
        return value
    return None


def int_in_range_or_default(value: Any, low: int, high: int, default: int) -> int:
    """Converte números JSON (int ou float) truncando em direção a zero.

    Booleanos não contam como número. Valores fora de [low, high], não finitos
    ou de outro tipo viram ``default``.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, float):
        if not math.isfinite(value):
            return default
        value = int(value)
    if not isinstance(value, int):
        return default
    if value < low or value > high:
        return default
    return value


def object_or_empty(value: Any) -> Dict[str, Any]:
    if isinstance(value, dict):
        return value
    return {}


def priority_band(priority: int) -> str:
    if priority <= 2:
        return "low"
    if priority <= 5:
        return "normal"
    if priority <= 8:
        return "high"
    return "critical"
