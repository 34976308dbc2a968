from __future__ import annotations

from typing import Any


def normalize_decimal(value: Any) -> Any:
    """Accept ``,`` as the fractional separator in textual numbers."""
    if isinstance(value, str):
        return value.strip().replace(",", ".")
    return value


def parse_flag(token: Any) -> bool:
    """Coerce a textual flag to bool.

    Only ``true`` (any case) is truthy; every other token reads as False.
    """
    if isinstance(token, bool):
        return token
    if token is None:
        return False
    return str(token).strip().lower() == "true"


def format_decimal(value: float, places: int = 3) -> str:
    """Render a number with a fixed ``.`` separator regardless of locale."""
    return f"{value:.{places}f}"
