"""Number formatting shared by the sources and the CLI."""

from __future__ import annotations

_SUFFIXES = ["bytes", "KB", "MB", "GB", "TB"]


def format_bytes(size: int, precision: int = 2) -> int | str:
    """Format a byte count with a 1024-based unit suffix.

    ``1023`` -> ``"1023 bytes"``, ``1024`` -> ``"1 KB"``,
    ``1572864`` -> ``"1.5 MB"``.  Sizes past the TB range stay in TB.
    Zero and negative sizes are returned unchanged.
    """
    if size <= 0:
        return size

    size = int(size)
    # floor(log_1024(size)), computed on the integer to avoid float edge cases
    exponent = min((size.bit_length() - 1) // 10, len(_SUFFIXES) - 1)
    value = round(size / 1024**exponent, precision)

    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {_SUFFIXES[exponent]}"


def percent(part: float, whole: float, rounding: int | None = 2) -> float:
    """``part / whole * 100``, or ``0.0`` when *whole* is zero."""
    if not whole:
        return 0.0
    value = part / whole * 100.0
    return value if rounding is None else round(value, rounding)
