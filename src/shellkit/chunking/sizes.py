import re

from ..core.errors import InvalidInputError

UNITS = {
    "": 1,
    "B": 1,
    "KB": 1024,
    "MB": 1024**2,
    "GB": 1024**3,
}

_SIZE_RE = re.compile(r"^\s*(?P<number>\d+(?:\.\d+)?)\s*(?P<unit>[KMG]?B)?\s*$", re.IGNORECASE)


def parse_size(text: str | int) -> int:
    """Parse a byte count such as ``4096``, ``512KB`` or ``1.5 MB``.

    Units are binary (KB = 1024). Fractional values are rounded down.
    Raises InvalidInputError for anything unparseable or not positive.
    """
    if isinstance(text, int):
        value = text
    else:
        match = _SIZE_RE.match(text)
        if match is None:
            raise InvalidInputError(f"Invalid size: {text!r} (expected e.g. 4096, 512KB, 10MB, 1GB)")
        number = match["number"]
        unit = (match["unit"] or "").upper()
        if "." in number and not unit:
            raise InvalidInputError(f"Invalid size: {text!r} (fractional byte counts need a unit)")
        value = int(float(number) * UNITS[unit]) if "." in number else int(number) * UNITS[unit]

    if value <= 0:
        raise InvalidInputError(f"Size must be greater than zero (got {text!r})")
    return value


def format_size(num_bytes: int) -> str:
    """Human-readable binary size for summaries."""
    for unit in ("B", "KB", "MB"):
        if num_bytes < 1024:
            return f"{num_bytes} {unit}" if unit == "B" else f"{num_bytes:.1f} {unit}"
        num_bytes /= 1024  # type: ignore[assignment]
    return f"{num_bytes:.1f} GB"
