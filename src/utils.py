"""Utility functions for the release catalog."""

import string

BIT_WIDTHS = (32, 64)
SIXTY_FOUR_BIT_MARKER = "x64"
SIZE_UNITS = ["B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]


def parse_version(version: str, parts: int = 4) -> tuple[int, ...]:
    """Parse a dotted version string into a fixed-length tuple of integers.

    Each component is read by its leading digits, so "3-beta" reads as 3.
    Components without leading digits read as 0, missing components are
    filled with 0 and anything past ``parts`` components is ignored.

    Args:
        version: Version string to parse (e.g., "5.32.1.1", "5.38").
        parts: Number of components in the result.

    Returns:
        Tuple of ``parts`` integers (e.g., (5, 32, 1, 1)).

    Examples:
        >>> parse_version("5.32.1.1")
        (5, 32, 1, 1)
        >>> parse_version("5.38")
        (5, 38, 0, 0)
        >>> parse_version("5.40.0.1-beta")
        (5, 40, 0, 1)
    """
    numbers = []
    if version and isinstance(version, str):
        for part in version.split(".")[:parts]:
            numeric = ""
            for ch in part.strip():
                if ch in string.digits:
                    numeric += ch
                else:
                    break
            numbers.append(int(numeric) if numeric else 0)

    numbers.extend([0] * (parts - len(numbers)))
    return tuple(numbers)


def infer_bits(archname: str | None) -> int:
    """Return 64 when the architecture name carries the 64-bit marker, else 32."""
    return 64 if SIXTY_FOUR_BIT_MARKER in str(archname or "") else 32


def normalize_bits(bits) -> int:
    """Map a bit-width argument onto 32, 64 or 0 (no filter).

    Only the integers 32 and 64 filter. Anything else, including "all",
    None and the strings "32" or "64", means no filter.
    """
    if isinstance(bits, int) and not isinstance(bits, bool) and bits in BIT_WIDTHS:
        return bits
    return 0


def readable_file_size(size: float) -> str:
    """Format a byte count with binary units and one decimal place.

    Examples:
        >>> readable_file_size(0)
        '0.0 B'
        >>> readable_file_size(1536)
        '1.5 KB'
        >>> readable_file_size(1073741824)
        '1.0 GB'
    """
    size = float(size or 0)
    unit = 0
    while size >= 1024 and unit < len(SIZE_UNITS) - 1:
        size /= 1024
        unit += 1
    return f"{size:.1f} {SIZE_UNITS[unit]}"
