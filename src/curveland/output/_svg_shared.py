"""Number and color formatting for compact SVG attributes."""

from functools import lru_cache


@lru_cache(maxsize=64)
def _svg_hex(rgb: tuple[int, int, int]) -> str:
    """CSS hex color, in the three-digit form when every channel repeats its nibble."""
    digits = "".join(f"{channel:02x}" for channel in rgb)
    if all(digits[i] == digits[i + 1] for i in range(0, 6, 2)):
        digits = digits[::2]
    return "#" + digits


@lru_cache(maxsize=4096)
def _svg_num(value: float, precision: int = 3) -> str:
    """Shortest decimal rendering: no trailing zeros and no leading zero."""
    rounded = round(value, precision)
    if rounded == int(rounded):
        return str(int(rounded))
    text = f"{rounded:.{precision}f}".rstrip("0")
    sign = "-" if text.startswith("-") else ""
    return sign + text.lstrip("-").removeprefix("0")
