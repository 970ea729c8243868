"""Display formatting for catalog numbers."""
import re

_CATALOG_NUMBER = re.compile(r"^([A-Za-z\-]+)(\d+)$")

_NUMERALS = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)

MAX_ROMAN = 3999


def to_roman(value: int) -> str:
    """Standard subtractive Roman numerals for 1..3999; 0 renders as "0"."""
    if value == 0:
        return "0"
    if not 0 < value <= MAX_ROMAN:
        raise ValueError(f"No Roman numeral for {value}")

    out = []
    for amount, numeral in _NUMERALS:
        count, value = divmod(value, amount)
        out.append(numeral * count)
    return "".join(out)


def format_catalog_number(catalog_number: str) -> str:
    """
    Render the numeric suffix of a catalog number in Roman numerals.

    "ANG-5" -> "ANG-V", "ANG-0" -> "ANG-0". Anything without a plain
    letters+digits shape, or with a suffix above 3999, is returned unchanged.
    """
    match = _CATALOG_NUMBER.match(catalog_number or "")
    if not match:
        return catalog_number

    prefix, digits = match.groups()
    value = int(digits)
    if value > MAX_ROMAN:
        return catalog_number

    return f"{prefix}{to_roman(value)}"
