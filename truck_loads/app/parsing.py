from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Outcome of parsing a form field; ``value`` is always usable."""

    value: T
    ok: bool
    notes: str = ""


def parse_load_number(text, fallback: int) -> ParseResult[int]:
    """
    Parse a load number typed into the edit view. Anything that is not a
    positive whole number keeps the previous value.
    """
    if isinstance(text, bool):
        return ParseResult(fallback, False, "Not a number.")
    if isinstance(text, int):
        if text >= 1:
            return ParseResult(text, True)
        return ParseResult(fallback, False, "Load number must be 1 or more.")
    s = str(text or "").strip()
    if not s:
        return ParseResult(fallback, False, "Empty load number.")
    try:
        number = int(s)
    except ValueError:
        return ParseResult(fallback, False, f"{s!r} is not a whole number.")
    if number < 1:
        return ParseResult(fallback, False, "Load number must be 1 or more.")
    return ParseResult(number, True)


def parse_weight(text, fallback: float) -> ParseResult[float]:
    """
    Accept None, "", "1,900", "1900", "1900.5", 1900 and 1900.0.
    Negative or non-numeric input keeps the previous weight.
    """
    if isinstance(text, bool):
        return ParseResult(fallback, False, "Not a number.")
    if isinstance(text, (int, float)):
        value = float(text)
    else:
        s = str(text or "").strip().replace(",", "")
        if s.lower().endswith("kg"):
            s = s[:-2].strip()
        if not s:
            return ParseResult(fallback, False, "Empty weight.")
        try:
            value = float(s)
        except ValueError:
            return ParseResult(fallback, False, f"{text!r} is not a weight.")
    if value != value or value in (float("inf"), float("-inf")):
        return ParseResult(fallback, False, "Weight must be a finite number.")
    if value < 0:
        return ParseResult(fallback, False, "Weight cannot be negative.")
    return ParseResult(value, True)
