"""Permission string parsing."""

from __future__ import annotations

from .errors import InvalidModeError

DEFAULT_MODE = 0o600
MAX_MODE = 0o7777

_OCTAL_DIGITS = frozenset("01234567")
_LEADING_SPACE = " \t\n\v\f\r"


def parse_mode(text: str) -> int:
    """Parse *text* as a base-8 permission mask in ``[0, 0o7777]``.

    Leading whitespace and one leading sign are accepted; anything else
    that is not an octal digit is rejected.
    """
    body = text.lstrip(_LEADING_SPACE)
    negative = body.startswith("-")
    if body[:1] in ("+", "-"):
        body = body[1:]
    if not body or not set(body) <= _OCTAL_DIGITS:
        raise InvalidModeError(text)

    value = int(body, 8)
    if negative:
        value = -value
    if value < 0 or value > MAX_MODE:
        raise InvalidModeError(text)
    return value
