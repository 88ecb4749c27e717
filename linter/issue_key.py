"""
Stable issue keys.

Rule findings are keyed by their rule id. Free-form findings are keyed by a
32-bit rolling hash of the normalized message, rendered in base36 and prefixed
with ``ai_``. The hash wraps exactly like a JavaScript ``(h << 5) - h + c``
loop over UTF-16 code units, so keys persisted by earlier clients still match.
"""

from typing import Iterator, Optional

AI_ISSUE_PREFIX = "ai_"
_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _utf16_code_units(text: str) -> Iterator[int]:
    for char in text:
        code_point = ord(char)
        if code_point > 0xFFFF:
            code_point -= 0x10000
            yield 0xD800 + (code_point >> 10)
            yield 0xDC00 + (code_point & 0x3FF)
        else:
            yield code_point


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


def rolling_hash(text: str) -> int:
    """Signed 32-bit rolling hash of ``text``."""
    hash_value = 0
    for unit in _utf16_code_units(text):
        hash_value = _to_int32((hash_value << 5) - hash_value + unit)
    return hash_value


def normalize_message(message: str) -> str:
    return (message or "").strip().lower()


def get_issue_key(message: str, rule_id: Optional[str] = None) -> str:
    """
    Return the key that joins an issue type to user preferences.

    Args:
        message: Human-readable issue description
        rule_id: Catalog rule id, authoritative when present
    """
    if rule_id:
        return rule_id
    return f"{AI_ISSUE_PREFIX}{_to_base36(abs(rolling_hash(normalize_message(message))))}"
