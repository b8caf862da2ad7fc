import re
from collections import Counter
from hashlib import sha256
from typing import Dict

from string_analyzer.schemas import StringProperties

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def sha256_hex(value: str) -> str:
    """SHA-256 of the UTF-8 bytes, lower-case hex. Doubles as the record id."""
    return sha256(value.encode("utf-8")).hexdigest()


def is_palindrome(value: str) -> bool:
    """Case-insensitive check over ASCII letters and digits only."""
    cleaned = _NON_ALNUM.sub("", value.lower())
    return cleaned == cleaned[::-1]


def character_frequency(value: str) -> Dict[str, int]:
    return dict(Counter(value))


def count_words(value: str) -> int:
    # str.split() with no separator already ignores leading/trailing whitespace
    return len(value.split())


def compute_properties(value: str) -> StringProperties:
    freq = character_frequency(value)
    return StringProperties(
        length=len(value),
        is_palindrome=is_palindrome(value),
        unique_characters=len(freq),
        word_count=count_words(value),
        sha256_hash=sha256_hex(value),
        character_frequency_map=freq,
    )
