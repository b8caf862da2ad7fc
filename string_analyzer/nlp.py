import logging
import re
from typing import Any, Dict, Optional

from string_analyzer.errors import ParseError
from string_analyzer.schemas import FilterSpec

logger = logging.getLogger("string_analyzer.nlp")

_NUM_WORDS = {
    'single': 1,
    'two': 2,
    'three': 3,
    'four': 4,
    'five': 5,
}

_WORD_COUNT_RE = re.compile(r'(\d+|single|two|three|four|five) word', re.ASCII)
_MIN_LENGTH_RE = re.compile(r'(?:longer|greater) than (\d+)', re.ASCII)
_MAX_LENGTH_RE = re.compile(r'(?:shorter|less) than (\d+)', re.ASCII)
_LETTER_RE = re.compile(r'containing the letter "?([a-z])"?')


def _safe_int(val: str) -> Optional[int]:
    """Convert a number word or digit string to an int, or None."""
    if val in _NUM_WORDS:
        return _NUM_WORDS[val]
    try:
        return int(val, 10)
    except (TypeError, ValueError):
        return None


def parse_natural_query(query: str) -> FilterSpec:
    """Interpret a free-text query as a FilterSpec.

    Each heuristic fills at most one field and fires independently of the
    others. Raises ParseError when none of them fire.
    """
    if not isinstance(query, str):
        raise ParseError("query must be a string")

    q = query.lower()
    filters: Dict[str, Any] = {}

    if 'palindrom' in q:
        filters['is_palindrome'] = True

    m = _WORD_COUNT_RE.search(q)
    if m:
        n = _safe_int(m.group(1))
        if n is not None:
            filters['word_count'] = n

    # "longer than N" is strict, so the inclusive bound is N + 1
    m = _MIN_LENGTH_RE.search(q)
    if m:
        n = _safe_int(m.group(1))
        if n is not None:
            filters['min_length'] = n + 1

    m = _MAX_LENGTH_RE.search(q)
    if m:
        n = _safe_int(m.group(1))
        if n is not None:
            filters['max_length'] = n - 1

    # "vowel" always maps to 'a' and takes precedence over an explicit letter
    if 'vowel' in q:
        filters['contains_character'] = 'a'
    else:
        m = _LETTER_RE.search(q)
        if m:
            filters['contains_character'] = m.group(1)

    if not filters:
        logger.info("No filters recognised in query %r", query)
        raise ParseError("Unable to parse natural language query")

    return FilterSpec(**filters)
