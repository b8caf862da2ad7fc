"""Filter engine: narrows a sequence of analyzed strings by a FilterSpec."""
import re
from typing import Iterable, List, Optional

from string_analyzer.errors import ValidationError
from string_analyzer.schemas import AnalyzedString, FilterSpec


def matches(record: AnalyzedString, spec: FilterSpec) -> bool:
    props = record.properties

    if spec.is_palindrome is not None and props.is_palindrome != spec.is_palindrome:
        return False

    if spec.min_length is not None and props.length < spec.min_length:
        return False

    if spec.max_length is not None and props.length > spec.max_length:
        return False

    if spec.word_count is not None and props.word_count != spec.word_count:
        return False

    # Case-sensitive containment on the raw value
    if spec.contains_character is not None and spec.contains_character not in record.value:
        return False

    return True


def apply_filters(records: Iterable[AnalyzedString], spec: FilterSpec) -> List[AnalyzedString]:
    """Return the records satisfying every populated field, in input order."""
    return [r for r in records if matches(r, spec)]


_INT_RE = re.compile(r'^[+-]?\d+$', re.ASCII)


def _parse_int(name: str, raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    value = raw.strip()
    if not _INT_RE.match(value):
        raise ValidationError(f"Invalid {name}: must be an integer")
    try:
        return int(value, 10)
    except ValueError:
        # past the interpreter's int-string digit limit
        raise ValidationError(f"Invalid {name}: must be an integer")


def filters_from_params(
    is_palindrome: Optional[str] = None,
    min_length: Optional[str] = None,
    max_length: Optional[str] = None,
    word_count: Optional[str] = None,
    contains_character: Optional[str] = None,
) -> FilterSpec:
    """Build a FilterSpec from raw query-string values.

    ``is_palindrome`` is true only for the literal "true"; any other value
    means false. Only the first character of ``contains_character`` is used,
    and an empty value leaves the field unset.
    """
    return FilterSpec(
        is_palindrome=None if is_palindrome is None else is_palindrome == "true",
        min_length=_parse_int("min_length", min_length),
        max_length=_parse_int("max_length", max_length),
        word_count=_parse_int("word_count", word_count),
        contains_character=contains_character[0] if contains_character else None,
    )
