from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class StringRequest(BaseModel):
    """Request schema for creating/analyzing a string."""
    value: str


class StringProperties(BaseModel):
    """Computed properties of an analyzed string."""
    model_config = {"frozen": True}

    length: int
    is_palindrome: bool
    unique_characters: int
    word_count: int
    sha256_hash: str
    character_frequency_map: Dict[str, int]


class AnalyzedString(BaseModel):
    """A stored string together with its derived properties."""
    model_config = {"frozen": True}

    id: str
    value: str
    properties: StringProperties
    created_at: datetime


class FilterSpec(BaseModel):
    """Conjunction of optional constraints; unset fields impose nothing."""
    model_config = {"frozen": True}

    is_palindrome: Optional[bool] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    word_count: Optional[int] = None
    contains_character: Optional[str] = Field(default=None, min_length=1, max_length=1)

    def applied(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.applied()


class InterpretedQuery(BaseModel):
    original: str
    parsed_filters: Dict[str, Any]


class StringListResponse(BaseModel):
    data: List[AnalyzedString]
    count: int
    filters_applied: Dict[str, Any]


class NaturalLanguageResponse(BaseModel):
    data: List[AnalyzedString]
    count: int
    interpreted_query: InterpretedQuery


class ErrorResponse(BaseModel):
    error: str
