from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, Response

from string_analyzer.config import settings
from string_analyzer.filters import filters_from_params
from string_analyzer.schemas import (
    AnalyzedString,
    ErrorResponse,
    NaturalLanguageResponse,
    StringListResponse,
    StringRequest,
)
from string_analyzer.services import (
    create_string,
    delete_string,
    filter_by_natural_language,
    get_string,
    list_strings,
)
from string_analyzer.store import StringStore

router = APIRouter()

_NOT_FOUND = {404: {"model": ErrorResponse}}


def get_store(request: Request) -> StringStore:
    return request.app.state.store


@router.get("/")
def root() -> dict:
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "endpoints": {
            "POST /strings": "Analyze and store a string",
            "GET /strings/{string_value}": "Get specific string analysis",
            "GET /strings": "Get all strings with optional filters",
            "GET /strings/filter-by-natural-language": "Filter using natural language",
            "DELETE /strings/{string_value}": "Delete a string",
        },
    }


@router.get("/health")
def health() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok"}


@router.post(
    "/strings",
    response_model=AnalyzedString,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def create_string_endpoint(payload: StringRequest, store: StringStore = Depends(get_store)) -> AnalyzedString:
    """Create and analyze a string."""
    return create_string(payload.value, store)


# Registered before /strings/{string_value} so the literal path wins
@router.get(
    "/strings/filter-by-natural-language",
    response_model=NaturalLanguageResponse,
    responses={400: {"model": ErrorResponse}},
)
def filter_by_natural_language_endpoint(
    query: str = Query(..., description="Natural language query"),
    store: StringStore = Depends(get_store),
) -> dict:
    """Filter strings using a natural language query, e.g. "single word palindromes"."""
    return filter_by_natural_language(store, query)


@router.get("/strings/{string_value}", response_model=AnalyzedString, responses=_NOT_FOUND)
def get_string_endpoint(string_value: str, store: StringStore = Depends(get_store)) -> AnalyzedString:
    """Get a specific string by its raw value."""
    return get_string(string_value, store)


@router.get("/strings", response_model=StringListResponse, responses={400: {"model": ErrorResponse}})
def get_all_strings(
    is_palindrome: Optional[str] = Query(None),
    min_length: Optional[str] = Query(None),
    max_length: Optional[str] = Query(None),
    word_count: Optional[str] = Query(None),
    contains_character: Optional[str] = Query(None),
    store: StringStore = Depends(get_store),
) -> dict:
    """Get all strings with optional filtering."""
    spec = filters_from_params(is_palindrome, min_length, max_length, word_count, contains_character)
    return list_strings(store, spec)


@router.delete("/strings/{string_value}", status_code=204, responses=_NOT_FOUND)
def delete_string_endpoint(string_value: str, store: StringStore = Depends(get_store)) -> Response:
    """Delete a string by its raw value."""
    delete_string(string_value, store)
    return Response(status_code=204)
