"""Error types surfaced at the HTTP boundary as ``{"error": <message>}``."""


class StringAnalyzerError(Exception):
    """Base exception for all string analyzer errors."""

    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(StringAnalyzerError):
    """Missing or wrong-typed field, or a bad filter parameter."""

    status_code = 400


class NotFoundError(StringAnalyzerError):
    status_code = 404


class ConflictError(StringAnalyzerError):
    status_code = 409


class ParseError(StringAnalyzerError):
    """A natural-language query matched none of the known patterns."""

    status_code = 400
