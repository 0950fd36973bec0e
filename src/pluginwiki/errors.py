from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_INPUT = "INVALID_INPUT"
    UNRECOGNIZED_SOURCE = "UNRECOGNIZED_SOURCE"
    UPSTREAM_FAILURE = "UPSTREAM_FAILURE"
    EXTRACTION_FAILURE = "EXTRACTION_FAILURE"


class WikiContentError(Exception):
    """Raised while loading documentation content for a URL.

    Caught by WikiService at the orchestration boundary, which logs it and
    answers with a fallback fragment. Never reaches callers of
    ``get_wiki_content``.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        url: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.url = url
        self.status_code = status_code

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "url": self.url,
            "status_code": self.status_code,
        }
