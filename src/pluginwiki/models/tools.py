from __future__ import annotations

from pydantic import BaseModel

from pluginwiki.models.wiki import ExtractorKind


class GetWikiContentOutput(BaseModel):
    url: str
    html: str


class ValidateWikiUrlOutput(BaseModel):
    url: str
    valid: bool
    extractor: ExtractorKind | None = None
