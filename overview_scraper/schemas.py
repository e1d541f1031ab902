from typing import Any

from pydantic import BaseModel, Field


class BatchRequest(BaseModel):
    queries: list[str] | None = None
    options: dict[str, Any] = Field(default_factory=dict)  # gl, hl, num, start, pws
    delay: int = 3000  # milliseconds between queries


class OverviewFragment(BaseModel):
    text: str
    html: str
    selector: str
    keyword: str | None = None


class OverviewResponse(BaseModel):
    success: bool
    query: str
    searchUrl: str | None = None
    aiOverview: OverviewFragment | None = None
    hasAiOverview: bool = False
    source: str
    timestamp: str
    error: str | None = None
    errorKind: str | None = None


class BatchResponse(BaseModel):
    success: bool = True
    totalQueries: int
    results: list[OverviewResponse]
    timestamp: str
