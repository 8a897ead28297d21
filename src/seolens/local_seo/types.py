"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Request payload models for local-SEO analysis.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class SearchResult(BaseModel):
    """One business listing returned by a local search grid scan."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = ""
    address: str = ""
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    reviews: int = Field(default=0, ge=0)
    rank: int | None = None
    distance: float = Field(default=0.0, ge=0.0)
    category: str = ""
    phone: str = ""
    website: str = ""


class AnalysisRequest(BaseModel):
    """Inputs for one local-SEO competitive analysis."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    query: str = Field(min_length=1)
    location: str = Field(min_length=1)
    grid_size: str = Field(default="9 x 9", alias="gridSize")
    distance: float = Field(default=0.5, ge=0.0)
    search_results: list[SearchResult] = Field(
        default_factory=list, alias="searchResults"
    )


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Analysis text plus cache bookkeeping for the response envelope."""

    analysis: str
    cache_key: str
    cached: bool = False
    fallback: bool = False

    def to_dict(self) -> dict[str, object]:
        return {
            "success": True,
            "analysis": self.analysis,
            "cached": self.cached,
            "fallback": self.fallback,
        }
