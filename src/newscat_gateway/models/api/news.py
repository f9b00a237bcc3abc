"""
News API Models

Articles are forwarded exactly as NewsAPI returns them, so they are kept as
plain mappings rather than re-modelled.
"""

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


class NewsSearchResponse(BaseModel):
    """Successful news search envelope."""
    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    total_results: int = Field(..., alias="totalResults", description="Total matches reported upstream")
    articles: List[Dict[str, Any]] = Field(default_factory=list, description="Articles in upstream order")
    query: str = Field(..., description="Search term after trimming surrounding whitespace")


__all__ = ["NewsSearchResponse"]
