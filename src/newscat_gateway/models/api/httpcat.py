"""HTTP Cat API Models"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class HttpCatResponse(BaseModel):
    """Confirmed status-code image."""
    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    code: int = Field(..., description="Status code")
    image_url: str = Field(..., alias="imageUrl", description="Resolved image URL")
    message: str = Field(..., description="Short caption")


__all__ = ["HttpCatResponse"]
