"""
Schemas for health and options endpoints.
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from matchumbeop.schemas.spellcheck import SpellCheckEngine


class HealthResponse(BaseModel):
    """Schema for health check endpoint response."""
    status: str
    spellcheck: str
    timestamp: datetime


class EngineInfo(BaseModel):
    """Information about a single spell-check engine."""

    id: SpellCheckEngine = Field(..., description="Engine identifier")
    name: str = Field(..., description="Human-readable engine name")


class SpellCheckOptionsResponse(BaseModel):
    """Response for the options endpoint."""

    default_engine: SpellCheckEngine = Field(..., description="Engine used when none is given")
    engines: List[EngineInfo] = Field(..., description="Available engines")
    text_limit: int = Field(..., description="Maximum characters checked per submission")

    class Config:
        json_schema_extra = {
            "example": {
                "default_engine": "naver",
                "engines": [
                    {"id": "naver", "name": "네이버 맞춤법 검사기"},
                    {"id": "daum", "name": "다음 맞춤법 검사기"}
                ],
                "text_limit": 1800
            }
        }
