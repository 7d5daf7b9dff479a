"""
API Request and Response Schemas

This module defines all Pydantic models for API requests and responses.
Separated from endpoints to keep concerns separated and enable reuse.

Design Principles:
- Batch entries accept any JSON value per field; the service checks
  presence, URL format, shortcode pattern and validity so every error of
  a batch comes back in one response with its entry index
- Response models define output structure
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field


class ShortenEntry(BaseModel):
    """One URL in a shortening batch."""
    long_url: Any = Field(None, description="The long URL to shorten")
    shortcode: Any = Field(None, description="Custom shortcode (4-20 chars of [A-Za-z0-9_-])")
    validity_minutes: Any = Field(None, description="Minutes until expiry (default 30)")


class ShortenRequest(BaseModel):
    """Request model for the batch shortening endpoint."""
    urls: List[ShortenEntry] = Field(..., description="URLs to shorten, submitted together")


class ShortenedURL(BaseModel):
    """A newly created short URL."""
    short_code: str
    short_url: str
    long_url: str
    created_at: datetime
    expires_at: datetime


class ShortenResponse(BaseModel):
    """Response model for the batch shortening endpoint."""
    urls: List[ShortenedURL]


class ClickItem(BaseModel):
    timestamp: datetime
    source: str
    location: str


class URLSummary(BaseModel):
    """Summary row of the statistics listing."""
    short_code: str
    short_url: str
    long_url: str
    created_at: datetime
    expires_at: datetime
    click_count: int
    last_clicked_at: Optional[datetime] = None
    expired: bool = Field(..., description="Past expires_at; informational only")


class URLListResponse(BaseModel):
    urls: List[URLSummary]


class StatsResponse(URLSummary):
    """Response model for the single-URL statistics endpoint."""
    clicks: List[ClickItem]
