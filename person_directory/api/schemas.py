"""
Pydantic schemas for API requests and responses.
"""
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from ..core.records import SearchType

class PersonResponse(BaseModel):
    """A directory entry."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    address: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    social_media: Optional[str] = None
    nid_number: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: Optional[datetime] = None

class SearchResultsResponse(BaseModel):
    """Response model for text and image search."""
    results: List[PersonResponse]

class ImageSearchRequest(BaseModel):
    """Search gateway request body."""
    model_config = ConfigDict(populate_by_name=True)

    image_url: str = Field(..., alias="imageUrl", min_length=1)

class GatewayErrorResponse(BaseModel):
    error: str
    details: str

class SearchLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    query: str
    type: SearchType
    created_at: datetime

class DashboardResponse(BaseModel):
    """Response model for the admin dashboard."""
    total_persons: int
    total_searches: int
    recent_searches: List[SearchLogResponse]
    status: str
    errors: List[str] = []
