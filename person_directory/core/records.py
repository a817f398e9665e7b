"""
Domain records shared by the store, the services and the API layer.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

# Text fields a free-text search looks into
SEARCH_FIELDS = ("name", "address", "phone_number", "email", "nid_number")

# Optional free-text fields accepted by the add-person form
OPTIONAL_FIELDS = ("address", "phone_number", "email", "social_media", "nid_number")

# Logged in place of a query term for image searches
IMAGE_QUERY_MARKER = "[image]"


class SearchType(str, Enum):
    TEXT = "text"
    IMAGE = "image"


@dataclass
class PersonRecord:
    """One directory entry."""

    id: int
    name: str
    address: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    social_media: Optional[str] = None
    nid_number: Optional[str] = None
    photo_url: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass
class SearchLogEntry:
    """Record of one executed search."""

    id: int
    query: str
    type: SearchType
    created_at: datetime
