from pydantic import BaseModel
from typing import Optional
from .artist import ArtistResponse

class AlbumBase(BaseModel):
    name: str
    duration_in_minutes: int

class AlbumResponse(AlbumBase):
    id: int
    cover_url: Optional[str] = None

# Minimal release info to avoid a circular import with release.py
class AlbumReleaseInfo(BaseModel):
    id: int
    name: str

class AlbumIndexItem(AlbumResponse):
    artist: Optional[ArtistResponse] = None
    release: Optional[AlbumReleaseInfo] = None
