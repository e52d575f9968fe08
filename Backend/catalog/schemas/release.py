from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from .album import AlbumResponse
from .artist import ArtistResponse

class ReleaseBase(BaseModel):
    name: str
    released_at: datetime

class ReleaseResponse(ReleaseBase):
    id: int
    created_at: Optional[datetime] = None
    # Derived from the album; None when the release has none
    duration_in_minutes: Optional[int] = None

    album: Optional[AlbumResponse] = None
    artists: List[ArtistResponse] = []
