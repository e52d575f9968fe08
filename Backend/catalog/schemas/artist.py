from pydantic import BaseModel
from typing import Optional, List

class ArtistBase(BaseModel):
    name: str

class ArtistResponse(ArtistBase):
    id: int
    logo_url: Optional[str] = None

class ArtistReleaseInfo(BaseModel):
    id: int
    name: str

class ArtistIndexItem(ArtistResponse):
    banner_url: Optional[str] = None
    releases: List[ArtistReleaseInfo] = []
