from pydantic import BaseModel
from typing import List, Optional
from .album import AlbumIndexItem
from .artist import ArtistIndexItem
from .pagination import PaginationMeta
from .release import ReleaseResponse

class IndexResponse(BaseModel):
    meta: PaginationMeta
    search_query: Optional[str] = None

class ReleaseIndexResponse(IndexResponse):
    items: List[ReleaseResponse] = []

class ArtistIndexResponse(IndexResponse):
    items: List[ArtistIndexItem] = []

class AlbumIndexResponse(IndexResponse):
    items: List[AlbumIndexItem] = []
