from pydantic import BaseModel
from typing import Optional

class ListParams(BaseModel):
    """Raw listing parameters, kept as strings; the services normalize them."""
    page: Optional[str] = None
    limit: Optional[str] = None
    past: Optional[str] = None
    search: Optional[str] = None
