from fastapi import HTTPException
from typing import Any, Dict, Optional

class CatalogException(HTTPException):
    """Base exception for the Catalog API"""
    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)

class NotFoundException(CatalogException):
    """Resource not found"""
    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            status_code=404,
            detail=f"{resource} with id {resource_id} not found"
        )
