from pydantic import BaseModel, ConfigDict, Field


class PaginationMeta(BaseModel):
    current_page: int = Field(ge=1)
    total_pages: int = Field(ge=0)
    total_count: int = Field(ge=0)
    per_page: int = Field(ge=1)

    model_config = ConfigDict(frozen=True)

    @property
    def last_page(self) -> int:
        # An empty listing still has a page 1 to link to.
        return max(self.total_pages, 1)

    @property
    def has_prev(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages
