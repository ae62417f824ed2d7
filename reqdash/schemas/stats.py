from pydantic import BaseModel, Field


class StatsSummary(BaseModel):
    total: int = 0
    approved: int = 0
    in_review: int = Field(default=0, alias="inReview")
    disapproved: int = 0

    class Config:
        populate_by_name = True


class CostSummary(BaseModel):
    total_hours: float = 0
    total_cost: float = 0


class PaginationState(BaseModel):
    page: int = 1
    pages: int = 1
    total: int = 0

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.pages
