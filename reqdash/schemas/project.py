from pydantic import BaseModel, field_validator
from typing import Optional

class ProjectRead(BaseModel):
    id: int
    name: str
    hourly_rate: Optional[float] = 0

    @field_validator("hourly_rate", mode="before")
    @classmethod
    def default_rate(cls, value):
        # the remote source omits the rate for projects that never set one
        return value or 0

    class Config:
        from_attributes = True
