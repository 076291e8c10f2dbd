from pydantic import BaseModel, ConfigDict, Field


class GrievanceCreate(BaseModel):
    StudentID: str = Field(..., min_length=1)
    Title: str = Field(..., min_length=1)
    Category: str = Field(..., min_length=1)
    Priority: str = Field(..., min_length=1)
    Description: str = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid")
