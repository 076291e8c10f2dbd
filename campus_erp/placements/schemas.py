from pydantic import BaseModel, ConfigDict, Field


class PlacementApplyRequest(BaseModel):
    studentId: str = Field(..., min_length=1)
    companyId: str = Field(..., min_length=1)
    courseId: str = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid")
