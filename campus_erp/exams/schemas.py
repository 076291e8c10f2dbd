from pydantic import BaseModel, ConfigDict, Field


class AdmitCardDownloaded(BaseModel):
    studentId: str = Field(..., min_length=1)
    semester: int = Field(..., ge=1)

    model_config = ConfigDict(extra="forbid")
