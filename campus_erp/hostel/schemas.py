from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class HostelFeePayRequest(BaseModel):
    studentId: str = Field(..., min_length=1)
    item: str = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid")


class HostelComplaintCreate(BaseModel):
    StudentID: str = Field(..., min_length=1)
    ComplaintID: str = Field(..., min_length=1)
    Category: Optional[str] = None
    Title: Optional[str] = None
    Description: Optional[str] = None
    RoomNo: Optional[str] = None
    Status: str = "Pending"
    RaisedOn: str = Field(default_factory=lambda: date.today().isoformat())

    model_config = ConfigDict(extra="forbid")

