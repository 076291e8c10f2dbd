from typing import List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field

from campus_erp.tables import composite_key


class AttendanceRecord(BaseModel):
    StudentID: str = Field(..., min_length=1)
    Date: str = Field(..., min_length=1, description="Class date, YYYY-MM-DD")
    SubjectCode: str = Field(..., min_length=1)
    Status: str = Field(..., description="Present | Absent")
    CourseID: Optional[str] = None
    Semester: Optional[int] = None
    Section: Optional[str] = None
    FacultyID: Optional[str] = None

    model_config = ConfigDict(extra="forbid")

    def to_document(self) -> dict:
        document = self.model_dump(exclude_none=True)
        document["Date#SubjectCode"] = composite_key(self.Date, self.SubjectCode)
        return document


class AttendanceBatch(BaseModel):
    records: List[AttendanceRecord] = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid")


class OverallAttendanceResponse(BaseModel):
    overall: Union[int, str]
