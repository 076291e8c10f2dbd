from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class StudentFields(BaseModel):
    Name: Optional[str] = None
    CourseID: Optional[str] = None
    Branch: Optional[str] = None
    Specialization: Optional[str] = None
    CurrentSem: Optional[int] = Field(None, ge=1)
    Section: Optional[str] = None
    ClassRollNo: Optional[str] = None
    StudentPhoneNo: Optional[str] = None
    ParentPhoneNo: Optional[str] = None
    Email: Optional[str] = None
    DOB: Optional[str] = None
    Gender: Optional[str] = None
    Address: Optional[str] = None
    AdmissionYear: Optional[int] = None
    PhotoURL: Optional[str] = None

    model_config = ConfigDict(extra="forbid")


class StudentRecord(StudentFields):
    StudentID: str = Field(..., min_length=1)


class StudentUpdate(StudentFields):
    StudentID: Optional[str] = None


class HostelAssignment(BaseModel):
    StudentID: str
    HostelID: str
    RoomNo: str
    StudentPhoneNo: Optional[str] = None
