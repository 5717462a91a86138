from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class SemesterCreate(BaseModel):
    semesterNumber: int = Field(ge=1, le=8)
    divisions: List[str] = []


class SemesterUpdate(BaseModel):
    semesterNumber: Optional[int] = Field(default=None, ge=1, le=8)
    divisions: Optional[List[str]] = None


class SubjectCreate(BaseModel):
    subjectName: str
    subjectCode: str
    credits: Optional[int] = None


class SubjectUpdate(BaseModel):
    subjectName: Optional[str] = None
    subjectCode: Optional[str] = None
    credits: Optional[int] = None


class TeacherCreate(BaseModel):
    name: str
    email: EmailStr
    password: Optional[str] = None
    phone: Optional[str] = None
    department: Optional[str] = None


class TeacherUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    department: Optional[str] = None


class StudentCreate(BaseModel):
    name: str
    email: EmailStr
    uucmsNo: str
    semester: int = Field(ge=1, le=8)
    division: str
    phone: Optional[str] = None


class StudentUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    semester: Optional[int] = Field(default=None, ge=1, le=8)
    division: Optional[str] = None
    phone: Optional[str] = None


class AssignTeacherRequest(BaseModel):
    teacherId: str
    division: str
