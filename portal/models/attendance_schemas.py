from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class AttendanceSubmission(BaseModel):
    model_config = ConfigDict(extra="allow")

    division: Optional[str] = None
    date: Optional[str] = None
    attendanceData: Optional[List[Dict[str, Any]]] = None


class AttendanceRecordsRequest(BaseModel):
    records: List[Dict[str, Any]]


class AttendanceStats(BaseModel):
    totalClasses: int
    totalStudents: int
    overallAttendanceRate: float
    averageAttendance: float
    totalPresentRecords: int = 0
    totalStudentRecords: int = 0


class StudentAttendanceStats(BaseModel):
    totalClasses: int
    classesAttended: int
    attendancePercentage: float
