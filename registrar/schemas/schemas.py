"""Pydantic schemas for service results and CLI output."""

from pydantic import BaseModel
from typing import Optional
from datetime import date, datetime
from decimal import Decimal


# ---- Student ----
class StudentOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    dob: Optional[date] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    admission_date: Optional[datetime] = None
    is_active: Optional[bool] = True

    class Config:
        from_attributes = True


# ---- Audit ----
class StudentAuditOut(BaseModel):
    id: int
    student_id: int
    change_type: str
    changed_field: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    changed_by: Optional[str] = None
    changed_date: Optional[datetime] = None

    class Config:
        from_attributes = True


# ---- Reports ----
class StudentCourseRow(BaseModel):
    student_id: int
    full_name: str
    course_name: str
    enroll_date: Optional[datetime] = None


class PaymentTotalRow(BaseModel):
    student_id: int
    full_name: str
    total_paid: Decimal
