"""Report service — read-only enrollment and payment summaries."""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from registrar.models.course import Course
from registrar.models.enrollment import Enrollment
from registrar.models.payment import Payment
from registrar.models.student import Student
from registrar.schemas.schemas import PaymentTotalRow, StudentCourseRow


class ReportService:
    """Queries behind the administrative reports."""

    @staticmethod
    def student_courses(db: Session, student_id: Optional[int] = None) -> List[StudentCourseRow]:
        """Students with the courses they are enrolled in, ordered by student."""
        query = (
            db.query(
                Student.id,
                Student.first_name,
                Student.last_name,
                Course.course_name,
                Enrollment.enroll_date,
            )
            .join(Enrollment, Enrollment.student_id == Student.id)
            .join(Course, Course.id == Enrollment.course_id)
        )
        if student_id is not None:
            query = query.filter(Student.id == student_id)

        rows = query.order_by(Student.id, Enrollment.enroll_date, Enrollment.id).all()
        return [
            StudentCourseRow(
                student_id=row.id,
                full_name=f"{row.first_name} {row.last_name}",
                course_name=row.course_name,
                enroll_date=row.enroll_date,
            )
            for row in rows
        ]

    @staticmethod
    def payment_totals(db: Session) -> List[PaymentTotalRow]:
        """Total paid by every student, zero for students without payments."""
        rows = (
            db.query(
                Student.id,
                Student.first_name,
                Student.last_name,
                func.coalesce(func.sum(Payment.amount), 0).label("total_paid"),
            )
            .outerjoin(Payment, Payment.student_id == Student.id)
            .group_by(Student.id, Student.first_name, Student.last_name)
            .order_by(Student.id)
            .all()
        )
        return [
            PaymentTotalRow(
                student_id=row.id,
                full_name=f"{row.first_name} {row.last_name}",
                total_paid=Decimal(str(row.total_paid or 0)),
            )
            for row in rows
        ]


report_service = ReportService()
