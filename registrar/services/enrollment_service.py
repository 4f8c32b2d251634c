"""Enrollment service — enroll existing students in existing courses."""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from registrar.core.clock import system_clock
from registrar.core.config import settings
from registrar.core.exceptions import NotFoundError, translate_db_error
from registrar.models.course import Course
from registrar.models.enrollment import Enrollment
from registrar.models.student import Student

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Creates enrollments.

    Existence of the student and course is checked up front; a duplicate
    (student, course) pair is left to the unique constraint on insert.
    """

    def __init__(self, clock=system_clock):
        self.clock = clock

    def enroll(self, db: Session, student_id: int, course_id: int) -> int:
        """Enroll a student in a course and return the enrollment id."""
        if not db.query(Student.id).filter(Student.id == student_id).first():
            logger.warning("Enrollment rejected: student %s not found", student_id)
            raise NotFoundError("Student", student_id)
        if not db.query(Course.id).filter(Course.id == course_id).first():
            logger.warning("Enrollment rejected: course %s not found", course_id)
            raise NotFoundError("Course", course_id)

        enrollment = Enrollment(
            student_id=student_id,
            course_id=course_id,
            enroll_date=self.clock.now(),
            status=settings.DEFAULT_ENROLLMENT_STATUS,
        )
        try:
            db.add(enrollment)
            db.flush()
            enrollment_id = enrollment.id
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning(
                "Enrollment of student %s in course %s failed", student_id, course_id
            )
            raise translate_db_error(
                exc, "Enrollment", refs={"Student": student_id, "Course": course_id}
            ) from exc

        logger.info("Enrolled student %s in course %s (%s)", student_id, course_id, enrollment_id)
        return enrollment_id

    @staticmethod
    def list_for_student(db: Session, student_id: int) -> List[Enrollment]:
        return (
            db.query(Enrollment)
            .filter(Enrollment.student_id == student_id)
            .order_by(Enrollment.enroll_date, Enrollment.id)
            .all()
        )


enrollment_service = EnrollmentService()
