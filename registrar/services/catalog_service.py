"""Catalog service — courses and faculty, inserted directly without audit."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from registrar.core.exceptions import ConstraintViolation, NotFoundError, translate_db_error
from registrar.models.course import Course
from registrar.models.faculty import Faculty

logger = logging.getLogger(__name__)


def _commit_new(db: Session, obj, operation: str) -> int:
    try:
        db.add(obj)
        db.flush()
        new_id = obj.id
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise translate_db_error(exc, operation) from exc
    return new_id


class CatalogService:
    """Manages courses and faculty members."""

    @staticmethod
    def create_course(
        db: Session,
        course_name: str,
        credits: int,
        code: Optional[str] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a course; credits outside 1..10 are refused by the store."""
        course = Course(
            course_name=course_name,
            code=code,
            credits=credits,
            description=description,
        )
        course_id = _commit_new(db, course, "Course creation")
        logger.info("Created course %s (%s)", course_id, code)
        return course_id

    @staticmethod
    def get_course(db: Session, course_id: int) -> Course:
        course = db.query(Course).filter(Course.id == course_id).first()
        if not course:
            raise NotFoundError("Course", course_id)
        return course

    @staticmethod
    def get_course_by_code(db: Session, code: str) -> Course:
        course = db.query(Course).filter(Course.code == code).first()
        if not course:
            raise NotFoundError("Course", code)
        return course

    @staticmethod
    def delete_course(db: Session, course_id: int) -> None:
        """Delete a course together with its enrollments."""
        course = CatalogService.get_course(db, course_id)
        try:
            db.delete(course)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise translate_db_error(exc, "Course deletion") from exc
        logger.info("Deleted course %s", course_id)

    @staticmethod
    def create_faculty(
        db: Session,
        full_name: str,
        department: Optional[str] = None,
        email: Optional[str] = None,
        salary: Optional[Decimal] = None,
        hire_date: Optional[date] = None,
    ) -> int:
        if salary is not None:
            try:
                salary = Decimal(str(salary))
            except InvalidOperation:
                raise ConstraintViolation(f"Invalid salary: {salary!r}")

        faculty = Faculty(
            full_name=full_name,
            department=department,
            email=email,
            salary=salary,
            hire_date=hire_date,
        )
        faculty_id = _commit_new(db, faculty, "Faculty creation")
        logger.info("Created faculty member %s", faculty_id)
        return faculty_id

    @staticmethod
    def get_faculty(db: Session, faculty_id: int) -> Faculty:
        faculty = db.query(Faculty).filter(Faculty.id == faculty_id).first()
        if not faculty:
            raise NotFoundError("Faculty", faculty_id)
        return faculty


catalog_service = CatalogService()
