"""Student service — registration, updates and removal, each audited."""

import logging
from datetime import date
from typing import Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from registrar.core.clock import system_clock
from registrar.core.exceptions import ConstraintViolation, NotFoundError, translate_db_error
from registrar.models.student import Student
from registrar.services.audit_service import AuditService, audit_service

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {"first_name", "last_name", "dob", "email", "phone", "gender", "is_active"}
)


class StudentService:
    """Every mutation here appends its audit rows before the single commit."""

    def __init__(self, clock=system_clock, auditor: Optional[AuditService] = None):
        self.clock = clock
        self.auditor = auditor or audit_service

    def register(
        self,
        db: Session,
        first_name: str,
        last_name: str,
        dob: Optional[date] = None,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        gender: Optional[str] = None,
        actor: Optional[str] = None,
    ) -> int:
        """Create a student and return the new id."""
        student = Student(
            first_name=first_name,
            last_name=last_name,
            dob=dob,
            email=email,
            phone=phone,
            gender=gender,
            admission_date=self.clock.now(),
            is_active=True,
        )
        try:
            db.add(student)
            db.flush()
            student_id = student.id
            self.auditor.record(
                db, {}, {student_id: self.auditor.snapshot(student)},
                actor=actor, clock=self.clock,
            )
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("Student registration rejected: %s", exc.__class__.__name__)
            raise translate_db_error(exc, "Student registration") from exc
        except Exception:
            db.rollback()
            raise

        logger.info("Registered student %s", student_id)
        return student_id

    @staticmethod
    def get(db: Session, student_id: int) -> Student:
        """Get a student by id."""
        student = db.query(Student).filter(Student.id == student_id).first()
        if not student:
            raise NotFoundError("Student", student_id)
        return student

    @staticmethod
    def get_by_email(db: Session, email: str) -> Student:
        student = db.query(Student).filter(Student.email == email).first()
        if not student:
            raise NotFoundError("Student", email)
        return student

    @staticmethod
    def full_name(db: Session, student_id: int) -> str:
        """Return "First Last", or an empty string when the student is unknown."""
        row = (
            db.query(Student.first_name, Student.last_name)
            .filter(Student.id == student_id)
            .first()
        )
        if row is None:
            return ""
        return " ".join(part for part in (row.first_name, row.last_name) if part)

    def update(
        self,
        db: Session,
        student_id: int,
        actor: Optional[str] = None,
        **changes,
    ) -> Student:
        """Update one student's fields."""
        self.update_many(db, [student_id], actor=actor, require_all=True, **changes)
        return self.get(db, student_id)

    def update_many(
        self,
        db: Session,
        student_ids: Iterable[int],
        actor: Optional[str] = None,
        require_all: bool = False,
        **changes,
    ) -> int:
        """Apply the same changes to several students in one transaction.

        Returns the number of students updated. Unknown ids are skipped unless
        ``require_all`` is set, in which case the first one raises NotFound.
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ConstraintViolation(f"Unknown student field(s): {', '.join(sorted(unknown))}")

        ids = list(dict.fromkeys(student_ids))
        students = db.query(Student).filter(Student.id.in_(ids)).all() if ids else []
        if require_all:
            found = {student.id for student in students}
            for student_id in ids:
                if student_id not in found:
                    raise NotFoundError("Student", student_id)

        before = self.auditor.snapshot_many(students)
        try:
            for student in students:
                for key, value in changes.items():
                    setattr(student, key, value)
            db.flush()
            after = self.auditor.snapshot_many(students)
            self.auditor.record(db, before, after, actor=actor, clock=self.clock)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("Student update rejected: %s", exc.__class__.__name__)
            raise translate_db_error(exc, "Student update") from exc
        except Exception:
            db.rollback()
            raise

        logger.info("Updated %d student(s)", len(students))
        return len(students)

    def delete(self, db: Session, student_id: int, actor: Optional[str] = None) -> None:
        """Delete a student; enrollments and payments go with it, audit rows stay."""
        student = self.get(db, student_id)
        before = {student_id: self.auditor.snapshot(student)}
        try:
            db.delete(student)
            db.flush()
            self.auditor.record(db, before, {}, actor=actor, clock=self.clock)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            raise translate_db_error(exc, "Student deletion") from exc
        except Exception:
            db.rollback()
            raise

        logger.info("Deleted student %s", student_id)


student_service = StudentService()
