"""Student audit model — append-only."""

from sqlalchemy import Column, Integer, String, DateTime, func
from registrar.db.base import Base


class StudentAudit(Base):
    """Immutable trail of changes made to student records.

    This table is APPEND-ONLY: rows are written by the student audit step and
    never updated or deleted. ``student_id`` carries no foreign key so the
    history outlives the student it describes.
    """
    __tablename__ = "student_audit"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, nullable=False, index=True)
    change_type = Column(String(20), nullable=False)  # INSERT, UPDATE, DELETE
    changed_field = Column(String(100), nullable=True)
    old_value = Column(String(500), nullable=True)
    new_value = Column(String(500), nullable=True)
    changed_by = Column(String(100), nullable=True)
    changed_date = Column(DateTime, server_default=func.now(), nullable=True)
