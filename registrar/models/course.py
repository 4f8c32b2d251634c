"""Course model."""

from sqlalchemy import CheckConstraint, Column, Integer, SmallInteger, String
from sqlalchemy.orm import relationship
from registrar.db.base import Base


class Course(Base):
    """Catalogue course with a credit weight between 1 and 10."""
    __tablename__ = "courses"
    __table_args__ = (
        CheckConstraint("credits BETWEEN 1 AND 10", name="ck_courses_credits"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_name = Column(String(150), nullable=False)
    code = Column(String(20), unique=True, nullable=True)
    credits = Column(SmallInteger, nullable=False)
    description = Column(String(500), nullable=True)

    enrollments = relationship(
        "Enrollment",
        back_populates="course",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
