"""Student model."""

from sqlalchemy import (
    Boolean, CheckConstraint, Column, Date, DateTime, Integer, String, func, true,
)
from sqlalchemy.orm import relationship
from registrar.db.base import Base


class Student(Base):
    """Registered student. Mutations go through the student service so they are audited."""
    __tablename__ = "students"
    __table_args__ = (
        CheckConstraint("gender IN ('M', 'F', 'O')", name="ck_students_gender"),
        CheckConstraint("length(trim(first_name)) > 0", name="ck_students_first_name"),
        CheckConstraint("length(trim(last_name)) > 0", name="ck_students_last_name"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    dob = Column(Date, nullable=True)
    email = Column(String(100), unique=True, nullable=True, index=True)
    phone = Column(String(10), nullable=True)
    gender = Column(String(1), nullable=True)
    admission_date = Column(DateTime, server_default=func.now(), nullable=True)
    is_active = Column(Boolean, default=True, server_default=true(), nullable=True)

    enrollments = relationship(
        "Enrollment",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    payments = relationship(
        "Payment",
        back_populates="student",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
