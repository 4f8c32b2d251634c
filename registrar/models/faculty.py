"""Faculty model."""

from sqlalchemy import CheckConstraint, Column, Date, Integer, Numeric, String
from registrar.db.base import Base


class Faculty(Base):
    __tablename__ = "faculty"
    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_faculty_salary"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    full_name = Column(String(150), nullable=False)
    department = Column(String(100), nullable=True)
    email = Column(String(100), unique=True, nullable=True)
    salary = Column(Numeric(12, 2), nullable=True)
    hire_date = Column(Date, nullable=True)
