"""Models package — import all models so Alembic can discover them."""

from registrar.models.student import Student
from registrar.models.course import Course
from registrar.models.faculty import Faculty
from registrar.models.enrollment import Enrollment
from registrar.models.payment import Payment
from registrar.models.student_audit import StudentAudit

__all__ = [
    "Student", "Course", "Faculty",
    "Enrollment", "Payment", "StudentAudit",
]
