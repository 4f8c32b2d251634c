"""Seed sample data for demo purposes."""

from datetime import date

from sqlalchemy.orm import Session

from registrar.models.course import Course
from registrar.models.enrollment import Enrollment
from registrar.models.faculty import Faculty
from registrar.models.payment import Payment
from registrar.models.student import Student
from registrar.services.catalog_service import catalog_service
from registrar.services.enrollment_service import enrollment_service
from registrar.services.payment_service import payment_service
from registrar.services.student_service import student_service


SAMPLE_STUDENTS = [
    ("Asha", "Patel", date(2003, 8, 14), "asha.patel@example.com", "9988776655", "F"),
    ("Ravi", "Kumar", date(2002, 5, 30), "ravi.kumar@example.com", "9876543210", "M"),
    ("Meena", "Iyer", date(2001, 12, 1), "meena.iyer@example.com", "9123456789", "F"),
]

SAMPLE_COURSES = [
    ("Database Systems", "DB101", 4, "Introduction to relational databases and SQL"),
    ("Data Structures", "CS102", 3, "Arrays, lists, trees, graphs, algorithms"),
    ("Web Development", "WD103", 3, "HTML, CSS, JavaScript, Server-side basics"),
]

SAMPLE_FACULTY = [
    ("Dr. Suresh Rao", "Computer Science", "suresh.rao@example.com", 75000, date(2019, 7, 1)),
    ("Ms. Anita Desai", "Computer Science", "anita.desai@example.com", 45000, date(2021, 3, 15)),
]

# (student email, course code)
SAMPLE_ENROLLMENTS = [
    ("asha.patel@example.com", "DB101"),
    ("ravi.kumar@example.com", "DB101"),
    ("ravi.kumar@example.com", "CS102"),
]

# (student email, amount, mode, reference)
SAMPLE_PAYMENTS = [
    ("asha.patel@example.com", 5000, "Bank Transfer", "TXN1001"),
    ("ravi.kumar@example.com", 4500, "Card", "TXN1002"),
]


def seed_sample_data(db: Session) -> None:
    """Insert sample students, courses, faculty, enrollments and payments."""

    # --- Students (through the service so each gets its INSERT audit row) ---
    student_ids = {}
    for first, last, dob, email, phone, gender in SAMPLE_STUDENTS:
        existing = db.query(Student).filter(Student.email == email).first()
        if existing:
            student_ids[email] = existing.id
        else:
            student_ids[email] = student_service.register(
                db, first, last, dob=dob, email=email, phone=phone, gender=gender
            )

    # --- Courses ---
    course_ids = {}
    for name, code, credits, description in SAMPLE_COURSES:
        existing = db.query(Course).filter(Course.code == code).first()
        if existing:
            course_ids[code] = existing.id
        else:
            course_ids[code] = catalog_service.create_course(
                db, name, credits, code=code, description=description
            )

    # --- Faculty ---
    for full_name, department, email, salary, hire_date in SAMPLE_FACULTY:
        existing = db.query(Faculty).filter(Faculty.email == email).first()
        if not existing:
            catalog_service.create_faculty(
                db, full_name, department=department, email=email,
                salary=salary, hire_date=hire_date,
            )

    # --- Enrollments ---
    for email, code in SAMPLE_ENROLLMENTS:
        existing = db.query(Enrollment).filter(
            Enrollment.student_id == student_ids[email],
            Enrollment.course_id == course_ids[code],
        ).first()
        if not existing:
            enrollment_service.enroll(db, student_ids[email], course_ids[code])

    # --- Payments ---
    for email, amount, mode, reference in SAMPLE_PAYMENTS:
        existing = db.query(Payment).filter(Payment.reference_no == reference).first()
        if not existing:
            payment_service.record(
                db, student_ids[email], amount, mode=mode, reference_no=reference
            )

    print("✅ Seeded students, courses, faculty, enrollments and payments")
