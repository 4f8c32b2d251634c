from decimal import Decimal

import pytest

from registrar.core.exceptions import ConstraintViolation, NotFoundError, UniquenessViolation
from registrar.models import Enrollment, Payment, StudentAudit
from registrar.services.catalog_service import catalog_service
from registrar.services.payment_service import payment_service


def test_enroll_sets_defaults(db, enrollments, clock, asha, db101):
    enrollment_id = enrollments.enroll(db, asha, db101)

    enrollment = db.query(Enrollment).filter(Enrollment.id == enrollment_id).one()
    assert enrollment.status == "Enrolled"
    assert enrollment.enroll_date == clock.now()


def test_enrolling_twice_fails_with_uniqueness_violation(db, enrollments, asha, db101):
    enrollments.enroll(db, asha, db101)

    with pytest.raises(UniquenessViolation) as excinfo:
        enrollments.enroll(db, asha, db101)

    assert excinfo.value.message.startswith("Enrollment failed:")
    assert db.query(Enrollment).count() == 1


def test_enroll_unknown_student(db, enrollments, db101):
    with pytest.raises(NotFoundError) as excinfo:
        enrollments.enroll(db, 777, db101)

    assert excinfo.value.entity == "Student"
    assert excinfo.value.entity_id == 777
    assert "Student 777 does not exist" in str(excinfo.value)
    assert db.query(Enrollment).count() == 0


def test_enroll_unknown_course(db, enrollments, asha):
    with pytest.raises(NotFoundError) as excinfo:
        enrollments.enroll(db, asha, 888)

    assert excinfo.value.entity == "Course"
    assert "Course 888 does not exist" in excinfo.value.message
    assert db.query(Enrollment).count() == 0


def test_enrollment_does_not_touch_student_audit(db, enrollments, asha, db101):
    enrollments.enroll(db, asha, db101)

    assert db.query(StudentAudit).count() == 1


def test_list_for_student(db, enrollments, clock, asha, db101):
    cs102 = catalog_service.create_course(db, "Data Structures", 3, code="CS102")
    enrollments.enroll(db, asha, db101)
    clock.advance(days=1)
    enrollments.enroll(db, asha, cs102)

    assert [e.course_id for e in enrollments.list_for_student(db, asha)] == [db101, cs102]


def test_record_payment_defaults(db, payments, clock, asha):
    payment_id = payments.record(db, asha, 5000)

    payment = db.query(Payment).filter(Payment.id == payment_id).one()
    assert payment.mode == "Bank Transfer"
    assert payment.reference_no is None
    assert payment.payment_date == clock.now()
    assert payment.amount == Decimal("5000")


def test_record_payment_with_mode_and_reference(db, payments, asha):
    payment_id = payments.record(db, asha, "3000.50", mode="Cash", reference_no="TXN2001")

    payment = db.query(Payment).filter(Payment.id == payment_id).one()
    assert payment.mode == "Cash"
    assert payment.reference_no == "TXN2001"


def test_negative_payment_is_constraint_violation(db, payments, asha):
    with pytest.raises(ConstraintViolation):
        payments.record(db, asha, -1)

    assert db.query(Payment).count() == 0


def test_zero_payment_is_allowed(db, payments, asha):
    payments.record(db, asha, 0)

    assert db.query(Payment).count() == 1


def test_payment_for_unknown_student(db, payments):
    with pytest.raises(NotFoundError):
        payments.record(db, 5, 100)

    assert db.query(Payment).count() == 0


def test_total_paid(db, payments, asha):
    assert payment_service.total_paid(db, asha) == 0
    payments.record(db, asha, 5000)
    payments.record(db, asha, "250.25")

    assert payment_service.total_paid(db, asha) == Decimal("5250.25")


@pytest.mark.parametrize("credits", [0, 11, -3])
def test_course_credits_out_of_range(db, credits):
    with pytest.raises(ConstraintViolation):
        catalog_service.create_course(db, "Broken", credits, code="BAD1")


def test_duplicate_course_code(db, db101):
    with pytest.raises(UniquenessViolation):
        catalog_service.create_course(db, "Another", 3, code="DB101")


def test_course_lookup_by_code(db, db101):
    assert catalog_service.get_course_by_code(db, "DB101").id == db101
    with pytest.raises(NotFoundError):
        catalog_service.get_course_by_code(db, "NOPE")


def test_faculty_salary_must_not_be_negative(db):
    with pytest.raises(ConstraintViolation):
        catalog_service.create_faculty(db, "Dr. Negative", salary=-10)


def test_faculty_email_is_unique(db):
    catalog_service.create_faculty(db, "Dr. Suresh Rao", email="suresh.rao@example.com", salary=75000)

    with pytest.raises(UniquenessViolation):
        catalog_service.create_faculty(db, "Someone Else", email="suresh.rao@example.com")


@pytest.mark.parametrize("amount", ["abc", "", "NaN", "Infinity"])
def test_unparseable_payment_amount(db, payments, asha, amount):
    with pytest.raises(ConstraintViolation) as excinfo:
        payments.record(db, asha, amount)

    assert "Invalid payment amount" in excinfo.value.message
    assert db.query(Payment).count() == 0


def test_unparseable_salary(db):
    with pytest.raises(ConstraintViolation):
        catalog_service.create_faculty(db, "Dr. Typo", salary="seventy thousand")


def test_faculty_lookup(db):
    faculty_id = catalog_service.create_faculty(
        db, "Ms. Anita Desai", department="Computer Science",
        email="anita.desai@example.com", salary=45000,
    )

    faculty = catalog_service.get_faculty(db, faculty_id)
    assert faculty.full_name == "Ms. Anita Desai"
    assert faculty.salary == Decimal("45000")
    with pytest.raises(NotFoundError) as excinfo:
        catalog_service.get_faculty(db, faculty_id + 1)
    assert excinfo.value.entity == "Faculty"
