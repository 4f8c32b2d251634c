import pytest
from sqlalchemy.exc import SQLAlchemyError

from registrar.core.exceptions import StorageFailure
from registrar.models import Student, StudentAudit
from registrar.services.audit_service import (
    DELETE, INSERT, UPDATE, AuditChange, AuditService, audit_service,
)
from registrar.services.catalog_service import catalog_service
from registrar.services.student_service import StudentService


def test_classify_insert_and_delete_carry_no_field_detail():
    changes = audit_service.classify(
        before={2: {"Email": "b@x", "Phone": None}},
        after={1: {"Email": "a@x", "Phone": None}},
    )

    assert changes == [AuditChange(1, INSERT), AuditChange(2, DELETE)]


def test_classify_update_only_reports_changed_tracked_fields():
    before = {
        1: {"Email": "a@x", "Phone": "1"},
        2: {"Email": None, "Phone": "2"},
        3: {"Email": "c@x", "Phone": None},
    }
    after = {
        1: {"Email": "a2@x", "Phone": "1"},
        2: {"Email": "", "Phone": "22"},
        3: {"Email": "c@x", "Phone": None},
    }

    changes = audit_service.classify(before, after)

    assert changes == [
        AuditChange(1, UPDATE, "Email", "a@x", "a2@x"),
        AuditChange(2, UPDATE, "Phone", "2", "22"),
    ]


def test_null_and_empty_string_compare_equal():
    assert audit_service.classify({1: {"Email": None}}, {1: {"Email": ""}}) == []


def test_tracking_an_extra_field_is_one_registry_entry(db):
    auditor = AuditService({
        "Email": lambda s: s.email,
        "Phone": lambda s: s.phone,
        "Gender": lambda s: s.gender,
    })
    service = StudentService(auditor=auditor)
    student_id = service.register(db, "Meena", "Iyer", gender="F")

    service.update(db, student_id, gender="O")

    row = db.query(StudentAudit).filter(StudentAudit.change_type == UPDATE).one()
    assert (row.changed_field, row.old_value, row.new_value) == ("Gender", "F", "O")


def test_snapshot_renders_values_as_text():
    student = Student(first_name="A", last_name="B", email="a@b.c", phone=None)

    assert audit_service.snapshot(student) == {"Email": "a@b.c", "Phone": None}


def test_history_is_newest_first(db, students, clock, asha):
    clock.advance(minutes=5)
    students.update(db, asha, email="asha2@example.com")

    history = audit_service.history(db, asha)
    assert [row.change_type for row in history] == [UPDATE, INSERT]
    assert audit_service.history(db, asha, change_type="insert")[0].change_type == INSERT


class ExplodingAuditService(AuditService):
    def append(self, db, changes, actor=None, clock=None):
        raise SQLAlchemyError("audit table unavailable")


def test_failed_audit_append_rolls_back_registration(db):
    service = StudentService(auditor=ExplodingAuditService())

    with pytest.raises(StorageFailure):
        service.register(db, "Asha", "Patel", email="asha.patel@example.com")

    assert db.query(Student).count() == 0
    assert db.query(StudentAudit).count() == 0


def test_failed_audit_append_rolls_back_update(db, asha):
    service = StudentService(auditor=ExplodingAuditService())

    with pytest.raises(StorageFailure):
        service.update(db, asha, email="changed@example.com")

    db.expire_all()
    assert db.query(Student).filter(Student.id == asha).one().email == "asha.patel@example.com"


def test_failed_audit_append_rolls_back_delete(db, asha):
    service = StudentService(auditor=ExplodingAuditService())

    with pytest.raises(StorageFailure):
        service.delete(db, asha)

    assert db.query(Student).count() == 1


def failing_on_marker(student):
    if student.email and "unreadable" in student.email:
        raise ValueError("cannot extract nickname")
    return None


def test_extractor_error_during_registration_leaves_nothing_pending(db):
    def always_fails(student):
        raise ValueError("cannot extract nickname")

    service = StudentService(auditor=AuditService({"Email": lambda s: s.email, "Nick": always_fails}))

    with pytest.raises(ValueError):
        service.register(db, "Asha", "Patel", email="asha.patel@example.com")
    catalog_service.create_course(db, "Database Systems", 4, code="DB101")

    assert db.query(Student).count() == 0
    assert db.query(StudentAudit).count() == 0


def test_extractor_error_during_update_leaves_nothing_pending(db, asha):
    service = StudentService(auditor=AuditService({"Email": lambda s: s.email, "Nick": failing_on_marker}))

    with pytest.raises(ValueError):
        service.update(db, asha, email="unreadable@example.com")
    catalog_service.create_course(db, "Database Systems", 4, code="DB101")

    db.expire_all()
    assert db.query(Student).filter(Student.id == asha).one().email == "asha.patel@example.com"
    assert db.query(StudentAudit).count() == 1
