"""Audit service — append-only change trail for student records."""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Mapping, Optional

from sqlalchemy.orm import Session

from registrar.core.clock import system_clock
from registrar.models.student import Student
from registrar.models.student_audit import StudentAudit

logger = logging.getLogger(__name__)

INSERT = "INSERT"
UPDATE = "UPDATE"
DELETE = "DELETE"

# Audit label -> value extractor. Only these fields produce UPDATE rows.
TRACKED_FIELDS: Dict[str, Callable[[Student], Optional[object]]] = {
    "Email": lambda student: student.email,
    "Phone": lambda student: student.phone,
}

Snapshot = Dict[str, Optional[str]]


@dataclass(frozen=True)
class AuditChange:
    """One audit row waiting to be appended."""

    student_id: int
    change_type: str
    changed_field: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None


def _as_text(value: Optional[object]) -> Optional[str]:
    if value is None:
        return None
    return str(value)[:500]


def _normalized(value: Optional[str]) -> str:
    return "" if value is None else value


class AuditService:
    """Classifies student mutations and records them in ``student_audit``."""

    def __init__(self, tracked_fields: Optional[Mapping[str, Callable]] = None):
        self.tracked_fields = dict(TRACKED_FIELDS if tracked_fields is None else tracked_fields)

    def snapshot(self, student: Student) -> Snapshot:
        """Capture the tracked values of a student as text."""
        return {
            label: _as_text(extract(student))
            for label, extract in self.tracked_fields.items()
        }

    def snapshot_many(self, students: Iterable[Student]) -> Dict[int, Snapshot]:
        return {student.id: self.snapshot(student) for student in students}

    def classify(
        self,
        before: Mapping[int, Snapshot],
        after: Mapping[int, Snapshot],
    ) -> List[AuditChange]:
        """Compare before/after row sets of one mutation.

        Ids only in ``after`` are inserts, ids only in ``before`` are deletes,
        and ids in both yield one update per tracked field whose value changed
        (None compares equal to the empty string).
        """
        changes: List[AuditChange] = []

        for student_id in sorted(set(after) - set(before)):
            changes.append(AuditChange(student_id, INSERT))

        for student_id in sorted(set(before) - set(after)):
            changes.append(AuditChange(student_id, DELETE))

        for student_id in sorted(set(before) & set(after)):
            old_row, new_row = before[student_id], after[student_id]
            for label in self.tracked_fields:
                old_value, new_value = old_row.get(label), new_row.get(label)
                if _normalized(old_value) != _normalized(new_value):
                    changes.append(
                        AuditChange(student_id, UPDATE, label, old_value, new_value)
                    )

        return changes

    def append(
        self,
        db: Session,
        changes: Iterable[AuditChange],
        actor: Optional[str] = None,
        clock=system_clock,
    ) -> List[StudentAudit]:
        """Add audit rows to the caller's open transaction.

        Does not commit: the rows persist only if the mutation they describe
        commits with them.
        """
        changed_at = clock.now()
        entries = [
            StudentAudit(
                student_id=change.student_id,
                change_type=change.change_type,
                changed_field=change.changed_field,
                old_value=change.old_value,
                new_value=change.new_value,
                changed_by=actor,
                changed_date=changed_at,
            )
            for change in changes
        ]
        db.add_all(entries)
        db.flush()
        logger.debug("Appended %d student audit row(s)", len(entries))
        return entries

    def record(
        self,
        db: Session,
        before: Mapping[int, Snapshot],
        after: Mapping[int, Snapshot],
        actor: Optional[str] = None,
        clock=system_clock,
    ) -> List[StudentAudit]:
        """Classify a mutation and append its audit rows."""
        return self.append(db, self.classify(before, after), actor=actor, clock=clock)

    @staticmethod
    def history(
        db: Session,
        student_id: int,
        change_type: Optional[str] = None,
    ) -> List[StudentAudit]:
        """Audit rows for a student, newest first."""
        query = db.query(StudentAudit).filter(StudentAudit.student_id == student_id)
        if change_type:
            query = query.filter(StudentAudit.change_type == change_type.upper())
        return query.order_by(StudentAudit.changed_date.desc(), StudentAudit.id.desc()).all()


audit_service = AuditService()
