"""Student registrar: records, enrollments, payments and the student audit trail."""
