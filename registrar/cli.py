"""Student registrar CLI tool (registrar)."""

import logging
from datetime import datetime
from typing import Optional

import typer

from registrar.core.config import settings
from registrar.core.exceptions import RegistrarError

app = typer.Typer(name="registrar", help="Student registrar CLI")
db_app = typer.Typer(help="Database management commands")
student_app = typer.Typer(help="Student records")
course_app = typer.Typer(help="Course catalogue")
report_app = typer.Typer(help="Reports")
audit_app = typer.Typer(help="Student audit trail")
app.add_typer(db_app, name="db")
app.add_typer(student_app, name="student")
app.add_typer(course_app, name="course")
app.add_typer(report_app, name="report")
app.add_typer(audit_app, name="audit")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging")):
    """Configure logging for every command."""
    level = logging.DEBUG if verbose or settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _fail(exc: RegistrarError) -> None:
    typer.echo(f"❌ {exc.message}", err=True)
    raise typer.Exit(code=1)


# ---- Database ----
@db_app.command("create")
def db_create():
    """Create the MySQL database if it doesn't exist."""
    import pymysql
    from sqlalchemy.engine import make_url

    url = make_url(settings.DATABASE_URL)
    if not url.drivername.startswith("mysql"):
        typer.echo(f"Nothing to create for {url.drivername}; run 'db init'")
        return

    conn = pymysql.connect(
        host=url.host, port=url.port or 3306, user=url.username, password=url.password or ""
    )
    try:
        cursor = conn.cursor()
        cursor.execute(f"CREATE DATABASE IF NOT EXISTS `{url.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
        typer.echo(f"✅ Database '{url.database}' created (or already exists)")
    finally:
        conn.close()


@db_app.command("init")
def db_init():
    """Create all tables from the models."""
    from registrar.db.base import Base
    from registrar.db.session import engine
    import registrar.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    typer.echo("✅ Tables created")


@db_app.command("migrate")
def db_migrate(config_path: str = typer.Option("alembic.ini", help="Alembic config file")):
    """Run Alembic migrations up to head."""
    from alembic import command
    from alembic.config import Config

    command.upgrade(Config(config_path), "head")
    typer.echo("✅ Migrations applied")


@db_app.command("seed")
def db_seed():
    """Seed sample students, courses, faculty, enrollments and payments."""
    from registrar.db.session import session_scope
    from registrar.db.seeds.seed_sample_data import seed_sample_data

    with session_scope() as db:
        try:
            seed_sample_data(db)
        except RegistrarError as exc:
            _fail(exc)
    typer.echo("✅ All seeds applied")


@db_app.command("reset")
def db_reset():
    """Drop and recreate all tables (DANGER)."""
    confirm = typer.confirm("⚠️  This will DROP every registrar table. Continue?")
    if not confirm:
        raise typer.Abort()
    from registrar.db.base import Base
    from registrar.db.session import engine
    import registrar.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    typer.echo("✅ Database reset")


# ---- Students ----
@student_app.command("add")
def student_add(
    first_name: str = typer.Argument(..., help="First name"),
    last_name: str = typer.Argument(..., help="Last name"),
    dob: Optional[datetime] = typer.Option(None, formats=["%Y-%m-%d"], help="Date of birth"),
    email: Optional[str] = typer.Option(None, help="Email address"),
    phone: Optional[str] = typer.Option(None, help="Phone number"),
    gender: Optional[str] = typer.Option(None, help="M, F or O"),
    actor: Optional[str] = typer.Option(None, help="Recorded as the author of the change"),
):
    """Register a student."""
    from registrar.db.session import session_scope
    from registrar.services.student_service import student_service

    with session_scope() as db:
        try:
            student_id = student_service.register(
                db, first_name, last_name,
                dob=dob.date() if dob else None,
                email=email, phone=phone, gender=gender, actor=actor,
            )
        except RegistrarError as exc:
            _fail(exc)
    typer.echo(f"✅ Student {student_id} registered")


@student_app.command("update")
def student_update(
    student_id: int = typer.Argument(..., help="Student ID"),
    email: Optional[str] = typer.Option(None, help="New email"),
    phone: Optional[str] = typer.Option(None, help="New phone"),
    first_name: Optional[str] = typer.Option(None, help="New first name"),
    last_name: Optional[str] = typer.Option(None, help="New last name"),
    actor: Optional[str] = typer.Option(None, help="Recorded as the author of the change"),
):
    """Update a student's contact details or name."""
    from registrar.db.session import session_scope
    from registrar.services.student_service import student_service

    changes = {
        key: value
        for key, value in {
            "email": email, "phone": phone,
            "first_name": first_name, "last_name": last_name,
        }.items()
        if value is not None
    }
    if not changes:
        typer.echo("Nothing to update")
        return

    with session_scope() as db:
        try:
            student_service.update(db, student_id, actor=actor, **changes)
        except RegistrarError as exc:
            _fail(exc)
    typer.echo(f"✅ Student {student_id} updated")


@student_app.command("delete")
def student_delete(
    student_id: int = typer.Argument(..., help="Student ID"),
    actor: Optional[str] = typer.Option(None, help="Recorded as the author of the change"),
):
    """Delete a student with their enrollments and payments."""
    from registrar.db.session import session_scope
    from registrar.services.student_service import student_service

    with session_scope() as db:
        try:
            student_service.delete(db, student_id, actor=actor)
        except RegistrarError as exc:
            _fail(exc)
    typer.echo(f"✅ Student {student_id} deleted")


@student_app.command("show")
def student_show(
    student_id: Optional[int] = typer.Argument(None, help="Student ID"),
    email: Optional[str] = typer.Option(None, help="Look the student up by email instead"),
):
    """Print a student record as JSON."""
    from registrar.db.session import session_scope
    from registrar.schemas.schemas import StudentOut
    from registrar.services.student_service import student_service

    if student_id is None and email is None:
        typer.echo("❌ Give a student ID or --email", err=True)
        raise typer.Exit(code=1)

    with session_scope() as db:
        try:
            if student_id is not None:
                student = student_service.get(db, student_id)
            else:
                student = student_service.get_by_email(db, email)
        except RegistrarError as exc:
            _fail(exc)
        typer.echo(StudentOut.model_validate(student).model_dump_json(indent=2))


@student_app.command("name")
def student_name(student_id: int = typer.Argument(..., help="Student ID")):
    """Print a student's full name (blank when unknown)."""
    from registrar.db.session import session_scope
    from registrar.services.student_service import student_service

    with session_scope() as db:
        typer.echo(student_service.full_name(db, student_id))


# ---- Courses ----
@course_app.command("add")
def course_add(
    name: str = typer.Argument(..., help="Course name"),
    credits: int = typer.Argument(..., help="Credits (1-10)"),
    code: Optional[str] = typer.Option(None, help="Unique course code"),
    description: Optional[str] = typer.Option(None, help="Description"),
):
    """Create a course."""
    from registrar.db.session import session_scope
    from registrar.services.catalog_service import catalog_service

    with session_scope() as db:
        try:
            course_id = catalog_service.create_course(db, name, credits, code=code, description=description)
        except RegistrarError as exc:
            _fail(exc)
    typer.echo(f"✅ Course {course_id} created")


# ---- Enrollment & payments ----
@app.command("enroll")
def enroll(
    student_id: int = typer.Argument(..., help="Student ID"),
    course_id: int = typer.Argument(..., help="Course ID"),
):
    """Enroll a student in a course."""
    from registrar.db.session import session_scope
    from registrar.services.enrollment_service import enrollment_service

    with session_scope() as db:
        try:
            enrollment_id = enrollment_service.enroll(db, student_id, course_id)
        except RegistrarError as exc:
            _fail(exc)
    typer.echo(f"✅ Enrollment {enrollment_id} created")


@app.command("pay")
def pay(
    student_id: int = typer.Argument(..., help="Student ID"),
    amount: str = typer.Argument(..., help="Amount paid"),
    mode: Optional[str] = typer.Option(None, help="Payment mode"),
    reference: Optional[str] = typer.Option(None, help="Reference number"),
):
    """Record a payment."""
    from registrar.db.session import session_scope
    from registrar.services.payment_service import payment_service

    with session_scope() as db:
        try:
            payment_id = payment_service.record(db, student_id, amount, mode=mode, reference_no=reference)
        except RegistrarError as exc:
            _fail(exc)
    typer.echo(f"✅ Payment {payment_id} recorded")


# ---- Reports ----
@report_app.command("courses")
def report_courses(student_id: Optional[int] = typer.Option(None, help="Limit to one student")):
    """List students with their enrolled courses."""
    from registrar.db.session import session_scope
    from registrar.services.report_service import report_service

    with session_scope() as db:
        for row in report_service.student_courses(db, student_id):
            typer.echo(f"  [{row.student_id}] {row.full_name}: {row.course_name} ({row.enroll_date:%Y-%m-%d})")


@report_app.command("payments")
def report_payments():
    """Total paid per student."""
    from registrar.db.session import session_scope
    from registrar.services.report_service import report_service

    with session_scope() as db:
        for row in report_service.payment_totals(db):
            typer.echo(f"  [{row.student_id}] {row.full_name}: {row.total_paid}")


@audit_app.command("show")
def audit_show(student_id: int = typer.Argument(..., help="Student ID")):
    """Show a student's audit trail, newest first."""
    from registrar.db.session import session_scope
    from registrar.services.audit_service import audit_service

    from registrar.schemas.schemas import StudentAuditOut

    with session_scope() as db:
        for row in audit_service.history(db, student_id):
            entry = StudentAuditOut.model_validate(row)
            field = f" {entry.changed_field}: {entry.old_value!r} -> {entry.new_value!r}" if entry.changed_field else ""
            by = f" by {entry.changed_by}" if entry.changed_by else ""
            typer.echo(f"  {entry.changed_date:%Y-%m-%d %H:%M:%S} {entry.change_type}{field}{by}")


if __name__ == "__main__":
    app()
