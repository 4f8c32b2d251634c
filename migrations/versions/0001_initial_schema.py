"""initial registrar schema

Revision ID: 0001
Revises:
Create Date: 2026-10-16

"""
from alembic import op
import sqlalchemy as sa


revision = '0001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table('students',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('first_name', sa.String(length=50), nullable=False),
        sa.Column('last_name', sa.String(length=50), nullable=False),
        sa.Column('dob', sa.Date(), nullable=True),
        sa.Column('email', sa.String(length=100), nullable=True),
        sa.Column('phone', sa.String(length=10), nullable=True),
        sa.Column('gender', sa.String(length=1), nullable=True),
        sa.Column('admission_date', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=True),
        sa.CheckConstraint("gender IN ('M', 'F', 'O')", name='ck_students_gender'),
        sa.CheckConstraint('length(trim(first_name)) > 0', name='ck_students_first_name'),
        sa.CheckConstraint('length(trim(last_name)) > 0', name='ck_students_last_name'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_students_email', 'students', ['email'], unique=False)

    op.create_table('courses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('course_name', sa.String(length=150), nullable=False),
        sa.Column('code', sa.String(length=20), nullable=True),
        sa.Column('credits', sa.SmallInteger(), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.CheckConstraint('credits BETWEEN 1 AND 10', name='ck_courses_credits'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
    )

    op.create_table('faculty',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('full_name', sa.String(length=150), nullable=False),
        sa.Column('department', sa.String(length=100), nullable=True),
        sa.Column('email', sa.String(length=100), nullable=True),
        sa.Column('salary', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('hire_date', sa.Date(), nullable=True),
        sa.CheckConstraint('salary >= 0', name='ck_faculty_salary'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table('enrollments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('course_id', sa.Integer(), nullable=False),
        sa.Column('enroll_date', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('status', sa.String(length=20), server_default='Enrolled', nullable=True),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('student_id', 'course_id', name='uq_student_course'),
    )
    op.create_index('ix_enrollments_student_id', 'enrollments', ['student_id'], unique=False)
    op.create_index('ix_enrollments_course_id', 'enrollments', ['course_id'], unique=False)

    op.create_table('payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('payment_date', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('mode', sa.String(length=50), server_default='Bank Transfer', nullable=True),
        sa.Column('reference_no', sa.String(length=100), nullable=True),
        sa.CheckConstraint('amount >= 0', name='ck_payments_amount'),
        sa.ForeignKeyConstraint(['student_id'], ['students.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_payments_student_date', 'payments', ['student_id', 'payment_date'], unique=False)

    # no foreign key: audit history outlives the student
    op.create_table('student_audit',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('student_id', sa.Integer(), nullable=False),
        sa.Column('change_type', sa.String(length=20), nullable=False),
        sa.Column('changed_field', sa.String(length=100), nullable=True),
        sa.Column('old_value', sa.String(length=500), nullable=True),
        sa.Column('new_value', sa.String(length=500), nullable=True),
        sa.Column('changed_by', sa.String(length=100), nullable=True),
        sa.Column('changed_date', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_student_audit_student_id', 'student_audit', ['student_id'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_student_audit_student_id', table_name='student_audit')
    op.drop_table('student_audit')
    op.drop_index('ix_payments_student_date', table_name='payments')
    op.drop_table('payments')
    op.drop_index('ix_enrollments_course_id', table_name='enrollments')
    op.drop_index('ix_enrollments_student_id', table_name='enrollments')
    op.drop_table('enrollments')
    op.drop_table('faculty')
    op.drop_table('courses')
    op.drop_index('ix_students_email', table_name='students')
    op.drop_table('students')
