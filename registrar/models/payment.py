"""Payment model."""

from sqlalchemy import (
    CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, func,
)
from sqlalchemy.orm import relationship
from registrar.db.base import Base


class Payment(Base):
    """Fee payment made by a student."""
    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_payments_amount"),
        Index("ix_payments_student_date", "student_id", "payment_date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_date = Column(DateTime, server_default=func.now(), nullable=True)
    mode = Column(String(50), default="Bank Transfer", server_default="Bank Transfer", nullable=True)
    reference_no = Column(String(100), nullable=True)

    student = relationship("Student", back_populates="payments")
