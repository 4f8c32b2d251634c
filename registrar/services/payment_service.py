"""Payment service — record student payments and sum them."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from registrar.core.clock import system_clock
from registrar.core.config import settings
from registrar.core.exceptions import ConstraintViolation, NotFoundError, translate_db_error
from registrar.models.payment import Payment
from registrar.models.student import Student

logger = logging.getLogger(__name__)


class PaymentService:
    """Records payments against existing students."""

    def __init__(self, clock=system_clock):
        self.clock = clock

    def record(
        self,
        db: Session,
        student_id: int,
        amount: Union[Decimal, int, float, str],
        mode: Optional[str] = None,
        reference_no: Optional[str] = None,
    ) -> int:
        """Record a payment and return its id. Negative amounts are refused by the store."""
        if not db.query(Student.id).filter(Student.id == student_id).first():
            logger.warning("Payment rejected: student %s not found", student_id)
            raise NotFoundError("Student", student_id)

        try:
            value = Decimal(str(amount))
        except InvalidOperation:
            value = None
        if value is None or not value.is_finite():
            raise ConstraintViolation(f"Invalid payment amount: {amount!r}")

        payment = Payment(
            student_id=student_id,
            amount=value,
            payment_date=self.clock.now(),
            mode=mode or settings.DEFAULT_PAYMENT_MODE,
            reference_no=reference_no,
        )
        try:
            db.add(payment)
            db.flush()
            payment_id = payment.id
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning("Payment for student %s rejected", student_id)
            raise translate_db_error(exc, "Payment", refs={"Student": student_id}) from exc

        logger.info("Recorded payment %s for student %s", payment_id, student_id)
        return payment_id

    @staticmethod
    def total_paid(db: Session, student_id: int) -> Decimal:
        """Sum of a student's payments; zero when there are none."""
        total = (
            db.query(func.coalesce(func.sum(Payment.amount), 0))
            .filter(Payment.student_id == student_id)
            .scalar()
        )
        return Decimal(str(total or 0))


payment_service = PaymentService()
