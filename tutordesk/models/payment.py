from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import ForeignKey, String, Numeric, Date, DateTime, CheckConstraint, UniqueConstraint, func
from tutordesk.db.base import Base

class PaymentStatus(str, Enum):
    pending="pending"
    completed="completed"
    failed="failed"

class StudentTeacherRelation(Base):
    __tablename__ = "student_teacher_relations"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(ForeignKey("students.id", ondelete="CASCADE"))
    teacher_id: Mapped[int] = mapped_column(ForeignKey("teachers.id", ondelete="CASCADE"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (UniqueConstraint("student_id", "teacher_id", name="uq_relation_student_teacher"),)

class Payment(Base):
    __tablename__ = "payments"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    student_id: Mapped[int] = mapped_column(ForeignKey("students.id", ondelete="CASCADE"))
    teacher_id: Mapped[int] = mapped_column(ForeignKey("teachers.id", ondelete="SET NULL"), nullable=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2))
    payment_date: Mapped[date] = mapped_column(Date)
    next_payment_due: Mapped[date] = mapped_column(Date)
    status: Mapped[str] = mapped_column(String(20), default=PaymentStatus.pending.value)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    student = relationship("Student", back_populates="payments")
    teacher = relationship("Teacher", back_populates="payments")

    __table_args__ = (CheckConstraint("amount > 0", name="amount_positive"),)
