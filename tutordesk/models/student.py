from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Integer, DateTime, func
from tutordesk.db.base import Base

class Student(Base):
    __tablename__ = "students"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    # identifier == user, ex.: ST00A12; o UNIQUE é a última barreira contra duplicados
    identifier: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    user: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    full_name: Mapped[str] = mapped_column(String(160))
    guardian_name: Mapped[str] = mapped_column(String(160))
    guardian_phone: Mapped[str] = mapped_column(String(30))
    class_name: Mapped[Optional[str]] = mapped_column("class", String(40), nullable=True)
    quarter: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    days_per_week: Mapped[int] = mapped_column(Integer, default=1)
    category: Mapped[str] = mapped_column(String(20))
    last_login: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    teachers = relationship("Teacher", secondary="student_teacher_relations", viewonly=True)
    payments = relationship("Payment", back_populates="student", order_by="Payment.id")
