from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Boolean, DateTime, func
from tutordesk.db.base import Base

class Teacher(Base):
    __tablename__ = "teachers"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user: Mapped[str] = mapped_column(String(80), unique=True, index=True)
    email: Mapped[str] = mapped_column(String(160), unique=True, index=True)
    full_name: Mapped[str] = mapped_column(String(160))
    category: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    password: Mapped[str] = mapped_column(String(255))
    contact: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    town: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    # NULL = sem decisão explícita; elegível para atribuição, mas não para login
    is_approved: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    last_login: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    deleted_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    payments = relationship("Payment", back_populates="teacher")

    @property
    def is_assignable(self) -> bool:
        return self.deleted_at is None and self.is_approved is not False
