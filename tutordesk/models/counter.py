from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Integer
from tutordesk.db.base import Base

class StudentIdCounter(Base):
    """One row per identifier prefix; the row lock serialises allocations."""
    __tablename__ = "student_id_counters"
    prefix: Mapped[str] = mapped_column(String(8), primary_key=True)
    category: Mapped[str] = mapped_column(String(20), unique=True)
    last_value: Mapped[int] = mapped_column(Integer, default=0)
