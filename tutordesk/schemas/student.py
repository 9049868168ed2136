from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

class StudentCreate(BaseModel):
    # obrigatoriedade checada no serviço para devolver o campo ofensor
    full_name: str = ""
    guardian_name: str = ""
    guardian_phone: str = ""
    category: Optional[str] = None
    class_name: Optional[str] = None
    quarter: Optional[str] = None
    days_per_week: int = Field(default=1, ge=1, le=7)

class PaymentInput(BaseModel):
    amount: Decimal
    payment_date: date
    # ignorado na criação: o vencimento é sempre recalculado
    next_payment_due: Optional[date] = None

class StudentCreateRequest(BaseModel):
    student: StudentCreate
    teacher_ids: List[int] = Field(default_factory=list)
    payments: Dict[int, PaymentInput] = Field(default_factory=dict)

class PaymentOut(BaseModel):
    id: int
    student_id: int
    teacher_id: Optional[int] = None
    amount: Decimal
    payment_date: date
    next_payment_due: date
    status: str

    model_config = {"from_attributes": True}

class StudentOut(BaseModel):
    id: int
    identifier: str
    user: str
    full_name: str
    guardian_name: str
    guardian_phone: str
    class_name: Optional[str] = None
    quarter: Optional[str] = None
    days_per_week: int
    category: str
    created_at: Optional[datetime] = None
    payments: List[PaymentOut] = []

    model_config = {"from_attributes": True}

class NextIdentifierOut(BaseModel):
    category: str
    identifier: str
