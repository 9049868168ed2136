from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

class TeacherOut(BaseModel):
    id: int
    user: str
    email: str
    full_name: str
    category: Optional[str] = None
    town: Optional[str] = None
    is_approved: Optional[bool] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

class TeacherApprovalIn(BaseModel):
    teacher_ids: List[int] = Field(min_length=1)
    approved: bool
