from datetime import date
from pydantic import BaseModel

class NextDueOut(BaseModel):
    payment_date: date
    next_payment_due: date
