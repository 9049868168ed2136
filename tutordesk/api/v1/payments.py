# tutordesk/api/v1/payments.py
from datetime import date

from fastapi import APIRouter, Query

from tutordesk.schemas.payment import NextDueOut
from tutordesk.services.payment_schedule import compute_next_due_date

router = APIRouter()

# recalculado pelo formulário sempre que a data de pagamento muda
@router.get("/next-due", response_model=NextDueOut)
def next_due(payment_date: date = Query(...)):
    return NextDueOut(payment_date=payment_date, next_payment_due=compute_next_due_date(payment_date))
