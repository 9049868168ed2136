# tutordesk/services/payment_schedule.py
from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime
from typing import Union

from tutordesk.core.errors import ValidationError

DateLike = Union[date, datetime, str]

def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        try:
            # aceita também um datetime ISO completo vindo do formulário
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise ValidationError("payment_date", f"Data de pagamento inválida: {value!r}") from None
    raise ValidationError("payment_date", "Data de pagamento ausente.")

def compute_next_due_date(payment_date: DateLike) -> date:
    """Returns ``payment_date`` plus one calendar month.

    A day that does not exist in the following month is clamped to that
    month's last day (Jan 31 -> Feb 28, or Feb 29 in a leap year).
    """
    d = _as_date(payment_date)
    year = d.year + d.month // 12
    month = d.month % 12 + 1
    last_day = monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))
