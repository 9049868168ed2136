# tutordesk/services/identifiers.py
"""Sequential, category-prefixed student identifiers (``ST00A1``, ``ST00F12``...).

Allocation is serialised per prefix by the ``student_id_counters`` row: the
increment takes the row lock and holds it until the surrounding transaction
ends, and the existing identifiers are re-scanned under that lock so the
result is always above every number already stored for the prefix.
"""
from __future__ import annotations

import logging
import re
import time
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.orm import Session

from tutordesk.core.config import settings
from tutordesk.core.errors import AllocationConflict, StoreUnavailable, ValidationError
from tutordesk.crud.student import bump_counter, raise_counter, seed_counter, student_crud
from tutordesk.models.counter import StudentIdCounter

logger = logging.getLogger(__name__)

PREFIXES = {
    "anglo": "ST00A",
    "franco": "ST00F",
    "bilingue": "ST00B",
}
IDENTIFIER_PATTERN = re.compile(r"^(ST00A|ST00F|ST00B)[1-9][0-9]*$")
_TRAILING_DIGITS = re.compile(r"(\d+)$")

def normalize_category(category: Optional[str]) -> str:
    cat = (category or "").strip().lower()
    if not cat:
        raise ValidationError("category", "Categoria do aluno é obrigatória.")
    if cat not in PREFIXES:
        raise ValidationError("category", f"Categoria desconhecida: {category!r}")
    return cat

def prefix_for(category: Optional[str]) -> str:
    return PREFIXES[normalize_category(category)]

def next_sequence_number(identifiers: Iterable[Optional[str]], prefix: str) -> int:
    """Highest trailing number among ``prefix`` identifiers, plus one (1 if none)."""
    numbers = []
    for ident in identifiers:
        if not ident or not ident.startswith(prefix):
            continue
        m = _TRAILING_DIGITS.search(ident)
        if not m:
            continue
        n = int(m.group(1))
        if n > 0:
            numbers.append(n)
    return max(numbers) + 1 if numbers else 1

def fallback_identifier(prefix: str, now_ms: Optional[int] = None) -> str:
    # degradação legada: pode colidir com um sequencial futuro (o UNIQUE barra)
    ms = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    # valor numérico dos 3 últimos dígitos: sem zeros à esquerda; "000" vira 1000
    return f"{prefix}{int(str(ms)[-3:]) or 1000}"

def _reserve_next(db: Session, prefix: str, category: str) -> int:
    value = bump_counter(db, prefix)
    scan_next = next_sequence_number(student_crud.list_identifiers_by_prefix(db, prefix), prefix)
    if value is None:
        try:
            seed_counter(db, prefix, category, scan_next)
        except IntegrityError as exc:
            raise AllocationConflict(f"Contador {prefix} criado concorrentemente.") from exc
        return scan_next
    if value < scan_next:
        raise_counter(db, prefix, scan_next)
        value = scan_next
    return value

def allocate_identifier(db: Session, category: Optional[str], *, commit: bool = True) -> str:
    """Reserves the next identifier for ``category``.

    With ``commit=False`` the reservation joins the caller's transaction (the
    counter lock is held until the caller commits or rolls back), so it must
    be the first write of that transaction: a retry rolls the session back.
    """
    cat = normalize_category(category)
    prefix = PREFIXES[cat]
    attempts = max(1, settings.ALLOCATION_MAX_RETRIES)

    for attempt in range(1, attempts + 1):
        try:
            value = _reserve_next(db, prefix, cat)
            if commit:
                db.commit()
            identifier = f"{prefix}{value}"
            logger.debug("identifier reserved", extra={"prefix": prefix, "identifier": identifier})
            return identifier
        except (AllocationConflict, IntegrityError):
            db.rollback()
            logger.info("identifier allocation conflict, retrying", extra={"prefix": prefix, "attempt": attempt})
        except (OperationalError, InterfaceError):
            db.rollback()
            identifier = fallback_identifier(prefix)
            logger.warning(
                "store unavailable during allocation, using timestamp fallback",
                extra={"prefix": prefix, "identifier": identifier},
                exc_info=True,
            )
            return identifier

    raise StoreUnavailable(f"Não foi possível alocar identificador {prefix} após {attempts} tentativas.")

def peek_next_identifier(db: Session, category: Optional[str]) -> str:
    """Preview of the next identifier; reserves nothing and takes no lock."""
    cat = normalize_category(category)
    prefix = PREFIXES[cat]
    try:
        scan_next = next_sequence_number(student_crud.list_identifiers_by_prefix(db, prefix), prefix)
        last = db.scalar(select(StudentIdCounter.last_value).where(StudentIdCounter.prefix == prefix))
    except (OperationalError, InterfaceError):
        db.rollback()
        logger.warning("store unavailable during preview, using timestamp fallback", extra={"prefix": prefix})
        return fallback_identifier(prefix)
    return f"{prefix}{max(scan_next, (last or 0) + 1)}"
