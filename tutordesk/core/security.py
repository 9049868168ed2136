# tutordesk/core/security.py
from __future__ import annotations
import logging
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

# bcrypt continua aceito: as contas legadas foram criadas com bcryptjs ($2a$/$2b$)
pwd_context = CryptContext(
    schemes=["argon2", "bcrypt_sha256", "bcrypt"],
    deprecated="auto",
    argon2__time_cost=2,
    argon2__memory_cost=19456,
    argon2__parallelism=1,
)

def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)

def verify_password(plain: str, stored_hash: str | None) -> bool:
    """Constant-time check of ``plain`` against a stored hash.

    An empty or unrecognised hash counts as a mismatch; the account cannot be
    signed into until an admin resets it.
    """
    if not stored_hash:
        pwd_context.dummy_verify()
        return False
    try:
        return pwd_context.verify(plain, stored_hash)
    except ValueError:
        logger.warning("stored password hash has an unknown format")
        pwd_context.dummy_verify()
        return False

def dummy_verify() -> None:
    # iguala o tempo de resposta quando a conta não existe
    pwd_context.dummy_verify()

def password_needs_upgrade(stored_hash: str) -> bool:
    try:
        return pwd_context.needs_update(stored_hash)
    except ValueError:
        return False
