"""
bidboard.auth.passwords

Password hashing for identities stored by the SQL remote store.
"""

from __future__ import annotations

from passlib.context import CryptContext

# pbkdf2_sha256 is implemented by passlib itself; no native backend required.
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)
