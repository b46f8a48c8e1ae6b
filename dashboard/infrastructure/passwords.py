"""Password Hashing — bcrypt hash/verify for stored user credentials.

Invariants:
    - Stored hashes are bcrypt ($2b$), cost 10
    - check_password raises ValueError on a malformed stored hash

Design Decisions:
    - bcrypt.checkpw does the constant-time comparison
"""

import bcrypt

BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    return bcrypt.hashpw(
        password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS),
    ).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
