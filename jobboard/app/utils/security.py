import bcrypt


def hash_password(password: str, rounds: int = 12) -> str:
    """
    Hash password using bcrypt directly.

    bcrypt truncates at 72 *bytes* and recent builds raise if you exceed it,
    so enforce the limit explicitly.
    """
    if not password:
        raise ValueError("Password is required")

    pw_bytes = password.encode("utf-8")
    if len(pw_bytes) > 72:
        raise ValueError("Password must be 72 bytes or less")

    hashed = bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, hashed: str | None) -> bool:
    """Check ``password`` against a stored bcrypt hash. Overlong input never matches."""
    try:
        if not password or not hashed:
            return False
        pw_bytes = password.encode("utf-8")
        if len(pw_bytes) > 72:
            return False
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False
