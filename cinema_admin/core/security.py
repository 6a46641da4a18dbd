import secrets

import bcrypt


def hash_password(password: str, rounds: int = 12) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # malformed hash or a password bcrypt refuses (over 72 bytes)
        return False


def generate_session_token() -> str:
    """256 bits of randomness, hex encoded."""
    return secrets.token_hex(32)
