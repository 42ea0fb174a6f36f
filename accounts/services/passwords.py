"""Password hashing with bcrypt."""

from passlib.context import CryptContext

from accounts.exceptions import UnsupportedPassword

DEFAULT_ROUNDS = 10

# bcrypt ignores everything past this many bytes
MAX_PASSWORD_BYTES = 72


def password_problem(password: str) -> str | None:
    """Describe why bcrypt cannot take this password, or None if it can."""
    if "\x00" in password:
        return "Password must not contain NUL characters"
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
    return None


class PasswordHasher:
    """Salted one-way hashing and verification of plaintext passwords."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        """Hash a password. The salt is generated per call and embedded in the result.

        Raises UnsupportedPassword rather than letting bcrypt truncate or
        reject the input.
        """
        problem = password_problem(password)
        if problem:
            raise UnsupportedPassword(problem)
        return self.context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against its hash.

        A malformed or unrecognised hash, or a password that could never
        have been hashed, counts as a mismatch.
        """
        if password_problem(password):
            return False
        try:
            return self.context.verify(password, password_hash)
        except (ValueError, TypeError):
            return False
