"""Password hashing and verification with bcrypt."""

import bcrypt

from src.config import MIN_BCRYPT_ROUNDS


class PasswordHasher:
    """One-way bcrypt hashing with a fixed cost factor.

    Each hash gets a fresh random salt, so hashing the same password twice
    yields different values that both verify.
    """

    def __init__(self, rounds: int = MIN_BCRYPT_ROUNDS) -> None:
        """Initialize the hasher.

        Args:
            rounds: Bcrypt work factor (log2 of the iteration count).

        Raises:
            ValueError: If rounds is below the accepted minimum.
        """
        if rounds < MIN_BCRYPT_ROUNDS:
            raise ValueError(
                f"bcrypt rounds must be at least {MIN_BCRYPT_ROUNDS}, got {rounds}"
            )
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password.

        Args:
            password: Plaintext password.

        Returns:
            Bcrypt hash string (``$2b$...``).
        """
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed_password: str) -> bool:
        """Check a plaintext password against a stored hash.

        Uses bcrypt's constant-time comparison. A malformed hash never
        matches.

        Args:
            password: Plaintext password to check.
            hashed_password: Stored bcrypt hash.

        Returns:
            True if the password matches.
        """
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), hashed_password.encode("utf-8")
            )
        except ValueError:
            return False

