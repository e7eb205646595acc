"""bcrypt hashing and the account password length policy."""

import bcrypt

from hostel_auth.exceptions import WeakPasswordError


class PasswordHashingService:
    """Hashes and checks account passwords.

    Passwords must be 8 to 16 characters long. bcrypt only looks at the
    first 72 bytes, which the upper bound keeps well clear of.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> stored = service.hash("hostel123")
    >>> service.verify("hostel123", stored)
    True
    """

    MIN_LENGTH = 8
    MAX_LENGTH = 16

    def __init__(self, rounds: int = 10):
        """
        Parameters
        ----------
        rounds
            bcrypt cost factor. Tests use 4, the minimum bcrypt accepts.
        """
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def validate_strength(self, password: str | None) -> None:
        """Raise WeakPasswordError unless the password fits the length policy."""
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)
        if not self.MIN_LENGTH <= len(password) <= self.MAX_LENGTH:
            msg = (
                f"Password must be between {self.MIN_LENGTH} and "
                f"{self.MAX_LENGTH} characters."
            )
            raise WeakPasswordError(msg)

    def hash(self, password: str) -> str:
        """Return a salted bcrypt hash after checking the length policy."""
        self.validate_strength(password)
        digest = bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self._rounds))
        return digest.decode()

    def verify(self, password: str | None, password_hash: str | None) -> bool:
        """Check a password against a stored hash.

        Missing input and unparseable hashes count as a mismatch.
        """
        if not password or not password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except ValueError:
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """True when the hash was made with a different cost factor."""
        # $2b$<cost>$<salt+digest>
        parts = password_hash.split("$")
        if len(parts) != 4 or not parts[2].isdigit():
            return True
        return int(parts[2]) != self._rounds
