"""
Password hashing helpers.
Wraps argon2-cffi so callers get plain booleans back instead of exceptions.
"""

from typing import Optional

from argon2 import PasswordHasher
from argon2 import exceptions as argon_exc

from backend import config
from backend.errors import HashingError


class CredentialHasher:
    """
    Salted, memory-hard one-way hashing (Argon2id).

    Every call to `hash` draws a fresh random salt, so hashing the same
    password twice gives two different strings. Cost parameters are tunable;
    hashes made with older parameters still verify and are reported by
    `needs_rehash`.
    """

    def __init__(
        self,
        time_cost: Optional[int] = None,
        memory_cost: Optional[int] = None,
        parallelism: Optional[int] = None,
    ) -> None:
        self._ph = PasswordHasher(
            time_cost=time_cost or config.ARGON2_TIME_COST,
            memory_cost=memory_cost or config.ARGON2_MEMORY_COST,
            parallelism=parallelism or config.ARGON2_PARALLELISM,
        )

    def hash(self, plaintext: str) -> str:
        """
        Hash a password.

        Args:
            plaintext (str): The password as typed by the user.

        Returns:
            str: Encoded Argon2 hash (parameters and salt included).

        Raises:
            HashingError: If argon2 could not produce a hash.
        """
        try:
            return self._ph.hash(plaintext)
        except argon_exc.HashingError as e:
            raise HashingError() from e

    def verify(self, plaintext: str, hash_value: Optional[str]) -> bool:
        """
        Check a password against a stored hash in constant time.

        Args:
            plaintext (str): The candidate password.
            hash_value (str): The stored encoded hash.

        Returns:
            bool: True on match; False on mismatch or malformed hash.
        """
        if not hash_value:
            return False
        try:
            return self._ph.verify(hash_value, plaintext)
        except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
            return False

    def needs_rehash(self, hash_value: str) -> bool:
        """True when `hash_value` was made with other cost parameters."""
        try:
            return self._ph.check_needs_rehash(hash_value)
        except argon_exc.InvalidHashError:
            return True
