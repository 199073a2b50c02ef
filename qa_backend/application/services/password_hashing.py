"""Password hashing strategies."""

from __future__ import annotations

import bcrypt

from qa_backend.domain.users.repositories import PasswordCipher

DEFAULT_ROUNDS = 12
# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def _encode(plaintext: str) -> bytes:
    encoded = plaintext.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password longer than {MAX_PASSWORD_BYTES} bytes")
    return encoded


class BcryptPasswordCipher(PasswordCipher):
    """bcrypt with a per-user salt.

    The salt is the ``$2b$<rounds>$`` prefix produced by ``bcrypt.gensalt`` and
    is stored on its own next to the full hash; the plaintext is never kept.
    """

    def __init__(self, *, rounds: int = DEFAULT_ROUNDS) -> None:
        self._rounds = rounds

    def hash_new(self, plaintext: str) -> tuple[str, str]:
        salt = bcrypt.gensalt(rounds=self._rounds).decode("ascii")
        return salt, self.hash(plaintext, salt)

    def hash(self, plaintext: str, salt: str) -> str:
        return bcrypt.hashpw(_encode(plaintext), salt.encode("ascii")).decode("ascii")

    def verify(self, plaintext: str, salt: str, expected_hash: str) -> bool:
        if not expected_hash.startswith(salt):
            return False
        try:
            return bcrypt.checkpw(_encode(plaintext), expected_hash.encode("ascii"))
        except (ValueError, TypeError):
            return False
