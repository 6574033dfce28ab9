# -*- coding: utf-8 -*-
"""
passwords

PBKDF2 hashing for values written through password formfields.

Hashes are stored as ``pbkdf2_sha256$<iterations>$<salt>$<digest>`` with
base64 encoded salt and digest.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import os


class PasswordHasher:
    algo = "pbkdf2_sha256"
    iterations = 260000
    salt_size = 16

    def _derive(self, password: str, salt: bytes, rounds: int) -> bytes:
        return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)

    def make_password(self, password: str, *, iterations: int | None = None) -> str:
        """Return a salted hash of ``password`` in storage format."""
        rounds = iterations or self.iterations
        salt = os.urandom(self.salt_size)
        digest = self._derive(password, salt, rounds)
        encoded = (base64.b64encode(part).decode("ascii") for part in (salt, digest))
        return "$".join((self.algo, str(rounds), *encoded))

    def check_password(self, password: str, stored: str) -> bool:
        """Compare ``password`` with ``stored``; malformed hashes never match."""
        try:
            algo, rounds, salt, digest = stored.split("$", 3)
            candidate = self._derive(password, base64.b64decode(salt), int(rounds))
            expected = base64.b64decode(digest)
        except (AttributeError, TypeError, ValueError):
            return False
        return algo == self.algo and hmac.compare_digest(candidate, expected)


password_hasher = PasswordHasher()

# The End
