"""Module: security."""

import hashlib
import hmac
import os
import time
from secrets import token_urlsafe
from threading import Lock
from typing import Callable

from vetcare.core.config import settings

# Shared password hashing format/version marker.
PASSWORD_SCHEME = "pbkdf2_sha256"
PASSWORD_ITERATIONS = 390000


def hash_password(password: str) -> str:
    """
    Create a PBKDF2-SHA256 password hash string.

    Stored format:
      pbkdf2_sha256$<iterations>$<salt_hex>$<hash_hex>
    """
    salt = os.urandom(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        PASSWORD_ITERATIONS,
    )
    return f"{PASSWORD_SCHEME}${PASSWORD_ITERATIONS}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    if not stored or not stored.startswith(f"{PASSWORD_SCHEME}$"):
        return False

    try:
        _, iterations_raw, salt_hex, hash_hex = stored.split("$", 3)
        iterations = int(iterations_raw)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(hash_hex)
    except ValueError:
        return False

    computed = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt,
        iterations,
    )
    return hmac.compare_digest(computed, expected)


class TokenStore:
    """In-process bearer token registry mapping opaque tokens to user ids.

    Each token lives for ``ttl_seconds`` after issue. Expired entries are
    evicted when looked up and swept on every new issue.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._tokens: dict[str, tuple[str, float]] = {}
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)

    def issue(self, user_id: str) -> str:
        token = token_urlsafe(32)
        now = self._clock()
        with self._lock:
            self._purge(now)
            self._tokens[token] = (user_id, now + self.ttl_seconds)
        return token

    def resolve(self, token: str) -> str | None:
        with self._lock:
            entry = self._tokens.get(token)
            if entry is None:
                return None
            user_id, expires_at = entry
            if expires_at <= self._clock():
                del self._tokens[token]
                return None
            return user_id

    def revoke(self, token: str) -> None:
        with self._lock:
            self._tokens.pop(token, None)

    def revoke_user(self, user_id: str) -> None:
        with self._lock:
            for token in [t for t, (uid, _) in self._tokens.items() if uid == user_id]:
                del self._tokens[token]

    def _purge(self, now: float) -> None:
        for token in [t for t, (_, expires_at) in self._tokens.items() if expires_at <= now]:
            del self._tokens[token]


tokens = TokenStore(ttl_seconds=settings.access_token_expire_minutes * 60)
