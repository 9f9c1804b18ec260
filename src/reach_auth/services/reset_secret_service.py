"""Password reset secrets.

Reset secrets are verified against the store rather than being
self-contained tokens, so they can be cleared after use or superseded
by a newer request. Only a digest is ever persisted.
"""

import hashlib
import secrets

from reach_auth.schemas import ResetSecret


class ResetSecretService:
    """Issues random reset secrets and derives their lookup digests.

    The secret already carries 256 bits of entropy, so a plain SHA-256
    digest is sufficient and keeps the stored value deterministic for an
    equality lookup.
    """

    SECRET_BYTES = 32

    def issue_reset_secret(self) -> ResetSecret:
        secret = secrets.token_hex(self.SECRET_BYTES)
        return ResetSecret(secret=secret, secret_hash=self.hash_secret_for_lookup(secret))

    def hash_secret_for_lookup(self, secret: str) -> str:
        return hashlib.sha256(secret.encode("utf-8")).hexdigest()
