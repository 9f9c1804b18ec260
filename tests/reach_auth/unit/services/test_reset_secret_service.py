"""Unit tests for ResetSecretService."""

import hashlib

from reach_auth.services import ResetSecretService


class TestResetSecretService:
    """Tests for reset secret issuance."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = ResetSecretService()

    def test_secret_is_64_hex_characters(self):
        issued = self.service.issue_reset_secret()

        assert len(issued.secret) == 64
        int(issued.secret, 16)

    def test_secrets_are_unique(self):
        secrets = {self.service.issue_reset_secret().secret for _ in range(50)}

        assert len(secrets) == 50

    def test_stored_hash_is_not_the_secret(self):
        issued = self.service.issue_reset_secret()

        assert issued.secret_hash != issued.secret
        assert issued.secret_hash == hashlib.sha256(issued.secret.encode()).hexdigest()

    def test_lookup_hash_is_deterministic(self):
        issued = self.service.issue_reset_secret()

        assert self.service.hash_secret_for_lookup(issued.secret) == issued.secret_hash
