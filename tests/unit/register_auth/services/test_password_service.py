"""Unit tests for PasswordHashingService."""

import pytest

from register_auth import PolicyViolationError, StoredSecret
from register_auth.services import PasswordHashingService


class TestPasswordHashingServiceInit:
    """Tests for PasswordHashingService initialization."""

    def test_default_rounds(self):
        """Test that the default work factor is 12."""
        assert PasswordHashingService().rounds == 12

    @pytest.mark.parametrize("rounds", [3, 32, 0, -1])
    def test_out_of_range_rounds_raise(self, rounds):
        """Test that unsupported work factors are rejected."""
        with pytest.raises(ValueError, match="between 4 and 31"):
            PasswordHashingService(rounds=rounds)


class TestPasswordHashingService:
    """Tests for password hashing functionality."""

    def setup_method(self):
        """Set up test fixtures."""
        # Use low rounds for faster tests
        self.service = PasswordHashingService(rounds=4)

    def test_hash_returns_stored_secret(self):
        """Test that hash returns a bcrypt secret."""
        secret = self.service.hash("my_password")

        assert isinstance(secret, StoredSecret)
        assert secret.hashed_value.startswith("$2")
        assert str(secret) == secret.hashed_value

    def test_hash_does_not_contain_plaintext(self):
        """Test that the stored secret never embeds the password."""
        secret = self.service.hash("Abc123!@")

        assert "Abc123!@" not in secret.hashed_value

    def test_hash_embeds_configured_rounds(self):
        """Test that the cost factor is recorded in the hash."""
        secret = self.service.hash("my_password")

        assert secret.hashed_value.split("$")[2] == "04"

    def test_verify_correct_password(self):
        """Test that correct password verifies successfully."""
        secret = self.service.hash("correct_password")

        assert self.service.verify("correct_password", secret) is True

    def test_verify_wrong_password(self):
        """Test that wrong password fails verification."""
        secret = self.service.hash("correct_password")

        assert self.service.verify("wrong_password", secret) is False

    def test_verify_accepts_raw_hash_string(self):
        """Test that a raw hash string verifies like a StoredSecret."""
        secret = self.service.hash("correct_password")

        assert self.service.verify("correct_password", secret.hashed_value) is True

    def test_different_hashes_for_same_password(self):
        """Test that same password produces different hashes (salt)."""
        hash1 = self.service.hash("same_password")
        hash2 = self.service.hash("same_password")

        assert hash1 != hash2
        assert self.service.verify("same_password", hash1)
        assert self.service.verify("same_password", hash2)

    def test_hash_empty_password(self):
        """Test that empty password can be hashed."""
        secret = self.service.hash("")

        assert self.service.verify("", secret)
        assert not self.service.verify("nonempty", secret)

    def test_hash_unicode_password(self):
        """Test that unicode passwords work correctly."""
        password = "пароль123"
        secret = self.service.hash(password)

        assert self.service.verify(password, secret)

    def test_hash_password_at_byte_limit(self):
        """Test that a 72 byte password is still accepted."""
        password = "A" * 72
        secret = self.service.hash(password)

        assert self.service.verify(password, secret)

    def test_hash_password_over_byte_limit_raises(self):
        """Test that passwords bcrypt would truncate are rejected."""
        with pytest.raises(PolicyViolationError, match="72 bytes"):
            self.service.hash("A" * 73)

    def test_hash_multibyte_password_over_byte_limit_raises(self):
        """Test that the limit counts encoded bytes, not characters."""
        # 40 characters but 80 bytes in UTF-8
        with pytest.raises(PolicyViolationError):
            self.service.hash("ж" * 40)

    def test_verify_over_byte_limit_returns_false(self):
        """Test that an overlong attempt never verifies."""
        secret = self.service.hash("A" * 72)

        assert self.service.verify("A" * 73, secret) is False

    def test_hash_unencodable_password_raises(self):
        """Test that a lone surrogate is a policy violation, not a crash."""
        with pytest.raises(PolicyViolationError, match="cannot be encoded") as exc_info:
            self.service.hash("Abcdefg1\ud800")

        assert exc_info.value.__cause__ is None
        assert exc_info.value.__suppress_context__ is True

    def test_verify_unencodable_password_returns_false(self):
        """Test that a lone surrogate attempt does not verify."""
        secret = self.service.hash("Abcdefg1")

        assert self.service.verify("Abcdefg1\ud800", secret) is False

    @pytest.mark.parametrize(
        "malformed",
        [
            "",
            "not-a-hash",
            "$2b$04$tooshort",
            "$argon2id$v=19$m=65536,t=3,p=4$c2FsdA$aGFzaA",
        ],
    )
    def test_verify_malformed_hash_returns_false(self, malformed):
        """Test that malformed secrets do not verify and do not raise."""
        assert self.service.verify("anything", malformed) is False
        assert self.service.verify("anything", StoredSecret(malformed)) is False


class TestNeedsRehash:
    """Tests for work factor upgrade detection."""

    def test_same_rounds_does_not_need_rehash(self):
        """Test that a hash made with current rounds is kept."""
        service = PasswordHashingService(rounds=4)
        secret = service.hash("password")

        assert service.needs_rehash(secret) is False

    def test_different_rounds_needs_rehash(self):
        """Test that a hash with another cost factor is flagged."""
        old = PasswordHashingService(rounds=4)
        new = PasswordHashingService(rounds=5)
        secret = old.hash("password")

        assert new.needs_rehash(secret) is True
        assert new.needs_rehash(secret.hashed_value) is True

    def test_malformed_hash_needs_rehash(self):
        """Test that unparsable hashes are flagged for regeneration."""
        service = PasswordHashingService(rounds=4)

        assert service.needs_rehash("garbage") is True
