"""Tests for SecretHash and AuthGate."""

import statistics
import time

import pytest

from mirrorgate.admission.auth import AuthGate, SecretHash
from mirrorgate.domain.exceptions import TokenMismatchError

FAST_ROUNDS = 4


@pytest.fixture(scope="module")
def secret_hash() -> SecretHash:
    return SecretHash.from_secret("s3cret-token", rounds=FAST_ROUNDS)


class TestSecretHash:
    """Test hashing and comparison."""

    def test_matches_configured_secret(self, secret_hash):
        assert secret_hash.matches("s3cret-token")

    @pytest.mark.parametrize("candidate", ["", "s3cret-toke", "s3cret-token ", "S3CRET-TOKEN"])
    def test_rejects_other_secrets(self, secret_hash, candidate):
        assert not secret_hash.matches(candidate)

    def test_is_salted(self):
        first = SecretHash.from_secret("same", rounds=FAST_ROUNDS)
        second = SecretHash.from_secret("same", rounds=FAST_ROUNDS)

        assert first.value != second.value
        assert first.matches("same") and second.matches("same")

    def test_is_bcrypt_hash_with_requested_cost(self, secret_hash):
        assert secret_hash.value.startswith(b"$2b$04$")

    def test_long_secrets_are_compared_in_full(self):
        base = "x" * 100
        secret_hash = SecretHash.from_secret(base + "a", rounds=FAST_ROUNDS)

        assert secret_hash.matches(base + "a")
        assert not secret_hash.matches(base + "b")

    def test_uses_bcrypt_checkpw(self, secret_hash, mocker):
        checkpw = mocker.patch("mirrorgate.admission.auth.bcrypt.checkpw", return_value=True)

        assert secret_hash.matches("anything")
        checkpw.assert_called_once()

    def test_comparison_time_does_not_depend_on_mismatch_position(self, secret_hash):
        """Approximate timing check: early and late mismatches cost the same."""
        secret = "s3cret-token"
        early = "X" + secret[1:]
        late = secret[:-1] + "X"

        def median_duration(candidate: str) -> float:
            samples = []
            for _ in range(15):
                started = time.perf_counter()
                secret_hash.matches(candidate)
                samples.append(time.perf_counter() - started)
            return statistics.median(samples)

        early_time = median_duration(early)
        late_time = median_duration(late)

        ratio = max(early_time, late_time) / min(early_time, late_time)
        assert ratio < 3.0


class TestAuthGate:
    """Test the async gate."""

    @pytest.mark.asyncio
    async def test_accepts_matching_secret(self, secret_hash, mock_logger):
        gate = AuthGate(secret_hash, logger=mock_logger)

        await gate.verify("s3cret-token")

    @pytest.mark.asyncio
    async def test_rejects_mismatching_secret(self, secret_hash, mock_logger):
        gate = AuthGate(secret_hash, logger=mock_logger)

        with pytest.raises(TokenMismatchError, match="Secret token does not match"):
            await gate.verify("wrong")

    @pytest.mark.asyncio
    async def test_rejects_empty_secret(self, secret_hash, mock_logger):
        gate = AuthGate(secret_hash, logger=mock_logger)

        with pytest.raises(TokenMismatchError):
            await gate.verify("")
