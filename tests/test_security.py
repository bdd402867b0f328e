"""
Password hashing and sign-in limiter tests.
"""

import pytest

from security.passwords import hash_password, verify_password
from security.rate_limiter import SignInLimiter


class TestPasswords:

    def test_hash_and_verify(self):
        hashed = hash_password("motdepasse", rounds=4)
        assert hashed.startswith("$2")
        assert verify_password("motdepasse", hashed)
        assert not verify_password("autre", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("same", rounds=4) != hash_password("same", rounds=4)

    def test_malformed_or_empty_hash_never_matches(self):
        assert verify_password("x", "not-a-bcrypt-hash") is False
        assert verify_password("x", "") is False


class TestSignInLimiter:

    def _limiter(self, start=0.0):
        now = {"t": start}
        limiter = SignInLimiter(max_attempts=2, window_seconds=10, clock=lambda: now["t"])
        return limiter, now

    def test_blocks_at_max_attempts(self):
        limiter, _ = self._limiter()
        assert not limiter.is_blocked("a@cnss.ma")
        limiter.record_failure("a@cnss.ma")
        assert not limiter.is_blocked("a@cnss.ma")
        limiter.record_failure("A@CNSS.MA")
        assert limiter.is_blocked("a@cnss.ma")
        assert not limiter.is_blocked("b@cnss.ma")

    def test_failures_expire(self):
        limiter, now = self._limiter()
        limiter.record_failure("a@cnss.ma")
        now["t"] = 5
        limiter.record_failure("a@cnss.ma")
        now["t"] = 11
        assert not limiter.is_blocked("a@cnss.ma")

    def test_reset(self):
        limiter, _ = self._limiter()
        limiter.record_failure("a@cnss.ma")
        limiter.record_failure("a@cnss.ma")
        limiter.reset("A@cnss.ma")
        assert not limiter.is_blocked("a@cnss.ma")


class TestPasswordLimits:

    def test_hash_rejects_over_72_bytes(self):
        with pytest.raises(ValueError):
            hash_password("x" * 73, rounds=4)

    def test_hash_accepts_exactly_72_bytes(self):
        hashed = hash_password("x" * 72, rounds=4)
        assert verify_password("x" * 72, hashed)

    def test_verify_over_long_password_is_false(self):
        hashed = hash_password("x" * 72, rounds=4)
        assert verify_password("x" * 80, hashed) is False


class TestSignInLimiterMemory:

    def test_lookups_of_unknown_emails_leave_no_entries(self):
        limiter = SignInLimiter(max_attempts=2, window_seconds=10, clock=lambda: 0.0)
        for n in range(1000):
            assert not limiter.is_blocked(f"ghost{n}@cnss.ma")
        assert limiter._failures == {}

    def test_expired_entries_are_dropped(self):
        now = {"t": 0.0}
        limiter = SignInLimiter(max_attempts=2, window_seconds=10, clock=lambda: now["t"])
        limiter.record_failure("a@cnss.ma")
        assert "a@cnss.ma" in limiter._failures
        now["t"] = 20
        assert not limiter.is_blocked("a@cnss.ma")
        assert limiter._failures == {}
