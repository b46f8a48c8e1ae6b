"""Auth Gate — sign-in classification into invalid-credentials vs unexpected.

Tests cover:
    - Correct password yields the authenticated user
    - Wrong password and unknown email give the same user-facing message
    - Malformed credentials are invalid-credentials without a store lookup
    - Store faults and corrupt hashes raise AuthUnavailableError
"""

import pytest

from dashboard.core.domain_types import SignInFailure, UserId
from dashboard.core.errors import AuthUnavailableError
from dashboard.core.read_models import StoredUser
from dashboard.infrastructure.passwords import hash_password
from dashboard.services.auth_gate import INVALID_CREDENTIALS_MESSAGE, AuthGate


class _FakeUsers:
    def __init__(self, users=(), error: Exception | None = None):
        self.users = {u.email: u for u in users}
        self.error = error
        self.lookups = []

    async def get_by_email(self, email):
        self.lookups.append(email)
        if self.error:
            raise self.error
        return self.users.get(email)


@pytest.fixture(scope="module")
def stored_user():
    return StoredUser(
        id=UserId("u1"), name="User", email="user@nextmail.com",
        password_hash=hash_password("123456"),
    )


async def test_correct_password_signs_in(stored_user):
    gate = AuthGate(_FakeUsers([stored_user]))
    outcome = await gate.sign_in("user@nextmail.com", "123456")
    assert outcome.ok
    assert outcome.user.id == "u1"
    assert outcome.user.email == "user@nextmail.com"
    assert outcome.failure is None


async def test_wrong_password_and_unknown_email_look_the_same(stored_user):
    gate = AuthGate(_FakeUsers([stored_user]))
    wrong_password = await gate.sign_in("user@nextmail.com", "654321")
    unknown_email = await gate.sign_in("nobody@nextmail.com", "123456")
    for outcome in (wrong_password, unknown_email):
        assert not outcome.ok
        assert outcome.failure is SignInFailure.INVALID_CREDENTIALS
        assert outcome.message == INVALID_CREDENTIALS_MESSAGE == "Invalid credentials."


@pytest.mark.parametrize("email, password", [
    ("not-an-email", "123456"),
    ("user@nextmail.com", "123"),
    ("", ""),
])
async def test_malformed_credentials_skip_the_store(email, password):
    users = _FakeUsers()
    outcome = await AuthGate(users).sign_in(email, password)
    assert outcome.failure is SignInFailure.INVALID_CREDENTIALS
    assert users.lookups == []


async def test_store_fault_is_unexpected():
    gate = AuthGate(_FakeUsers(error=ConnectionError("db unreachable")))
    with pytest.raises(AuthUnavailableError) as exc_info:
        await gate.sign_in("user@nextmail.com", "123456")
    assert exc_info.value.http_status == 503
    assert exc_info.value.to_response()["error"]["message"] == "Something went wrong."


async def test_corrupt_stored_hash_is_unexpected():
    broken = StoredUser(
        id=UserId("u1"), name="User", email="user@nextmail.com",
        password_hash="not-a-bcrypt-hash",
    )
    with pytest.raises(AuthUnavailableError):
        await AuthGate(_FakeUsers([broken])).sign_in("user@nextmail.com", "123456")


async def test_injected_verifier_is_used(stored_user):
    gate = AuthGate(_FakeUsers([stored_user]), verify=lambda password, hashed: False)
    outcome = await gate.sign_in("user@nextmail.com", "123456")
    assert outcome.failure is SignInFailure.INVALID_CREDENTIALS
