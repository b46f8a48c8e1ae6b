"""Auth Gate — credential verification and sign-in failure classification.

Invariants:
    - Exactly two failure kinds: invalid-credentials and unexpected
    - invalid-credentials is returned as data with one fixed message, whether
      the email or the password was wrong
    - unexpected faults are raised as AuthUnavailableError for the outer handler
    - Session issuance is not done here

Design Decisions:
    - bcrypt runs in a worker thread (asyncio.to_thread): it is CPU-bound
    - verify callable injected so tests avoid real hashing cost
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass

from pydantic import ValidationError

from dashboard.core.domain_types import SignInFailure, UserId
from dashboard.core.errors import AuthUnavailableError
from dashboard.core.repository_protocols import UserRepository
from dashboard.infrastructure.passwords import check_password
from dashboard.schemas.auth import SignInCredentials

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."


@dataclass(frozen=True)
class AuthenticatedUser:
    id: UserId
    name: str
    email: str


@dataclass(frozen=True)
class SignInOutcome:
    user: AuthenticatedUser | None = None
    failure: SignInFailure | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.user is not None


class AuthGate:
    """Verifies an email/password pair against the stored bcrypt hash."""

    def __init__(
        self,
        users: UserRepository,
        verify: Callable[[str, str], bool] = check_password,
    ):
        self.users = users
        self.verify = verify

    async def sign_in(self, email: str, password: str) -> SignInOutcome:
        try:
            credentials = SignInCredentials(email=email, password=password)
        except ValidationError:
            return _invalid_credentials()

        try:
            user = await self.users.get_by_email(credentials.email)
            if user is None:
                return _invalid_credentials()
            matched = await asyncio.to_thread(
                self.verify, credentials.password, user.password_hash,
            )
        except Exception as e:
            logger.error(f"Sign-in failed unexpectedly: {e}", exc_info=True)
            raise AuthUnavailableError(str(e)) from e

        if not matched:
            return _invalid_credentials()
        logger.info("User signed in", extra={"user_id": user.id})
        return SignInOutcome(
            user=AuthenticatedUser(id=user.id, name=user.name, email=user.email),
        )


def _invalid_credentials() -> SignInOutcome:
    return SignInOutcome(
        failure=SignInFailure.INVALID_CREDENTIALS,
        message=INVALID_CREDENTIALS_MESSAGE,
    )
