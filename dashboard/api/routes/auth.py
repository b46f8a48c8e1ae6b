"""Auth Routes — credential sign-in.

Invariants:
    - Wrong email or password → 401 {"message": "Invalid credentials."}
    - Unexpected faults propagate as AuthUnavailableError (503 via global handler)
    - No session/cookie is issued here
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from dashboard.api.dependencies import get_auth_gate
from dashboard.schemas.auth import AuthenticatedUserResponse, SignInRequest
from dashboard.services.auth_gate import AuthGate

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/sign-in", response_model=AuthenticatedUserResponse)
async def sign_in(body: SignInRequest, gate: AuthGate = Depends(get_auth_gate)):
    outcome = await gate.sign_in(body.email, body.password)
    if not outcome.ok:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"message": outcome.message},
        )
    user = outcome.user
    return AuthenticatedUserResponse(id=user.id, name=user.name, email=user.email)
