"""
api/routes/auth.py -- Login, registration and profile REST endpoints.

Routes:
  POST /api/login     -- email/password login; returns a bearer token
  POST /api/register  -- create a standard account; returns a bearer token
  GET  /api/profile   -- claims of the presented token (requires auth)

Security:
  POST /login is rate-limited per client IP (LOGIN_RATE_LIMIT).
  Login returns the same 401 for unknown email and wrong password.
  Registration ignores any role sent by the client.
  Cache-Control: no-store on every response that carries a token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import AuthResponse, LoginRequest, ProfileResponse, RegisterRequest
from auth.guards import RequestContext, authenticated
from auth.models import AuthResult
from auth.service import IdentityService
from core.config import get_settings

# Auth policy:
# - POST /api/login:    public
# - POST /api/register: public
# - GET  /api/profile:  requires auth (authenticated pipeline)
router = APIRouter()


def _token_response(result: AuthResult, message: str) -> JSONResponse:
    resp = JSONResponse(
        status_code=200,
        content=AuthResponse(
            token=result.token,
            message=message,
            name=result.account.name,
            email=result.account.email,
            status=result.account.role,
        ).model_dump(),
    )
    resp.headers["Cache-Control"] = "no-store"
    return resp


@limiter.limit(get_settings().login_rate_limit)  # must be ABOVE @router to preserve FastAPI introspection
@router.post("/login", response_model=AuthResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with email and password and return a 24-hour bearer token."""
    identity: IdentityService = request.app.state.identity_service
    result = identity.login(body.email, body.password)
    return _token_response(result, "Login successful")


@router.post("/register", response_model=AuthResponse)
def register(request: Request, body: RegisterRequest) -> JSONResponse:
    """Create a standard account and sign it in immediately."""
    identity: IdentityService = request.app.state.identity_service
    result = identity.register(body.name, body.email, body.password)
    return _token_response(result, "Registration successful")


@router.get("/profile", response_model=ProfileResponse)
def profile(request: Request, ctx: RequestContext = Depends(authenticated)) -> ProfileResponse:
    """Return the identity carried by the presented token."""
    identity: IdentityService = request.app.state.identity_service
    p = identity.profile(ctx.require_claims())
    return ProfileResponse(user_id=p.user_id, name=p.name, email=p.email, status=p.role)
