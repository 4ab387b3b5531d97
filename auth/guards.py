"""
auth/guards.py -- Ordered guard pipeline for protected routes.

A guard is a plain function (request, ctx) -> None that either returns
(pass) or raises an InventoryError (fail). GuardPipeline runs its guards in
order and stops at the first failure, so listing require_token before
require_admin guarantees a missing token is reported as 401 before any role
check can produce a 403.

The verified Claims travel on a typed RequestContext returned by the
pipeline, which FastAPI hands to the route handler:

    @router.get("/profile")
    def profile(ctx: RequestContext = Depends(authenticated)): ...

OPTIONS preflight never reaches a guard -- api/main.py answers it in
middleware before routing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from fastapi import Request

from auth.models import Claims
from auth.tokens import TokenService
from core.exceptions import Forbidden, Unauthenticated


@dataclass
class RequestContext:
    """Per-request values produced by the guards."""

    claims: Claims | None = None

    def require_claims(self) -> Claims:
        if self.claims is None:
            raise Unauthenticated()
        return self.claims


Guard = Callable[[Request, RequestContext], None]


def require_token(request: Request, ctx: RequestContext) -> None:
    """Require a valid, unexpired Bearer token and attach its claims to ctx."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header:
        raise Unauthenticated("Authorization header required")
    scheme, _, token = auth_header.partition(" ")
    if scheme != "Bearer" or not token.strip():
        raise Unauthenticated("Invalid or expired token")

    tokens: TokenService = request.app.state.token_service
    claims = tokens.verify(token.strip())
    if claims is None:
        raise Unauthenticated("Invalid or expired token")
    ctx.claims = claims


def require_admin(request: Request, ctx: RequestContext) -> None:
    """Require the already-attached claims to carry the admin role."""
    claims = ctx.require_claims()
    if not claims.is_admin:
        raise Forbidden("Admin access required")


class GuardPipeline:
    """FastAPI dependency that evaluates guards in order, short-circuiting on failure."""

    def __init__(self, *guards: Guard) -> None:
        self.guards = guards

    def __call__(self, request: Request) -> RequestContext:
        ctx = RequestContext()
        for guard in self.guards:
            guard(request, ctx)
        return ctx


authenticated = GuardPipeline(require_token)
admin_only = GuardPipeline(require_token, require_admin)
