"""
API request and response models for the inventory REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
catalog/models.py, which own the internal domain representation. Route
handlers map between the two.

Unknown fields in request bodies are ignored (Pydantic's default), so a
"status" or "id" sent by a client never reaches the services.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from catalog.models import CatalogItem

# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Request body for POST /api/login."""

    email: str
    password: str


class RegisterRequest(BaseModel):
    """Request body for POST /api/register.

    There is deliberately no role field: self-registration always creates a
    standard account.
    """

    name: str
    email: str
    password: str


class AuthResponse(BaseModel):
    """Response for POST /api/login and POST /api/register."""

    model_config = ConfigDict(frozen=True)

    token: str
    message: str
    name: str
    email: str
    status: str


class ProfileResponse(BaseModel):
    """Response for GET /api/profile."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    name: str
    email: str
    status: str


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class ProductIn(BaseModel):
    """Request body for POST /api/products and PUT /api/products/{id}.

    All four fields are required: PUT replaces the whole record. Sign of
    price and quantity is not checked.
    """

    name: str
    category: str
    price: float
    quantity: int

    def to_item(self) -> CatalogItem:
        return CatalogItem(
            name=self.name,
            category=self.category,
            price=self.price,
            quantity=self.quantity,
        )


class ProductOut(BaseModel):
    """A catalog item as returned by every product endpoint."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    category: str
    price: float
    quantity: int

    @classmethod
    def from_item(cls, item: CatalogItem) -> "ProductOut":
        return cls(
            id=item.id,
            name=item.name,
            category=item.category,
            price=item.price,
            quantity=item.quantity,
        )


# ---------------------------------------------------------------------------
# Errors and health
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    model_config = ConfigDict(frozen=True)

    status: str = "healthy"
    version: str
    components: dict[str, str]
