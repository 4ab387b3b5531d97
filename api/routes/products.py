"""
api/routes/products.py -- Catalog routes for the inventory REST API.

Routes (in registration order to avoid path capture conflicts):
  GET    /products                       -- list all items (public)
  GET    /products/category/{category}   -- exact-match category filter (public)
  GET    /products/{product_id}          -- single item (public)
  POST   /products                       -- create item (admin)
  PUT    /products/{product_id}          -- full replace (admin)
  DELETE /products/{product_id}          -- delete (admin)

A non-integer product_id fails request validation and is returned as 400.
PUT and DELETE on an id that does not exist still succeed unless
STRICT_MUTATIONS is enabled (see catalog/service.py).
"""

from fastapi import APIRouter, Depends, Request, Response

from api.models import ProductIn, ProductOut
from auth.guards import RequestContext, admin_only
from catalog.service import CatalogService

router = APIRouter()


# ---------------------------------------------------------------------------
# Public reads
# ---------------------------------------------------------------------------


@router.get("/products", response_model=list[ProductOut])
def list_products(request: Request) -> list[ProductOut]:
    """Return every catalog item, ascending by id. Empty list when there are none."""
    catalog: CatalogService = request.app.state.catalog_service
    return [ProductOut.from_item(i) for i in catalog.list_items()]


@router.get("/products/category/{category}", response_model=list[ProductOut])
def list_products_by_category(request: Request, category: str) -> list[ProductOut]:
    """Return items in exactly this category. Unknown category -> 200 with []."""
    catalog: CatalogService = request.app.state.catalog_service
    return [ProductOut.from_item(i) for i in catalog.list_by_category(category)]


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(request: Request, product_id: int) -> ProductOut:
    catalog: CatalogService = request.app.state.catalog_service
    return ProductOut.from_item(catalog.get_item(product_id))


# ---------------------------------------------------------------------------
# Admin mutations
# ---------------------------------------------------------------------------


@router.post("/products", response_model=ProductOut, status_code=201)
def create_product(
    request: Request,
    body: ProductIn,
    ctx: RequestContext = Depends(admin_only),
) -> ProductOut:
    """Create an item. The id is assigned by the store; any id in the body is ignored."""
    catalog: CatalogService = request.app.state.catalog_service
    return ProductOut.from_item(catalog.create_item(body.to_item()))


@router.put("/products/{product_id}", response_model=ProductOut)
def update_product(
    request: Request,
    product_id: int,
    body: ProductIn,
    ctx: RequestContext = Depends(admin_only),
) -> ProductOut:
    """Replace all fields of an item and echo it back."""
    catalog: CatalogService = request.app.state.catalog_service
    return ProductOut.from_item(catalog.update_item(product_id, body.to_item()))


@router.delete("/products/{product_id}", status_code=204)
def delete_product(
    request: Request,
    product_id: int,
    ctx: RequestContext = Depends(admin_only),
) -> Response:
    catalog: CatalogService = request.app.state.catalog_service
    catalog.delete_item(product_id)
    return Response(status_code=204)
