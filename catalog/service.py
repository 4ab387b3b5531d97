"""
catalog/service.py -- Read and mutate operations over the product catalog.

Reads are public. Mutations are admin-only, but the role check is the
caller's job (the admin_only guard pipeline in auth/guards.py) -- this
service trusts whoever calls it.

Missing ids on update/delete:
  By default update_item() and delete_item() report success even when no row
  matched, which is what API clients already observe. Pass strict=True
  (STRICT_MUTATIONS=true) to get NotFound instead. Either way a zero-row
  mutation is logged.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from catalog.models import CatalogItem
from catalog.store import CatalogStore
from core.exceptions import NotFound

logger = logging.getLogger("inventory.catalog")


class CatalogService:
    def __init__(self, store: CatalogStore, strict: bool = False) -> None:
        self.store = store
        self.strict = strict

    def list_items(self) -> list[CatalogItem]:
        return self.store.list_items()

    def list_by_category(self, category: str) -> list[CatalogItem]:
        """Exact-match filter. An unknown category is an empty list, not an error."""
        return self.store.list_by_category(category)

    def get_item(self, item_id: int) -> CatalogItem:
        item = self.store.get_item(item_id)
        if item is None:
            raise NotFound("Product not found")
        return item

    def create_item(self, draft: CatalogItem) -> CatalogItem:
        """Insert draft and return it with the store-assigned id."""
        item_id = self.store.create_item(draft)
        logger.info("Created product %d (%s)", item_id, draft.name)
        return replace(draft, id=item_id)

    def update_item(self, item_id: int, draft: CatalogItem) -> CatalogItem:
        """Replace every field of item_id with draft and echo it back with item_id."""
        rows = self.store.update_item(item_id, draft)
        if rows == 0:
            logger.warning("Update of product %d matched no rows", item_id)
            if self.strict:
                raise NotFound("Product not found")
        return replace(draft, id=item_id)

    def delete_item(self, item_id: int) -> None:
        rows = self.store.delete_item(item_id)
        if rows == 0:
            logger.warning("Delete of product %d matched no rows", item_id)
            if self.strict:
                raise NotFound("Product not found")
