"""
catalog/store.py -- SQLAlchemy-backed persistence layer for catalog items.

Uses SQLAlchemy Core (not ORM) so the CatalogItem dataclass in
catalog/models.py remains the authoritative domain representation.

Pattern: Repository + Data Mapper. CatalogStore is the repository;
_row_to_item is the mapper. Services never touch SQL directly.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = CatalogStore(engine)
    item_id = store.create_item(CatalogItem(name="Pears", category="Fruit", price=50, quantity=10))
    items = store.list_items()
    store.update_item(item_id, item)   # rows affected
    store.delete_item(item_id)         # rows affected
"""

import logging
from typing import Optional

from sqlalchemy import Column, Float, Integer, MetaData, String, Table, text
from sqlalchemy.engine import Engine

from catalog.models import CatalogItem

logger = logging.getLogger("inventory.catalog")

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

_products = Table(
    "products",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("category", String(255), nullable=False),
    Column("price", Float, nullable=False),
    Column("quantity", Integer, nullable=False),
)

SAMPLE_ITEMS: list[CatalogItem] = [
    CatalogItem(name="Apples", category="Fruit", price=89.99, quantity=100),
    CatalogItem(name="Milk", category="Dairy", price=75.50, quantity=50),
    CatalogItem(name="Bread", category="Bakery", price=45.00, quantity=30),
]


class CatalogStore:
    def __init__(self, engine: Engine) -> None:
        self.engine = engine
        metadata.create_all(self.engine)

    def count(self) -> int:
        with self.engine.connect() as conn:
            result = conn.execute(text("SELECT COUNT(*) FROM products")).scalar()
        return result or 0

    def list_items(self) -> list[CatalogItem]:
        """Return every item ordered by id."""
        with self.engine.connect() as conn:
            rows = conn.execute(_products.select().order_by(_products.c.id)).fetchall()
        return [_row_to_item(r) for r in rows]

    def list_by_category(self, category: str) -> list[CatalogItem]:
        """Return items whose category matches exactly (case-sensitive)."""
        with self.engine.connect() as conn:
            rows = conn.execute(
                _products.select().where(_products.c.category == category).order_by(_products.c.id)
            ).fetchall()
        return [_row_to_item(r) for r in rows]

    def get_item(self, item_id: int) -> Optional[CatalogItem]:
        with self.engine.connect() as conn:
            row = conn.execute(_products.select().where(_products.c.id == item_id)).fetchone()
        return _row_to_item(row) if row is not None else None

    def create_item(self, item: CatalogItem) -> int:
        """Insert an item and return the id assigned by the database. item.id is ignored."""
        with self.engine.connect() as conn:
            result = conn.execute(
                _products.insert().values(
                    name=item.name,
                    category=item.category,
                    price=item.price,
                    quantity=item.quantity,
                )
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def update_item(self, item_id: int, item: CatalogItem) -> int:
        """Replace all mutable fields of item_id. Returns the number of rows affected."""
        with self.engine.connect() as conn:
            result = conn.execute(
                _products.update()
                .where(_products.c.id == item_id)
                .values(
                    name=item.name,
                    category=item.category,
                    price=item.price,
                    quantity=item.quantity,
                )
            )
            conn.commit()
        return result.rowcount

    def delete_item(self, item_id: int) -> int:
        """Delete item_id. Returns the number of rows affected."""
        with self.engine.connect() as conn:
            result = conn.execute(_products.delete().where(_products.c.id == item_id))
            conn.commit()
        return result.rowcount

    def seed_if_empty(self) -> int:
        """Insert SAMPLE_ITEMS when the products table is empty. Returns rows inserted."""
        if self.count() > 0:
            return 0
        for item in SAMPLE_ITEMS:
            self.create_item(item)
        logger.info("Seeded %d sample products", len(SAMPLE_ITEMS))
        return len(SAMPLE_ITEMS)


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_item(row) -> CatalogItem:
    return CatalogItem(
        id=row.id,
        name=row.name,
        category=row.category,
        price=row.price,
        quantity=row.quantity,
    )
