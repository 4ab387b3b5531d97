"""
catalog/models.py -- Domain dataclass for catalog items.

Pure data container with zero logic. Persistence lives in catalog/store.py
and the read/mutate rules in catalog/service.py.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class CatalogItem:
    """A priced, quantified inventory record.

    price and quantity are meant to be non-negative but are stored as given;
    nothing in the catalog rejects negative values.

    id is None before the record is written to the database.
    """

    name: str
    category: str
    price: float
    quantity: int
    id: Optional[int] = None
