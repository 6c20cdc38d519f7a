# products/services/stock_in.py

"""
======================================================
PATH: products/services/stock_in.py
======================================================
STOCK-IN PROCESSOR

Purpose:
- Apply a bulk list of stock additions in one transaction.
- Upsert the (product, lot_number) batch and append an IN movement per item.

Rules:
- One session_id per call; every movement of the call carries it.
- Unknown barcode is a per-item failure; siblings still commit.
- Any unexpected exception escapes the atomic block and rolls back the whole call.
- Results are returned in input order, one per item.
"""

from __future__ import annotations

import logging
import secrets
import time
import uuid
from dataclasses import dataclass, field
from datetime import date

from django.db import transaction

from products.models import Product, StockBatch, StockMovement
from products.services.exceptions import ProductNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockInItem:
    barcode: str
    quantity: int
    lot_number: str = ""
    expire_date: date | None = None


@dataclass(frozen=True)
class StockInResult:
    barcode: str
    quantity: int
    success: bool
    product_id: str = ""
    batch_id: str = ""
    lot_number: str = ""
    error: str | None = None

    def to_dict(self) -> dict:
        data = {
            "barcode": self.barcode,
            "productId": self.product_id,
            "batchId": self.batch_id,
            "lotNumber": self.lot_number,
            "quantity": self.quantity,
            "success": self.success,
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class StockInOutcome:
    session_id: uuid.UUID
    results: list[StockInResult] = field(default_factory=list)

    @property
    def all_succeeded(self) -> bool:
        return all(r.success for r in self.results)


def generate_lot_number() -> str:
    """AUTO-<epoch millis>-<8 hex> for items submitted without a lot."""
    return f"AUTO-{int(time.time() * 1000)}-{secrets.token_hex(4)}"


def _find_batch_for_update(*, product: Product, lot_number: str) -> StockBatch | None:
    return (
        StockBatch.objects.select_for_update()
        .filter(product=product, lot_number=lot_number)
        .order_by("created_at", "id")
        .first()
    )


def _stock_in_one(*, item: StockInItem, session_id: uuid.UUID) -> StockInResult:
    lot_number = (item.lot_number or "").strip() or generate_lot_number()

    product = Product.objects.filter(barcode=item.barcode).first()
    if product is None:
        error = ProductNotFoundError(item.barcode)
        logger.warning("Stock-in barcode not found", extra={"barcode": item.barcode})
        return StockInResult(
            barcode=item.barcode,
            quantity=item.quantity,
            success=False,
            lot_number=lot_number,
            error=str(error),
        )

    batch = _find_batch_for_update(product=product, lot_number=lot_number)
    if batch is not None:
        # Existing lot: expiry stays as first recorded.
        batch.quantity = int(batch.quantity or 0) + item.quantity
        batch.save(update_fields=["quantity"])
    else:
        batch = StockBatch.objects.create(
            product=product,
            lot_number=lot_number,
            expire_date=item.expire_date,
            quantity=item.quantity,
        )

    StockMovement.objects.create(
        product=product,
        batch=batch,
        lot_number=lot_number,
        movement_type=StockMovement.MovementType.IN,
        quantity=item.quantity,
        session_id=session_id,
    )

    return StockInResult(
        barcode=item.barcode,
        quantity=item.quantity,
        success=True,
        product_id=str(product.id),
        batch_id=str(batch.id),
        lot_number=lot_number,
    )


@transaction.atomic
def stock_in_items(*, items, session_id: uuid.UUID | None = None) -> StockInOutcome:
    """
    Process stock-in items sequentially inside one transaction.

    items: iterable of StockInItem (already validated: quantity > 0).
    """
    session_id = session_id or uuid.uuid4()

    results = [_stock_in_one(item=item, session_id=session_id) for item in items]
    outcome = StockInOutcome(session_id=session_id, results=results)

    logger.info(
        "Stock-in processed",
        extra={
            "session_id": str(session_id),
            "items": len(results),
            "failed": sum(1 for r in results if not r.success),
        },
    )
    return outcome
