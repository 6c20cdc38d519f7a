# products/services/stock_fefo.py

"""
FEFO STOCK ENGINE

Purpose:
- Deduct stock First-Expiry-First-Out across a product's batches.
- Integer-only quantities (StockMovement.quantity is PositiveIntegerField).

Selection order (deterministic):
- expire_date ascending, batches without expiry LAST
- then created_at ascending, then id
- only batches with quantity > 0; expired batches are NOT skipped

Policy:
- allocate_fefo() is pure and returns a tagged result (allocation or shortfall).
- stock_out_items() turns a shortfall into InsufficientStockError, which aborts
  the whole bulk call (no item of the call persists).
- Unknown barcode is a per-item failure and does NOT abort the call.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field

from django.db import transaction
from django.db.models import F

from products.models import Product, StockBatch, StockMovement
from products.services.exceptions import InsufficientStockError, ProductNotFoundError

logger = logging.getLogger(__name__)


# ============================================================
# RESULT TYPES
# ============================================================

@dataclass(frozen=True)
class StockOutItem:
    barcode: str
    quantity: int


@dataclass(frozen=True)
class BatchDeduction:
    batch: StockBatch
    quantity: int

    @property
    def lot_number(self) -> str:
        return self.batch.lot_number


@dataclass(frozen=True)
class FefoAllocation:
    deductions: list[BatchDeduction]

    @property
    def total(self) -> int:
        return sum(d.quantity for d in self.deductions)


@dataclass(frozen=True)
class InsufficientStock:
    requested: int
    available: int


@dataclass(frozen=True)
class StockOutResult:
    barcode: str
    requested_quantity: int
    success: bool
    product_id: str = ""
    deducted_quantity: int = 0
    batches: list[dict] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> dict:
        data = {
            "barcode": self.barcode,
            "productId": self.product_id,
            "requestedQuantity": self.requested_quantity,
            "deductedQuantity": self.deducted_quantity,
            "batches": list(self.batches),
            "success": self.success,
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class StockOutOutcome:
    session_id: uuid.UUID
    results: list[StockOutResult] = field(default_factory=list)

    @property
    def all_succeeded(self) -> bool:
        return all(r.success for r in self.results)


# ============================================================
# ALLOCATION
# ============================================================

def fefo_batches_qs(*, product):
    """Canonical FEFO ordering for a product's non-empty batches."""
    return StockBatch.objects.filter(product=product, quantity__gt=0).order_by(
        F("expire_date").asc(nulls_last=True),
        "created_at",
        "id",
    )


def allocate_fefo(batches, requested: int) -> FefoAllocation | InsufficientStock:
    """
    Walk batches in the given order taking min(remaining, batch.quantity)
    until the request is covered. Does not touch the database.
    """
    batch_list = [b for b in batches if int(b.quantity or 0) > 0]
    total_available = sum(int(b.quantity) for b in batch_list)

    if total_available < requested:
        return InsufficientStock(requested=requested, available=total_available)

    remaining = requested
    deductions = []

    for batch in batch_list:
        if remaining <= 0:
            break

        consumed = min(remaining, int(batch.quantity))
        deductions.append(BatchDeduction(batch=batch, quantity=consumed))
        remaining -= consumed

    return FefoAllocation(deductions=deductions)


# ============================================================
# STOCK-OUT
# ============================================================

def _stock_out_one(*, item: StockOutItem, session_id: uuid.UUID) -> StockOutResult:
    product = Product.objects.filter(barcode=item.barcode).first()
    if product is None:
        logger.warning("Stock-out barcode not found", extra={"barcode": item.barcode})
        return StockOutResult(
            barcode=item.barcode,
            requested_quantity=item.quantity,
            success=False,
            error=str(ProductNotFoundError(item.barcode)),
        )

    batches = list(fefo_batches_qs(product=product).select_for_update())
    allocation = allocate_fefo(batches, item.quantity)

    if isinstance(allocation, InsufficientStock):
        logger.warning(
            "Stock-out aborted: insufficient stock",
            extra={
                "barcode": item.barcode,
                "requested": allocation.requested,
                "available": allocation.available,
                "session_id": str(session_id),
            },
        )
        raise InsufficientStockError(
            barcode=item.barcode,
            requested=allocation.requested,
            available=allocation.available,
        )

    touched = []
    for deduction in allocation.deductions:
        batch = deduction.batch
        batch.quantity = int(batch.quantity) - deduction.quantity
        batch.save(update_fields=["quantity"])

        StockMovement.objects.create(
            product=product,
            batch=batch,
            lot_number=batch.lot_number,
            movement_type=StockMovement.MovementType.OUT,
            quantity=deduction.quantity,
            session_id=session_id,
        )

        touched.append(
            {
                "batchId": str(batch.id),
                "lotNumber": batch.lot_number,
                "quantity": deduction.quantity,
            }
        )

    return StockOutResult(
        barcode=item.barcode,
        requested_quantity=item.quantity,
        success=True,
        product_id=str(product.id),
        deducted_quantity=allocation.total,
        batches=touched,
    )


@transaction.atomic
def stock_out_items(*, items, session_id: uuid.UUID | None = None) -> StockOutOutcome:
    """
    Process stock-out items sequentially inside one transaction.

    A later item for the same product sees the decrements of earlier items.
    Raises InsufficientStockError (whole call rolled back) on any shortfall.
    """
    session_id = session_id or uuid.uuid4()

    results = [_stock_out_one(item=item, session_id=session_id) for item in items]
    outcome = StockOutOutcome(session_id=session_id, results=results)

    logger.info(
        "Stock-out processed",
        extra={
            "session_id": str(session_id),
            "items": len(results),
            "failed": sum(1 for r in results if not r.success),
        },
    )
    return outcome
