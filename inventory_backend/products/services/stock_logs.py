# products/services/stock_logs.py

"""
======================================================
PATH: products/services/stock_logs.py
======================================================
MOVEMENT LOG AGGREGATOR

Purpose:
- Collapse raw StockMovement rows into one entry per bulk operation,
  movement type and product.

Rules:
- Group key: (session_id or "single-<movement id>", movement_type, product_id)
- Movements without a session are always their own group
- createdAt is the earliest timestamp in the group
- lots are merged per lot_number in first-seen order
- Output is sorted newest first
"""

from __future__ import annotations

from collections import OrderedDict

from products.filters import StockMovementFilter
from products.models import StockMovement
from products.services.exceptions import StockLogQueryError


def _group_key(movement) -> tuple:
    session = str(movement.session_id) if movement.session_id else f"single-{movement.id}"
    return (session, movement.movement_type, str(movement.product_id))


def group_movements(movements) -> list[dict]:
    """
    movements: StockMovement rows ordered newest first (product preloaded).
    """
    groups: OrderedDict[tuple, dict] = OrderedDict()

    for m in movements:
        key = _group_key(m)
        qty = int(m.quantity or 0)

        group = groups.get(key)
        if group is None:
            group = {
                "sessionId": str(m.session_id) if m.session_id else None,
                "type": m.movement_type,
                "productId": str(m.product_id),
                "productName": getattr(m.product, "name", ""),
                "_created_at": m.created_at,
                "totalQuantity": 0,
                "_lots": OrderedDict(),
            }
            groups[key] = group

        if m.created_at < group["_created_at"]:
            group["_created_at"] = m.created_at

        group["totalQuantity"] += qty
        group["_lots"][m.lot_number] = group["_lots"].get(m.lot_number, 0) + qty

    ordered = sorted(groups.values(), key=lambda g: g["_created_at"], reverse=True)

    logs = []
    for g in ordered:
        logs.append(
            {
                "sessionId": g["sessionId"],
                "type": g["type"],
                "createdAt": g["_created_at"].isoformat(),
                "productId": g["productId"],
                "productName": g["productName"],
                "totalQuantity": g["totalQuantity"],
                "lots": [
                    {"lot": lot, "quantity": quantity}
                    for lot, quantity in g["_lots"].items()
                ],
            }
        )
    return logs


def get_stock_logs(params=None) -> dict:
    """
    Filter movements by query params (see StockMovementFilter) and group them.

    Raises StockLogQueryError carrying the form errors on bad params.
    """
    queryset = StockMovement.objects.select_related("product").order_by("-created_at", "id")
    filterset = StockMovementFilter(params or {}, queryset=queryset)

    if not filterset.is_valid():
        raise StockLogQueryError(
            {name: list(messages) for name, messages in filterset.errors.items()}
        )

    logs = group_movements(filterset.qs)
    return {"logs": logs, "total": len(logs)}
