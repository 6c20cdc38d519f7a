# products/tests/test_stock_logs.py

import uuid
from datetime import datetime, timedelta
from datetime import timezone as dt_timezone
from types import SimpleNamespace

from django.test import SimpleTestCase, TestCase
from django.utils import timezone

from products.models import Product, StockBatch, StockMovement
from products.services.exceptions import StockLogQueryError
from products.services.stock_logs import get_stock_logs, group_movements

T0 = datetime(2025, 3, 1, 9, 0, tzinfo=dt_timezone.utc)


def _row(*, session=None, type="IN", product="p1", name="Water", lot="L1", qty=1, minutes=0):
    return SimpleNamespace(
        id=uuid.uuid4(),
        session_id=session,
        movement_type=type,
        product_id=product,
        product=SimpleNamespace(name=name),
        lot_number=lot,
        quantity=qty,
        created_at=T0 + timedelta(minutes=minutes),
    )


class GroupMovementsTests(SimpleTestCase):
    """
    GUARANTEES:
    - Rows sharing session + type + product collapse into one entry
    - Session-less rows are always singletons
    - Lots are merged per lot number; totals add up
    - createdAt is the earliest row; entries newest first
    """

    def test_same_session_type_and_product_merge(self):
        session = uuid.uuid4()
        rows = [
            _row(session=session, lot="L2", qty=20, minutes=2),
            _row(session=session, lot="L1", qty=20, minutes=1),
            _row(session=session, lot="L2", qty=5, minutes=0),
        ]

        logs = group_movements(rows)

        self.assertEqual(len(logs), 1)
        entry = logs[0]
        self.assertEqual(entry["sessionId"], str(session))
        self.assertEqual(entry["totalQuantity"], 45)
        self.assertEqual(entry["lots"], [{"lot": "L2", "quantity": 25}, {"lot": "L1", "quantity": 20}])
        self.assertEqual(entry["createdAt"], T0.isoformat())
        self.assertEqual(entry["productName"], "Water")

    def test_different_type_or_product_split_the_session(self):
        session = uuid.uuid4()
        rows = [
            _row(session=session, type="OUT", product="p1"),
            _row(session=session, type="IN", product="p1"),
            _row(session=session, type="IN", product="p2", name="Rice"),
        ]

        self.assertEqual(len(group_movements(rows)), 3)

    def test_sessionless_rows_are_singletons(self):
        rows = [_row(qty=3), _row(qty=4)]

        logs = group_movements(rows)

        self.assertEqual(len(logs), 2)
        self.assertTrue(all(entry["sessionId"] is None for entry in logs))
        self.assertEqual(sorted(entry["totalQuantity"] for entry in logs), [3, 4])

    def test_entries_sorted_newest_first(self):
        rows = [
            _row(session=uuid.uuid4(), minutes=10),
            _row(session=uuid.uuid4(), minutes=30),
            _row(session=uuid.uuid4(), minutes=20),
        ]

        created = [entry["createdAt"] for entry in group_movements(rows)]

        self.assertEqual(created, sorted(created, reverse=True))

    def test_empty_input(self):
        self.assertEqual(group_movements([]), [])


class GetStockLogsTests(TestCase):
    """
    GUARANTEES:
    - type / fromDate / toDate filter on the calendar date of created_at
    - filter=today|7days overrides fromDate/toDate
    - Bad params raise StockLogQueryError
    """

    def setUp(self):
        self.product = Product.objects.create(name="Water", barcode="WATER", unit="bottle")
        self.batch = StockBatch.objects.create(product=self.product, lot_number="L1", quantity=100)
        self.now = timezone.now()

        self.today_in = self._movement("IN", self.now)
        self.today_out = self._movement("OUT", self.now)
        self.three_days_ago = self._movement("IN", self.now - timedelta(days=3))
        self.month_ago = self._movement("IN", self.now - timedelta(days=30))

    def _movement(self, movement_type, created_at):
        return StockMovement.objects.create(
            product=self.product,
            batch=self.batch,
            movement_type=movement_type,
            quantity=1,
            created_at=created_at,
        )

    def _day(self, delta_days):
        return (timezone.localdate() - timedelta(days=delta_days)).isoformat()

    def test_no_filters_returns_everything(self):
        data = get_stock_logs({})

        self.assertEqual(data["total"], 4)
        self.assertEqual(len(data["logs"]), 4)
        self.assertEqual(data["logs"][0]["createdAt"][:10], self.now.isoformat()[:10])

    def test_type_filter(self):
        data = get_stock_logs({"type": "OUT"})

        self.assertEqual(data["total"], 1)
        self.assertEqual(data["logs"][0]["type"], "OUT")

    def test_date_range_filter(self):
        data = get_stock_logs({"fromDate": self._day(5), "toDate": self._day(1)})

        self.assertEqual(data["total"], 1)

    def test_today_shorthand(self):
        data = get_stock_logs({"filter": "today"})

        self.assertEqual(data["total"], 2)

    def test_seven_days_shorthand(self):
        data = get_stock_logs({"filter": "7days"})

        self.assertEqual(data["total"], 3)

    def test_shorthand_overrides_explicit_dates(self):
        data = get_stock_logs({"filter": "today", "fromDate": self._day(60), "toDate": self._day(20)})

        self.assertEqual(data["total"], 2)

    def test_shorthand_ignores_malformed_dates(self):
        data = get_stock_logs({"filter": "today", "fromDate": "garbage", "toDate": "31-12-2025"})

        self.assertEqual(data["total"], 2)

    def test_malformed_date_with_bad_shorthand_is_rejected(self):
        with self.assertRaises(StockLogQueryError) as ctx:
            get_stock_logs({"filter": "yesterday", "fromDate": "garbage"})

        self.assertIn("filter", ctx.exception.errors)
        self.assertIn("fromDate", ctx.exception.errors)

    def test_invalid_date_is_rejected(self):
        with self.assertRaises(StockLogQueryError) as ctx:
            get_stock_logs({"fromDate": "31-12-2025"})

        self.assertIn("fromDate", ctx.exception.errors)

    def test_invalid_type_is_rejected(self):
        with self.assertRaises(StockLogQueryError) as ctx:
            get_stock_logs({"type": "SIDEWAYS"})

        self.assertIn("type", ctx.exception.errors)
