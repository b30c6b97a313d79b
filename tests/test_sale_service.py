import tempfile
import unittest
from decimal import Decimal
from pathlib import Path

from sqlalchemy import func, select

from app.core.constants import KIND_ROLL, STATUS_AVAILABLE, STATUS_DEPLETED
from app.core.errors import BadRequest, InsufficientStock, NotFound
from app.database import create_session_factory, create_store_engine
from app.database.migrations import apply_migrations
from app.models.history import HistoryEntry
from app.models.product import Product
from app.models.sales import Sale
from app.services.history_service import list_history
from app.services.product_service import create_product
from app.services.sale_service import compute_total, record_sale


class SaleServiceTest(unittest.TestCase):
    def setUp(self):
        self._tmp_dir = tempfile.TemporaryDirectory()
        db_path = Path(self._tmp_dir.name) / "store.db"
        self.engine = create_store_engine(f"sqlite:///{db_path}")
        apply_migrations(self.engine)
        self.Session = create_session_factory(self.engine)

    def tearDown(self):
        self.engine.dispose()
        self._tmp_dir.cleanup()

    def _create_roll(self, quantity="100", price="5.00", code="LINO-001"):
        with self.Session() as db:
            product = create_product(
                db,
                KIND_ROLL,
                {
                    "category": "Lino",
                    "color": "Azul",
                    "code": code,
                    "quantity_total": Decimal(quantity),
                    "unit_price": Decimal(price),
                },
                actor="ana",
            )
            return product.id

    def _sell(self, product_id, quantity, **kwargs):
        kwargs.setdefault("seller", "carlos")
        with self.Session() as db:
            return record_sale(db, product_id, Decimal(quantity), **kwargs)

    def _product(self, product_id):
        with self.Session() as db:
            return db.get(Product, product_id)

    def _count(self, column):
        with self.Session() as db:
            return db.execute(select(func.count(column))).scalar_one()

    def test_sales_decrement_stock_until_depleted(self):
        product_id = self._create_roll()

        first = self._sell(product_id, "30", client="Taller Sur")
        self.assertEqual(first.total, Decimal("150.00"))
        self.assertEqual(first.remaining, Decimal("70"))
        self.assertEqual(first.status, STATUS_AVAILABLE)

        second = self._sell(product_id, "70")
        self.assertEqual(second.total, Decimal("350.00"))
        self.assertEqual(second.remaining, Decimal("0"))
        self.assertEqual(second.status, STATUS_DEPLETED)

        product = self._product(product_id)
        self.assertEqual(product.quantity_remaining, Decimal("0"))
        self.assertEqual(product.quantity_total, Decimal("100"))
        self.assertEqual(product.status, STATUS_DEPLETED)
        self.assertEqual(self._count(Sale.id), 2)

    def test_each_sale_appends_history_newest_first(self):
        product_id = self._create_roll()
        self._sell(product_id, "30", client="Taller Sur")

        with self.Session() as db:
            history = list_history(db, product_id)

        self.assertEqual([entry.action for entry in history], ["Venta realizada", "Registrado"])
        self.assertEqual(history[0].actor, "carlos")
        self.assertIn("Taller Sur", history[0].details)

    def test_insufficient_stock_leaves_store_unchanged(self):
        product_id = self._create_roll(quantity="10")

        with self.assertRaises(InsufficientStock):
            self._sell(product_id, "10.5")

        product = self._product(product_id)
        self.assertEqual(product.quantity_remaining, Decimal("10"))
        self.assertEqual(product.status, STATUS_AVAILABLE)
        self.assertEqual(self._count(Sale.id), 0)
        self.assertEqual(self._count(HistoryEntry.id), 1)

    def test_unknown_product_writes_nothing(self):
        with self.assertRaises(NotFound):
            self._sell(999, "1")

        self.assertEqual(self._count(Sale.id), 0)
        self.assertEqual(self._count(HistoryEntry.id), 0)

    def test_kind_mismatch_is_not_found(self):
        product_id = self._create_roll()
        with self.assertRaises(NotFound):
            self._sell(product_id, "1", kind="libro")

    def test_rejects_unknown_kind_and_non_positive_quantity(self):
        product_id = self._create_roll()
        with self.assertRaises(BadRequest):
            self._sell(product_id, "1", kind="revista")
        with self.assertRaises(BadRequest):
            self._sell(product_id, "0")

    def test_client_total_is_recomputed_by_default(self):
        product_id = self._create_roll(price="4.50")
        result = self._sell(product_id, "2", precomputed_total=Decimal("1.00"))
        self.assertEqual(result.total, Decimal("9.00"))
        self.assertEqual(result.sale.total_price, Decimal("9.00"))

    def test_client_total_honoured_when_trusted(self):
        product_id = self._create_roll(price="4.50")
        result = self._sell(
            product_id,
            "2",
            precomputed_total=Decimal("8.00"),
            trust_client_total=True,
        )
        self.assertEqual(result.total, Decimal("8.00"))

    def test_fractional_sales_reach_zero(self):
        product_id = self._create_roll(quantity="1", price="10.00")
        self._sell(product_id, "0.7")
        result = self._sell(product_id, "0.3")
        self.assertEqual(result.remaining, Decimal("0"))
        self.assertEqual(result.status, STATUS_DEPLETED)

    def test_sub_cent_quantity_is_rejected_without_writes(self):
        product_id = self._create_roll(quantity="1")
        with self.assertRaises(BadRequest):
            self._sell(product_id, "0.004")

        self.assertEqual(self._product(product_id).quantity_remaining, Decimal("1"))
        self.assertEqual(self._count(Sale.id), 0)

    def test_cent_sales_never_exceed_total(self):
        product_id = self._create_roll(quantity="1", price="10.00")
        self.assertEqual(self._sell(product_id, "0.99").remaining, Decimal("0.01"))
        self.assertEqual(self._sell(product_id, "0.01").remaining, Decimal("0"))
        with self.assertRaises(InsufficientStock):
            self._sell(product_id, "0.01")

        with self.Session() as db:
            sold = db.execute(select(func.sum(Sale.quantity))).scalar_one()
        self.assertEqual(Decimal(str(sold)), Decimal("1"))

    def test_recorded_sale_is_logged_with_context(self):
        product_id = self._create_roll()
        with self.assertLogs("app.services.sale_service", level="INFO") as captured:
            result = self._sell(product_id, "2")

        record = captured.records[-1]
        self.assertEqual(record.sale_id, result.sale.id)
        self.assertEqual(record.product_id, product_id)
        self.assertEqual(record.seller, "carlos")

    def test_history_for_unknown_kind_is_empty(self):
        product_id = self._create_roll()
        with self.Session() as db:
            self.assertEqual(list_history(db, product_id, "revista"), [])
            self.assertEqual(len(list_history(db, product_id, "Rollo")), 1)


class ComputeTotalTest(unittest.TestCase):
    def test_rounds_to_cents(self):
        self.assertEqual(compute_total(Decimal("3.33"), Decimal("1.5")), Decimal("5.00"))

    def test_missing_client_total_uses_computed(self):
        self.assertEqual(
            compute_total(Decimal("5.00"), Decimal("30"), None, trust_client_total=True),
            Decimal("150.00"),
        )


if __name__ == "__main__":
    unittest.main()
