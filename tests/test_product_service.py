import tempfile
import unittest
from decimal import Decimal
from pathlib import Path

from sqlalchemy import func, select

from app.core.constants import KIND_BOOK, KIND_ROLL, STATUS_AVAILABLE, STATUS_DEPLETED, STATUS_SOLD
from app.core.errors import BadRequest, DuplicateKey, NotFound
from app.database import create_session_factory, create_store_engine
from app.database.migrations import apply_migrations
from app.models.history import HistoryEntry
from app.models.product import Product
from app.models.sales import Sale
from app.services.product_service import create_product, delete_product, list_products, update_product
from app.services.sale_service import record_sale


def roll_fields(code="ALG-001", quantity="50", price="3.20"):
    return {
        "category": "Algodón",
        "color": "Blanco",
        "code": code,
        "quantity_total": Decimal(quantity),
        "unit_price": Decimal(price),
        "whole_unit_price": Decimal("140.00"),
        "supplier": "Textiles del Norte",
        "registered_by": "ana",
    }


class ProductServiceTest(unittest.TestCase):
    def setUp(self):
        self._tmp_dir = tempfile.TemporaryDirectory()
        db_path = Path(self._tmp_dir.name) / "store.db"
        self.engine = create_store_engine(f"sqlite:///{db_path}")
        apply_migrations(self.engine)
        self.Session = create_session_factory(self.engine)

    def tearDown(self):
        self.engine.dispose()
        self._tmp_dir.cleanup()

    def _create(self, kind=KIND_ROLL, fields=None, actor="ana"):
        with self.Session() as db:
            return create_product(db, kind, fields or roll_fields(), actor=actor)

    def _update(self, product_id, fields, kind=KIND_ROLL):
        with self.Session() as db:
            return update_product(db, kind, product_id, fields, actor="luis")

    def test_create_starts_with_full_stock(self):
        product = self._create()
        self.assertEqual(product.kind, KIND_ROLL)
        self.assertEqual(product.quantity_remaining, Decimal("50"))
        self.assertEqual(product.status, STATUS_AVAILABLE)
        self.assertIsNotNone(product.created_at)

    def test_create_with_zero_stock_is_depleted(self):
        product = self._create(fields=roll_fields(quantity="0"))
        self.assertEqual(product.status, STATUS_DEPLETED)

    def test_duplicate_code_rejected_and_first_unchanged(self):
        first = self._create()
        with self.assertRaises(DuplicateKey):
            self._create(fields=roll_fields(quantity="5", price="1.00"))

        with self.Session() as db:
            products = list_products(db, KIND_ROLL)
        self.assertEqual(len(products), 1)
        self.assertEqual(products[0].id, first.id)
        self.assertEqual(products[0].quantity_total, Decimal("50"))
        self.assertEqual(products[0].unit_price, Decimal("3.20"))

    def test_same_code_allowed_across_kinds(self):
        self._create()
        book = self._create(
            kind=KIND_BOOK,
            fields={
                "name": "Rayuela",
                "code": "ALG-001",
                "quantity_total": Decimal("4"),
                "unit_price": Decimal("18.00"),
            },
            actor=None,
        )
        self.assertEqual(book.kind, KIND_BOOK)

    def test_list_orders_by_descending_id(self):
        first = self._create(fields=roll_fields(code="A"))
        second = self._create(fields=roll_fields(code="B"))
        with self.Session() as db:
            ids = [product.id for product in list_products(db, KIND_ROLL)]
        self.assertEqual(ids, [second.id, first.id])

    def test_new_total_shifts_remaining(self):
        product = self._create()
        with self.Session() as db:
            record_sale(db, product.id, Decimal("20"), seller="carlos")

        updated = self._update(product.id, {"quantity_total": Decimal("40")})
        self.assertEqual(updated.quantity_total, Decimal("40"))
        self.assertEqual(updated.quantity_remaining, Decimal("20"))
        self.assertEqual(updated.status, STATUS_AVAILABLE)

        shrunk = self._update(product.id, {"quantity_total": Decimal("10")})
        self.assertEqual(shrunk.quantity_remaining, Decimal("0"))
        self.assertEqual(shrunk.status, STATUS_DEPLETED)

    def test_explicit_remaining_must_fit_total(self):
        product = self._create()
        with self.assertRaises(BadRequest):
            self._update(product.id, {"quantity_remaining": Decimal("51")})

        updated = self._update(product.id, {"quantity_remaining": Decimal("0")})
        self.assertEqual(updated.status, STATUS_DEPLETED)

    def test_status_can_be_set_explicitly(self):
        product = self._create()
        updated = self._update(product.id, {"status": "Vendido", "color": "Crudo"})
        self.assertEqual(updated.status, STATUS_SOLD)
        self.assertEqual(updated.color, "Crudo")

        with self.assertRaises(BadRequest):
            self._update(product.id, {"status": "perdido"})

    def test_update_rejects_taken_code(self):
        self._create(fields=roll_fields(code="A"))
        second = self._create(fields=roll_fields(code="B"))
        with self.assertRaises(DuplicateKey):
            self._update(second.id, {"code": "A"})

    def test_update_and_delete_missing_product(self):
        with self.assertRaises(NotFound):
            self._update(404, {"color": "Negro"})
        with self.Session() as db, self.assertRaises(NotFound):
            delete_product(db, KIND_ROLL, 404)

    def test_delete_cascades_to_sales_and_history(self):
        product = self._create()
        with self.Session() as db:
            record_sale(db, product.id, Decimal("5"), seller="carlos")

        with self.Session() as db:
            delete_product(db, KIND_ROLL, product.id)

        with self.Session() as db:
            self.assertIsNone(db.get(Product, product.id))
            self.assertEqual(db.execute(select(func.count(Sale.id))).scalar_one(), 0)
            self.assertEqual(db.execute(select(func.count(HistoryEntry.id))).scalar_one(), 0)


if __name__ == "__main__":
    unittest.main()
