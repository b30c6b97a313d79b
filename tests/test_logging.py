import json
import logging
import unittest
from decimal import Decimal

from app.config import Settings
from app.core.logging import JsonFormatter, setup_logging


class LoggingTest(unittest.TestCase):
    def tearDown(self):
        logging.getLogger().handlers.clear()

    def test_json_formatter_payload(self):
        record = logging.LogRecord(
            name="app.services.sale_service",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg="Rejected sale of %s",
            args=("3",),
            exc_info=None,
        )
        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["level"], "WARNING")
        self.assertEqual(payload["logger"], "app.services.sale_service")
        self.assertEqual(payload["message"], "Rejected sale of 3")

    def test_json_formatter_carries_sale_context(self):
        record = logging.LogRecord(
            name="app.services.sale_service",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Recorded sale",
            args=(),
            exc_info=None,
        )
        record.sale_id = 7
        record.product_id = 3
        record.quantity = Decimal("2.50")
        record.seller = "carlos"

        payload = json.loads(JsonFormatter().format(record))
        self.assertEqual(payload["sale_id"], 7)
        self.assertEqual(payload["product_id"], 3)
        self.assertEqual(payload["quantity"], "2.50")
        self.assertEqual(payload["seller"], "carlos")
        self.assertNotIn("kind", payload)

    def test_setup_logging_uses_settings(self):
        setup_logging(Settings(_env_file=None, LOG_LEVEL="debug", LOG_JSON=True))
        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0].formatter, JsonFormatter)


if __name__ == "__main__":
    unittest.main()
