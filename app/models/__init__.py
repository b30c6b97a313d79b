import importlib

from app.models.clients import Client
from app.models.history import HistoryEntry
from app.models.product import Product
from app.models.sales import Sale
from app.models.schema_migration import SchemaMigration


def import_all_models() -> None:
    for module_name in (
        "app.models.clients",
        "app.models.history",
        "app.models.product",
        "app.models.sales",
        "app.models.schema_migration",
    ):
        importlib.import_module(module_name)


__all__ = [
    "Client",
    "HistoryEntry",
    "Product",
    "Sale",
    "SchemaMigration",
    "import_all_models",
]
