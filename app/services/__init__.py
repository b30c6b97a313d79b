from app.services.client_service import create_client, delete_client, list_clients, update_client
from app.services.history_service import list_history
from app.services.product_service import create_product, delete_product, list_products, update_product
from app.services.sale_service import SaleResult, compute_total, list_sales, record_sale
from app.services.stats_service import inventory_statistics, sales_statistics

__all__ = [
    "SaleResult",
    "compute_total",
    "create_client",
    "create_product",
    "delete_client",
    "delete_product",
    "inventory_statistics",
    "list_clients",
    "list_history",
    "list_products",
    "list_sales",
    "record_sale",
    "sales_statistics",
    "update_client",
    "update_product",
]
