from .dashboard import dashboard_summary
from .product_list import get_product_by_barcode, list_products
from .stock_fefo import allocate_fefo, stock_out_items
from .stock_in import stock_in_items
from .stock_logs import get_stock_logs, group_movements

__all__ = [
    "dashboard_summary",
    "get_product_by_barcode",
    "list_products",
    "allocate_fefo",
    "stock_out_items",
    "stock_in_items",
    "get_stock_logs",
    "group_movements",
]
