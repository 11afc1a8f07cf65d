from collections import defaultdict
from typing import Iterable, List

from slugify import slugify

from app.models.product import Product
from app.schemas.product import SORT_KEYS
from app.schemas.report import CategoryReport, CategorySummary, DashboardSummary, LowStockItem


def filter_products(products: Iterable[Product], search: str | None) -> List[Product]:
    """Case-insensitive substring match on name, category and description."""
    products = list(products)
    term = (search or "").strip().lower()
    if not term:
        return products
    return [
        p for p in products
        if term in p.name.lower()
        or term in p.category.lower()
        or term in p.description.lower()
    ]


def sort_products(products: Iterable[Product], key: str = "name", direction: str = "ascending") -> List[Product]:
    if key not in SORT_KEYS:
        raise ValueError(f"Cannot sort products by '{key}'")
    if direction not in ("ascending", "descending"):
        raise ValueError(f"Unknown sort direction '{direction}'")

    def sort_value(product: Product):
        value = getattr(product, key)
        return value.lower() if isinstance(value, str) else value

    return sorted(products, key=sort_value, reverse=(direction == "descending"))


def low_stock_products(products: Iterable[Product]) -> List[Product]:
    return [p for p in products if p.is_low_stock]


def dashboard_summary(products: Iterable[Product], preview_limit: int = 5) -> DashboardSummary:
    products = list(products)
    low_stock = low_stock_products(products)

    return DashboardSummary(
        total_products=len(products),
        total_stock_units=sum(p.stock_level for p in products),
        low_stock_count=len(low_stock),
        low_stock_items=[
            LowStockItem(
                id=str(p.id),
                name=p.name,
                stock_level=p.stock_level,
                reorder_point=p.reorder_point,
            )
            for p in low_stock[:preview_limit]
        ],
        has_more_low_stock=len(low_stock) > preview_limit,
    )


def category_report(products: Iterable[Product]) -> CategoryReport:
    """
    Group products by category.

    Categories are listed with the most stock first; ties fall back to the
    category name so the order is deterministic.
    """
    products = list(products)
    counts = defaultdict(int)
    stock = defaultdict(int)
    for p in products:
        counts[p.category] += 1
        stock[p.category] += p.stock_level

    total = len(products)
    categories = [
        CategorySummary(
            name=name,
            slug=slugify(name),
            product_count=counts[name],
            stock_units=stock[name],
            share_percent=int(counts[name] * 100 / total + 0.5) if total else 0,  # half up
        )
        for name in counts
    ]
    categories.sort(key=lambda c: (-c.stock_units, c.name))

    return CategoryReport(
        total_products=total,
        total_stock_units=sum(stock.values()),
        category_count=len(categories),
        categories=categories,
    )
