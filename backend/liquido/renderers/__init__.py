"""
Renderers - catalog entities to HTML fragments

Pure functions over brands, lines and products (models or plain dicts).
Markup lives in Jinja2 templates next to this module; output is
auto-escaped.
"""
import re
from typing import Any, Iterable, Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from liquido.renderers.component_loader import ComponentLoader, ComponentNotFoundError

PLACEHOLDER_LOGO = "/images/brands/placeholder.png"

STATUS_COLORS = {
    "pending": "bg-yellow-500/20 text-yellow-400 border-yellow-500/30",
    "confirmed": "bg-blue-500/20 text-blue-400 border-blue-500/30",
    "completed": "bg-green-500/20 text-green-400 border-green-500/30",
    "cancelled": "bg-red-500/20 text-red-400 border-red-500/30",
}

SUMUP_STATUS_CLASSES = {
    "SUCCESSFUL": "bg-green-500/20 text-green-400 border-green-500/30",
    "FAILED": "bg-red-500/20 text-red-400 border-red-500/30",
    "PENDING": "bg-yellow-500/20 text-yellow-400 border-yellow-500/30",
    "EXPIRED": "bg-gray-500/20 text-gray-400 border-gray-500/30",
}

NEUTRAL_CLASS = "bg-gray-500/20 text-gray-400 border-gray-500/30"

CURRENCY_SYMBOLS = {"EUR": "€", "USD": "$", "GBP": "£"}


def _dashed(value: str) -> str:
    """'Dinner Lady' -> 'dinner-lady' (whitespace only, no other cleanup)"""
    return re.sub(r"\s+", "-", (value or "").lower())


env = Environment(
    loader=PackageLoader("liquido.renderers", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
env.filters["dashed"] = _dashed


def _render(template: str, **context: Any) -> str:
    return env.get_template(template).render(**context).strip()


def render_brand_card(brand: Any, section_name: str = "") -> str:
    return _render("brand_card.html", brand=brand, section_name=section_name or "")


def render_brands_grid(brands: Iterable[Any], section_name: str = "") -> str:
    """Brand cards, or an empty-state message when there are none"""
    return _render("brands_grid.html", brands=list(brands or []), section_name=section_name or "")


def render_brand_header(brand: Any) -> str:
    return _render("brand_header.html", brand=brand, placeholder_logo=PLACEHOLDER_LOGO)


def render_line_card(line: Any, brand_name: str, brand_logo: str = "") -> str:
    return _render("line_card.html", line=line, brand_name=brand_name, brand_logo=brand_logo)


def render_lines_grid(lines: Iterable[Any], empty_message: str = None) -> str:
    """
    Line cards for lines annotated with brandName/brandLogo

    Args:
        lines: Output of the catalog line queries
        empty_message: Shown instead of the grid when there are no lines
    """
    return _render(
        "lines_grid.html",
        lines=list(lines or []),
        empty_message=empty_message or "Nessun prodotto disponibile al momento.",
    )


def render_product_card(product: Any) -> str:
    return _render("product_card.html", product=product)


def render_products_grid(products: Iterable[Any]) -> str:
    return _render("products_grid.html", products=list(products or []))


def render_status_badge(status: Optional[str]) -> str:
    """Colored pill for an order / service request status"""
    color = STATUS_COLORS.get(status or "", NEUTRAL_CLASS)
    label = status[:1].upper() + status[1:] if status else "Unknown"
    return _render("status_badge.html", color=color, label=label)


def format_amount(amount: Optional[float], currency: str = "EUR") -> str:
    """
    Minor units to a display amount: 1250, 'EUR' -> '€12.50'

    Returns 'N/A' when there is no amount.
    """
    if amount is None:
        return "N/A"
    code = (currency or "EUR").upper()
    major = amount / 100
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    sign = "-" if major < 0 else ""
    return f"{sign}{symbol}{abs(major):,.2f}"


def sumup_status_class(status: Optional[str]) -> str:
    return SUMUP_STATUS_CLASSES.get(status or "", NEUTRAL_CLASS)


env.filters["amount"] = format_amount
env.filters["sumup_class"] = sumup_status_class


def render_transaction_rows(payload: Any) -> str:
    """
    Table rows for a SumUp transaction listing

    Accepts the upstream payload as returned by the proxy: a list of
    transactions or an object with an 'items' list.
    """
    if isinstance(payload, dict):
        payload = payload.get("items")
    transactions = [tx for tx in (payload or []) if isinstance(tx, dict)]
    return _render("sumup_transactions.html", transactions=transactions)


__all__ = [
    "ComponentLoader",
    "ComponentNotFoundError",
    "format_amount",
    "render_brand_card",
    "render_brand_header",
    "render_brands_grid",
    "render_line_card",
    "render_lines_grid",
    "render_product_card",
    "render_products_grid",
    "render_status_badge",
    "render_transaction_rows",
    "sumup_status_class",
]
