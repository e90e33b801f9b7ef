"""Read-only dashboard and report aggregates.

Nothing here mutates a store. Revenue figures only count paid invoices.
Amounts come back as Decimals; frames are built with object columns so pandas
never converts money to float.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from .models import Invoice, InvoiceStatus, Product
from .utils import utcnow

MONTHS = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']

def products_frame(products: Sequence[Product]) -> pd.DataFrame:
    """One row per product."""
    return pd.DataFrame(
        [
            {
                'id': product.id,
                'name': product.name,
                'sku': product.sku,
                'category': product.category,
                'quantity': product.quantity,
                'low_stock_threshold': product.low_stock_threshold,
                'selling_price': product.selling_price,
            }
            for product in products
        ],
        columns=['id', 'name', 'sku', 'category', 'quantity', 'low_stock_threshold', 'selling_price']
    )

def invoices_frame(invoices: Sequence[Invoice]) -> pd.DataFrame:
    """One row per invoice."""
    return pd.DataFrame(
        [
            {
                'id': invoice.id,
                'invoice_number': invoice.invoice_number,
                'status': invoice.status.value,
                'created_at': invoice.created_at,
                'total': invoice.total,
                'items_sold': sum(item.quantity for item in invoice.items),
            }
            for invoice in invoices
        ],
        columns=['id', 'invoice_number', 'status', 'created_at', 'total', 'items_sold']
    )

def line_items_frame(invoices: Sequence[Invoice]) -> pd.DataFrame:
    """One row per invoice line."""
    return pd.DataFrame(
        [
            {
                'invoice_id': invoice.id,
                'status': invoice.status.value,
                'product_id': item.product_id,
                'quantity': item.quantity,
                'total': item.total,
            }
            for invoice in invoices
            for item in invoice.items
        ],
        columns=['invoice_id', 'status', 'product_id', 'quantity', 'total']
    )

def _decimal_sum(series: pd.Series) -> Decimal:
    return sum(series.tolist(), Decimal('0'))

def dashboard_metrics(products: Sequence[Product], invoices: Sequence[Invoice], today: Optional[date] = None) -> Dict[str, Any]:
    """Headline numbers for the dashboard.

    Args:
        products: Catalog products
        invoices: All invoices
        today: Day used for ``today_sales``, defaults to the current UTC date

    Returns:
        Dict with total_products, total_stock, low_stock_count, total_sales,
        pending_invoices and today_sales
    """
    today = today or utcnow().date()
    product_df = products_frame(products)
    invoice_df = invoices_frame(invoices)
    paid = invoice_df[invoice_df['status'] == InvoiceStatus.PAID.value]
    paid_today = paid.loc[[created.date() == today for created in paid['created_at']]]

    return {
        'total_products': len(product_df),
        'total_stock': int(product_df['quantity'].sum()) if not product_df.empty else 0,
        'low_stock_count': int((product_df['quantity'] <= product_df['low_stock_threshold']).sum()),
        'total_sales': _decimal_sum(paid['total']),
        'pending_invoices': int((invoice_df['status'] == InvoiceStatus.PENDING.value).sum()),
        'today_sales': _decimal_sum(paid_today['total']),
    }

def stock_by_category(products: Sequence[Product]) -> Dict[str, int]:
    """Units on hand per category, in first-seen category order."""
    df = products_frame(products)
    if df.empty:
        return {}
    grouped = df.groupby('category', sort=False)['quantity'].sum()
    return {category: int(quantity) for category, quantity in grouped.items()}

def sales_by_category(products: Sequence[Product], invoices: Sequence[Invoice]) -> Dict[str, Decimal]:
    """Paid revenue per category.

    Lines whose product has since been deleted cannot be categorised and are
    left out.
    """
    lines = line_items_frame(invoices)
    lines = lines[lines['status'] == InvoiceStatus.PAID.value]
    categories = products_frame(products)[['id', 'category']].rename(columns={'id': 'product_id'})
    merged = lines.merge(categories, on='product_id', how='inner')
    if merged.empty:
        return {}

    result = {}
    for category, group in merged.groupby('category', sort=False):
        result[category] = _decimal_sum(group['total'])
    return result

def monthly_sales(invoices: Sequence[Invoice]) -> List[Dict[str, Any]]:
    """Paid sales and invoice count per calendar month, January first."""
    df = invoices_frame(invoices)
    df = df[df['status'] == InvoiceStatus.PAID.value]
    months = [created.month for created in df['created_at']]

    rows = []
    for number, name in enumerate(MONTHS, 1):
        in_month = df.loc[[month == number for month in months]]
        rows.append({
            'name': name,
            'sales': _decimal_sum(in_month['total']),
            'invoices': len(in_month),
        })
    return rows

def paid_summary(invoices: Sequence[Invoice]) -> Dict[str, Any]:
    """Revenue, units sold and average invoice value over paid invoices."""
    df = invoices_frame(invoices)
    paid = df[df['status'] == InvoiceStatus.PAID.value]
    revenue = _decimal_sum(paid['total'])
    count = len(paid)

    return {
        'paid_invoices': count,
        'revenue': revenue,
        'items_sold': int(paid['items_sold'].sum()) if count else 0,
        'average_invoice': revenue / count if count else Decimal('0'),
    }
