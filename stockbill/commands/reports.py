"""Dashboard report and demo seeding commands."""

from typing import List

from ..cli.base import BaseCommand, command_error_handler
from ..cli.config import Config
from ..reports import dashboard_metrics, monthly_sales, paid_summary, sales_by_category, stock_by_category
from ..utils import format_indian_rupees

class ReportCommand(BaseCommand):
    """Print dashboard metrics and category and monthly breakdowns."""

    @command_error_handler
    def execute(self) -> None:
        products = self.app.catalog.products
        invoices = self.app.invoices.invoices

        report = {
            'dashboard': dashboard_metrics(products, invoices),
            'summary': paid_summary(invoices),
            'stock_by_category': stock_by_category(products),
            'sales_by_category': sales_by_category(products, invoices),
            'monthly_sales': monthly_sales(invoices),
        }

        def lines() -> List[str]:
            dashboard = report['dashboard']
            summary = report['summary']
            out = [
                "Dashboard",
                f"  Products:          {dashboard['total_products']}",
                f"  Units in stock:    {dashboard['total_stock']}",
                f"  Low stock:         {dashboard['low_stock_count']}",
                f"  Pending invoices:  {dashboard['pending_invoices']}",
                f"  Total sales:       {format_indian_rupees(dashboard['total_sales'])}",
                f"  Sales today:       {format_indian_rupees(dashboard['today_sales'])}",
                "",
                "Paid invoices",
                f"  Count:             {summary['paid_invoices']}",
                f"  Items sold:        {summary['items_sold']}",
                f"  Average invoice:   {format_indian_rupees(summary['average_invoice'])}",
                "",
                "Stock by category",
            ]
            out += [f"  {category:<20} {quantity:>8}" for category, quantity in report['stock_by_category'].items()]
            out += ["", "Sales by category"]
            out += [
                f"  {category:<20} {format_indian_rupees(amount):>16}"
                for category, amount in report['sales_by_category'].items()
            ]
            out += ["", "Monthly sales"]
            out += [
                f"  {month['name']:<4} {month['invoices']:>4} invoices {format_indian_rupees(month['sales']):>16}"
                for month in report['monthly_sales']
                if month['invoices']
            ]
            return out

        self.emit(report, lines)

class SeedCommand(BaseCommand):
    """Load the demo catalog and invoices."""

    bootstrap = False

    def __init__(self, config: Config, replace: bool = False):
        super().__init__(config)
        self.replace = replace

    @command_error_handler
    def execute(self) -> None:
        seeded = self.app.seed_demo_data(replace=self.replace)
        counts = {
            'seeded': seeded,
            'products': len(self.app.catalog.products),
            'invoices': len(self.app.invoices.invoices),
        }
        if seeded:
            message = f"Seeded {counts['products']} products and {counts['invoices']} invoices"
        else:
            message = "Storage already has data; use --replace to overwrite it"
        self.emit(counts, lambda: [message])
