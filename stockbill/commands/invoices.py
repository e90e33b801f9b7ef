"""Invoice commands."""

from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

import click

from ..cli.base import BaseCommand, command_error_handler
from ..cli.config import Config
from ..models import Invoice, InvoiceStatus, InvoiceUpdate, MutationResult, PaymentMode
from ..utils import format_indian_rupees

def invoice_line(invoice: Invoice) -> str:
    return (
        f"{invoice.invoice_number:<9} {invoice.created_at:%Y-%m-%d} {invoice.customer_name[:24]:<24} "
        f"{invoice.status.value:<9} {invoice.payment_mode.value:<10} {format_indian_rupees(invoice.total):>14}"
    )

def invoice_details(invoice: Invoice) -> List[str]:
    lines = [
        f"Invoice {invoice.invoice_number}  ({invoice.status.value}, {invoice.payment_mode.value})",
        f"  Date:      {invoice.created_at:%Y-%m-%d %H:%M}",
        f"  Customer:  {invoice.customer_name} <{invoice.customer_email}> {invoice.customer_mobile}",
        f"  Issued by: {invoice.created_by.name or '-'}",
        "",
    ]
    for item in invoice.items:
        lines.append(
            f"  {item.product_name[:28]:<28} HSN {item.hsn or '-':<6} {item.quantity:>4} x "
            f"{format_indian_rupees(item.unit_price):>12} = {format_indian_rupees(item.total):>14}  "
            f"GST {item.gst_rate}%"
        )
    lines += [
        "",
        f"  Subtotal:              {format_indian_rupees(invoice.subtotal):>14}",
        f"  Discount:              {format_indian_rupees(-invoice.discount_amount):>14}  ({invoice.discount_percent}%)",
        f"  CGST:                  {format_indian_rupees(invoice.cgst):>14}",
        f"  SGST:                  {format_indian_rupees(invoice.sgst):>14}",
        f"  Total:                 {format_indian_rupees(invoice.total):>14}",
    ]
    if invoice.notes:
        lines.append(f"  Notes: {invoice.notes}")
    return lines

class InvoiceCommand(BaseCommand):
    """Shared invoice lookup."""

    def find(self, ref: str) -> Invoice:
        """Resolve an invoice by id or invoice number.

        Raises:
            click.ClickException: if nothing matches
        """
        invoice = self.app.invoices.get(ref) or self.app.invoices.get_by_number(ref.upper())
        if invoice is None:
            raise click.ClickException(f"Invoice {ref} not found")
        return invoice

class ListInvoicesCommand(InvoiceCommand):
    """List invoices in creation order."""

    def __init__(self, config: Config, status: Optional[InvoiceStatus] = None):
        super().__init__(config)
        self.status = status

    @command_error_handler
    def execute(self) -> None:
        invoices = [
            invoice for invoice in self.app.invoices.invoices
            if self.status is None or invoice.status is self.status
        ]
        self.emit(invoices, lambda: [invoice_line(i) for i in invoices] or ["No invoices found"])

class ShowInvoiceCommand(InvoiceCommand):
    """Show one invoice with its lines and tax breakdown."""

    def __init__(self, config: Config, ref: str):
        super().__init__(config)
        self.ref = ref

    @command_error_handler
    def execute(self) -> None:
        invoice = self.find(self.ref)
        self.emit(invoice, lambda: invoice_details(invoice))

class RecentInvoicesCommand(InvoiceCommand):
    """Newest invoices first."""

    def __init__(self, config: Config, limit: Optional[int] = None):
        super().__init__(config)
        self.limit = limit or config.recent_invoice_limit

    @command_error_handler
    def execute(self) -> None:
        invoices = self.app.invoices.recent(self.limit)
        self.emit(invoices, lambda: [invoice_line(i) for i in invoices] or ["No invoices found"])

class CreateInvoiceCommand(InvoiceCommand):
    """Compose an invoice, deduct its stock and save it.

    Args:
        config: Application configuration
        customer: (name, email, mobile)
        items: (product id or SKU, quantity) pairs in line order
        discount: Discount percentage, clamped to 0..100
        status: Initial status
        payment_mode: Payment mode
        notes: Free text notes
        login: Optional (email, password) of the issuing user
    """

    def __init__(
        self,
        config: Config,
        customer: Tuple[str, str, str],
        items: Sequence[Tuple[str, int]],
        discount: Decimal = Decimal('0'),
        status: InvoiceStatus = InvoiceStatus.PENDING,
        payment_mode: PaymentMode = PaymentMode.CASH,
        notes: Optional[str] = None,
        login: Optional[Tuple[str, str]] = None
    ):
        super().__init__(config)
        self.customer = customer
        self.items = list(items)
        self.discount = discount
        self.status = status
        self.payment_mode = payment_mode
        self.notes = notes
        self.login = login

    @command_error_handler
    def execute(self) -> None:
        app = self.app
        if self.login:
            email, password = self.login
            if not app.identity.login(email, password):
                raise click.ClickException("Invalid email or password")

        editor = app.new_editor()
        name, email, mobile = self.customer
        editor.set_customer(name=name, email=email, mobile=mobile)
        editor.set_discount(self.discount)
        editor.set_status(self.status)
        editor.set_payment_mode(self.payment_mode)
        editor.set_notes(self.notes)

        for ref, quantity in self.items:
            product = app.catalog.get(ref) or app.catalog.get_by_sku(ref)
            if product is None:
                raise click.ClickException(f"Product {ref} not found")
            index = editor.add_row()
            if not editor.select_product(index, product.id):
                if self.debug:
                    self.logger.debug(f"{ref} is already on the invoice, line dropped")
                continue
            if quantity != 1:
                editor.set_quantity(index, quantity)

        result = app.submit(editor)
        if not result.ok:
            for field_name, message in result.errors.items():
                click.secho(f"  {field_name}: {message}", fg='red', err=True)
            raise click.ClickException("Invoice not created")

        invoice = result.invoice
        self.emit(invoice, lambda: [f"Created invoice {invoice.invoice_number}"] + invoice_details(invoice))

class UpdateInvoiceCommand(InvoiceCommand):
    """Change status, payment mode or notes of an invoice."""

    def __init__(
        self,
        config: Config,
        ref: str,
        status: Optional[InvoiceStatus] = None,
        payment_mode: Optional[PaymentMode] = None,
        notes: Optional[str] = None
    ):
        super().__init__(config)
        self.ref = ref
        self.update = InvoiceUpdate(status=status, payment_mode=payment_mode, notes=notes)

    @command_error_handler
    def execute(self) -> None:
        if not self.update.changes():
            raise click.UsageError("Nothing to update")
        invoice = self.find(self.ref)
        if self.app.invoices.update(invoice.id, self.update) is MutationResult.NOT_FOUND:
            raise click.ClickException(f"Invoice {self.ref} not found")
        updated = self.app.invoices.get(invoice.id)
        self.emit(updated, lambda: [f"Updated invoice {updated.invoice_number} ({updated.status.value})"])

class DeleteInvoiceCommand(InvoiceCommand):
    """Delete an invoice. Stock is not restored."""

    def __init__(self, config: Config, ref: str):
        super().__init__(config)
        self.ref = ref

    @command_error_handler
    def execute(self) -> None:
        invoice = self.find(self.ref)
        result = self.app.invoices.delete(invoice.id)
        self.emit(
            {'id': invoice.id, 'invoice_number': invoice.invoice_number, 'result': result},
            lambda: [f"Deleted invoice {invoice.invoice_number}"]
        )
