"""Invoice commands."""

from decimal import Decimal

import click

from bizledger.cli.error_handling import handle_domain_error
from bizledger.domain.entities import (
    DiscountType,
    InvoiceSettings,
    InvoiceStatus,
    LineItem,
)
from bizledger.domain.invoice import InvoiceService
from bizledger.utils.amount_parser import parse_non_negative, parse_rate
from bizledger.utils.date_parser import parse_date
from bizledger.utils.money import format_currency

DISCOUNT_TYPE_CHOICE = click.Choice([kind.value for kind in DiscountType])
STATUS_CHOICE = click.Choice([status.value for status in InvoiceStatus])
ZERO = Decimal("0")


def _parse_discount(discount: str | None, discount_type: str):
    """Map a --discount value to (type, rate, amount)."""
    kind = DiscountType(discount_type)
    if discount is None:
        return kind, ZERO, ZERO
    if kind == DiscountType.FIXED:
        return kind, ZERO, parse_non_negative(discount, "discount_amount")
    return kind, parse_rate(discount, "discount_rate"), ZERO


@click.group("invoice")
def invoice_group():
    """Manage invoices, line items and payments."""
    pass


@invoice_group.command("create")
@click.option("--client", required=True, help="Client name")
@click.option("--issue-date", default="today", show_default=True, help="Issue date")
@click.option("--net-days", type=int, default=30, show_default=True, help="Payment terms in days")
@click.option("--number", help="Invoice number (generated when omitted)")
@click.option("--currency", help="Invoice currency (defaults to the reporting currency)")
@click.option("--tax-rate", default="0", help="Invoice tax rate in percent")
@click.option("--discount", help="Invoice discount (percent, or amount with --discount-type fixed)")
@click.option(
    "--discount-type",
    type=DISCOUNT_TYPE_CHOICE,
    default=DiscountType.PERCENTAGE.value,
    show_default=True,
)
@click.option("--shipping", default="0", help="Shipping amount")
@click.option("--shipping-tax-rate", default="0", help="Tax rate on shipping in percent")
@click.option("--notes", help="Invoice notes")
@click.pass_context
def create_invoice(
    ctx,
    client: str,
    issue_date: str,
    net_days: int,
    number: str | None,
    currency: str | None,
    tax_rate: str,
    discount: str | None,
    discount_type: str,
    shipping: str,
    shipping_tax_rate: str,
    notes: str | None,
):
    """Create a draft invoice.

    Examples:
        bizledger invoice create --client "Acme Ltd" --tax-rate 5
        bizledger invoice create --client "Acme Ltd" --discount 50 --discount-type fixed
    """
    service = InvoiceService(ctx.obj["db"])

    try:
        kind, discount_rate, discount_amount = _parse_discount(discount, discount_type)
        settings = InvoiceSettings(
            tax_rate=parse_rate(tax_rate, "tax_rate"),
            discount_rate=discount_rate,
            discount_type=kind,
            discount_amount=discount_amount,
            shipping_amount=parse_non_negative(shipping, "shipping_amount"),
            shipping_tax_rate=parse_rate(shipping_tax_rate, "shipping_tax_rate"),
        )
        invoice_id = service.create_invoice(
            client_name=client,
            issue_date=parse_date(issue_date),
            net_days=net_days,
            currency=currency or ctx.obj["currency"],
            settings=settings,
            notes=notes,
            invoice_number=number,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    invoice = service.require_invoice(invoice_id)
    click.echo(f"Created invoice {invoice.id}: {invoice.invoice_number}")
    click.echo(f"  Client: {invoice.client_name}")
    click.echo(f"  Issued: {invoice.issue_date}  Due: {invoice.due_date}")


@invoice_group.command("add-item")
@click.argument("invoice_id", type=int)
@click.option("--description", help="Line item description")
@click.option("--quantity", required=True, help="Quantity")
@click.option("--rate", required=True, help="Unit price")
@click.option("--tax-rate", default="0", help="Tax rate in percent")
@click.option("--discount", help="Discount (percent, or amount with --discount-type fixed)")
@click.option(
    "--discount-type",
    type=DISCOUNT_TYPE_CHOICE,
    default=DiscountType.PERCENTAGE.value,
    show_default=True,
)
@click.pass_context
def add_item(
    ctx,
    invoice_id: int,
    description: str | None,
    quantity: str,
    rate: str,
    tax_rate: str,
    discount: str | None,
    discount_type: str,
):
    """Add a line item to an invoice.

    Examples:
        bizledger invoice add-item 1 --description "Design" --quantity 10 --rate 85
    """
    service = InvoiceService(ctx.obj["db"])

    try:
        kind, discount_rate, discount_amount = _parse_discount(discount, discount_type)
        item = LineItem(
            quantity=parse_non_negative(quantity, "quantity"),
            rate=parse_non_negative(rate, "rate"),
            tax_rate=parse_rate(tax_rate, "tax_rate"),
            discount_rate=discount_rate,
            discount_type=kind,
            discount_amount=discount_amount,
            description=description,
        )
        line_item_id = service.add_line_item(invoice_id, item)
        totals = service.calculate_totals(invoice_id)
        invoice = service.require_invoice(invoice_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Added line item {line_item_id} to invoice {invoice_id}")
    click.echo(f"  Invoice total: {format_currency(totals.total, invoice.currency)}")


@invoice_group.command("remove-item")
@click.argument("invoice_id", type=int)
@click.argument("line_item_id", type=int)
@click.pass_context
def remove_item(ctx, invoice_id: int, line_item_id: int):
    """Remove a line item from an invoice."""
    service = InvoiceService(ctx.obj["db"])
    try:
        service.remove_line_item(invoice_id, line_item_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Removed line item {line_item_id} from invoice {invoice_id}")


@invoice_group.command("show")
@click.argument("invoice_id", type=int)
@click.pass_context
def show_invoice(ctx, invoice_id: int):
    """Show an invoice with line items, totals and payment status."""
    service = InvoiceService(ctx.obj["db"])
    try:
        invoice = service.require_invoice(invoice_id)
        items = service.get_line_items(invoice_id)
        totals = service.calculate_totals(invoice_id)
        payments = service.get_payments(invoice_id)
        status = service.get_payment_status(invoice_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    currency = invoice.currency
    click.echo(f"\nInvoice {invoice.invoice_number} (ID {invoice.id})")
    click.echo(f"Client: {invoice.client_name}")
    click.echo(f"Issued: {invoice.issue_date}  Due: {invoice.due_date}")
    click.echo(f"Status: {status.status.value}")
    if invoice.notes:
        click.echo(f"Notes: {invoice.notes}")

    click.echo("-" * 84)
    click.echo(
        f"{'ID':<5} {'Description':<30} {'Qty':>8} {'Rate':>12} {'Tax':>10} {'Total':>14}"
    )
    click.echo("-" * 84)
    for item, line in zip(items, totals.line_item_totals):
        click.echo(
            f"{item.id:<5} {(item.description or '')[:30]:<30} {item.quantity:>8} "
            f"{format_currency(item.rate, currency):>12} "
            f"{format_currency(line.tax, currency):>10} "
            f"{format_currency(line.total, currency):>14}"
        )
    if not items:
        click.echo("(no line items)")
    click.echo("-" * 84)

    rows = [
        ("Subtotal", totals.subtotal),
        ("Discount", -totals.total_discount),
        ("Tax", totals.total_tax),
        ("Shipping", totals.shipping_amount),
        ("Shipping tax", totals.shipping_tax),
        ("Total", totals.total),
    ]
    for name, value in rows:
        click.echo(f"{name:<20} {format_currency(value, currency):>20}")

    click.echo("")
    for payment in payments:
        method = f" ({payment.method})" if payment.method else ""
        click.echo(
            f"Payment {payment.id} on {payment.date}: "
            f"{format_currency(payment.amount, currency)}{method}"
        )
    click.echo(f"{'Paid':<20} {format_currency(status.amount_paid, currency):>20}")
    click.echo(f"{'Due':<20} {format_currency(status.amount_due, currency):>20}")


@invoice_group.command("list")
@click.option("--status", type=STATUS_CHOICE, help="Only invoices with this status")
@click.pass_context
def list_invoices(ctx, status: str | None):
    """List invoices."""
    service = InvoiceService(ctx.obj["db"])
    invoices = service.list_invoices(InvoiceStatus(status) if status else None)

    if not invoices:
        click.echo("No invoices found.")
        return

    click.echo("-" * 84)
    click.echo(
        f"{'ID':<5} {'Number':<16} {'Client':<24} {'Issued':<12} {'Status':<10} {'Total':>14}"
    )
    click.echo("-" * 84)
    for invoice in invoices:
        total = service.calculate_totals(invoice.id).total
        click.echo(
            f"{invoice.id:<5} {invoice.invoice_number:<16} {invoice.client_name[:24]:<24} "
            f"{str(invoice.issue_date):<12} {invoice.status.value:<10} "
            f"{format_currency(total, invoice.currency):>14}"
        )


@invoice_group.command("pay")
@click.argument("invoice_id", type=int)
@click.option("--amount", required=True, help="Payment amount")
@click.option("--date", "payment_date", default="today", show_default=True, help="Payment date")
@click.option("--method", help="Payment method (e.g., 'bank transfer')")
@click.pass_context
def pay_invoice(ctx, invoice_id: int, amount: str, payment_date: str, method: str | None):
    """Record a payment against an invoice."""
    service = InvoiceService(ctx.obj["db"])
    try:
        payment_id = service.record_payment(
            invoice_id,
            parse_non_negative(amount),
            parse_date(payment_date),
            method,
        )
        invoice = service.require_invoice(invoice_id)
        status = service.get_payment_status(invoice_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Recorded payment {payment_id} on invoice {invoice_id}")
    click.echo(f"  Status: {invoice.status.value}")
    click.echo(f"  Due: {format_currency(status.amount_due, invoice.currency)}")


@invoice_group.command("status")
@click.argument("invoice_id", type=int)
@click.argument("status", type=STATUS_CHOICE)
@click.pass_context
def set_status(ctx, invoice_id: int, status: str):
    """Set an invoice's status (e.g. sent or cancelled)."""
    service = InvoiceService(ctx.obj["db"])
    try:
        service.update_status(invoice_id, InvoiceStatus(status))
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Invoice {invoice_id} status set to {status}")


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group)
