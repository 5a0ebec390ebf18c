"""CLI commands for the Sale ledger."""

from __future__ import annotations

import click

from cafe_ledger.application.delete_sale import DeleteSaleHandler
from cafe_ledger.application.dto import SaleDTO
from cafe_ledger.application.edit_sale import EditSaleHandler
from cafe_ledger.application.list_sales import ListSalesHandler
from cafe_ledger.application.record_sale import RecordSaleHandler
from cafe_ledger.domain.exceptions import DomainException
from cafe_ledger.infrastructure.bootstrap import CafeLedgerApp
from cafe_ledger.infrastructure.persistence.key_value_store import SnapshotError


def _display_sale(dto: SaleDTO) -> None:
    click.echo(f"Sale #{dto.id}  ({dto.date})")
    click.echo(f"Customer: {dto.customer}")
    click.echo(
        f"  {dto.product_name} x {dto.quantity} @ {dto.unit_price} = {dto.total}"
    )


@click.command("record")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, help="Units sold.")
@click.option("--customer", default="", help="Customer name.")
@click.option("--date", "sale_date", default=None, help="Sale date (YYYY-MM-DD), default today.")
@click.pass_obj
def sale_record(
    app: CafeLedgerApp,
    product_id: str,
    quantity: str,
    customer: str,
    sale_date: str | None,
) -> None:
    """Record a sale (deducts stock)."""
    handler = RecordSaleHandler(ledger=app.ledger)

    try:
        dto = handler.handle(product_id, quantity, customer, sale_date)
    except (DomainException, SnapshotError) as exc:
        raise click.ClickException(str(exc))

    click.echo("Sale recorded.")
    _display_sale(dto)


@click.command("edit")
@click.option("--id", "sale_id", required=True, help="Sale ID.")
@click.option("--quantity", default=None, help="New quantity.")
@click.option("--customer", default=None, help="New customer name.")
@click.option("--date", "sale_date", default=None, help="New sale date (YYYY-MM-DD).")
@click.pass_obj
def sale_edit(
    app: CafeLedgerApp,
    sale_id: str,
    quantity: str | None,
    customer: str | None,
    sale_date: str | None,
) -> None:
    """Correct a recorded sale (adjusts stock by the difference)."""
    handler = EditSaleHandler(ledger=app.ledger, sale_repo=app.sale_repo)

    try:
        dto = handler.handle(sale_id, quantity=quantity, customer=customer, sale_date=sale_date)
    except (DomainException, SnapshotError) as exc:
        raise click.ClickException(str(exc))

    click.echo("Sale updated.")
    _display_sale(dto)


@click.command("delete")
@click.option("--id", "sale_id", required=True, help="Sale ID.")
@click.pass_obj
def sale_delete(app: CafeLedgerApp, sale_id: str) -> None:
    """Delete a sale (returns its stock)."""
    handler = DeleteSaleHandler(ledger=app.ledger)

    try:
        handler.handle(sale_id)
    except (DomainException, SnapshotError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sale #{sale_id} deleted.")


@click.command("list")
@click.option("--product", "product_id", default=None, help="Only sales of this product ID.")
@click.pass_obj
def sale_list(app: CafeLedgerApp, product_id: str | None) -> None:
    """List recorded sales."""
    sales = ListSalesHandler(ledger=app.ledger).handle(product_id)

    if not sales:
        click.echo("No sales recorded.")
        return

    click.echo(
        f"{'ID':<6} {'Date':<10} {'Product':<20} {'Qty':>5} {'Total':>10}  Customer"
    )
    click.echo("-" * 70)
    for s in sales:
        click.echo(
            f"{s.id:<6} {s.date:<10} {s.product_name:<20} {s.quantity:>5} "
            f"{s.total:>10}  {s.customer}"
        )
