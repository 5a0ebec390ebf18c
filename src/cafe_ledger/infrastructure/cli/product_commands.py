"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from cafe_ledger.application.add_product import AddProductHandler
from cafe_ledger.application.delete_product import DeleteProductHandler
from cafe_ledger.application.list_products import ListProductsHandler
from cafe_ledger.application.restock_product import RestockProductHandler
from cafe_ledger.application.update_product import UpdateProductHandler
from cafe_ledger.domain.exceptions import DomainException
from cafe_ledger.infrastructure.bootstrap import CafeLedgerApp
from cafe_ledger.infrastructure.persistence.key_value_store import SnapshotError


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 3.50).")
@click.option("--quantity", default="0", show_default=True, help="Opening stock.")
@click.pass_obj
def product_add(app: CafeLedgerApp, name: str, price: str, quantity: str) -> None:
    """Add a new product to the catalogue."""
    handler = AddProductHandler(product_repo=app.product_repo)

    try:
        product = handler.handle(name=name, price=price, quantity=quantity)
    except (DomainException, SnapshotError) as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.quantity} in stock)"
    )


@click.command("list")
@click.option("--search", default=None, help="Filter by name.")
@click.option("--low-stock", is_flag=True, default=False, help="Only show low-stock products.")
@click.pass_obj
def product_list(app: CafeLedgerApp, search: str | None, low_stock: bool) -> None:
    """List products with stock and sales totals."""
    handler = ListProductsHandler(
        product_repo=app.product_repo,
        low_stock_threshold=app.settings.low_stock_threshold,
    )
    products = handler.handle(search=search, low_stock_only=low_stock)

    if not products:
        click.echo("No products found.")
        return

    click.echo(
        f"{'ID':<6} {'Name':<20} {'Price':>10} {'Stock':>7} {'Sold':>6} {'Revenue':>12}"
    )
    click.echo("-" * 66)
    for p in products:
        flag = "  LOW" if p.low_stock else ""
        click.echo(
            f"{p.id:<6} {p.name:<20} {p.price:>10} {p.quantity:>7} "
            f"{p.total_sold:>6} {p.revenue:>12}{flag}"
        )


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 4.25).")
@click.option("--quantity", default=None, help="Corrected stock level.")
@click.pass_obj
def product_update(
    app: CafeLedgerApp,
    product_id: str,
    name: str | None,
    price: str | None,
    quantity: str | None,
) -> None:
    """Edit a product's name, price or stock level."""
    if name is None and price is None and quantity is None:
        raise click.UsageError("Nothing to update: pass --name, --price or --quantity")

    handler = UpdateProductHandler(product_repo=app.product_repo)

    try:
        product = handler.handle(product_id, name=name, price=price, quantity=quantity)
    except (DomainException, SnapshotError) as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' updated: "
        f"{product.price}, {product.quantity} in stock"
    )


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_delete(app: CafeLedgerApp, product_id: str) -> None:
    """Remove a product from the catalogue."""
    handler = DeleteProductHandler(
        product_repo=app.product_repo,
        sale_repo=app.sale_repo,
        policy=app.settings.product_deletion_policy,
    )

    try:
        removed_sales = handler.handle(product_id)
    except (DomainException, SnapshotError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")
    if removed_sales:
        click.echo(f"{removed_sales} dependent sale(s) removed.")


@click.command("restock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--amount", required=True, help="Units received.")
@click.pass_obj
def product_restock(app: CafeLedgerApp, product_id: str, amount: str) -> None:
    """Add received units to a product's stock."""
    handler = RestockProductHandler(
        ledger=app.ledger,
        low_stock_threshold=app.settings.low_stock_threshold,
    )

    try:
        product = handler.handle(product_id, amount)
    except (DomainException, SnapshotError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {amount.strip()} units to {product.name} (now {product.quantity})")
