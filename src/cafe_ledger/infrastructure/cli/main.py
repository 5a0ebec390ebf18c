import click
from pydantic import ValidationError as SettingsError

from cafe_ledger.infrastructure.bootstrap import build_app
from cafe_ledger.infrastructure.cli.customer_commands import (
    customer_add,
    customer_delete,
    customer_list,
    customer_update,
)
from cafe_ledger.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_restock,
    product_update,
)
from cafe_ledger.infrastructure.cli.sale_commands import (
    sale_delete,
    sale_edit,
    sale_list,
    sale_record,
)
from cafe_ledger.infrastructure.logging_config import configure_logging
from cafe_ledger.infrastructure.persistence.key_value_store import SnapshotError
from cafe_ledger.infrastructure.settings import Settings


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Café Ledger: products, sales and customers"""
    if ctx.obj is not None:
        return
    try:
        settings = Settings()
    except SettingsError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")
    configure_logging(settings.log_level, settings.log_file)
    try:
        ctx.obj = build_app(settings)
    except SnapshotError as exc:
        raise click.ClickException(str(exc))


@cli.group()
def product() -> None:
    """Manage the product catalogue."""


@cli.group()
def sale() -> None:
    """Record and correct sales."""


@cli.group()
def customer() -> None:
    """Manage customers."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_update)
sale.add_command(sale_delete)
sale.add_command(sale_edit)
sale.add_command(sale_list)
sale.add_command(sale_record)
customer.add_command(customer_add)
customer.add_command(customer_delete)
customer.add_command(customer_list)
customer.add_command(customer_update)
