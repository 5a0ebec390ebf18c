"""CLI commands for the customer directory."""

from __future__ import annotations

import click

from cafe_ledger.application.add_customer import AddCustomerHandler
from cafe_ledger.application.delete_customer import DeleteCustomerHandler
from cafe_ledger.application.find_customers import FindCustomersHandler
from cafe_ledger.application.update_customer import UpdateCustomerHandler
from cafe_ledger.domain.exceptions import DomainException
from cafe_ledger.infrastructure.bootstrap import CafeLedgerApp
from cafe_ledger.infrastructure.persistence.key_value_store import SnapshotError


@click.command("add")
@click.option("--name", required=True, help="Customer name.")
@click.option("--email", required=True, help="Email address.")
@click.option("--phone", required=True, help="Phone number.")
@click.option("--address", default="", help="Postal address.")
@click.option("--points", "loyalty_points", default="0", help="Loyalty points.")
@click.option("--birthday", default=None, help="Birthday (YYYY-MM-DD).")
@click.pass_obj
def customer_add(
    app: CafeLedgerApp,
    name: str,
    email: str,
    phone: str,
    address: str,
    loyalty_points: str,
    birthday: str | None,
) -> None:
    """Add a customer."""
    handler = AddCustomerHandler(customer_repo=app.customer_repo)

    try:
        customer = handler.handle(
            name=name,
            email=email,
            phone=phone,
            address=address,
            loyalty_points=loyalty_points,
            birthday=birthday,
        )
    except (DomainException, SnapshotError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer #{customer.id} '{customer.name}' added")


@click.command("list")
@click.option("--search", default=None, help="Match name, email or phone.")
@click.pass_obj
def customer_list(app: CafeLedgerApp, search: str | None) -> None:
    """List customers."""
    customers = FindCustomersHandler(customer_repo=app.customer_repo).handle(search)

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Email':<26} {'Phone':<14} {'Points':>6}")
    click.echo("-" * 76)
    for c in customers:
        cake = "  birthday today!" if c.birthday_today else ""
        click.echo(
            f"{c.id:<6} {c.name:<20} {c.email:<26} {c.phone:<14} "
            f"{c.loyalty_points:>6}{cake}"
        )


@click.command("update")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@click.option("--name", default=None)
@click.option("--email", default=None)
@click.option("--phone", default=None)
@click.option("--address", default=None)
@click.option("--points", "loyalty_points", default=None)
@click.option("--birthday", default=None, help="YYYY-MM-DD, or empty to clear.")
@click.pass_obj
def customer_update(
    app: CafeLedgerApp,
    customer_id: str,
    name: str | None,
    email: str | None,
    phone: str | None,
    address: str | None,
    loyalty_points: str | None,
    birthday: str | None,
) -> None:
    """Update a customer's details."""
    handler = UpdateCustomerHandler(customer_repo=app.customer_repo)

    try:
        customer = handler.handle(
            customer_id,
            name=name,
            email=email,
            phone=phone,
            address=address,
            loyalty_points=loyalty_points,
            birthday=birthday,
        )
    except (DomainException, SnapshotError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer #{customer.id} '{customer.name}' updated")


@click.command("delete")
@click.option("--id", "customer_id", required=True, help="Customer ID.")
@click.pass_obj
def customer_delete(app: CafeLedgerApp, customer_id: str) -> None:
    """Delete a customer."""
    handler = DeleteCustomerHandler(customer_repo=app.customer_repo)

    try:
        handler.handle(customer_id)
    except (DomainException, SnapshotError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer #{customer_id} deleted.")
