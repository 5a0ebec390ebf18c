"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from cafe_ledger.domain.model.customer import Customer
from cafe_ledger.domain.model.product import Product
from cafe_ledger.domain.model.sale import Sale


@dataclass(frozen=True)
class ProductDTO:

    id: str
    name: str
    price: str  # formatted, e.g. "$3.00"
    quantity: int
    total_sold: int
    revenue: str
    low_stock: bool


@dataclass(frozen=True)
class SaleDTO:

    id: str
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    total: str
    customer: str
    date: str  # ISO, e.g. "2024-01-01"


@dataclass(frozen=True)
class CustomerDTO:

    id: str
    name: str
    email: str
    phone: str
    address: str
    loyalty_points: int
    birthday: str | None
    birthday_today: bool = False


def product_to_dto(product: Product, low_stock_threshold: int) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        price=str(product.price),
        quantity=product.quantity,
        total_sold=product.total_sold,
        revenue=str(product.revenue),
        low_stock=product.is_low_stock(low_stock_threshold),
    )


def sale_to_dto(sale: Sale) -> SaleDTO:
    return SaleDTO(
        id=sale.id,
        product_id=sale.product_id,
        product_name=sale.product_name,
        quantity=sale.quantity.value,
        unit_price=str(sale.unit_price),
        total=str(sale.total),
        customer=sale.customer,
        date=sale.sale_date.isoformat(),
    )


def customer_to_dto(customer: Customer, birthday_today: bool = False) -> CustomerDTO:
    return CustomerDTO(
        id=customer.id,
        name=customer.name,
        email=customer.email,
        phone=customer.phone,
        address=customer.address,
        loyalty_points=customer.loyalty_points,
        birthday=customer.birthday.isoformat() if customer.birthday else None,
        birthday_today=birthday_today,
    )
