"""Snapshot-backed repositories over a KeyValueStore.

Each repository owns one fixed key and keeps the serialized collection
in memory.  The collection is read once on construction and, on every
change, the whole collection is re-serialized and written back before
the in-memory copy is replaced.

Field names are camelCase so snapshots written by the original
browser app (``cafeProducts``, ``cafeSales``, ``cafeCustomers``) load
unchanged, including their float prices and numeric ids.
"""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone

from cafe_ledger.domain.exceptions import DomainException
from cafe_ledger.domain.model.customer import Customer
from cafe_ledger.domain.model.product import Product
from cafe_ledger.domain.model.sale import Sale
from cafe_ledger.domain.model.value_objects import Money, Quantity
from cafe_ledger.domain.repository.customer_repository import CustomerRepository
from cafe_ledger.domain.repository.product_repository import ProductRepository
from cafe_ledger.domain.repository.sale_repository import SaleRepository
from cafe_ledger.infrastructure.persistence.key_value_store import (
    KeyValueStore,
    SnapshotError,
)

logger = logging.getLogger(__name__)


class _SnapshotCollection:

    def __init__(self, store: KeyValueStore, key: str) -> None:
        self._store = store
        self._key = key
        self._records: list[dict] = self._read()
        # Every record is decoded once up front so a corrupt snapshot
        # fails at startup rather than halfway through a command.
        for raw in self._records:
            self._decode(self._to_domain, raw)
        self._last_id = self._read_last_id()

    # --- Record helpers -------------------------------------------------------

    def _find(self, record_id: str) -> dict | None:
        for raw in self._records:
            if str(raw["id"]) == record_id:
                return raw
        return None

    def _upsert(self, record: dict) -> None:
        records = list(self._records)
        for i, raw in enumerate(records):
            if str(raw["id"]) == record["id"]:
                records[i] = record
                break
        else:
            records.append(record)
            self._raise_last_id(record["id"])
        self._commit(records)

    def _remove(self, record_id: str) -> None:
        records = [raw for raw in self._records if str(raw["id"]) != record_id]
        if len(records) != len(self._records):
            self._commit(records)

    def _next_numeric_id(self) -> str:
        # Ids written by the original app are millisecond timestamps;
        # they still count, so new ids never collide with them.  The
        # stored high-water mark keeps ids of deleted records retired.
        numeric = [int(raw["id"]) for raw in self._records if str(raw["id"]).isdigit()]
        return str(max(numeric + [self._last_id]) + 1)

    @property
    def _last_id_key(self) -> str:
        return f"{self._key}.lastId"

    def _read_last_id(self) -> int:
        text = self._store.get(self._last_id_key)
        if text is None or not text.strip():
            return 0
        if not text.strip().isdigit():
            raise SnapshotError(f"Snapshot '{self._last_id_key}' must hold a whole number")
        return int(text)

    def _raise_last_id(self, record_id: str) -> None:
        if record_id.isdigit() and int(record_id) > self._last_id:
            self._store.set(self._last_id_key, record_id)
            self._last_id = int(record_id)

    def _decode(self, convert, raw: dict):
        try:
            return convert(raw)
        except (KeyError, TypeError, ValueError, DomainException) as exc:
            raise SnapshotError(
                f"Malformed record {raw.get('id')!r} in snapshot '{self._key}': {exc}"
            ) from exc

    # --- Store I/O ------------------------------------------------------------

    def _read(self) -> list[dict]:
        text = self._store.get(self._key)
        if text is None or not text.strip():
            return []
        try:
            records = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SnapshotError(f"Snapshot '{self._key}' is not valid JSON") from exc
        if not isinstance(records, list):
            raise SnapshotError(f"Snapshot '{self._key}' must be a JSON array")
        if not all(isinstance(raw, dict) and "id" in raw for raw in records):
            raise SnapshotError(f"Snapshot '{self._key}' holds a record without an id")
        logger.debug("Loaded %d record(s) from snapshot '%s'", len(records), self._key)
        return records

    def _commit(self, records: list[dict]) -> None:
        self._store.set(self._key, json.dumps(records, indent=2) + "\n")
        self._records = records


def _money(raw: object) -> Money:
    return Money.of(str(raw))


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------


class SnapshotProductRepository(_SnapshotCollection, ProductRepository):

    def __init__(self, store: KeyValueStore, key: str = "cafeProducts") -> None:
        super().__init__(store, key)

    # --- ProductRepository interface ------------------------------------------

    def next_id(self) -> str:
        return self._next_numeric_id()

    def get_by_id(self, product_id: str) -> Product | None:
        raw = self._find(product_id)
        return self._decode(self._to_domain, raw) if raw is not None else None

    def get_by_name(self, name: str) -> Product | None:
        for product in self.list_all():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return [self._decode(self._to_domain, raw) for raw in self._records]

    def save(self, product: Product) -> None:
        self._upsert(self._to_raw(product))

    def delete(self, product_id: str) -> None:
        self._remove(product_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "price": str(product.price.amount),
            "currency": product.price.currency,
            "quantity": product.quantity,
            "totalSold": product.total_sold,
            "revenue": str(product.revenue.amount),
            "createdAt": product.created_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        currency = raw.get("currency", "USD")
        created = raw.get("createdAt")
        return Product(
            id=str(raw["id"]),
            name=raw["name"],
            price=Money(_money(raw["price"]).amount, currency),
            quantity=int(raw.get("quantity", 0)),
            total_sold=int(raw.get("totalSold", 0)),
            revenue=Money(_money(raw.get("revenue", 0)).amount, currency),
            created_at=(
                datetime.fromisoformat(created) if created else datetime.now(timezone.utc)
            ),
        )


# ---------------------------------------------------------------------------
# Sales
# ---------------------------------------------------------------------------


class SnapshotSaleRepository(_SnapshotCollection, SaleRepository):

    def __init__(self, store: KeyValueStore, key: str = "cafeSales") -> None:
        super().__init__(store, key)

    # --- SaleRepository interface ---------------------------------------------

    def next_id(self) -> str:
        return self._next_numeric_id()

    def get_by_id(self, sale_id: str) -> Sale | None:
        raw = self._find(sale_id)
        return self._decode(self._to_domain, raw) if raw is not None else None

    def list_all(self) -> list[Sale]:
        return [self._decode(self._to_domain, raw) for raw in self._records]

    def list_by_product(self, product_id: str) -> list[Sale]:
        return [s for s in self.list_all() if s.product_id == product_id]

    def save(self, sale: Sale) -> None:
        self._upsert(self._to_raw(sale))

    def delete(self, sale_id: str) -> None:
        self._remove(sale_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(sale: Sale) -> dict:
        return {
            "id": sale.id,
            "productId": sale.product_id,
            "productName": sale.product_name,
            "quantity": sale.quantity.value,
            "unitPrice": str(sale.unit_price.amount),
            "currency": sale.unit_price.currency,
            "total": str(sale.total.amount),
            "customer": sale.customer,
            "date": sale.sale_date.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Sale:
        quantity = Quantity(int(raw["quantity"]))
        currency = raw.get("currency", "USD")
        # The stored total is what the product was credited with, so it
        # is taken as-is rather than recomputed from the unit price.
        total = Money(_money(raw["total"]).amount, currency) if "total" in raw else None
        if "unitPrice" in raw:
            unit_price = Money(_money(raw["unitPrice"]).amount, currency)
        else:
            # Snapshots from the original app only carry the total.
            legacy_total = Money(_money(raw["total"]).amount, currency)
            unit_price = legacy_total.per_unit(quantity.value)
        return Sale(
            id=str(raw["id"]),
            product_id=str(raw["productId"]),
            product_name=raw.get("productName", ""),
            quantity=quantity,
            unit_price=unit_price,
            customer=raw.get("customer", ""),
            sale_date=date.fromisoformat(raw["date"][:10]),
            total=total,
        )


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------


class SnapshotCustomerRepository(_SnapshotCollection, CustomerRepository):

    def __init__(self, store: KeyValueStore, key: str = "cafeCustomers") -> None:
        super().__init__(store, key)

    def next_id(self) -> str:
        return self._next_numeric_id()

    def get_by_id(self, customer_id: str) -> Customer | None:
        raw = self._find(customer_id)
        return self._decode(self._to_domain, raw) if raw is not None else None

    def list_all(self) -> list[Customer]:
        return [self._decode(self._to_domain, raw) for raw in self._records]

    def save(self, customer: Customer) -> None:
        self._upsert(self._to_raw(customer))

    def delete(self, customer_id: str) -> None:
        self._remove(customer_id)

    @staticmethod
    def _to_raw(customer: Customer) -> dict:
        return {
            "id": customer.id,
            "name": customer.name,
            "email": customer.email,
            "phone": customer.phone,
            "address": customer.address,
            "loyaltyPoints": customer.loyalty_points,
            "birthday": customer.birthday.isoformat() if customer.birthday else "",
        }

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        birthday = raw.get("birthday") or None
        return Customer(
            id=str(raw["id"]),
            name=raw["name"],
            email=raw.get("email", ""),
            phone=str(raw.get("phone", "")),
            address=raw.get("address", ""),
            loyalty_points=int(raw.get("loyaltyPoints") or 0),
            birthday=date.fromisoformat(birthday[:10]) if birthday else None,
        )
