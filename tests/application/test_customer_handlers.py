"""Integration tests for the customer directory use cases."""

from datetime import date

import pytest

from cafe_ledger.application.add_customer import AddCustomerHandler
from cafe_ledger.application.delete_customer import DeleteCustomerHandler
from cafe_ledger.application.find_customers import FindCustomersHandler
from cafe_ledger.application.update_customer import UpdateCustomerHandler
from cafe_ledger.domain.exceptions import CustomerNotFoundError, ValidationError
from tests.fakes import FakeCustomerRepository


def _setup() -> FakeCustomerRepository:
    repo = FakeCustomerRepository()
    add = AddCustomerHandler(repo)
    add.handle("Alice Smith", "alice@example.com", "555-0101", birthday="1990-03-14")
    add.handle("Bob Jones", "bob@cafe.test", "555-0202", loyalty_points="40")
    return repo


class TestAddCustomer:

    def test_assigns_ids(self):
        repo = _setup()
        assert [c.id for c in repo.list_all()] == ["1", "2"]

    def test_parses_points_and_birthday(self):
        repo = _setup()
        assert repo.get_by_id("1").birthday == date(1990, 3, 14)
        assert repo.get_by_id("2").loyalty_points == 40

    def test_missing_email_rejected(self):
        repo = _setup()
        with pytest.raises(ValidationError, match="email is required"):
            AddCustomerHandler(repo).handle("Carol", "", "555-0303")
        assert len(repo.list_all()) == 2

    def test_non_numeric_points_rejected(self):
        repo = _setup()
        with pytest.raises(ValidationError, match="loyalty points"):
            AddCustomerHandler(repo).handle("Carol", "c@x.test", "1", loyalty_points="many")


class TestUpdateCustomer:

    def test_updates_only_given_fields(self):
        repo = _setup()
        customer = UpdateCustomerHandler(repo).handle("2", phone="555-9999", loyalty_points="41")
        assert customer.phone == "555-9999"
        assert customer.loyalty_points == 41
        assert customer.email == "bob@cafe.test"

    def test_empty_birthday_clears_it(self):
        repo = _setup()
        UpdateCustomerHandler(repo).handle("1", birthday="")
        assert repo.get_by_id("1").birthday is None

    def test_blank_name_rejected_without_change(self):
        repo = _setup()
        with pytest.raises(ValidationError):
            UpdateCustomerHandler(repo).handle("1", name=" ", loyalty_points="5")
        c = repo.get_by_id("1")
        assert (c.name, c.loyalty_points) == ("Alice Smith", 0)

    def test_unknown_customer(self):
        with pytest.raises(CustomerNotFoundError):
            UpdateCustomerHandler(_setup()).handle("9", name="X")


class TestDeleteAndFindCustomers:

    def test_delete(self):
        repo = _setup()
        DeleteCustomerHandler(repo).handle("1")
        assert repo.get_by_id("1") is None

    def test_delete_unknown(self):
        with pytest.raises(CustomerNotFoundError):
            DeleteCustomerHandler(_setup()).handle("9")

    def test_search_by_email_fragment(self):
        dtos = FindCustomersHandler(_setup()).handle("cafe.test")
        assert [d.name for d in dtos] == ["Bob Jones"]

    def test_birthday_flag(self):
        dtos = FindCustomersHandler(_setup()).handle(today=date(2025, 3, 14))
        assert [(d.name, d.birthday_today) for d in dtos] == [
            ("Alice Smith", True),
            ("Bob Jones", False),
        ]
        assert dtos[0].birthday == "1990-03-14"
