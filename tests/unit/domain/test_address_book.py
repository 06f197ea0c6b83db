"""Tests for the default-address invariant kept by AddressBook."""

from datetime import timedelta
from uuid import uuid4

import pytest

from core.domain.clock import utcnow
from core.domain.entities.address import Address
from core.domain.enums import AddressType
from core.domain.services.address_book import AddressBook


def make_address(user_id, name="Jane Doe", age_days=0, is_default=False):
    address = Address.create(
        user_id=user_id,
        full_name=name,
        address_line1="12 Harbour Street",
        city="Lisbon",
        postal_code="1100-001",
        country="Portugal",
        country_code=" pt ",
    )
    address.created_at = utcnow() - timedelta(days=age_days)
    address.is_default = is_default
    return address


def defaults(book: AddressBook):
    return [a for a in book.addresses if a.is_default]


class TestAddressEntity:
    def test_create_normalizes_fields(self):
        address = make_address(uuid4())

        assert address.country_code == "PT"
        assert address.type == AddressType.SHIPPING
        assert address.is_default is False
        assert address.updated_at is None

    def test_required_field_cannot_be_blank(self):
        with pytest.raises(ValueError, match="City cannot be empty"):
            Address.create(
                user_id=uuid4(),
                full_name="Jane Doe",
                address_line1="12 Harbour Street",
                city="   ",
                postal_code="1100-001",
                country="Portugal",
                country_code="PT",
            )

    def test_formatted_string(self):
        address = make_address(uuid4())
        address.address_line2 = "Flat 3"
        address.state = "Lisboa"

        assert address.to_formatted_string() == (
            "Jane Doe\n12 Harbour Street\nFlat 3\nLisbon, Lisboa 1100-001\nPortugal"
        )


class TestAddressBook:
    def test_first_address_becomes_default(self):
        user_id = uuid4()
        book = AddressBook(user_id, [])

        first = book.add(make_address(user_id))

        assert first.is_default is True
        assert book.changed == [first]

    def test_second_address_is_not_default_unless_requested(self):
        user_id = uuid4()
        existing = make_address(user_id, age_days=3, is_default=True)
        book = AddressBook(user_id, [existing])

        second = book.add(make_address(user_id, name="Work"))

        assert second.is_default is False
        assert defaults(book) == [existing]

    def test_add_as_default_clears_previous_default(self):
        user_id = uuid4()
        existing = make_address(user_id, age_days=3, is_default=True)
        book = AddressBook(user_id, [existing])

        second = book.add(make_address(user_id, name="Work"), make_default=True)

        assert defaults(book) == [second]
        assert existing in book.changed

    def test_add_rejects_other_users_address(self):
        book = AddressBook(uuid4(), [])

        with pytest.raises(ValueError):
            book.add(make_address(uuid4()))

    def test_undefault_promotes_oldest_other_address(self):
        user_id = uuid4()
        current = make_address(user_id, name="Home", age_days=1, is_default=True)
        oldest = make_address(user_id, name="Parents", age_days=10)
        newer = make_address(user_id, name="Work", age_days=5)
        book = AddressBook(user_id, [current, newer, oldest])

        book.update(current.id, make_default=False)

        assert defaults(book) == [oldest]

    def test_undefault_only_address_keeps_it_default(self):
        user_id = uuid4()
        only = make_address(user_id, is_default=True)
        book = AddressBook(user_id, [only])

        book.update(only.id, make_default=False)

        assert only.is_default is True

    def test_set_default_is_noop_for_current_default(self):
        user_id = uuid4()
        current = make_address(user_id, is_default=True)
        book = AddressBook(user_id, [current])

        book.set_default(current.id)

        assert book.changed == []

    def test_set_default_moves_flag(self):
        user_id = uuid4()
        current = make_address(user_id, age_days=2, is_default=True)
        other = make_address(user_id, name="Work")
        book = AddressBook(user_id, [current, other])

        book.set_default(other.id)

        assert defaults(book) == [other]

    def test_remove_default_promotes_oldest_remaining(self):
        user_id = uuid4()
        current = make_address(user_id, name="Home", age_days=1, is_default=True)
        oldest = make_address(user_id, name="Parents", age_days=10)
        newer = make_address(user_id, name="Work", age_days=5)
        book = AddressBook(user_id, [current, oldest, newer])

        book.remove(current.id)

        assert book.removed is current
        assert defaults(book) == [oldest]

    def test_remove_last_address_leaves_no_default(self):
        user_id = uuid4()
        only = make_address(user_id, is_default=True)
        book = AddressBook(user_id, [only])

        book.remove(only.id)

        assert book.addresses == []
        assert book.changed == []

    def test_unknown_address_raises_key_error(self):
        book = AddressBook(uuid4(), [])

        with pytest.raises(KeyError):
            book.set_default(uuid4())
