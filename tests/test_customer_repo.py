"""
test_customer_repo.py
Tests CustomerRepository SQL and row mapping against a scripted fake connection.
"""
from datetime import datetime

import psycopg2
import pytest

from models.customer import Customer
from repositories.customer_repo import CustomerRepository
from utils.errors import NotFoundError

ADA = (1, "Ada", "Lovelace", "555-0100", "regular")
ALAN = (2, "Alan", "Turing", None, "")


def test_all_maps_rows_in_order(fake_db):
    conn = fake_db([ADA, ALAN])
    customers = CustomerRepository().all()

    assert [c.full_name() for c in customers] == ["Ada Lovelace", "Alan Turing"]
    assert customers[0] == Customer(id=1, first_name="Ada", last_name="Lovelace",
                                    phone="555-0100", notes="regular")
    assert "ORDER BY last_name, first_name" in conn.last_sql
    assert conn.released == 1


def test_get_returns_customer(fake_db):
    conn = fake_db([ADA])
    customer = CustomerRepository().get(1)

    assert customer.id == 1
    assert customer.phone == "555-0100"
    assert conn.last_params == (1,)


def test_get_missing_raises_not_found(fake_db):
    conn = fake_db([])
    with pytest.raises(NotFoundError) as exc_info:
        CustomerRepository().get(42)

    assert exc_info.value.status == 404
    assert "No such customer: 42" in str(exc_info.value)
    assert conn.released == 1


def test_search_wraps_term_in_wildcards(fake_db):
    conn = fake_db([ALAN])
    result = CustomerRepository().search("ring")

    assert [c.last_name for c in result] == ["Turing"]
    assert "ILIKE %s" in conn.last_sql
    assert "concat(first_name, ' ', last_name)" in conn.last_sql
    assert conn.last_params == ("%ring%",)


def test_search_empty_string_matches_everything(fake_db):
    conn = fake_db([ADA, ALAN])
    assert len(CustomerRepository().search("")) == 2
    assert conn.last_params == ("%%",)


def test_search_without_matches_returns_empty_list(fake_db):
    fake_db([])
    assert CustomerRepository().search("nobody") == []


def test_top_ten_returns_customers_with_counts(fake_db):
    conn = fake_db([ALAN + (5,), ADA + (2,)])
    top = CustomerRepository().top_ten()

    assert [t["customer"].full_name() for t in top] == ["Alan Turing", "Ada Lovelace"]
    assert [t["reservation_count"] for t in top] == [5, 2]
    assert "ORDER BY reservation_count DESC" in conn.last_sql
    assert "GROUP BY customers.id" in conn.last_sql
    assert conn.last_params == (10,)


def test_top_ten_honours_custom_limit(fake_db):
    conn = fake_db([])
    assert CustomerRepository().top_ten(limit=3) == []
    assert conn.last_params == (3,)


def test_save_new_customer_inserts_and_sets_id(fake_db):
    conn = fake_db([(7,)])
    customer = Customer(first_name="Grace", last_name="Hopper", phone="555-0199")

    saved = CustomerRepository().save(customer)

    assert saved is customer
    assert customer.id == 7
    assert conn.last_sql.startswith("INSERT INTO customers")
    assert conn.last_params == ("Grace", "Hopper", "555-0199", "")
    assert conn.commits == 1


def test_save_existing_customer_updates(fake_db):
    conn = fake_db(1)
    customer = Customer(id=1, first_name="Ada", last_name="King", notes="married")

    CustomerRepository().save(customer)

    assert conn.last_sql.startswith("UPDATE customers")
    assert conn.last_params == ("Ada", "King", None, "married", 1)
    assert conn.commits == 1


def test_update_of_vanished_customer_raises_not_found(fake_db):
    conn = fake_db(0)
    with pytest.raises(NotFoundError):
        CustomerRepository().save(Customer(id=99, first_name="X", last_name="Y"))
    assert conn.rollbacks == 0
    assert conn.released == 1


def test_failed_insert_rolls_back_and_propagates(fake_db):
    conn = fake_db(psycopg2.IntegrityError("null value in column"))
    customer = Customer(first_name="Ada", last_name="Lovelace")

    with pytest.raises(psycopg2.IntegrityError):
        CustomerRepository().save(customer)

    assert customer.id is None
    assert conn.rollbacks == 1
    assert conn.commits == 0
    assert conn.released == 1


def test_get_reservations_queries_by_customer_id(fake_db):
    start = datetime(2024, 3, 5, 19, 30)
    conn = fake_db([(11, 1, start, 4, "window seat")])
    customer = Customer(id=1, first_name="Ada", last_name="Lovelace")

    reservations = CustomerRepository().get_reservations(customer)

    assert [r.id for r in reservations] == [11]
    assert reservations[0].num_guests == 4
    assert "WHERE customer_id = %s" in conn.last_sql
    assert conn.last_params == (1,)
