# tests/conftest.py
import pytest
import os

os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient

# Import app and dependencies
from app.main import app, get_transactions
from app.source import parse_transaction_data

# Records in the same JSON shape as the remote dataset.
# March (any year): ids 1, 2, 3, 4 and 7. Ids 6 and 8 have unusable dates.
SAMPLE_TRANSACTIONS = [
    {
        "id": 1,
        "title": "Fjallraven Foldsack No. 1 Backpack",
        "price": 109.95,
        "description": "Your perfect pack for everyday use and walks in the forest.",
        "category": "men's clothing",
        "image": "https://example.com/images/1.jpg",
        "sold": False,
        "dateOfSale": "2021-03-27T20:29:54+05:30",
    },
    {
        "id": 2,
        "title": "Mens Casual Premium Slim Fit T-Shirts",
        "price": 22.3,
        "description": "Slim-fitting style, contrast raglan long sleeve.",
        "category": "men's clothing",
        "image": "https://example.com/images/2.jpg",
        "sold": True,
        "dateOfSale": "2022-03-05T20:29:54+05:30",
    },
    {
        "id": 3,
        "title": "Solid Gold Petite Micropave",
        "price": 168,
        "description": "Satisfaction Guaranteed. Return or exchange any order within 30 days.",
        "category": "jewelery",
        "image": "https://example.com/images/3.jpg",
        "sold": True,
        "dateOfSale": "2021-03-10",
    },
    {
        "id": 4,
        "title": "WD 2TB Elements Portable External Hard Drive",
        "price": 900,
        "description": "USB 3.0 and USB 2.0 compatibility, fast data transfers.",
        "category": "electronics",
        "image": "https://example.com/images/4.jpg",
        "sold": False,
        "dateOfSale": "2021-03-15T08:00:00+05:30",
    },
    {
        "id": 5,
        "title": "Rain Jacket Women Windbreaker",
        "price": 39.99,
        "description": "Lightweight and perfect for a trip or casual wear.",
        "category": "women's clothing",
        "image": "https://example.com/images/5.jpg",
        "sold": True,
        "dateOfSale": "2021-07-01T10:00:00+05:30",
    },
    {
        "id": 6,
        "title": "Broken Date Speaker",
        "price": 50,
        "description": "Recorded with a date nobody can read.",
        "category": "electronics",
        "image": "https://example.com/images/6.jpg",
        "sold": True,
        "dateOfSale": "not-a-date",
    },
    {
        "id": 7,
        "title": "Samsung 49-Inch Curved Gaming Monitor",
        "price": 999.99,
        "description": "Super ultrawide screen QLED.",
        "category": "electronics",
        "image": "https://example.com/images/7.jpg",
        "sold": True,
        "dateOfSale": "2021-03-21T11:00:00+05:30",
    },
    {
        "id": 8,
        "title": "Undated Ring",
        "price": 10,
        "description": "No sale date at all.",
        "category": "jewelery",
        "image": "https://example.com/images/8.jpg",
        "sold": False,
        "dateOfSale": None,
    },
]

@pytest.fixture(scope="function")
def transactions():
    """A fresh list of validated records for a single test."""
    return parse_transaction_data(SAMPLE_TRANSACTIONS)

@pytest.fixture(scope="function")
def client(transactions):
    """
    Overrides the dataset dependency so no request leaves the test process.
    """
    def get_test_transactions_override():
        return transactions

    app.dependency_overrides[get_transactions] = get_test_transactions_override

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()
