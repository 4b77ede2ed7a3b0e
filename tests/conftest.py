"""Pytest configuration and fixtures for docschema tests"""
import pytest
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from infer import SchemaParser


@pytest.fixture
def pet_documents():
    """Two pets, the second without a type"""
    return [
        {"name": "Nori", "type": "Cat"},
        {"name": "Rey"},
    ]


@pytest.fixture
def member_document():
    """A fan club member as exported by mongoexport"""
    return """{
        "_id": {"$oid": "50319491fe4dce143835c552"},
        "membership_status": "ACTIVE",
        "name": "Ellie J Clarke",
        "gender": "male",
        "age": 36,
        "phone_no": "+19786213180",
        "last_login": {"$date": "2014-01-31T22:26:33.000Z"},
        "address": {
            "city": "El Paso, Texas",
            "street": "133 Aloha Ave",
            "postal_code": 50017,
            "country": "USA",
            "location": {
                "type": "Point",
                "coordinates": [-73.4446279457308, 40.89674015263909]
            }
        },
        "favorite_feature": "Auth",
        "email": "corefinder88@hotmail.com"
    }"""


@pytest.fixture
def order_documents():
    """Orders with nested customers and arrays of line items"""
    return [
        {
            "order_id": 1,
            "customer": {"name": "Alice", "tier": "gold"},
            "items": [{"sku": "A", "qty": 1}, {"sku": "B", "qty": 2}],
            "tags": ["new", "web"],
        },
        {
            "order_id": 2,
            "customer": {"name": "Bob"},
            "items": [{"sku": "A", "qty": 5, "discount": 0.1}],
            "tags": ["web"],
        },
        {
            "order_id": 3,
            "items": [],
            "tags": [],
        },
    ]


@pytest.fixture
def parser_factory():
    """Factory to create a SchemaParser already fed with documents"""
    def _create_parser(documents, merge_numeric=False, finalize=True):
        parser = SchemaParser(merge_numeric=merge_numeric)
        for document in documents:
            parser.observe(document)
        if finalize:
            parser.finalize()
        return parser
    return _create_parser
