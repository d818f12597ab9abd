"""Test data factories using factory_boy.

These factories generate realistic test data for GLB Market models.
"""

from tests.factories.token import ListingFactory, OwnedTokenFactory, TokenRecordFactory

__all__ = [
    "ListingFactory",
    "OwnedTokenFactory",
    "TokenRecordFactory",
]
