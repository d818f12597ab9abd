"""Token metadata aggregation and data sources."""

from glbmarket.services.metadata.aggregator import ReadAggregator
from glbmarket.services.metadata.demo import DemoCatalog
from glbmarket.services.metadata.sources import LiveSource, MockSource, TokenDataSource
from glbmarket.services.metadata.uri import normalize_uri

__all__ = [
    "DemoCatalog",
    "LiveSource",
    "MockSource",
    "ReadAggregator",
    "TokenDataSource",
    "normalize_uri",
]
