"""A hybrid sequence/mapping container with gaps and an extended array toolkit.

See README.md for complete documentation and usage examples.
"""

import logging

from hybridarray.equality import coercing, equals, exact
from hybridarray.errors import EmptyCollectionError, HybridArrayError, InvalidArgumentError
from hybridarray.hybridarray import GAP, STOP, hybridarray

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "GAP",
    "STOP",
    "EmptyCollectionError",
    "HybridArrayError",
    "InvalidArgumentError",
    "coercing",
    "equals",
    "exact",
    "hybridarray",
]
