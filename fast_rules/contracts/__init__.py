"""Contract classes and abstract interfaces.

Exported so they can be imported directly from :mod:`fast_rules`.
"""

from .schema_provider import SchemaProvider

__all__ = [
    "SchemaProvider",
]
