"""Domain entities for Stockroom.

Entities are pure Python values that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from stockroom.domain.entities.field_spec import FieldSpec, FieldType
from stockroom.domain.entities.product import (
    DEFAULT_IN_STOCK,
    ID_FIELD,
    PRODUCT_FIELDS,
    PRODUCT_SORT_FIELDS,
    SAMPLE_PRODUCTS,
    Record,
)

__all__ = [
    "DEFAULT_IN_STOCK",
    "FieldSpec",
    "FieldType",
    "ID_FIELD",
    "PRODUCT_FIELDS",
    "PRODUCT_SORT_FIELDS",
    "Record",
    "SAMPLE_PRODUCTS",
]
