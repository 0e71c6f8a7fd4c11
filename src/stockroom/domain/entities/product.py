"""Product records and their schema.

Products are plain mappings (``Record``) so the query engine and the
statistics aggregator can work on any snapshot without conversion.
The schema below is the closed set of fields accepted from clients;
anything else in a request body is ignored.
"""

from typing import Any

from stockroom.domain.entities.field_spec import FieldSpec, FieldType

Record = dict[str, Any]

ID_FIELD = "id"

PRODUCT_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec(
        name="name",
        type=FieldType.TEXT,
        required=True,
        trim=True,
        label="Name",
    ),
    FieldSpec(
        name="description",
        type=FieldType.TEXT,
        required=True,
        trim=True,
        label="Description",
        message="Description is required and must be a string",
    ),
    FieldSpec(
        name="price",
        type=FieldType.NUMBER,
        required=True,
        min=0,
        label="Price",
    ),
    FieldSpec(
        name="category",
        type=FieldType.TEXT,
        required=True,
        trim=True,
        lowercase=True,
        label="Category",
    ),
    FieldSpec(
        name="inStock",
        type=FieldType.BOOLEAN,
        label="inStock",
    ),
)

# Fields a client may sort by
PRODUCT_SORT_FIELDS = frozenset({ID_FIELD} | {spec.name for spec in PRODUCT_FIELDS})

DEFAULT_IN_STOCK = True

SAMPLE_PRODUCTS: tuple[Record, ...] = (
    {
        "id": "1",
        "name": "Laptop",
        "description": "High-performance laptop with 16GB RAM",
        "price": 1200,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "2",
        "name": "Smartphone",
        "description": "Latest model with 128GB storage",
        "price": 800,
        "category": "electronics",
        "inStock": True,
    },
    {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    },
    {
        "id": "4",
        "name": "Desk Chair",
        "description": "Ergonomic office chair with lumbar support",
        "price": 250,
        "category": "furniture",
        "inStock": True,
    },
    {
        "id": "5",
        "name": "Headphones",
        "description": "Noise-canceling wireless headphones",
        "price": 150,
        "category": "electronics",
        "inStock": True,
    },
)
