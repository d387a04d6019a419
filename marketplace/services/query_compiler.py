"""
Compile a FilterSpec into a data query and its matching count query.

Both queries come from the same predicate list, so the reported total always
agrees with what paging through the data query yields. User input only ever
reaches the database as bound parameters.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, NamedTuple, Sequence, Tuple

from sqlalchemy import Select, func, or_, select

from marketplace.models.merchant import Merchant
from marketplace.models.product import Product
from marketplace.schemas.listing import FilterSpec
from marketplace.services.filter_builder import ENTITY_MERCHANT, ENTITY_PRODUCT
from marketplace.utils.exceptions import ConfigurationError
from marketplace.utils.validators import LIKE_ESCAPE_CHAR, contains_pattern

ACTIVE = "active"


@dataclass(frozen=True)
class EntitySchema:
    """How one entity kind is selected, filtered and ordered."""

    kind: str
    root: type
    columns: Callable[[], Sequence]
    joins: Callable[[], Sequence[Tuple]]
    base_predicates: Callable[[], List]
    category_column: Callable[[], object]
    search_columns: Callable[[], Sequence]
    ordering: Callable[[], Sequence]


class CompiledListing(NamedTuple):
    data_query: Select
    count_query: Select


PRODUCT_SCHEMA = EntitySchema(
    kind=ENTITY_PRODUCT,
    root=Product,
    columns=lambda: (
        Product,
        Merchant.name.label("merchant_name"),
        Merchant.logo.label("merchant_logo"),
        Merchant.rating.label("merchant_rating"),
        Merchant.is_dropx.label("is_dropx"),
    ),
    joins=lambda: ((Merchant, Product.merchant_id == Merchant.id),),
    base_predicates=lambda: [Product.status == ACTIVE, Merchant.status == ACTIVE],
    category_column=lambda: Product.category,
    search_columns=lambda: (Product.name, Product.description, Product.tags),
    ordering=lambda: (
        Product.featured.desc(),
        Product.rating.desc(),
        Product.created_at.desc(),
        Product.id.desc(),
    ),
)

MERCHANT_SCHEMA = EntitySchema(
    kind=ENTITY_MERCHANT,
    root=Merchant,
    columns=lambda: (Merchant,),
    joins=lambda: (),
    base_predicates=lambda: [Merchant.status == ACTIVE],
    category_column=lambda: Merchant.category,
    search_columns=lambda: (Merchant.name, Merchant.description, Merchant.category),
    ordering=lambda: (
        Merchant.rating.desc(),
        Merchant.is_dropx.desc(),
        Merchant.created_at.desc(),
        Merchant.id.desc(),
    ),
)

ENTITY_SCHEMAS: Dict[str, EntitySchema] = {
    PRODUCT_SCHEMA.kind: PRODUCT_SCHEMA,
    MERCHANT_SCHEMA.kind: MERCHANT_SCHEMA,
}


def get_schema(entity_kind: str) -> EntitySchema:
    try:
        return ENTITY_SCHEMAS[entity_kind]
    except KeyError:
        raise ConfigurationError(f"Unknown entity kind: {entity_kind!r}") from None


def build_predicates(schema: EntitySchema, spec: FilterSpec) -> List:
    predicates = list(schema.base_predicates())

    if spec.category:
        predicates.append(schema.category_column() == spec.category)

    if spec.search:
        pattern = contains_pattern(spec.search)
        predicates.append(
            or_(
                *(
                    column.ilike(pattern, escape=LIKE_ESCAPE_CHAR)
                    for column in schema.search_columns()
                )
            )
        )

    return predicates


def _with_joins(query: Select, schema: EntitySchema) -> Select:
    for target, onclause in schema.joins():
        query = query.join(target, onclause)
    return query


def compile_listing(entity_kind: str, spec: FilterSpec) -> CompiledListing:
    schema = get_schema(entity_kind)
    predicates = build_predicates(schema, spec)

    data_query = _with_joins(
        select(*schema.columns()).select_from(schema.root), schema
    )
    data_query = (
        data_query.where(*predicates)
        .order_by(*schema.ordering())
        .limit(spec.limit)
        .offset(spec.offset)
    )

    count_query = _with_joins(
        select(func.count()).select_from(schema.root), schema
    ).where(*predicates)

    return CompiledListing(data_query=data_query, count_query=count_query)


def compile_category_counts() -> Select:
    """Active products from active merchants, grouped by category."""
    schema = PRODUCT_SCHEMA
    product_count = func.count(Product.id).label("product_count")
    query = _with_joins(
        select(Product.category, product_count).select_from(Product), schema
    )
    return (
        query.where(*schema.base_predicates(), Product.category.isnot(None))
        .group_by(Product.category)
        .order_by(product_count.desc(), Product.category.asc())
    )
