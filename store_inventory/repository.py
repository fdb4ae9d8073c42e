"""
Soft-delete aware data access.

Every read or write that goes through this module hides logically
deleted rows unless the caller opts in.  The rule is applied by
``scope_statement``:

* when ``with_deleted`` is true the statement is left alone;
* when the statement's WHERE clause already mentions the model's
  ``deleted_at`` column the caller is deliberately querying deletion
  state, so the statement is left alone;
* otherwise ``deleted_at IS NULL`` is appended for the model's table.

The same rule covers joined/aggregate selects: only the repository's
own table is scoped, joined tables must filter themselves in their ON
clause (see ``queries.join_inventory``).

Repositories for parent collections declare ``cascades``: foreign key
columns on child tables that receive the parent's ``deleted_at`` when
the parent is soft-deleted through ``update_one``.  The parent update
and the cascade are committed together.
"""

import logging
from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar

from sqlalchemy import func, update
from sqlalchemy.sql import visitors
from sqlalchemy.sql.elements import ColumnClause
from sqlmodel import Session, SQLModel, select

from .models import Inventory, Product, Store, parse_id, utcnow

logger = logging.getLogger(__name__)

DELETED_FIELD = "deleted_at"

ModelType = TypeVar("ModelType", bound=SQLModel)


def references_deleted_marker(clause: Any, model: Type[SQLModel]) -> bool:
    """True when ``clause`` mentions ``model``'s ``deleted_at`` column."""
    if clause is None:
        return False
    table_name = model.__table__.name
    for element in visitors.iterate(clause):
        if not isinstance(element, ColumnClause) or element.name != DELETED_FIELD:
            continue
        table = getattr(element, "table", None)
        if table is not None and getattr(table, "name", None) == table_name:
            return True
    return False


def scope_statement(statement, model: Type[SQLModel], with_deleted: bool = False):
    """Add ``deleted_at IS NULL`` for ``model`` unless the caller opted out or filters on it already."""
    if with_deleted or references_deleted_marker(statement.whereclause, model):
        return statement
    return statement.where(getattr(model, DELETED_FIELD).is_(None))


class SoftDeleteRepository(Generic[ModelType]):
    model: Type[ModelType]
    # Child foreign key columns that inherit this model's deletion marker
    cascades: Tuple[Any, ...] = ()

    def __init__(self, session: Session):
        self.session = session

    def select(self, *criteria, with_deleted: bool = False):
        return scope_statement(select(self.model).where(*criteria), self.model, with_deleted)

    def find(self, *criteria, order_by: Sequence[Any] = (), with_deleted: bool = False) -> List[ModelType]:
        statement = self.select(*criteria, with_deleted=with_deleted)
        if order_by:
            statement = statement.order_by(*order_by)
        return list(self.session.exec(statement).all())

    def find_one(self, *criteria, with_deleted: bool = False) -> Optional[ModelType]:
        return self.session.exec(self.select(*criteria, with_deleted=with_deleted)).first()

    def get(self, id: Any, with_deleted: bool = False) -> Optional[ModelType]:
        document_id = parse_id(id)
        if document_id is None:
            return None
        return self.find_one(self.model.id == document_id, with_deleted=with_deleted)

    def ids(self, *criteria, with_deleted: bool = False) -> List[Any]:
        statement = scope_statement(select(self.model.id).where(*criteria), self.model, with_deleted)
        return list(self.session.exec(statement).all())

    def count(self, *criteria, with_deleted: bool = False) -> int:
        statement = scope_statement(
            select(func.count()).select_from(self.model).where(*criteria),
            self.model,
            with_deleted,
        )
        return self.session.exec(statement).one()

    def aggregate(self, statement, with_deleted: bool = False):
        """Run a caller-built (joined, grouped) select rooted at this model."""
        return self.session.exec(scope_statement(statement, self.model, with_deleted))

    def add(self, document: ModelType) -> ModelType:
        self.session.add(document)
        self.session.commit()
        self.session.refresh(document)
        return document

    def update_one(self, *criteria, values: Dict[str, Any], with_deleted: bool = False) -> Optional[ModelType]:
        """Apply ``values`` to the first matching document and return it, or None when nothing matched."""
        document = self.find_one(*criteria, with_deleted=with_deleted)
        if document is None:
            return None

        for key, value in values.items():
            setattr(document, key, value)
        self.session.add(document)

        marker = values.get(DELETED_FIELD)
        if marker is not None:
            self._cascade_deleted(document, marker)

        self.session.commit()
        self.session.refresh(document)
        return document

    def update_many(self, *criteria, values: Dict[str, Any], with_deleted: bool = False) -> int:
        statement = scope_statement(update(self.model).where(*criteria).values(**values), self.model, with_deleted)
        return self.session.execute(statement).rowcount

    def soft_delete(self, *criteria) -> Optional[ModelType]:
        return self.update_one(*criteria, values={DELETED_FIELD: utcnow()})

    def _cascade_deleted(self, document: ModelType, marker: Any) -> None:
        for foreign_key in self.cascades:
            child = foreign_key.class_
            statement = scope_statement(
                update(child).where(foreign_key == document.id).values({DELETED_FIELD: marker}),
                child,
            )
            affected = self.session.execute(statement).rowcount
            logger.info(
                "Cascaded deletion of %s %s to %d %s rows",
                self.model.__name__,
                document.id,
                affected,
                child.__name__,
            )


class StoreRepository(SoftDeleteRepository[Store]):
    model = Store
    cascades = (Inventory.store_id,)

    def by_id_or_slug(self, value: str, with_deleted: bool = False) -> Optional[Store]:
        store_id = parse_id(value)
        if store_id is not None:
            return self.find_one(Store.id == store_id, with_deleted=with_deleted)
        return self.find_one(Store.slug == value.strip().lower(), with_deleted=with_deleted)


class ProductRepository(SoftDeleteRepository[Product]):
    model = Product
    cascades = (Inventory.product_id,)


class InventoryRepository(SoftDeleteRepository[Inventory]):
    model = Inventory

    def for_pair(self, store_id: Any, product_id: Any, with_deleted: bool = False) -> Optional[Inventory]:
        return self.find_one(
            Inventory.store_id == store_id,
            Inventory.product_id == product_id,
            with_deleted=with_deleted,
        )

    def upsert(self, store_id: Any, product_id: Any, values: Dict[str, Any]) -> Inventory:
        """Create or update the row for a (store, product) pair, clearing any deletion marker."""
        inventory = self.for_pair(store_id, product_id, with_deleted=True)
        if inventory is None:
            inventory = Inventory(store_id=store_id, product_id=product_id)

        for key, value in values.items():
            setattr(inventory, key, value)
        inventory.deleted_at = None

        return self.add(inventory)
