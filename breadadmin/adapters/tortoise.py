# -*- coding: utf-8 -*-
"""
tortoise

Tortoise ORM backend for BREAD controllers.

:class:`Adapter` wraps the handful of Tortoise calls that query composition,
record loading and persistence need, so controllers never import the ORM
directly.

Version:0.1.0
Author: Timur Kady
Email: timurkady@yandex.com
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable

from pypika_tortoise.enums import Matching, SqlTypes
from pypika_tortoise.functions import Cast, Upper
from pypika_tortoise.terms import BasicCriterion
from tortoise import Tortoise
from tortoise.exceptions import ConfigurationError, DoesNotExist, FieldError, IntegrityError
from tortoise.expressions import Q
from tortoise.fields.relational import RelationalField, ReverseRelation
from tortoise.models import Model
from tortoise.query_utils import QueryModifier, get_joins_for_related_field
from tortoise.queryset import QuerySet

if TYPE_CHECKING:  # pragma: no cover
    from tortoise.expressions import ResolveContext


class RawContains(Q):
    """Case-insensitive ``LIKE '%term%'`` on a ``relation__column`` path.

    Unlike ``__icontains`` the term is not escaped, so ``%`` and ``_`` inside
    it keep their wildcard meaning.
    """

    __slots__ = ("path", "term")

    def __init__(self, path: str, term: Any) -> None:
        super().__init__()
        self.path = path
        self.term = term

    def __bool__(self) -> bool:
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RawContains):
            return False
        return (self.path, self.term, self._is_negated) == (
            other.path,
            other.term,
            other._is_negated,
        )

    def __invert__(self) -> RawContains:
        node = RawContains(self.path, self.term)
        node._is_negated = not self._is_negated
        return node

    def __repr__(self) -> str:
        return f"RawContains({self.path!r}, {self.term!r})"

    def resolve(self, resolve_context: ResolveContext) -> QueryModifier:
        model, table = resolve_context.model, resolve_context.table
        *relations, column = self.path.split("__")
        joins = []
        for name in relations:
            relation = model._meta.fields_map.get(name)
            if not isinstance(relation, RelationalField):
                raise FieldError(f"{name!r} is not a relation of {model.__name__}")
            joins.extend(get_joins_for_related_field(table, relation, name))
            table = joins[-1][0]
            model = relation.related_model
        db_column = model._meta.fields_db_projection.get(column)
        if db_column is None:
            raise FieldError(f"Unknown column {column!r} on {model.__name__}")
        pattern = Upper(f"%{self.term}%")
        criterion = BasicCriterion(
            Matching.like, Upper(Cast(table[db_column], SqlTypes.VARCHAR)), pattern
        )
        modifier = QueryModifier(where_criterion=criterion, joins=joins)
        return ~modifier if self._is_negated else modifier


class Adapter:
    """Stateless bridge between BREAD controllers and Tortoise ORM."""

    name = "tortoise"
    QuerySet = QuerySet
    Model = Model
    Q = Q
    DoesNotExist = DoesNotExist
    IntegrityError = IntegrityError

    def get_model(self, dotted: str) -> type[Model] | None:
        """Resolve ``app.Model`` against the initialized Tortoise apps.

        Returns ``None`` when either the app label or the model is unknown.
        """
        app_label, _, model_name = dotted.rpartition(".")
        return Tortoise.apps.get(app_label, {}).get(model_name)

    def get_model_for_table(self, table: str) -> type[Model] | None:
        """Find the registered model whose ``db_table`` is ``table``."""
        for registry in Tortoise.apps.values():
            for candidate in registry.values():
                if candidate._meta.db_table == table:
                    return candidate
        return None

    def get_columns(self, table: str) -> list[str]:
        """List attribute names stored in ``table``.

        Foreign keys appear under their ``<name>_id`` attribute and an
        unmapped table gives ``[]``.
        """
        model = self.get_model_for_table(table)
        return list(model._meta.fields_db_projection) if model is not None else []

    def get_pk_attr(self, model: type[Any]) -> str:
        """Primary key attribute of ``model``, ``id`` for plain classes."""
        meta = getattr(model, "_meta", None)
        if meta is None:
            return "id"
        return getattr(meta, "pk_attr", "id")

    def coerce_pk(self, model: type[Any], value: Any) -> Any:
        """Cast a path segment to the primary key type, leaving junk untouched."""
        try:
            return model._meta.pk.to_python_value(value)
        except (TypeError, ValueError):
            return value

    def has_relation(self, obj: Any, name: str) -> bool:
        """Whether ``name`` is a relation loadable with ``fetch_related``."""
        meta = getattr(obj, "_meta", None)
        return name in getattr(meta, "fetch_fields", ())

    def is_record(self, obj: Any) -> bool:
        return isinstance(obj, Model)

    def is_collection(self, obj: Any) -> bool:
        # fetched reverse and many-to-many relations
        return isinstance(obj, (ReverseRelation, list, tuple))

    def all(self, model: type[Model] | str) -> QuerySet:
        """Unfiltered queryset over ``model`` given as class or dotted path.

        Raises ``ConfigurationError`` when a dotted path does not resolve.
        """
        resolved = self.get_model(model) if isinstance(model, str) else model
        if resolved is None:
            raise ConfigurationError(f"Unknown model {model!r}")
        return resolved.all()

    def filter(self, qs: QuerySet, *conditions: Q, **lookups: Any) -> QuerySet:
        """Narrow ``qs`` by ``Q`` conditions and keyword lookups."""
        return qs.filter(*conditions, **lookups)

    def contains(self, path: str, term: Any) -> Q:
        """Unescaped case-insensitive ``LIKE '%term%'`` on ``path``."""
        return RawContains(path, term)

    def contains_any(self, paths: Iterable[str], term: Any) -> Q | None:
        """OR of :meth:`contains` over ``paths``; ``None`` when there are none."""
        branches = [self.contains(path, term) for path in paths]
        return Q(*branches, join_type=Q.OR) if branches else None

    def distinct(self, qs: QuerySet) -> QuerySet:
        return qs.distinct()

    def order_by(self, qs: QuerySet, *ordering: str) -> QuerySet:
        """Sort ``qs``; a leading ``-`` on a column means descending."""
        return qs.order_by(*ordering)

    def limit(self, qs: QuerySet, limit: int) -> QuerySet:
        return qs.limit(limit)

    def offset(self, qs: QuerySet, offset: int) -> QuerySet:
        return qs.offset(offset)

    async def count(self, qs: QuerySet) -> int:
        return await qs.count()

    async def fetch_all(self, qs: QuerySet) -> list[Model]:
        return list(await qs)

    async def get_or_none(self, model: type[Model], **lookups: Any) -> Model | None:
        return await model.get_or_none(**lookups)

    async def fetch_related(self, obj: Model, *relations: str) -> None:
        """Load ``relations`` onto ``obj`` in place."""
        await obj.fetch_related(*relations)

    async def save(self, obj: Model, update_fields: Iterable[str] | None = None) -> Model:
        await obj.save(update_fields=update_fields)
        return obj

    async def delete(self, obj: Model) -> None:
        await obj.delete()

# The End
