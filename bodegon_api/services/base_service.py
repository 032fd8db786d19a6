"""
Base Service Classes.

Provides the shared lifecycle for every auditable entity kind:
- Data access via Repository
- Lifecycle guard (delete/restore transitions) and actor stamps
- Validation hooks for uniqueness and integrity rules
- DTO transformation with batched actor expansion

Architecture:
    Router (thin) → Service (business logic) → Repository (data access) → Model

Usage:
    from bodegon_api.services.base_service import BaseCRUDService

    class IngredientService(BaseCRUDService[Ingredient, IngredientOutput]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                model=Ingredient,
                output_schema=IngredientOutput,
                entity_name="Ingredient",
                search_fields=(Ingredient.name,),
            )
"""

from __future__ import annotations

from typing import Any, Generic, Sequence, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from bodegon_api.models import Base
from bodegon_api.services.crud.query import (
    ActorLoader,
    column_values,
    page_metadata,
    paginate,
    search_filter,
)
from bodegon_api.services.crud.repository import SoftDeleteRepository
from bodegon_api.services.crud.soft_delete import (
    ensure_live,
    restore_entity,
    set_created_by,
    set_updated_by,
    soft_delete,
)
from shared.config.logging import get_logger
from shared.infrastructure.db import safe_commit
from shared.utils.admin_schemas import ListQuery
from shared.utils.exceptions import DuplicateNameError, NotFoundError
from shared.utils.schemas import Page
from shared.utils.validators import validate_id

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


class BaseService(Generic[ModelT]):
    """
    Base service for domain operations.

    Holds the session and a repository for the service's model.
    """

    def __init__(self, db: Session, model: Type[ModelT]):
        self._db = db
        self._model = model
        self._repo = SoftDeleteRepository(model, db)

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db

    @property
    def repo(self) -> SoftDeleteRepository[ModelT]:
        """Repository for data access."""
        return self._repo


class BaseCRUDService(BaseService[ModelT], Generic[ModelT, OutputT]):
    """
    Base service for auditable entities.

    Every mutating method takes the resolved actor id and writes exactly one
    audit stamp. Validation hooks run before any write.
    """

    # Fields an update may set to null; other nulls in a patch are ignored
    nullable_fields: frozenset[str] = frozenset()

    def __init__(
        self,
        db: Session,
        model: Type[ModelT],
        output_schema: Type[OutputT],
        entity_name: str,
        *,
        search_fields: Sequence[Any] = (),
    ):
        super().__init__(db, model)
        self._output_schema = output_schema
        self._entity_name = entity_name
        self._search_fields = tuple(search_fields)

    @property
    def entity_name(self) -> str:
        """Human-readable entity name for messages."""
        return self._entity_name

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_entity(
        self,
        entity_id: str,
        *,
        live_only: bool = False,
        options: list[Any] | None = None,
    ) -> ModelT:
        """
        Load an entity by id, deleted or not unless live_only is set.

        Raises:
            InvalidIdError: If the id is malformed.
            NotFoundError: If no such entity exists.
        """
        entity_id = validate_id(entity_id, self._entity_name)
        entity = self._repo.find_by_id(entity_id, live_only=live_only, options=options)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    def get(self, entity_id: str, *, expand: bool = False, live_only: bool = False) -> OutputT:
        """
        Get one entity as output DTO.

        Args:
            entity_id: Entity id.
            expand: Expand the kind's references (category, subcategories, ...).
            live_only: Treat deleted entities as not found.
        """
        options = self._expand_options() if expand else None
        entity = self.get_entity(entity_id, live_only=live_only, options=options)
        return self.to_output(entity, expand=expand)

    def list(self, query: ListQuery) -> Page[OutputT]:
        """
        List one page of entities, newest first.

        Deleted rows are excluded unless query.include_deleted is set.
        """
        expand = self._wants_expand(query)
        stmt = self._list_statement(query)
        if expand:
            stmt = stmt.options(*self._expand_options()).execution_options(
                populate_existing=True
            )
        items, total = paginate(self._db, stmt, query)
        return Page[self._output_schema](
            items=self.to_outputs(items, expand=expand),
            **page_metadata(total, query),
        )

    def count(self, *, is_deleted: bool | None = None) -> int:
        return self._repo.count(is_deleted=is_deleted)

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, data: dict[str, Any], actor_id: str | None) -> OutputT:
        """
        Create a new entity stamped with created_by.

        Raises:
            DuplicateNameError / InvalidReferenceError / ...: from _validate_create.
        """
        data = self._validate_create(dict(data))

        columns = self._column_names()
        entity = self._model(**{k: v for k, v in data.items() if k in columns})
        set_created_by(entity, actor_id)
        self._db.add(entity)
        self._before_commit(entity, data)
        safe_commit(self._db)

        logger.info(f"{self._entity_name} created", entity_id=entity.id, actor_id=actor_id)
        return self.to_output(entity)

    def update(self, entity_id: str, data: dict[str, Any], actor_id: str | None) -> OutputT:
        """
        Partially update an entity: only keys present in `data` change.

        Raises:
            NotFoundError: If the entity does not exist.
            AlreadyDeletedError: If the entity is deleted.
        """
        entity = self.get_entity(entity_id)
        ensure_live(entity, self._entity_name)

        data = {
            k: v for k, v in data.items() if v is not None or k in self.nullable_fields
        }
        data = self._validate_update(entity, data)

        for field_name, value in data.items():
            if field_name in self._column_names():
                setattr(entity, field_name, value)

        set_updated_by(entity, actor_id)
        self._before_commit(entity, data)
        safe_commit(self._db)

        logger.info(
            f"{self._entity_name} updated",
            entity_id=entity.id,
            actor_id=actor_id,
            fields=sorted(data),
        )
        return self.to_output(entity)

    def delete(self, entity_id: str, actor_id: str | None) -> OutputT:
        """
        Soft delete an entity.

        Raises:
            NotFoundError: If the entity does not exist.
            AlreadyDeletedError: If it is already deleted.
            HasSubcategoriesError / HasDishesError: from _validate_delete.
        """
        entity = self.get_entity(entity_id)
        ensure_live(entity, self._entity_name)
        self._validate_delete(entity)
        soft_delete(self._db, entity, actor_id, self._entity_name)
        return self.to_output(entity)

    def restore(self, entity_id: str, actor_id: str | None) -> OutputT:
        """
        Restore a soft-deleted entity.

        Raises:
            NotFoundError: If the entity does not exist.
            NotDeletedError: If it is not deleted.
        """
        entity = self.get_entity(entity_id)
        if entity.is_deleted:
            self._validate_restore(entity)
        restore_entity(self._db, entity, actor_id, self._entity_name)
        return self.to_output(entity)

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModelT, *, expand: bool = False) -> OutputT:
        """Convert one entity to its output DTO."""
        return self.to_outputs([entity], expand=expand)[0]

    def to_outputs(self, entities: Sequence[ModelT], *, expand: bool = False) -> list[OutputT]:
        """
        Convert entities to output DTOs.

        Actor stamps and per-kind extras are loaded once for the whole batch.
        """
        if not entities:
            return []
        actors = ActorLoader(self._db).load(entities)
        extras = self._load_extras(entities, expand)
        outputs = []
        for entity in entities:
            data = column_values(entity)
            data.update(actors.stamps(entity))
            data.update(self._output_fields(entity, extras, expand))
            outputs.append(self._output_schema(**data))
        return outputs

    # =========================================================================
    # Query Hooks (override in subclasses)
    # =========================================================================

    def _list_statement(self, query: ListQuery) -> Select:
        """Filtered, ordered select for list(). Override to add kind filters."""
        stmt = self._repo._base_query()
        stmt = self._repo._apply_live_filter(stmt, not query.include_deleted)
        condition = search_filter(self._search_fields, query.search)
        if condition is not None:
            stmt = stmt.where(condition)
        stmt = self._apply_filters(stmt, query)
        return stmt.order_by(self._model.created_at.desc(), self._model.id.desc())

    def _apply_filters(self, stmt: Select, query: ListQuery) -> Select:
        """Entity-specific exact-match filters."""
        return stmt

    def _wants_expand(self, query: ListQuery) -> bool:
        """Whether the query asks for expanded references."""
        return False

    def _expand_options(self) -> list[Any]:
        """Loader options used when references are expanded."""
        return []

    def _load_extras(self, entities: Sequence[ModelT], expand: bool) -> dict[str, Any]:
        """Batch-load data needed by _output_fields for all entities."""
        return {}

    def _output_fields(self, entity: ModelT, extras: dict[str, Any], expand: bool) -> dict[str, Any]:
        """Extra output fields beyond columns and actor stamps."""
        return {}

    # =========================================================================
    # Validation Hooks (override in subclasses)
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Validate and normalize data before create.

        Returns the data to persist.
        """
        return data

    def _validate_update(self, entity: ModelT, data: dict[str, Any]) -> dict[str, Any]:
        """
        Validate and normalize a partial update.

        Returns the data to apply.
        """
        return data

    def _validate_delete(self, entity: ModelT) -> None:
        """Check dependents before delete. Raise to block it."""
        pass

    def _validate_restore(self, entity: ModelT) -> None:
        """Check the entity can come back (parents live, name still free)."""
        pass

    def _before_commit(self, entity: ModelT, data: dict[str, Any]) -> None:
        """Hook to write non-column state (associations) in the same commit."""
        pass

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _column_names(self) -> set[str]:
        return {c.key for c in self._model.__mapper__.column_attrs}

    def _ensure_unique(
        self,
        column: Any,
        value: Any,
        *scope: Any,
        field: str = "name",
        exclude_id: str | None = None,
    ) -> None:
        """
        Raise DuplicateNameError if a live row in scope already has this value.

        Args:
            column: Model column to compare.
            value: Candidate value.
            scope: Extra criteria narrowing the uniqueness scope (e.g. same parent).
            exclude_id: The entity being updated or restored.
        """
        if self._repo.exists_live(column == value, *scope, exclude_id=exclude_id):
            raise DuplicateNameError(self._entity_name, value, field=field)
