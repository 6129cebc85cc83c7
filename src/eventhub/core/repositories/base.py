"""
Repository base interface
=========================

Persistence contract shared by every aggregate repository. Implementations
live outside the core; they store and return whole aggregates.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from eventhub.core.domain.entity import Entity

EntityT = TypeVar("EntityT", bound=Entity)
ItemT = TypeVar("ItemT")

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20


@dataclass(frozen=True)
class Page(Generic[ItemT]):
    """One page of a paginated query plus the total number of matches."""

    items: List[ItemT] = field(default_factory=list)
    total: int = 0

    def __post_init__(self) -> None:
        if self.total < len(self.items):
            raise ValueError(
                f"total ({self.total}) cannot be smaller than the page size ({len(self.items)})"
            )


@dataclass(frozen=True)
class PageRequest:
    """1-based page number and page size."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.limit < 1:
            raise ValueError(f"limit must be >= 1, got {self.limit}")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class Repository(ABC, Generic[EntityT]):
    """
    Abstract CRUD contract for one aggregate type.

    Aggregates are immutable: ``update`` receives the new instance returned
    by a transition and replaces the stored one.
    """

    @abstractmethod
    def find_by_id(self, entity_id: str) -> Optional[EntityT]:
        """
        Find an aggregate by its id.

        Args:
            entity_id: Aggregate identifier

        Returns:
            The aggregate if found, None otherwise
        """

    @abstractmethod
    def create(self, entity: EntityT) -> EntityT:
        """Store a new aggregate and return the stored version."""

    @abstractmethod
    def update(self, entity: EntityT) -> EntityT:
        """Replace the stored aggregate with ``entity``."""

    @abstractmethod
    def delete(self, entity_id: str) -> bool:
        """
        Delete an aggregate.

        Returns:
            True if it existed, False otherwise
        """

    def save(self, entity: EntityT) -> EntityT:
        """Create or update depending on whether ``entity.id`` is already stored."""
        if self.find_by_id(entity.id) is None:
            return self.create(entity)
        return self.update(entity)

    def exists(self, entity_id: str) -> bool:
        return self.find_by_id(entity_id) is not None
