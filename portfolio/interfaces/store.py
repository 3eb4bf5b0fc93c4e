"""
Store interface: where a repository's collection comes from and goes to.
"""

from abc import ABC, abstractmethod
from typing import Generic, List, Sequence, TypeVar

T = TypeVar("T")


class IStore(ABC, Generic[T]):
    """
    Abstract interface for a repository's backing source.

    A repository loads its whole collection once through ``load`` and hands
    the full new snapshot to ``save`` after every mutation. Both are
    suspension points, so a file- or database-backed store can be swapped in
    without changing callers.

    Implementations:
        - InMemoryStore: seeded list kept in memory
        - JsonFileStore: reads a JSON array of entities from disk
    """

    @abstractmethod
    async def load(self) -> List[T]:
        """
        Load every entity.

        Raises:
            StoreException: If the source cannot be read or parsed
        """
        pass

    @abstractmethod
    async def save(self, entities: Sequence[T]) -> None:
        """
        Accept the full collection after a mutation.

        Raises:
            StoreException: If the snapshot cannot be stored
        """
        pass
