"""Repository Registry for looking up repositories by name.

This module provides a registry pattern for repositories, allowing explicit
registration, lookup, and lazy creation through the repository factory.
"""

from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Tuple

from portfolio.interfaces.repository import IRepository

if TYPE_CHECKING:
    from portfolio.factories.repository_factory import RepositoryFactory


class RepositoryRegistry:
    """Registry to manage named repositories"""

    def __init__(self, factory: Optional["RepositoryFactory"] = None):
        self._repositories: Dict[str, IRepository] = {}
        self._factory = factory

    def register(self, name: str, repository: IRepository) -> None:
        """Register a repository, replacing any previous one under the name"""
        self._repositories[name] = repository

    def get(self, name: str) -> Optional[IRepository]:
        """Get repository by name"""
        return self._repositories.get(name)

    def has(self, name: str) -> bool:
        return name in self._repositories

    def remove(self, name: str) -> bool:
        """Remove a repository"""
        if name in self._repositories:
            del self._repositories[name]
            return True
        return False

    def clear(self) -> None:
        self._repositories.clear()

    def list(self) -> List[str]:
        """List all registered names"""
        return list(self._repositories.keys())

    def entries(self) -> List[Tuple[str, IRepository]]:
        return list(self._repositories.items())

    def get_or_create(self, name: str) -> IRepository:
        """Get a registered repository, building it through the factory on first use.

        Raises:
            UnknownEntityTypeException: If the name is not registered and the
                factory does not support it
        """
        repository = self._repositories.get(name)
        if repository is None:
            if self._factory is None:
                from portfolio.factories.repository_factory import get_repository_factory

                self._factory = get_repository_factory()
            repository = self._factory.create(name)
            self._repositories[name] = repository
        return repository

    def __len__(self) -> int:
        return len(self._repositories)

    def __contains__(self, name: str) -> bool:
        return name in self._repositories

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._repositories))
