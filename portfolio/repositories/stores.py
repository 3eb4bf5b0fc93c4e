"""Backing stores a repository loads its collection from.

Stores hand the repository a full list of entities on ``load`` and receive
the full new snapshot on ``save``. Content files are read-only sources: the
JSON store parses them but never writes back.
"""

import json
import logging
from pathlib import Path
from typing import Generic, Iterable, List, Optional, Sequence, Type, TypeVar, Union

import aiofiles
import aiofiles.os
from pydantic import BaseModel, ValidationError

from portfolio.exceptions import StoreException
from portfolio.interfaces.store import IStore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class InMemoryStore(IStore[T], Generic[T]):
    """Store holding a seed list in memory.

    ``save`` keeps the latest snapshot, so a later ``load`` (for example by a
    second repository built on the same store) sees committed changes.
    """

    def __init__(self, seed: Optional[Iterable[T]] = None):
        self._entities: List[T] = list(seed or [])
        self.save_count = 0

    async def load(self) -> List[T]:
        return list(self._entities)

    async def save(self, entities: Sequence[T]) -> None:
        self._entities = list(entities)
        self.save_count += 1
        logger.debug(f"In-memory store saved {len(self._entities)} entities")

    @property
    def snapshot(self) -> List[T]:
        return list(self._entities)


class JsonFileStore(IStore[T], Generic[T]):
    """Store reading a JSON array of entities from a content file.

    Attributes:
        path: Location of the JSON file
        model: Entity model each array item is parsed with

    Example:
        >>> store = JsonFileStore("content/projects.json", Project)
        >>> projects = await store.load()
    """

    def __init__(self, path: Union[str, Path], model: Type[T]):
        self.path = Path(path)
        self.model = model

    async def load(self) -> List[T]:
        """Read and parse the content file.

        Raises:
            StoreException: If the file is missing, is not valid JSON, is not
                a JSON array, or an item does not match the entity model
        """
        if not await aiofiles.os.path.exists(self.path):
            raise StoreException(
                f"Content file not found: {self.path}",
                details={"path": str(self.path)},
            )

        async with aiofiles.open(self.path, mode='r', encoding='utf-8') as f:
            raw = await f.read()

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreException(
                f"Invalid JSON in {self.path}: {e.msg}",
                details={"path": str(self.path), "line": e.lineno},
            ) from e

        if not isinstance(payload, list):
            raise StoreException(
                f"Expected a JSON array in {self.path}",
                details={"path": str(self.path), "type": type(payload).__name__},
            )

        entities = []
        for index, item in enumerate(payload):
            try:
                entities.append(self.model.model_validate(item))
            except ValidationError as e:
                raise StoreException(
                    f"Invalid {self.model.__name__} at index {index} in {self.path}",
                    details={"path": str(self.path), "index": index, "errors": e.errors()},
                ) from e

        logger.debug(f"Loaded {len(entities)} {self.model.__name__} entities from {self.path}")
        return entities

    async def save(self, entities: Sequence[T]) -> None:
        # Content files are never rewritten
        logger.debug(
            f"Skipping write of {len(entities)} {self.model.__name__} entities to {self.path}"
        )
