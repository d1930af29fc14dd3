"""
Persistence substrate and the typed collection adapter on top of it.

A store holds named collections, each an ordered list of plain dicts, and
is read and written a whole collection at a time.
"""

import copy
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar, Union

import yaml

from .errors import StorageError
from .logger import get_logger
from .notifier import Notifier

logger = get_logger(__name__)

T = TypeVar("T")


class YamlStore:
    """One YAML file per collection inside a data directory."""

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        return self.data_dir / f"{key}.yaml"

    def read(self, key: str) -> List[Dict[str, Any]]:
        path = self.path_for(key)
        if not path.exists():
            return []
        try:
            with open(path, "r", encoding="utf-8") as fp:
                data = yaml.safe_load(fp)
        except (OSError, yaml.YAMLError) as e:
            raise StorageError(f"Could not read {path}: {e}") from e
        if data is None:
            return []
        if not isinstance(data, list):
            raise StorageError(f"{path} does not contain a list")
        return data

    def write(self, key: str, items: List[Dict[str, Any]]) -> None:
        """
        Replace the collection file.

        The data is written to a temporary file first and moved over the
        old one, so a failed write leaves the previous contents in place.
        """
        path = self.path_for(key)
        tmp_name = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.data_dir, suffix=".tmp", delete=False
            ) as fp:
                tmp_name = fp.name
                yaml.safe_dump(
                    items,
                    fp,
                    default_flow_style=False,
                    allow_unicode=True,
                    sort_keys=False,
                    width=120,
                )
            os.replace(tmp_name, path)
        except (OSError, yaml.YAMLError) as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Could not write {path}: {e}") from e


class MemoryStore:
    """In-process store for tests and throwaway sessions."""

    def __init__(self, data: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.data = copy.deepcopy(data) if data else {}

    def read(self, key: str) -> List[Dict[str, Any]]:
        return copy.deepcopy(self.data.get(key, []))

    def write(self, key: str, items: List[Dict[str, Any]]) -> None:
        self.data[key] = copy.deepcopy(items)


class Collection(Generic[T]):
    """
    Typed view of one collection in a store.

    load() never raises: a failed read or a record that cannot be parsed
    posts a notice and yields an empty list. save() rewrites the whole
    collection and reports failure through its return value.
    """

    def __init__(
        self,
        store,
        key: str,
        parse: Callable[[Dict[str, Any]], T],
        serialize: Callable[[T], Dict[str, Any]],
        notifier: Optional[Notifier] = None,
    ):
        self.store = store
        self.key = key
        self.parse = parse
        self.serialize = serialize
        self.notifier = notifier or Notifier()

    def load(self) -> List[T]:
        try:
            return [self.parse(item) for item in self.store.read(self.key)]
        except (StorageError, TypeError, ValueError, AttributeError) as e:
            logger.error("Error getting items from %s: %s", self.key, e)
            self.notifier.error(
                "Error", f"Failed to load data from storage. ({self.key})"
            )
            return []

    def save(self, records: List[T]) -> bool:
        try:
            self.store.write(self.key, [self.serialize(r) for r in records])
        except (StorageError, TypeError, ValueError) as e:
            logger.error("Error saving items to %s: %s", self.key, e)
            self.notifier.error(
                "Error", f"Failed to save data to storage. ({self.key})"
            )
            return False
        return True
