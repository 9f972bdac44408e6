"""
Local File Storage Implementation

Each key is stored as one UTF-8 file, <data_dir>/<key>.json, holding
the whole serialized collection.

TRADEOFFS:
- Every save rewrites the file in full (collections are small)
- No locking; a single user runs a single process
- No fsync or atomic rename; a failed write is logged by the caller
"""

from pathlib import Path
from typing import Optional, Union

from studio.services.storage.interface import (
    KeyValueStorageInterface,
    StorageReadError,
    StorageWriteError,
)


class LocalFileStorage(KeyValueStorageInterface):
    """Key-value storage backed by a directory of JSON files."""

    SUFFIX = ".json"

    def __init__(self, data_dir: Union[str, Path]):
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _path_for(self, key: str) -> Path:
        return self._data_dir / f"{key}{self.SUFFIX}"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"Failed to read {path}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(value, encoding="utf-8")
        except OSError as e:
            raise StorageWriteError(f"Failed to write {path}: {e}") from e

    def remove_item(self, key: str) -> bool:
        path = self._path_for(key)
        try:
            path.unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageWriteError(f"Failed to remove {path}: {e}") from e

    def keys(self) -> list[str]:
        if not self._data_dir.is_dir():
            return []
        return sorted(p.stem for p in self._data_dir.glob(f"*{self.SUFFIX}"))

    def describe(self) -> str:
        return f"Arquivos locais em {self._data_dir.resolve()}"
