import json
import os
import tempfile
from pathlib import Path

from disk_search.errors import IndexStoreError
from disk_search.indexer.file_index import FileIndex
from disk_search.utils.logger import get_logger

logger = get_logger("Store")

SCHEMA_VERSION = 1


class IndexStore:
    """Reads and writes a FileIndex as a single JSON file.

    Saves go to a temporary file next to the target and are renamed into
    place, so readers only ever see a complete file and a failed save leaves
    the previous one untouched. Any failure raises IndexStoreError.
    """

    def __init__(self, index_path):
        self.index_path = Path(index_path)

    def exists(self):
        return self.index_path.is_file()

    def save(self, index):
        """Write the full index to disk, replacing any existing file."""
        payload = {"version": SCHEMA_VERSION, "files": index.files}
        tmp_path = None
        try:
            self.index_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.index_path.name}.", suffix=".tmp", dir=self.index_path.parent
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.index_path)
            tmp_path = None
        except (OSError, TypeError, ValueError) as e:
            raise IndexStoreError(f"Could not save index to {self.index_path}: {e}") from e
        finally:
            if tmp_path is not None:
                _remove_quietly(tmp_path)

        logger.info(f"Saved index with {len(index)} entries to {self.index_path}")

    def load(self):
        """Read the index back from disk."""
        try:
            with open(self.index_path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            raise IndexStoreError(f"Could not load index from {self.index_path}: {e}") from e

        files = _validate_payload(payload, self.index_path)
        logger.info(f"Loaded index with {len(files)} entries from {self.index_path}")
        return FileIndex(files)


def _validate_payload(payload, index_path):
    if not isinstance(payload, dict):
        raise IndexStoreError(f"Index file {index_path} does not contain an object")

    # Files written before versioning carry no version field.
    version = payload.get("version", 1)
    if isinstance(version, bool) or not isinstance(version, int):
        raise IndexStoreError(f"Index file {index_path} has an invalid version: {version!r}")
    if version > SCHEMA_VERSION:
        raise IndexStoreError(
            f"Index file {index_path} has schema version {version}, "
            f"newest supported is {SCHEMA_VERSION}"
        )

    files = payload.get("files")
    if not isinstance(files, dict):
        raise IndexStoreError(f"Index file {index_path} has no 'files' mapping")
    for name, path in files.items():
        if not isinstance(path, str):
            raise IndexStoreError(f"Index file {index_path} has a non-string path for {name!r}")
    return files


def _remove_quietly(path):
    try:
        os.unlink(path)
    except OSError as e:
        logger.debug(f"Could not remove temporary file {path}: {e}")


def save_index(index, location):
    IndexStore(location).save(index)


def load_index(location):
    return IndexStore(location).load()


def index_exists(location):
    return IndexStore(location).exists()
