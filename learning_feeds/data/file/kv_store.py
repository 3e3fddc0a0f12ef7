import hashlib
from pathlib import Path

import structlog

from learning_feeds.core.repository.kv_store import KeyValueStore, KeyValueStoreError

logger = structlog.get_logger()


class FileKeyValueStore(KeyValueStore):
    """Keeps every key in its own file under the given directory."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    def get(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise KeyValueStoreError(f"failed to read {key=} from {path}") from exc

    def set(self, key: str, value: str) -> None:  # noqa: A003
        path = self._path_for(key)
        tmp_path = path.with_suffix(".tmp")
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(value, encoding="utf-8")
            # replace is atomic, readers never see a half-written value
            tmp_path.replace(path)
        except OSError as exc:
            raise KeyValueStoreError(f"failed to write {key=} to {path}") from exc

        logger.debug("Stored value", key=key, path=str(path), size=len(value))

    def delete(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise KeyValueStoreError(f"failed to delete {key=} at {path}") from exc

    def _path_for(self, key: str) -> Path:
        digest = hashlib.sha1(key.encode("utf-8"), usedforsecurity=False).hexdigest()
        return self._directory / f"{digest}.json"
