from learning_feeds.core.repository.kv_store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:  # noqa: A003
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)
