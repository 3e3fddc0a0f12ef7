from abc import ABC, abstractmethod


class KeyValueStoreError(Exception):
    ...


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:  # noqa: A003
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...
