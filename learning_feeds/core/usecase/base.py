from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

OutputT = TypeVar("OutputT")


class BaseUseCase(ABC, Generic[OutputT]):
    @abstractmethod
    async def execute(self, *args: Any, **kwargs: Any) -> OutputT:
        ...
