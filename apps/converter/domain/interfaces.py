from abc import ABC, abstractmethod


class BaseStateStore(ABC):
    @abstractmethod
    def load(self, key: str) -> str | None:
        pass

    @abstractmethod
    def save(self, key: str, value: str) -> None:
        pass
