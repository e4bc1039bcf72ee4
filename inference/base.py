from abc import ABC, abstractmethod


class CompletionError(Exception):
    """Completion could not be produced."""
    pass


class UpstreamError(CompletionError):
    """Completion service answered with a non-success HTTP status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"OpenAI {status_code}")


class CompletionBackend(ABC):
    """
    Abstract completion boundary.
    The webhook depends ONLY on this interface.
    """

    @abstractmethod
    async def complete(self, topic: str) -> str:
        """Return the trimmed generated text for ``topic`` ("" if none)."""
        raise NotImplementedError
