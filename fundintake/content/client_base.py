from abc import ABC, abstractmethod


class BaseCompletionClient(ABC):
    """Contract for provider-specific text completion clients."""

    @abstractmethod
    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        prompt: str,
        user_tag: str,
    ) -> str:
        """Return the provider's reply as plain text."""
