"""Example completion client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseCompletionClient and register the provider in ContentGeneratorFactory.
"""

from typing import ClassVar

from fundintake.content.client_base import BaseCompletionClient


class ExampleClientAdapter(BaseCompletionClient):
    """Returns canned replies keyed by the request's ``user_tag``. No network calls."""

    RESPONSES: ClassVar[dict[str, str]] = {
        "investment-form-tagline": "Payroll infrastructure that pays global teams in minutes.",
        "investment-form-industry-tags": "fintech, b2b, saas",
        "investment-form-business-model-tags": "subscription, b2b, api-based",
    }

    def __init__(self) -> None:
        self.prompts: list[str] = []

    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        prompt: str,
        user_tag: str,
    ) -> str:
        _ = model, temperature, max_tokens
        self.prompts.append(prompt)
        return self.RESPONSES.get(user_tag, "example")
