import httpx
import openai

from fundintake.content.client_base import BaseCompletionClient
from fundintake.content.exceptions import ContentError, ContentNetworkError


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion client built on the OpenAI chat API.

    Rate limits and transient errors are retried by the SDK with
    exponential backoff, up to ``max_retries`` times.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        max_retries: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            max_retries=max_retries,
            base_url=base_url,
        )

    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        prompt: str,
        user_tag: str,
    ) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                user=user_tag,
                messages=[{"role": "user", "content": prompt}],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ContentNetworkError(f"AI provider network error: {exc}") from exc
        except openai.RateLimitError as exc:
            if getattr(exc, "code", None) == "insufficient_quota":
                raise ContentError(
                    "AI provider quota exceeded. Please check your plan and billing details."
                ) from exc
            raise ContentNetworkError(f"AI provider rate limit: {exc}") from exc
        except openai.AuthenticationError as exc:
            raise ContentError(f"AI provider authentication failed: {exc}") from exc
        except openai.APIError as exc:
            raise ContentNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ContentError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None or not content.strip():
            raise ContentError("AI returned empty response")
        return content.strip()
