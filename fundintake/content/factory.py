from fundintake.config.settings import Settings
from fundintake.content.example_client_adapter import ExampleClientAdapter
from fundintake.content.generator import ContentGenerator
from fundintake.content.openai_client_adapter import OpenAIClientAdapter


class ContentGeneratorFactory:
    """Creates the configured content generator."""

    SUPPORTED_PROVIDERS = ("example", "openai")

    @classmethod
    def create(cls, settings: Settings) -> ContentGenerator:
        provider = settings.content_provider.lower()
        if provider == "example":
            return ContentGenerator(
                client=ExampleClientAdapter(),
                model="example",
                max_transcript_tokens=settings.content_max_transcript_tokens,
            )
        if provider == "openai":
            if not settings.content_openai_api_key:
                raise ValueError("content_openai_api_key is required for content_provider=openai")
            client = OpenAIClientAdapter(
                api_key=settings.content_openai_api_key,
                timeout_seconds=settings.content_openai_timeout_seconds,
                max_retries=settings.content_openai_max_retries,
            )
            return ContentGenerator(
                client=client,
                model=settings.content_openai_model_name,
                max_transcript_tokens=settings.content_max_transcript_tokens,
            )
        raise ValueError(
            f"Unknown content provider '{provider}'. Choose from: {list(cls.SUPPORTED_PROVIDERS)}"
        )
