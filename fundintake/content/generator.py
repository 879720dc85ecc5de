"""AI-assisted marketing copy for portfolio companies, from pitch transcripts."""

import math
import re
from pathlib import Path

from fundintake.content.client_base import BaseCompletionClient
from fundintake.content.exceptions import ContentValidationError
from fundintake.content.prompt_loader import load_prompt_template
from fundintake.logging.logger import Log

CHARS_PER_TOKEN = 4
MAX_TAGS = 5

COMMON_INDUSTRY_TAGS = (
    "fintech", "healthtech", "edtech", "proptech", "foodtech", "cleantech",
    "b2b", "b2c", "saas", "marketplace", "e-commerce", "social", "gaming",
    "ai", "ml", "blockchain", "crypto", "iot", "cybersecurity", "biotech",
    "hardware", "software", "mobile", "web", "enterprise", "consumer",
    "retail", "healthcare", "education", "finance", "real estate", "logistics",
    "travel", "media", "entertainment", "sports", "fitness", "wellness",
    "automotive", "manufacturing", "energy", "sustainability", "climate",
)

COMMON_BUSINESS_MODEL_TAGS = (
    "b2b", "b2c", "b2b2c", "marketplace", "platform", "saas", "subscription",
    "freemium", "pay-per-use", "transaction-based", "commission", "advertising",
    "affiliate", "licensing", "white-label", "franchise", "direct-sales",
    "e-commerce", "aggregator", "on-demand", "peer-to-peer", "data-monetization",
    "api-based", "managed-service", "channel-partner", "reseller", "enterprise",
    "smb", "consumer", "prosumer", "vertical", "horizontal",
)


def estimate_tokens(text: str) -> int:
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def parse_tags(response: str, max_tags: int = MAX_TAGS) -> list[str]:
    """Split a comma-separated reply into lower-case tags, keeping at most ``max_tags``."""
    tags: list[str] = []
    for raw in response.split(","):
        tag = re.sub(r"\s+", " ", raw).strip().strip(".\"'").lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tags[:max_tags]


class ContentGenerator:
    """Generates a tagline and tag suggestions through a completion client."""

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        model: str,
        max_transcript_tokens: int = 8000,
        prompt_dir: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._max_transcript_tokens = max_transcript_tokens
        self._prompts = {
            name: load_prompt_template(name, prompt_dir)
            for name in ("tagline", "industry_tags", "business_model_tags")
        }

    def generate_tagline(self, transcript: str) -> str:
        self.validate_transcript(transcript)
        prompt = self._prompts["tagline"].format(transcript=transcript)
        reply = self._client.create_completion(
            model=self._model,
            temperature=0.7,
            max_tokens=50,
            prompt=prompt,
            user_tag="investment-form-tagline",
        )
        tagline = reply.strip().strip("\"'")
        if not tagline:
            raise ContentValidationError("No tagline generated. Please try again.")
        Log.info("Tagline generated", length=len(tagline))
        return tagline

    def generate_industry_tags(self, transcript: str) -> list[str]:
        return self._generate_tags(
            transcript,
            kind="industry_tags",
            common_tags=COMMON_INDUSTRY_TAGS,
            temperature=0.5,
        )

    def generate_business_model_tags(self, transcript: str) -> list[str]:
        return self._generate_tags(
            transcript,
            kind="business_model_tags",
            common_tags=COMMON_BUSINESS_MODEL_TAGS,
            temperature=0.5,
        )

    def validate_transcript(self, transcript: object) -> None:
        """Raises ContentValidationError for a missing or over-long transcript."""
        if not isinstance(transcript, str) or not transcript.strip():
            raise ContentValidationError("Transcript is required and must be a string")
        tokens = estimate_tokens(transcript)
        if tokens > self._max_transcript_tokens:
            raise ContentValidationError(
                f"Transcript too long: about {tokens} tokens, "
                f"limit is {self._max_transcript_tokens}"
            )

    def _generate_tags(
        self,
        transcript: str,
        *,
        kind: str,
        common_tags: tuple[str, ...],
        temperature: float,
    ) -> list[str]:
        self.validate_transcript(transcript)
        prompt = self._prompts[kind].format(
            transcript=transcript,
            common_tags=", ".join(common_tags),
        )
        reply = self._client.create_completion(
            model=self._model,
            temperature=temperature,
            max_tokens=100,
            prompt=prompt,
            user_tag=f"investment-form-{kind.replace('_', '-')}",
        )
        tags = parse_tags(reply)
        if not tags:
            raise ContentValidationError(f"Unable to parse {kind.replace('_', ' ')} from response")
        Log.info(f"Generated {kind.replace('_', ' ')}", tags=tags)
        return tags
