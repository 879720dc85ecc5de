class ContentError(Exception):
    """Raised when content generation fails."""


class ContentValidationError(ContentError):
    """Raised when the transcript or the generated content is unusable."""


class ContentNetworkError(ContentError):
    """Raised when the AI provider call fails due to network/infrastructure issues.

    Callers may retry.
    """
