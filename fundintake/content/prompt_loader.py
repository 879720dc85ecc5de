from pathlib import Path

from fundintake.content.exceptions import ContentError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(name: str, prompt_dir: Path | None = None) -> str:
    """Load ``<name>_prompt.txt`` from ``prompt_dir`` (the bundled prompts by default).

    Raises:
        ContentError: if the file cannot be read.
    """
    path = (prompt_dir or _DEFAULT_PROMPT_DIR) / f"{name}_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ContentError(f"Failed to load prompt template {path.name}: {exc}") from exc
