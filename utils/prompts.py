"""Prompt loading utilities."""

from functools import lru_cache
from pathlib import Path

# Prompts directory
PROMPTS_DIR = Path(__file__).parent.parent / "prompts"


@lru_cache(maxsize=10)
def load_prompt(name: str) -> str:
    """
    Load a prompt template from the prompts directory.

    Args:
        name: Name of the prompt file (without .md extension)

    Returns:
        The prompt template without its trailing newline
    """
    prompt_path = PROMPTS_DIR / f"{name}.md"
    return prompt_path.read_text(encoding="utf-8").rstrip("\n")


def get_system_prompt() -> str:
    """Get the constant system instruction for completions."""
    return load_prompt("system")


def get_user_prompt(file_content: str, language: str, line_prefix: str) -> str:
    """
    Get the user prompt with the document context.

    Args:
        file_content: Full text of the document
        language: Language identifier of the document
        line_prefix: Text of the cursor's line up to the cursor

    Returns:
        Formatted user prompt
    """
    template = load_prompt("user")
    return template.format(
        file_content=file_content,
        language=language,
        line_prefix=line_prefix,
    )
