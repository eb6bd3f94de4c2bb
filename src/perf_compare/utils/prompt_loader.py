"""Load markdown prompt templates (YAML frontmatter + Jinja2 body)."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import frontmatter
from jinja2 import Environment, TemplateError

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).parent.parent / "prompts"

ROLE_MARKERS = {"system:": "system", "user:": "user"}

_env = Environment(keep_trailing_newline=True)


def load_prompt(
    prompt_name: str, prompts_dir: Optional[Path] = None, **kwargs: Any
) -> Dict[str, Any]:
    """
    Load a prompt file, parse its frontmatter and render the body.

    Args:
        prompt_name: File name under the prompts directory, without ``.md``
        prompts_dir: Directory override (defaults to the packaged prompts)
        **kwargs: Template variables

    Returns:
        Dictionary with ``config`` (frontmatter) and ``messages``
        (chat-completions message dicts)

    Raises:
        FileNotFoundError: If the prompt file does not exist
        ValueError: If the file cannot be parsed or rendered
    """
    directory = prompts_dir or PROMPTS_DIR
    prompt_path = directory / f"{prompt_name}.md"

    if not prompt_path.exists():
        raise FileNotFoundError(f"Prompt file not found: {prompt_path}")

    logger.debug(f"Loading prompt from: {prompt_path}")

    try:
        with open(prompt_path, "r", encoding="utf-8") as f:
            post = frontmatter.load(f)
    except Exception as e:
        raise ValueError(f"Failed to parse prompt file {prompt_path}: {e}")

    try:
        rendered = _env.from_string(post.content).render(**kwargs)
    except TemplateError as e:
        raise ValueError(f"Failed to render prompt '{prompt_name}': {e}")

    return {
        "config": dict(post.metadata),
        "messages": parse_messages(rendered),
    }


def parse_messages(content: str) -> List[Dict[str, str]]:
    """
    Split rendered content on ``system:`` / ``user:`` marker lines.

    Text before the first marker is ignored; empty sections are dropped.

    Raises:
        ValueError: If no marker is present
    """
    messages: List[Dict[str, str]] = []
    role: Optional[str] = None
    lines: List[str] = []

    def flush() -> None:
        body = "\n".join(lines).strip()
        if role and body:
            messages.append({"role": role, "content": body})

    for line in content.split("\n"):
        marker = ROLE_MARKERS.get(line.strip())
        if marker:
            flush()
            role, lines = marker, []
        elif role:
            lines.append(line)
    flush()

    if not messages:
        raise ValueError("Invalid prompt format. Expected 'system:' and/or 'user:' markers")

    logger.debug(f"Parsed {len(messages)} messages from prompt")
    return messages
