"""Packaged prompt text.

A ``prompts/<name>.txt`` file in the working directory shadows the copy
shipped with the package, so the system instruction can be changed without
reinstalling.
"""

from functools import lru_cache
from pathlib import Path

PACKAGE_DIR = Path(__file__).parent
SYSTEM_PROMPT = "system"


def prompt_locations(name: str) -> list[Path]:
    """Candidate files for a prompt, highest priority first."""
    filename = f"{name}.txt"
    return [Path.cwd() / "prompts" / filename, PACKAGE_DIR / filename]


@lru_cache(maxsize=8)
def load_prompt(name: str) -> str:
    """Read the first existing candidate for ``name``, stripped.

    Raises:
        FileNotFoundError: If no candidate exists
    """
    candidates = prompt_locations(name)
    for path in candidates:
        if path.is_file():
            return path.read_text(encoding="utf-8").strip()
    searched = ", ".join(str(path) for path in candidates)
    raise FileNotFoundError(f"Prompt {name!r} not found (searched: {searched})")


def get_system_prompt() -> str:
    """Instruction sent as the first message of every request."""
    return load_prompt(SYSTEM_PROMPT)


def clear_cache() -> None:
    """Forget loaded prompts so edited files are read again."""
    load_prompt.cache_clear()


__all__ = [
    "clear_cache",
    "get_system_prompt",
    "load_prompt",
    "prompt_locations",
]
