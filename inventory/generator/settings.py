"""Generator constants.

Defaults match the inventory-generator-v1 output; each cap can be raised
through the environment for large workflows.
"""

import os
from dataclasses import dataclass

GENERATOR_VERSION = "inventory-generator-v1"
MAX_CODE_STEPS = 14
MAX_DIAGRAM_EDGES = 220
MAX_IO_NOTES = 8

# label limits for diagram nodes
MAX_LABEL_NAME = 42
MAX_LABEL_TYPE = 26


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


@dataclass(frozen=True)
class GeneratorSettings:
    """tunable caps for one generation run."""

    generator_version: str = GENERATOR_VERSION
    max_code_steps: int = MAX_CODE_STEPS
    max_diagram_edges: int = MAX_DIAGRAM_EDGES
    max_io_notes: int = MAX_IO_NOTES

    @classmethod
    def from_env(cls) -> "GeneratorSettings":
        """read SNIPPET_MAX_* overrides from the process environment."""
        return cls(
            max_code_steps=_env_int("SNIPPET_MAX_CODE_STEPS", MAX_CODE_STEPS),
            max_diagram_edges=_env_int("SNIPPET_MAX_DIAGRAM_EDGES", MAX_DIAGRAM_EDGES),
            max_io_notes=_env_int("SNIPPET_MAX_IO_NOTES", MAX_IO_NOTES),
        )
