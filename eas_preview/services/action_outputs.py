"""
GitHub Actions output files.

Values written here become step outputs (`GITHUB_OUTPUT`) or part of the job
summary page (`GITHUB_STEP_SUMMARY`).
"""

import uuid
from pathlib import Path
from typing import Dict


def format_output(name: str, value: str) -> str:
    """Format a single output, using the heredoc syntax for multi-line values."""
    if "\n" not in value:
        return f"{name}={value}\n"

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def write_outputs(path: str, outputs: Dict[str, str]) -> None:
    """Append step outputs to the outputs file."""
    with Path(path).open("a", encoding="utf-8") as f:
        for name, value in outputs.items():
            f.write(format_output(name, value))


def append_step_summary(path: str, markdown: str) -> None:
    """Append markdown to the job summary."""
    with Path(path).open("a", encoding="utf-8") as f:
        f.write(f"{markdown}\n")
