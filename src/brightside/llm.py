"""One-shot text completions through the Claude CLI."""

from __future__ import annotations

import logging
import re
import subprocess

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")
_SUMMARY_LABEL_RE = re.compile(r"^\s*(?:\*\*)?summary(?:\*\*)?\s*:\s*", re.IGNORECASE)


class LLMError(Exception):
    """The CLI could not produce a usable answer."""


def call_llm(prompt: str, *, model: str | None = None, timeout: int = 120) -> str:
    """Send *prompt* to ``claude -p`` and return the reply as one paragraph.

    A leading "Summary:" label is dropped and line breaks are folded into
    single spaces. Raises :class:`LLMError` if the CLI is missing, times
    out, exits non-zero or answers with nothing.
    """
    cmd = ["claude", "-p"]
    if model:
        cmd.extend(["--model", model])

    try:
        result = subprocess.run(cmd, input=prompt, capture_output=True, text=True, timeout=timeout)
    except FileNotFoundError as exc:
        raise LLMError("Claude CLI not found on PATH") from exc
    except subprocess.TimeoutExpired as exc:
        raise LLMError(f"Claude CLI timed out after {timeout}s") from exc

    if result.returncode != 0:
        raise LLMError(f"Claude CLI failed (exit {result.returncode}): {result.stderr[:200]}")

    text = _WHITESPACE_RE.sub(" ", _SUMMARY_LABEL_RE.sub("", result.stdout)).strip()
    if not text:
        raise LLMError("Claude CLI returned an empty response")
    logger.debug("Claude CLI returned %d chars", len(text))
    return text
