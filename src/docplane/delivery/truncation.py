"""Character-budget guard for responses returned in full.

Anything handed back to the agent without going through the cache is
bounded here. Over-limit text is cut at ``limit`` characters and followed by
a footer that states both sizes and tells the caller how to ask for less.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from docplane.config.constants import CHARACTER_LIMIT

TRUNCATION_MARKER = "\n\n--- TRUNCATED ---\n"

DEFAULT_TRUNCATION_HINT = (
    "Use returnMode: 'summary' or narrower parameters to manage response size."
)


@dataclass(frozen=True, slots=True)
class TruncationResult:
    """Guarded text. ``original_length`` is set iff ``truncated``."""

    text: str
    truncated: bool
    original_length: int | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"text": self.text, "truncated": self.truncated}
        if self.truncated:
            result["original_length"] = self.original_length
        return result


def format_footer(original_length: int, limit: int, hint: str) -> str:
    return (
        f"{TRUNCATION_MARKER}"
        f"Response truncated from {original_length:,} to {limit:,} characters.\n"
        f"{hint}"
    )


_FOOTER_LENGTHS_RE = re.compile(
    r"Response truncated from ([0-9,]+) to ([0-9,]+) characters\.\n"
)


def _already_guarded(text: str, limit: int, hint: str) -> bool:
    """True if *text* is exactly an earlier ``truncate`` output within *limit*.

    The footer has to start where its own "to M" says the body ends, report
    a longer original, and run to the end of the text unchanged.
    """
    pos = text.find(TRUNCATION_MARKER)
    while 0 <= pos <= limit:
        match = _FOOTER_LENGTHS_RE.match(text, pos + len(TRUNCATION_MARKER))
        if match is not None:
            original = int(match.group(1).replace(",", ""))
            kept = int(match.group(2).replace(",", ""))
            if (
                kept == pos
                and original > kept
                and text[pos:] == format_footer(original, kept, hint)
            ):
                return True
        pos = text.find(TRUNCATION_MARKER, pos + 1)
    return False


def truncate(
    text: str,
    *,
    limit: int | None = None,
    hint: str | None = None,
) -> TruncationResult:
    """Bound *text* to *limit* characters (default ``CHARACTER_LIMIT``).

    Text at or under the limit comes back unchanged. So does the untouched
    output of an earlier call that kept no more than *limit* characters and
    used the same hint: guarding a guarded payload again keeps its footer.
    Any other text, footer-like or not, is cut.

    Args:
        text: Payload to bound.
        limit: Maximum characters kept before the footer.
        hint: Footer advice; replaces the default returnMode hint.
    """
    limit = CHARACTER_LIMIT if limit is None else max(limit, 0)
    hint = DEFAULT_TRUNCATION_HINT if hint is None else hint

    if len(text) <= limit or _already_guarded(text, limit, hint):
        return TruncationResult(text=text, truncated=False)

    footer = format_footer(len(text), limit, hint)
    return TruncationResult(
        text=text[:limit] + footer,
        truncated=True,
        original_length=len(text),
    )
