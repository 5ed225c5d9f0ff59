"""Boilerplate stripping for scraped article bodies.

Reader-proxy output is markdown with a metadata preamble and whatever
navigation chrome the publisher page carried. :func:`clean_article_content`
removes the common shapes of that chrome. It is best-effort: when nothing
matches, text passes through unchanged.
"""

from __future__ import annotations

import re

CONTENT_MARKER = "Markdown Content:"

# Lines longer than this are candidates for the real start of the article.
_MIN_BODY_LINE_LENGTH = 50

_NAV_LABELS = (
    "Home", "Menu", "Search", "Close", "Navigation", "Main menu", "Share",
    "Advertisement", "News", "Opinion", "Sport", "Culture", "Lifestyle",
    "More", "Show more", "Back to top",
)

# Applied in order; each pattern matches a whole line including its newline.
_EOL = r"[ \t]*(?:\n|$)"

_LINE_PATTERNS: list[re.Pattern[str]] = [
    # Bare navigation labels
    re.compile(
        r"^[ \t]*(?:" + "|".join(re.escape(label) for label in _NAV_LABELS) + r")" + _EOL,
        re.MULTILINE | re.IGNORECASE,
    ),
    # Accessibility skip links
    re.compile(r"^[ \t]*\[?Skip to [^\n]*(?:\n|$)", re.MULTILINE | re.IGNORECASE),
    # Subscription prompts
    re.compile(
        r"^[ \t]*(?:Subscribe|Sign up for|Sign up to|Get our|Newsletter sign-up)\b[^\n]{0,100}"
        r"(?:\n|$)",
        re.MULTILINE | re.IGNORECASE,
    ),
    # Sign-in prompts
    re.compile(
        r"^[ \t]*(?:Sign in|Log in|Login|Register|Create an account)\b[^\n]{0,60}(?:\n|$)",
        re.MULTILINE | re.IGNORECASE,
    ),
    # Section labels
    re.compile(
        r"^[ \t]*(?:Related|Related stories|Most viewed|Most popular|More on this story|"
        r"Topics|Explore more on these topics|Read more|You might also like)[ \t]*:?" + _EOL,
        re.MULTILINE | re.IGNORECASE,
    ),
    # Image captions and embeds ("Image 3: ..." / "![Image 3: ...](...)")
    re.compile(r"^[ \t]*!?\[?Image \d+:[^\n]*(?:\n|$)", re.MULTILINE),
    # Lines that are only a markdown link
    re.compile(r"^[ \t]*\[[^\]\n]*\]\([^)\n]*\)" + _EOL, re.MULTILINE),
    # Bullets that are only a markdown link
    re.compile(r"^[ \t]*[*+-][ \t]+\[[^\]\n]*\]\([^)\n]*\)" + _EOL, re.MULTILINE),
    # Guardian footer chrome
    re.compile(
        r"^[^\n]*(?:© \d{4} Guardian News|Guardian News & Media Limited|"
        r"theguardian\.com/(?:help|info|about))[^\n]*(?:\n|$)",
        re.MULTILINE,
    ),
]

_LITERAL_REMOVALS: tuple[str, ...] = (
    "View image in fullscreen",
    "Support the Guardian",
    "Reuse this content",
    "Share on Facebook",
    "Share on Twitter",
    "Share via Email",
    "Copy link",
    "Continue reading the main story",
    "Advertisement\n",
)

_EXCESS_NEWLINES = re.compile(r"\n{3,}")

_NAV_PREFIX = re.compile(
    r"^(?:News|Opinion|Sport|Culture|Lifestyle|Menu|Home|Search|More)\b"
)


def _strip_preamble(text: str) -> str:
    index = text.find(CONTENT_MARKER)
    if index == -1:
        return text
    return text[index + len(CONTENT_MARKER):]


def _relocate_start(text: str) -> str:
    """Drop leading lines until the first line that looks like body prose."""
    lines = text.split("\n")
    for index, line in enumerate(lines):
        stripped = line.strip()
        if len(stripped) > _MIN_BODY_LINE_LENGTH and not _NAV_PREFIX.match(stripped):
            return "\n".join(lines[index:])
    return text


def clean_article_content(raw: str) -> str:
    """Strip scraper preamble and publisher boilerplate from *raw*.

    Args:
        raw: Article text as returned by the reader proxy.

    Returns:
        Cleaned text with at most one blank line between paragraphs.
    """
    if not raw:
        return ""

    text = _strip_preamble(raw)

    for pattern in _LINE_PATTERNS:
        text = pattern.sub("", text)

    for literal in _LITERAL_REMOVALS:
        text = text.replace(literal, "")

    text = _EXCESS_NEWLINES.sub("\n\n", text).strip()

    return _relocate_start(text)
