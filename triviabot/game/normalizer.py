"""
Answer normalization.

Turns free-text answers into a canonical key so "The Eiffel Tower" and
"eiffel towers" compare equal.
"""

import html
import re

# Any case of "and" is a connective. The fixed-point loop in normalize()
# would strip "AND" on its second, lowercased pass anyway.
_CONNECTIVE_RE = re.compile(r" (?:and|&) ", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")
_NON_WORD_RE = re.compile(r"[^\w ]")
_ARTICLE_RE = re.compile(r"^(?:the|an?) +")
_WHITESPACE_RE = re.compile(r"\s+")


def _strip_markup(text: str) -> str:
    """Reduce an HTML fragment to its plain text."""
    text = _TAG_RE.sub(" ", text)
    text = html.unescape(text)
    # Entities can decode to new tags ("&lt;i&gt;")
    return _TAG_RE.sub(" ", text)


def _canonicalize(text: str) -> str:
    text = _CONNECTIVE_RE.sub(" ", text)
    text = _strip_markup(text)
    text = _NON_WORD_RE.sub("", text.lower())
    text = _ARTICLE_RE.sub("", text.lstrip(), count=1)
    text = text.replace("-", " ")
    text = text.rstrip()
    if text.endswith("s"):
        text = text[:-1]
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize(text: str | None) -> str:
    """
    Produce the canonical answer key for ``text``.

    Steps, in order: drop " and " / " & " connectives, strip markup, lowercase
    and remove everything but word characters and spaces, strip one leading
    article, turn hyphens into spaces, drop one trailing "s", collapse
    whitespace.

    The result is stable under re-application: the pipeline is repeated until
    the key stops changing, so normalize(normalize(x)) == normalize(x). The
    repetition strips every trailing "s", not just one, so "bass" becomes
    "ba" and "boss" matches "bo". Both sides of a comparison go through the
    same pipeline, so this only ever widens what counts as a match.

    Args:
        text: Raw answer text; None and punctuation-only input give ""

    Returns:
        Canonical key, possibly empty
    """
    if not text:
        return ""

    key = _canonicalize(str(text))
    while True:
        again = _canonicalize(key)
        if again == key:
            return key
        key = again


def answers_match(expected: str, attempt: str) -> bool:
    """Compare two answers by canonical key. A blank attempt never matches."""
    attempt_key = normalize(attempt)
    if not attempt_key:
        return False
    return normalize(expected) == attempt_key
