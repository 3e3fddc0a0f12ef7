import re

ELLIPSIS = "..."

_TAG_RE = re.compile(r"<.*?>", re.DOTALL)
_ENTITY_RE = re.compile(r"&[^;\s]+;")
_WHITESPACE_RE = re.compile(r"\s+")

# only these entities are decoded, anything else is kept verbatim
ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&nbsp;": " ",
    "&hellip;": "...",
    "&mdash;": "—",
    "&ndash;": "–",
}


def clean_text(value: str | None) -> str:
    if not value:
        return ""

    text = _TAG_RE.sub("", value)
    text = _ENTITY_RE.sub(lambda m: ENTITIES.get(m.group(0), m.group(0)), text)
    text = _WHITESPACE_RE.sub(" ", text)

    return text.strip()


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[:max_length].rstrip() + ELLIPSIS


def clean_description(value: str | None, *, max_length: int) -> str:
    return truncate(clean_text(value), max_length)
