import re

BASE64_PLACEHOLDER = "<BASE64_DATA_HIDDEN>"
GEOMETRY_PLACEHOLDER = "[...GEOMETRY_DATA_HIDDEN...]"
PLACEHOLDER_TOKENS = (BASE64_PLACEHOLDER, GEOMETRY_PLACEHOLDER)

_DATA_URI = re.compile(r"data:[\w.+-]+/[\w.+-]+(?:;[\w.+-]+=[\w.+-]+)*;base64,[A-Za-z0-9+/=]+")
# Array literal with more than ten numeric entries
_NUMERIC_ARRAY = re.compile(r"\[(\s*-?\d*\.?\d+,){10,}\s*-?\d*\.?\d+\s*\]")


def compress_code_for_context(code: str) -> str:
    """
    Strips heavy data assets (base64 payloads, geometry arrays) from generated
    code so it fits the context window of a refinement request.
    Lossy: the result is prompt context only, never the artifact of record.
    """
    if not code:
        return ""
    compressed = _DATA_URI.sub(BASE64_PLACEHOLDER, code)
    compressed = _NUMERIC_ARRAY.sub(GEOMETRY_PLACEHOLDER, compressed)
    return compressed


def contains_placeholder(text: str) -> bool:
    return any(token in text for token in PLACEHOLDER_TOKENS)
