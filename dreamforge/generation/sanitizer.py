import json
import logging
import re
from typing import Any, Iterable

from dreamforge.generation.errors import MalformedResponseError, ValidationError

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```json", re.IGNORECASE)


def parse_and_sanitize(text: str) -> Any:
    """
    Recovers a JSON value from model output.

    Strategies, first success wins:
    1. Direct parse of the whole text.
    2. Parse of the span between the first '{' and the last '}'.
    3. Parse after stripping markdown fences and surrounding whitespace.
    No semantic repair is attempted on broken JSON.
    """
    # 1. Attempt direct parse
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    # 2. Attempt to find the first '{' and last '}'
    first_open = text.find("{")
    last_close = text.rfind("}")
    if first_open != -1 and last_close > first_open:
        try:
            return json.loads(text[first_open:last_close + 1])
        except json.JSONDecodeError:
            pass

    # 3. Aggressive cleanup
    clean_text = _JSON_FENCE.sub("", text).replace("```", "").strip()
    try:
        return json.loads(clean_text)
    except json.JSONDecodeError:
        logger.error(f"[Sanitizer] JSON parse failed. Raw text: {text[:200]}...")
        raise MalformedResponseError("The AI generated an invalid response structure. Please try again.")


def validate_structure(data: Any, required_keys: Iterable[str], context: str) -> dict:
    """Presence check only: field types and enum values are left to the caller."""
    if not isinstance(data, dict):
        raise ValidationError(f"{context}: Response was not a valid object.")
    missing = [key for key in required_keys if key not in data]
    if missing:
        raise ValidationError(f"{context}: Missing required fields: {', '.join(missing)}", missing=missing)
    return data
