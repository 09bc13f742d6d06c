"""Google Gemini API wrapper and JSON extraction from model output."""

import json
import logging

from google import genai
from google.genai import types

from config import settings

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


class GeminiUnavailableError(RuntimeError):
    """Raised when no Gemini API key is configured."""


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


async def generate_text(
    system_prompt: str,
    user_prompt: str,
    max_tokens: int = 900,
    temperature: float = 0.2,
) -> str:
    """Send a system+user prompt pair to Gemini and return the raw text.

    Exactly one attempt. Transport and API errors propagate to the caller.
    """
    client = get_client()
    if client is None:
        raise GeminiUnavailableError("Gemini API key not configured")

    response = await client.aio.models.generate_content(
        model=settings.gemini_model,
        contents=user_prompt,
        config=types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=temperature,
            max_output_tokens=max_tokens,
        ),
    )
    return response.text or ""


def find_json_object_span(text: str) -> str | None:
    """Return the first balanced ``{...}`` span in text, or None.

    Single linear scan; braces inside JSON strings are ignored.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def extract_json_object(text: str | None) -> dict | None:
    """Parse the first balanced JSON object in a model response.

    Handles markdown fences and surrounding prose. Returns None when there is
    no object or it fails strict parsing.
    """
    if not text:
        return None
    span = find_json_object_span(text)
    if span is None:
        return None
    try:
        parsed = json.loads(span)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse Gemini response as JSON: %s", e)
        return None
    return parsed if isinstance(parsed, dict) else None
