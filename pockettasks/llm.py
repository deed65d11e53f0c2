"""
PocketTasks AI - LLM Client Helpers

Creates the OpenAI client and performs JSON-mode chat completions.
Transport failures become ServiceError; unusable answers become SchemaError.
"""

import json
import logging
import re
from typing import Any, Optional

import httpx
import openai
from openai import AsyncOpenAI

from pockettasks.config import settings
from pockettasks.errors import SchemaError, ServiceError

logger = logging.getLogger(__name__)


_CODE_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def create_llm_client() -> Optional[AsyncOpenAI]:
    """Create the OpenAI client, or None when no API key is configured."""
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY is not set, AI features will answer with fallbacks")
        return None
    client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY, timeout=settings.LLM_TIMEOUT)
    logger.info("OpenAI client initialized")
    return client


def parse_json_content(content: str) -> Optional[dict]:
    """
    Parse a model answer into a JSON object.

    Handles answers wrapped in markdown code fences.
    Returns None when the content is not a JSON object.
    """
    if not content:
        return None
    text = _CODE_FENCE_PATTERN.sub("", content.strip()).strip()
    try:
        data = json.loads(text)
    except ValueError:
        # Fall back to the outermost braces in case the model added prose
        start, end = text.find("{"), text.rfind("}")
        if start == -1 or end <= start:
            return None
        try:
            data = json.loads(text[start:end + 1])
        except ValueError:
            return None
    return data if isinstance(data, dict) else None


async def request_json(
    client: Any,
    system_prompt: str,
    user_prompt: str,
    max_tokens: int = 500,
) -> dict:
    """
    Run one JSON-mode chat completion and return the parsed object.

    Raises:
        ServiceError: If the client is missing or the call fails
        SchemaError: If the answer is not a JSON object
    """
    if client is None:
        raise ServiceError("OpenAI API key is not configured")

    try:
        response = await client.chat.completions.create(
            model=settings.MODEL_NAME,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=settings.LLM_TEMPERATURE,
            max_tokens=max_tokens,
            response_format={"type": "json_object"},
            timeout=settings.LLM_TIMEOUT,
        )
    except openai.APIStatusError as e:
        raise ServiceError(f"AI service returned {e.status_code}: {e.message}") from e
    except (openai.APIError, httpx.HTTPError) as e:
        raise ServiceError(f"AI service request failed: {e}") from e

    choices = getattr(response, "choices", None) or []
    content = choices[0].message.content if choices else None
    data = parse_json_content(content or "")
    if data is None:
        logger.warning(f"AI answer was not a JSON object: {(content or '')[:100]!r}")
        raise SchemaError("AI response was not a JSON object")
    return data
