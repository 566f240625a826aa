"""OpenAI call that drafts the business sections from an intake questionnaire.

The client is created lazily on first use so importing this module (and the
web app) works without credentials.  The returned document is raw model
output; callers pass it through ``hzz_plan.validation.pipeline.run``.
"""

import json
import logging
import time
from typing import Any

from openai import OpenAI, OpenAIError

from hzz_plan import config
from hzz_plan.exceptions import ConfigurationError, GenerationError
from hzz_plan.generation.intake import IntakeData
from hzz_plan.generation.prompts import SYSTEM_PROMPT, build_user_message
from hzz_plan.schema.registry import SchemaRegistry, load_registry

logger = logging.getLogger(__name__)

# Lazy-initialised client (see _init_client)
_LLM_CLIENT: OpenAI | None = None


def _init_client() -> OpenAI:
    """Create the OpenAI client on first use (raises ConfigurationError without an API key)."""
    global _LLM_CLIENT  # pylint: disable=global-statement
    if _LLM_CLIENT is not None:
        return _LLM_CLIENT

    if not config.OPENAI_API_KEY:
        raise ConfigurationError("OpenAI API key not configured (set OPENAI_API_KEY)")

    base_url = config.OPENAI_BASE_URL or None
    logger.info("Connecting to OpenAI%s  (model=%s)", f" at {base_url}" if base_url else "", config.GENERATION_MODEL)
    _LLM_CLIENT = OpenAI(api_key=config.OPENAI_API_KEY, base_url=base_url, timeout=config.GENERATION_TIMEOUT)
    return _LLM_CLIENT


def generate_sections(intake: IntakeData, registry: SchemaRegistry | None = None) -> Any:
    """Ask the model for the business sections and return the parsed JSON.

    Raises:
        ConfigurationError: no API key is configured.
        GenerationError: the API call failed, or the reply was empty or not JSON.
    """
    registry = registry or load_registry()
    client = _init_client()

    t0 = time.time()
    try:
        completion = client.chat.completions.create(
            model=config.GENERATION_MODEL,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_user_message(intake, registry)},
            ],
            response_format={"type": "json_object"},
            temperature=config.GENERATION_TEMPERATURE,
            max_tokens=config.GENERATION_MAX_TOKENS,
        )
    except OpenAIError as exc:
        logger.error("LLM call failed after %.1fs: %s", time.time() - t0, exc)
        raise GenerationError(f"LLM call failed: {exc}", original_error=exc) from exc

    elapsed = time.time() - t0
    content = completion.choices[0].message.content if completion.choices else None
    if not content:
        logger.warning("LLM returned an empty response (%.1fs)", elapsed)
        raise GenerationError("LLM returned an empty response")

    try:
        generated = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.warning("LLM response is not valid JSON (%.1fs): %s", elapsed, exc)
        raise GenerationError(f"LLM response is not valid JSON: {exc}", original_error=exc) from exc

    logger.info("LLM responded in %.1fs (%d chars)", elapsed, len(content))
    return generated
