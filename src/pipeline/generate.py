"""Resume generation through the Groq chat API, with timeout and one retry."""

import json
import logging

import groq
import jsonschema
from groq import Groq

from src.config import GENERATION_ATTEMPTS, GENERATION_TIMEOUT, MODEL_ID, MODEL_PARAMS
from src.errors import GenerationFailed
from src.fields import DraftFields
from src.pipeline.prompt import PROMPT_VERSION, SYSTEM_PROMPT, build_prompt
from src.utils import hash_text
from src.validation import validate_generation_response

log = logging.getLogger("resume_builder.pipeline")

# Connection errors include timeouts
TRANSIENT_ERRORS = (groq.APIConnectionError, groq.RateLimitError, groq.InternalServerError)
MALFORMED_RESPONSE_ERRORS = (ValueError, IndexError, jsonschema.ValidationError)

INVALID_KEY_MESSAGE = "Invalid or expired API key. Check GROQ_API_KEY in .env and regenerate at console.groq.com"


def _request_result(client: Groq, model: str, prompt: str) -> str:
    response = client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        temperature=MODEL_PARAMS["temperature"],
        top_p=MODEL_PARAMS.get("top_p", 1),
        response_format={"type": "json_object"},
    )
    content = (response.choices[0].message.content or "").strip()
    data = json.loads(content)
    validate_generation_response(data)
    return data["result"]


def generate_resume(
    api_key: str,
    fields: DraftFields,
    model: str = MODEL_ID,
    timeout: float = GENERATION_TIMEOUT,
    attempts: int = GENERATION_ATTEMPTS,
) -> dict:
    """
    Generate a resume draft from the draft fields.

    Transient failures (connection errors, timeouts, rate limits, 5xx, malformed
    output) are retried until `attempts` is used up. Anything else fails at once.

    Returns:
        {"result": draft_text, "_audit": {...}}

    Raises:
        GenerationFailed: the service could not produce a draft.
    """
    prompt = build_prompt(fields)
    prompt_hash = hash_text(prompt)
    client = Groq(api_key=api_key, timeout=timeout, max_retries=0)

    last_error: Exception | None = None
    for attempt in range(1, attempts + 1):
        try:
            result = _request_result(client, model, prompt)
            break
        except MALFORMED_RESPONSE_ERRORS as e:
            last_error = e
            log.warning("Malformed generation response (attempt %d/%d): %s", attempt, attempts, e)
        except TRANSIENT_ERRORS as e:
            last_error = e
            log.warning("Transient generation failure (attempt %d/%d): %s", attempt, attempts, e)
        except groq.AuthenticationError as e:
            raise GenerationFailed(INVALID_KEY_MESSAGE, attempts=attempt) from e
        except groq.APIError as e:
            raise GenerationFailed(f"Resume generation failed: {e}", attempts=attempt) from e
    else:
        raise GenerationFailed(
            f"Resume generation failed after {attempts} attempts: {last_error}",
            attempts=attempts,
            transient=True,
        ) from last_error

    return {
        "result": result,
        "_audit": {
            "prompt_version": PROMPT_VERSION,
            "prompt_hash": prompt_hash,
            "model_id": model,
            "model_params": MODEL_PARAMS,
            "attempts": attempt,
        },
    }
