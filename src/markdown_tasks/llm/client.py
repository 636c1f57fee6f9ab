# src/markdown_tasks/llm/client.py

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict

import httpx
import openai
from openai import OpenAI

from ..core.errors import (
    ClientError,
    HttpError,
    MalformedResponseError,
    MissingApiKeyError,
    NetworkError,
)
from ..core.ports import ChatMessage

logger = logging.getLogger(__name__)

BODY_SNIPPET_CHARS = 200

PROMPT_TEMPLATE = (
    "You are a helpful assistant that edits personal task lists.\n"
    "Rewrite the raw task below into a single, concise, actionable task description "
    "for a markdown task list.\n"
    "Rules:\n"
    "- Reply with the task description only, on one line.\n"
    "- No introduction, explanation, quotes or surrounding commentary.\n"
    "- Do not add checklist syntax such as '- [ ]'; it is added later.\n"
    "- Keep the language of the raw task.\n"
    "\n"
    'Raw task: "{raw_text}"'
)


def build_messages(raw_text: str) -> list[ChatMessage]:
    return [{"role": "user", "content": PROMPT_TEMPLATE.format(raw_text=raw_text.strip())}]


def _make_timeout_obj(connect_s: float, read_s: float) -> httpx.Timeout:
    # read >= connect as a sane baseline
    read_s = max(read_s, connect_s)
    return httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)


def _snippet(text: str) -> str:
    text = " ".join((text or "").split())
    if len(text) > BODY_SNIPPET_CHARS:
        return text[:BODY_SNIPPET_CHARS] + "..."
    return text


def extract_content(completion: Any) -> str:
    """
    Pull choices[0].message.content out of a chat completion.

    The SDK builds response objects without validation, so a body like {} comes
    back as an object that simply lacks the attributes.
    """
    try:
        content = completion.choices[0].message.content
    except (AttributeError, IndexError, KeyError, TypeError) as e:
        raise MalformedResponseError("LLM response has no choices[0].message.content.") from e

    if not isinstance(content, str) or not content.strip():
        raise MalformedResponseError("LLM response content is empty.")
    return content.strip()


class OpenRouterCompletionClient:
    """
    OpenAI-compatible chat-completions client (OpenRouter by default).

    One call of improve_task() is exactly one HTTP request:
    the SDK's automatic retries are disabled and there is no model fallback.
    """

    def __init__(self, settings: Any, *, http_client: httpx.Client | None = None) -> None:
        self._settings = settings
        self._http_client = http_client
        self._clients: dict[str, OpenAI] = {}

    def _get_client(self, api_key: str) -> OpenAI:
        """Lazily create and cache an SDK client per API key."""
        client = self._clients.get(api_key)
        if client is not None:
            return client

        base_url = str(getattr(self._settings, "openrouter_base_url", "") or "").strip()
        if not base_url:
            raise ClientError("LLM base URL is not set. Set MDTASKS_OPENROUTER_BASE_URL.")

        client = OpenAI(
            base_url=base_url,
            api_key=api_key,
            timeout=_make_timeout_obj(
                connect_s=float(getattr(self._settings, "connect_timeout", 5.0)),
                read_s=float(getattr(self._settings, "read_timeout", 30.0)),
            ),
            max_retries=0,
            http_client=self._http_client,
        )
        self._clients[api_key] = client
        return client

    def improve_task(self, raw_text: str, api_key: str | None) -> str:
        key = (api_key or "").strip()
        if not key:
            raise MissingApiKeyError()

        model = str(getattr(self._settings, "llm_model", "") or "").strip()
        if not model:
            raise ClientError("LLM model is not set. Set MDTASKS_LLM_MODEL.")

        headers: Dict[str, str] = dict(getattr(self._settings, "extra_headers", {}) or {})
        max_tokens = int(getattr(self._settings, "llm_max_tokens", 100))

        client = self._get_client(key)

        logger.info("LLM: requesting model=%s max_tokens=%d", model, max_tokens)
        t0 = time.monotonic()
        try:
            completion = client.chat.completions.create(
                model=model,
                messages=build_messages(raw_text),
                max_tokens=max_tokens,
                extra_headers=headers or None,
            )
        except openai.APIStatusError as e:
            logger.info("LLM: HTTP %s from model=%s", e.status_code, model)
            raise HttpError(e.status_code, _snippet(e.response.text)) from e
        except openai.APIConnectionError as e:
            logger.info("LLM: network/timeout error (%s)", e.__class__.__name__)
            raise NetworkError(e) from e
        except (openai.APIResponseValidationError, json.JSONDecodeError) as e:
            raise MalformedResponseError(f"LLM response could not be decoded: {e}") from e

        logger.debug("LLM: response from model=%s in %.2fs", model, time.monotonic() - t0)
        return extract_content(completion)


def friendly_llm_error_message(err: Exception) -> str:
    """One-line, user-facing description of a completion failure."""
    if isinstance(err, MissingApiKeyError):
        return "LLM is not configured (missing API key). Set OPENROUTER_API_KEY."
    if isinstance(err, HttpError):
        if err.status in (401, 403):
            return f"LLM authentication failed (HTTP {err.status}). Check OPENROUTER_API_KEY."
        if err.status == 404:
            return f"LLM model not available (HTTP 404). Check MDTASKS_LLM_MODEL. {err.body_snippet}".rstrip()
        if err.status == 429:
            return "LLM is rate-limited (HTTP 429). Try again later."
        return str(err)
    if isinstance(err, NetworkError):
        return f"LLM network/timeout error. Check your connection and try again. ({err.cause})"
    if isinstance(err, MalformedResponseError):
        return f"LLM returned an unexpected response. {err}"
    return str(err).strip() or "LLM error."
