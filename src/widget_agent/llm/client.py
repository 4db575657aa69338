from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import openai
from openai import OpenAI

from ..errors import NetworkError, UpstreamFormatError
from .settings import LlmSettings

logger = logging.getLogger(__name__)

JSON_OBJECT_FORMAT = {"type": "json_object"}


@dataclass(frozen=True)
class ChatRequest:
    system_prompt: str
    user_prompt: str
    temperature: float
    max_tokens: int

    def messages(self) -> list[dict[str, str]]:
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": self.user_prompt},
        ]


def build_client(settings: LlmSettings) -> OpenAI:
    # max_retries=0: exactly one request per call.
    return OpenAI(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.timeout,
        max_retries=0,
    )


def _message_content(resp: Any) -> str:
    try:
        content = resp.choices[0].message.content
    except (AttributeError, IndexError, TypeError) as exc:
        raise UpstreamFormatError("Generator response has no message content.") from exc
    if not isinstance(content, str):
        raise UpstreamFormatError("Generator response has no message content.")
    return content


def request_completion(client: Any, *, model: str, request: ChatRequest) -> str:
    """Issue one chat completion constrained to a JSON object and return its text.

    `client` is anything exposing the OpenAI ``chat.completions.create`` call.
    """
    logger.debug("Calling model %s (temperature=%s, max_tokens=%s)", model, request.temperature, request.max_tokens)
    try:
        resp = client.chat.completions.create(
            model=model,
            messages=request.messages(),
            temperature=request.temperature,
            max_tokens=request.max_tokens,
            response_format=JSON_OBJECT_FORMAT,
        )
    except openai.APIStatusError as exc:
        raise NetworkError(f"Text generation request was rejected with HTTP {exc.status_code}: {exc.message}") from exc
    except openai.APIError as exc:
        raise NetworkError(f"Text generation request failed: {exc}") from exc

    text = _message_content(resp)
    logger.debug("Received %d characters from model", len(text))
    return text
