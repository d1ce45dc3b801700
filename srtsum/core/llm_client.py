from __future__ import annotations

import logging
import time
from typing import Callable, Optional

import requests

from srtsum.core.config import API_KEY, BACKOFF, BASE_URL, MAX_RETRIES, MODEL, TEMPERATURE, TIMEOUT

logger = logging.getLogger(__name__)

# Anything that turns a prompt into generated text.
Generator = Callable[[str], str]

_RETRY_STATUS = {429, 500, 502, 503, 504}


class ServiceError(RuntimeError):
    """The generation service could not produce a usable response."""

    def __init__(self, message: str, *, transient: bool = False):
        super().__init__(message)
        self.transient = transient


def _extract_content(data: object) -> str:
    try:
        content = data["choices"][0]["message"]["content"]  # type: ignore[index]
    except (KeyError, IndexError, TypeError) as e:
        raise ServiceError(f"Malformed response body, no choices[0].message.content: {data!r}") from e
    if not isinstance(content, str):
        raise ServiceError(f"Response content is not text: {content!r}")
    return content.strip()


def _post_once(url: str, payload: dict, headers: dict, timeout: float) -> str:
    try:
        r = requests.post(url, json=payload, headers=headers, timeout=timeout)
    except (requests.ConnectionError, requests.Timeout) as e:
        raise ServiceError(f"Could not reach generation service at {url}: {e}", transient=True) from e
    except requests.exceptions.ChunkedEncodingError as e:
        raise ServiceError(f"Connection to {url} dropped mid-response: {e}", transient=True) from e
    except requests.RequestException as e:
        # bad URL, redirect loops and the like; retrying will not help
        raise ServiceError(f"Request to generation service at {url} failed: {e}") from e

    try:
        r.raise_for_status()
    except requests.HTTPError as e:
        # Keep the server's error body, it usually names the real problem (bad model etc.)
        raise ServiceError(
            f"{e}\nService response: {r.text}",
            transient=r.status_code in _RETRY_STATUS,
        ) from e

    try:
        data = r.json()
    except ValueError as e:
        raise ServiceError(f"Service returned non-JSON body: {r.text[:500]}") from e
    return _extract_content(data)


def chat_completion(
    prompt: str,
    *,
    system: str = "",
    temperature: float = TEMPERATURE,
    model: Optional[str] = None,
    base_url: Optional[str] = None,
    api_key: Optional[str] = None,
    timeout: float = TIMEOUT,
    max_retries: int = MAX_RETRIES,
    backoff: float = BACKOFF,
) -> str:
    """Send one prompt to an OpenAI-compatible /chat/completions endpoint.

    Transient failures (connection errors, timeouts, dropped connections, 429
    and 5xx) are retried with exponential backoff, ``backoff * 2**attempt``
    seconds between tries.
    Raises ServiceError once attempts are exhausted or on a permanent failure.
    """
    url = f"{(base_url or BASE_URL).rstrip('/')}/chat/completions"
    payload = {
        "model": model or MODEL,
        "messages": ([{"role": "system", "content": system}] if system else [])
        + [{"role": "user", "content": prompt}],
        "stream": False,
        "temperature": temperature,
    }
    headers = {}
    key = API_KEY if api_key is None else api_key
    if key:
        headers["Authorization"] = f"Bearer {key}"

    attempts = max(1, max_retries)
    attempt = 0
    while True:
        try:
            return _post_once(url, payload, headers, timeout)
        except ServiceError as e:
            attempt += 1
            if not e.transient or attempt >= attempts:
                raise
            delay = backoff * (2 ** (attempt - 1))
            logger.warning(
                "Generation request failed (attempt %d/%d): %s. Retrying in %.1fs",
                attempt,
                attempts,
                e,
                delay,
            )
            time.sleep(delay)


def make_generator(
    *,
    model: Optional[str] = None,
    base_url: Optional[str] = None,
    temperature: float = TEMPERATURE,
) -> Generator:
    """Bind connection settings so the pipeline only deals with prompt -> text."""

    def generate(prompt: str) -> str:
        return chat_completion(prompt, model=model, base_url=base_url, temperature=temperature)

    return generate
