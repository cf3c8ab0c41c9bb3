"""Text generation client for OpenAI-compatible chat completion APIs."""

from __future__ import annotations

from typing import Any, Optional

import httpx

from .config import load_settings

SIMPLIFIER_SYSTEM_PROMPT = (
    "You are a helpful scientific paper abstract simplifier. Keep length of "
    "simplified abstracts to its original length, but dumb it down to a 5th "
    "grade reading level, as if you were explaining it to a kid."
)

SIMPLIFY_PROMPT = (
    "Please simplify this scientific abstract and make it easier to understand "
    "for a general audience, while preserving the key points:\n\n{abstract}"
)


def _build_headers(api_key: str) -> dict[str, str]:
    """Build headers for the chat completion API."""
    if not api_key:
        raise RuntimeError("Missing OPENAI_API_KEY for text generation")
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


async def generate_text(
    prompt: str,
    system: Optional[str] = None,
    *,
    model: Optional[str] = None,
    max_tokens: int = 2000,
    temperature: float = 0.4,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    Send a chat completion request and return the assistant text.

    Raises:
        RuntimeError: missing API key or non-200 response
    """
    cfg = load_settings()
    messages = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})

    payload: dict[str, Any] = {
        "model": model or cfg["llm_model"],
        "messages": messages,
        "max_tokens": max_tokens,
        "temperature": temperature,
    }
    url = f"{cfg['llm_base_url'].rstrip('/')}/chat/completions"
    headers = _build_headers(cfg["llm_api_key"])

    if client is not None:
        response = await client.post(url, headers=headers, json=payload, timeout=cfg["llm_timeout"])
    else:
        async with httpx.AsyncClient(timeout=cfg["llm_timeout"]) as owned:
            response = await owned.post(url, headers=headers, json=payload)

    if response.status_code != 200:
        raise RuntimeError(f"LLM API error {response.status_code}: {response.text}")

    data = response.json()
    choices = data.get("choices") or []
    if not choices:
        return ""

    message = choices[0].get("message", {})
    return (message.get("content") or "").strip()


async def simplify_abstract(abstract: str, **kwargs: Any) -> str:
    """Rewrite ``abstract`` at a 5th grade reading level."""
    return await generate_text(
        SIMPLIFY_PROMPT.format(abstract=abstract),
        system=SIMPLIFIER_SYSTEM_PROMPT,
        **kwargs,
    )
