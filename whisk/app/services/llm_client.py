import json
import logging
import re
from typing import Any, Dict, List, Optional

import httpx

from whisk.app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Raised when the completion service fails or returns nothing usable."""


class AIResponseError(ValueError):
    """Raised when a completion cannot be parsed into the expected JSON object."""


def _strip_invalid_control_chars(s: str) -> str:
    """Remove ASCII control chars that frequently break json.loads (except \n, \r, \t)."""
    if not isinstance(s, str):
        return str(s)
    return re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F]", "", s)


def strip_code_fences(text: str) -> str:
    cleaned = re.sub(r"```[a-zA-Z0-9_-]*\s*", "", text or "")
    return cleaned.replace("`", "").strip()


def parse_ai_json(raw: str) -> Dict[str, Any]:
    """Parse the first top-level JSON object out of a completion.

    Markdown fences and stray backticks are removed first. Anything that is
    not a JSON object raises AIResponseError.
    """
    cleaned = strip_code_fences(_strip_invalid_control_chars(raw))
    match = re.search(r"\{[\s\S]*\}", cleaned)
    if match:
        cleaned = match.group(0)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise AIResponseError(f"AI returned invalid JSON format: {exc}") from exc
    if not isinstance(data, dict):
        raise AIResponseError("AI response is not a JSON object")
    return data


class LLMClient:
    """Thin client for an OpenAI-compatible chat-completions endpoint."""

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: Optional[str] = None,
        timeout_seconds: float = 60.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "LLMClient":
        return cls(
            base_url=settings.llm_base_url,
            model=settings.llm_model_name,
            api_key=settings.llm_api_key,
            timeout_seconds=settings.llm_timeout_seconds,
        )

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def complete(
        self,
        prompt: str,
        *,
        system: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
    ) -> str:
        messages: List[Dict[str, str]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        payload: Dict[str, Any] = {
            "model": self.model,
            "temperature": temperature,
            "messages": messages,
            "stream": False,
        }
        if max_tokens:
            payload["max_tokens"] = max_tokens
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        timeout = httpx.Timeout(self.timeout_seconds, connect=10.0)
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                resp = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers=self._headers(),
                )
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
            raise LLMError(f"Completion request failed: {exc}") from exc

        if isinstance(data, list) and data:
            data = data[0]
        if isinstance(data, dict) and "error" in data:
            error_info = data["error"] if isinstance(data["error"], dict) else {"message": str(data["error"])}
            error_type = error_info.get("type") or error_info.get("status") or "unknown_error"
            error_message = error_info.get("message", "Unknown error")
            logger.error(
                "Completion service returned error: type=%s, message=%s",
                error_type,
                str(error_message)[:500],
            )
            raise LLMError(f"Completion service error ({error_type}): {error_message}")

        content = None
        if isinstance(data, dict):
            choices = data.get("choices") or []
            if choices and isinstance(choices[0], dict):
                content = (choices[0].get("message") or {}).get("content")
        if not content or not isinstance(content, str):
            raise LLMError("Completion response missing assistant content")

        logger.debug("Completion raw content (truncated): %s", content[:500])
        return _strip_invalid_control_chars(content).strip()


def get_llm_client() -> LLMClient:
    return LLMClient.from_settings(get_settings())
