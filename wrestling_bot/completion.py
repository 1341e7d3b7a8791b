# /wrestling_bot/completion.py
import logging
from typing import Any, Dict, List, Optional

import httpx

from .config import Settings
from .errors import UpstreamError

logger = logging.getLogger(__name__)


def _response_details(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def _extract_reply(data: Any) -> Optional[str]:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None


class CompletionGateway:
    """
    Sends assembled chat messages to the Mistral chat completions API.
    Model, max_tokens and temperature come from Settings and are not per-call.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.BaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def build_payload(self, messages: List[Dict[str, str]]) -> Dict[str, Any]:
        return {
            "model": self.settings.model,
            "messages": messages,
            "max_tokens": self.settings.max_tokens,
            "temperature": self.settings.temperature,
        }

    def complete(self, messages: List[Dict[str, str]]) -> str:
        payload = self.build_payload(messages)
        logger.debug("Completion call: model=%s messages=%s", self.settings.model, len(messages))

        try:
            with httpx.Client(timeout=self.settings.timeout, transport=self._transport) as client:
                response = client.post(self.settings.api_url, json=payload, headers=self._headers())
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Completion request failed: {exc}", details=str(exc)) from exc

        if not response.is_success:
            raise UpstreamError(
                f"Completion service returned {response.status_code}",
                status_code=response.status_code,
                details=_response_details(response),
            )

        details = _response_details(response)
        reply = _extract_reply(details)
        if reply is None:
            raise UpstreamError(
                "Completion response is missing choices[0].message.content",
                status_code=response.status_code,
                details=details,
            )

        return reply.strip()
