"""
Ollama Chat Client

Talks to a locally running Ollama server (`POST /api/chat`, non-streaming).
"""

from typing import Any, Dict, List, Optional, Sequence
import httpx

from ..config import Settings, get_settings
from ..core.exceptions import (
    ChatHTTPError,
    ChatInvalidResponseError,
    ChatModelNotFoundError,
    ChatServiceUnavailableError,
)
from ..core.logging import get_logger
from ..models.chat import ChatMessage

logger = get_logger(__name__)


class OllamaClient:
    """
    Request/response chat assistant.
    
    The caller decides how much history to send; this client serializes
    whatever it is given after the system prompt.
    """
    
    def __init__(
        self,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self._http = http_client
    
    @property
    def model(self) -> str:
        return self.settings.ollama_model
    
    def build_payload(
        self,
        system_prompt: str,
        history: Sequence[ChatMessage],
        message: str,
    ) -> Dict[str, Any]:
        messages: List[Dict[str, str]] = [{"role": "system", "content": system_prompt}]
        messages.extend({"role": m.role.value, "content": m.content} for m in history)
        messages.append({"role": "user", "content": message})
        return {
            "model": self.model,
            "messages": messages,
            "stream": False,
            "options": {
                "temperature": self.settings.ollama_temperature,
                "num_predict": self.settings.ollama_num_predict,
            },
        }
    
    async def send(
        self,
        system_prompt: str,
        history: Sequence[ChatMessage],
        message: str,
    ) -> str:
        """
        Send one user message and return the assistant's reply text, trimmed.
        
        Raises:
            ChatServiceUnavailableError: server unreachable or timed out
            ChatModelNotFoundError: configured model not pulled
            ChatHTTPError: any other non-success status
            ChatInvalidResponseError: reply without message content
        """
        url = f"{self.settings.ollama_base_url}/api/chat"
        payload = self.build_payload(system_prompt, history, message)
        timeout = self.settings.ollama_timeout_seconds
        
        try:
            if self._http is not None:
                response = await self._http.post(url, json=payload, timeout=timeout)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.post(url, json=payload, timeout=timeout)
        except httpx.HTTPError as e:
            logger.warning("ollama_unreachable", url=url, error=str(e))
            raise ChatServiceUnavailableError(self.settings.ollama_base_url) from e
        
        if not response.is_success:
            error_text = self._error_text(response)
            if error_text and "not found" in error_text:
                logger.warning("ollama_model_not_found", model=self.model)
                raise ChatModelNotFoundError(self.model)
            logger.warning("ollama_http_error", status=response.status_code, error=error_text)
            raise ChatHTTPError(response.status_code)
        
        try:
            content = response.json()["message"]["content"]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("ollama_invalid_response", error=str(e))
            raise ChatInvalidResponseError() from e
        if not isinstance(content, str):
            raise ChatInvalidResponseError()
        
        return content.strip()
    
    @staticmethod
    def _error_text(response: httpx.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None
        if isinstance(body, dict) and isinstance(body.get("error"), str):
            return body["error"]
        return None
