"""
Chat Session

Rolling transcript with the "CineBot" assistant. Failures never escape:
they become an assistant message explaining what went wrong.
"""

from typing import List, Optional, Protocol, Sequence, Tuple

from ..config import Settings, get_settings
from ..core.exceptions import (
    ChatError,
    ChatModelNotFoundError,
    ChatServiceUnavailableError,
)
from ..core.logging import get_logger
from ..models.chat import ChatMessage, ChatRole

logger = get_logger(__name__)

HISTORY_LIMIT = 10

SYSTEM_PROMPT = (
    "You are CineBot, a friendly and knowledgeable movie recommendation assistant inside the CineFlow app. "
    "Your personality is warm, enthusiastic about cinema, and concise. "
    "Keep responses SHORT (2-4 sentences max) unless the user asks for detail. "
    "When recommending movies, always include the year in parentheses. "
    "You can discuss any movie-related topic: recommendations, trivia, comparisons, plot explanations, etc. "
    "If someone asks something unrelated to movies, gently steer them back to films. "
    "Never use markdown formatting; respond in plain text only. "
    "When listing movies, use simple numbered lists."
)

SUGGESTED_PROMPTS = (
    "Suggest a thriller for tonight",
    "What's a good movie like Inception?",
    "Best movies of 2024",
    "Something light for a date night",
)


class ChatAssistant(Protocol):
    async def send(self, system_prompt: str, history: Sequence[ChatMessage], message: str) -> str: ...


class ChatSession:
    """
    One conversation.
    
    The whole transcript is kept for display; only the last HISTORY_LIMIT
    prior messages go upstream. A send issued while another is in flight is
    ignored.
    """
    
    def __init__(self, assistant: ChatAssistant, settings: Optional[Settings] = None):
        self.assistant = assistant
        self.settings = settings or get_settings()
        self._messages: List[ChatMessage] = []
        self.is_awaiting_response = False
    
    @property
    def messages(self) -> Tuple[ChatMessage, ...]:
        return tuple(self._messages)
    
    async def send(self, text: str) -> Optional[ChatMessage]:
        """
        Send user text; returns the assistant message appended (reply or
        error explanation), or None when the input was ignored.
        """
        user_text = text.strip()
        if not user_text:
            return None
        if self.is_awaiting_response:
            logger.debug("chat_send_ignored_in_flight")
            return None
        
        history = self._messages[-HISTORY_LIMIT:]
        self._messages.append(ChatMessage(role=ChatRole.USER, content=user_text))
        self.is_awaiting_response = True
        
        try:
            reply = await self.assistant.send(SYSTEM_PROMPT, history, user_text)
            content = reply.strip()
        except ChatError as e:
            logger.warning("chat_reply_failed", error=e.message, kind=type(e).__name__)
            content = self._describe_error(e)
        except Exception as e:
            logger.error("chat_reply_crashed", error=str(e))
            content = "Connection error - make sure Ollama is running locally and try again."
        finally:
            self.is_awaiting_response = False
        
        reply_message = ChatMessage(role=ChatRole.ASSISTANT, content=content)
        self._messages.append(reply_message)
        return reply_message
    
    def clear(self):
        self._messages.clear()
    
    def _describe_error(self, error: ChatError) -> str:
        if isinstance(error, ChatServiceUnavailableError):
            return (
                "Can't reach Ollama - make sure it's running "
                f"({self.settings.ollama_base_url})."
            )
        if isinstance(error, ChatModelNotFoundError):
            return (
                f"The model '{error.model}' wasn't found. "
                f"Run 'ollama pull {error.model}' first."
            )
        return f"Something went wrong: {error.message}. Please try again."
