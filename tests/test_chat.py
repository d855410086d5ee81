"""
Tests for the Ollama Client and Chat Session
"""

import asyncio
import json

import httpx
import pytest
from unittest.mock import AsyncMock

from cineflow.core.exceptions import (
    ChatHTTPError,
    ChatInvalidResponseError,
    ChatModelNotFoundError,
    ChatServiceUnavailableError,
)
from cineflow.models.chat import ChatMessage, ChatRole
from cineflow.services.chat_session import HISTORY_LIMIT, SYSTEM_PROMPT, ChatSession
from cineflow.services.ollama_client import OllamaClient


def make_ollama(settings, handler, requests=None):
    def recording_handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return handler(request)
    
    http = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
    return OllamaClient(settings=settings, http_client=http)


def reply(content):
    return httpx.Response(200, json={"model": "llama3.2", "message": {"role": "assistant", "content": content}, "done": True})


# =============================================================================
# OLLAMA CLIENT
# =============================================================================

class TestOllamaClient:
    
    @pytest.mark.asyncio
    async def test_request_shape(self, settings):
        requests = []
        client = make_ollama(settings, lambda r: reply("  Try Heat (1995).  "), requests)
        history = [
            ChatMessage(role=ChatRole.USER, content="hi"),
            ChatMessage(role=ChatRole.ASSISTANT, content="hello"),
        ]
        
        text = await client.send("be nice", history, "a heist movie?")
        
        assert text == "Try Heat (1995)."
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "http://localhost:11434/api/chat"
        body = json.loads(request.content)
        assert body["model"] == "llama3.2"
        assert body["stream"] is False
        assert body["options"] == {"temperature": 0.8, "num_predict": 500}
        assert body["messages"] == [
            {"role": "system", "content": "be nice"},
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
            {"role": "user", "content": "a heist movie?"},
        ]
    
    @pytest.mark.asyncio
    async def test_unreachable(self, settings):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)
        
        with pytest.raises(ChatServiceUnavailableError) as exc_info:
            await make_ollama(settings, handler).send("s", [], "hi")
        assert exc_info.value.base_url == "http://localhost:11434"
    
    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self, settings):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)
        
        with pytest.raises(ChatServiceUnavailableError):
            await make_ollama(settings, handler).send("s", [], "hi")
    
    @pytest.mark.asyncio
    async def test_missing_model(self, settings):
        client = make_ollama(settings, lambda r: httpx.Response(404, json={"error": "model 'llama3.2' not found"}))
        
        with pytest.raises(ChatModelNotFoundError) as exc_info:
            await client.send("s", [], "hi")
        assert exc_info.value.model == "llama3.2"
    
    @pytest.mark.asyncio
    async def test_other_status(self, settings):
        client = make_ollama(settings, lambda r: httpx.Response(500, text="boom"))
        
        with pytest.raises(ChatHTTPError) as exc_info:
            await client.send("s", [], "hi")
        assert exc_info.value.status_code == 500
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{"done": True}, {"message": {"role": "assistant"}}, {"message": {"content": 3}}])
    async def test_reply_without_content(self, settings, body):
        client = make_ollama(settings, lambda r: httpx.Response(200, json=body))
        
        with pytest.raises(ChatInvalidResponseError):
            await client.send("s", [], "hi")


# =============================================================================
# CHAT SESSION
# =============================================================================

@pytest.fixture
def assistant():
    return AsyncMock(send=AsyncMock(return_value=" Sure! "))


class TestChatSession:
    
    @pytest.mark.asyncio
    async def test_exchange_appends_both_messages(self, assistant, settings):
        session = ChatSession(assistant, settings)
        
        message = await session.send("  recommend something ")
        
        assert message.content == "Sure!"
        assert [(m.role, m.content) for m in session.messages] == [
            (ChatRole.USER, "recommend something"),
            (ChatRole.ASSISTANT, "Sure!"),
        ]
        assistant.send.assert_awaited_once_with(SYSTEM_PROMPT, [], "recommend something")
        assert not session.is_awaiting_response
    
    @pytest.mark.asyncio
    async def test_whitespace_is_ignored(self, assistant, settings):
        session = ChatSession(assistant, settings)
        
        assert await session.send("   ") is None
        assert session.messages == ()
        assistant.send.assert_not_awaited()
    
    @pytest.mark.asyncio
    async def test_history_is_capped(self, assistant, settings):
        session = ChatSession(assistant, settings)
        for i in range(7):
            await session.send(f"question {i}")
        
        await session.send("last one")
        
        history = assistant.send.await_args.args[1]
        assert len(history) == HISTORY_LIMIT
        assert history[0].content == "question 2"
        assert history[-1].role is ChatRole.ASSISTANT
        assert len(session.messages) == 16
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("error,expected", [
        (ChatServiceUnavailableError("http://localhost:11434"),
         "Can't reach Ollama - make sure it's running (http://localhost:11434)."),
        (ChatModelNotFoundError("llama3.2"),
         "The model 'llama3.2' wasn't found. Run 'ollama pull llama3.2' first."),
        (ChatHTTPError(502), "Something went wrong: Server error (502). Please try again."),
        (RuntimeError("socket closed"),
         "Connection error - make sure Ollama is running locally and try again."),
    ])
    async def test_failures_become_assistant_messages(self, settings, error, expected):
        session = ChatSession(AsyncMock(send=AsyncMock(side_effect=error)), settings)
        
        message = await session.send("hi")
        
        assert message.role is ChatRole.ASSISTANT
        assert message.content == expected
        assert len(session.messages) == 2
        assert not session.is_awaiting_response
    
    @pytest.mark.asyncio
    async def test_send_while_waiting_is_ignored(self, settings):
        release = asyncio.Event()
        
        async def slow_send(system_prompt, history, message):
            await release.wait()
            return "done"
        
        session = ChatSession(AsyncMock(send=AsyncMock(side_effect=slow_send)), settings)
        first = asyncio.create_task(session.send("first"))
        await asyncio.sleep(0)
        
        assert session.is_awaiting_response
        assert await session.send("second") is None
        
        release.set()
        await first
        assert [m.content for m in session.messages] == ["first", "done"]
    
    @pytest.mark.asyncio
    async def test_clear(self, assistant, settings):
        session = ChatSession(assistant, settings)
        await session.send("hi")
        
        session.clear()
        
        assert session.messages == ()
