import pytest

import meeting_agent.core.llm.providers as providers
from meeting_agent.config import settings
from meeting_agent.core.llm.client import LLMClient, Message
from meeting_agent.core.llm.providers.stub import StubLLMProvider


@pytest.fixture(autouse=True)
def use_stub_provider(monkeypatch):
    """Force LLMClient to use the async stub provider."""
    monkeypatch.setattr(settings, "LLM_PROVIDER", "stub")
    # reset cached provider instance if it was already created
    providers._provider_instance = None
    yield
    providers._provider_instance = None


@pytest.mark.asyncio
async def test_generate():
    client = LLMClient()
    res = await client.generate("hi", [Message(role="user", content="hello")])
    assert res == StubLLMProvider.REPLY
    assert client.provider.name == "stub"


def test_provider_is_cached():
    assert providers.get_llm_provider() is providers.get_llm_provider()


def test_unknown_provider(monkeypatch):
    monkeypatch.setattr(settings, "LLM_PROVIDER", "nope")
    with pytest.raises(ValueError, match="Unknown LLM provider"):
        LLMClient()


def test_gemini_requires_api_key(monkeypatch):
    monkeypatch.setattr(settings, "LLM_PROVIDER", "gemini")
    monkeypatch.setattr(settings, "GEMINI_API_KEY", None)
    with pytest.raises(ValueError, match="Failed to initialize LLM provider 'gemini'"):
        providers.get_llm_provider()
    assert providers._provider_instance is None


def test_gemini_history_mapping():
    from meeting_agent.core.llm.providers.gemini import GeminiLLMProvider

    provider = GeminiLLMProvider.__new__(GeminiLLMProvider)
    history = provider._prepare_gemini_history([
        Message(role="user", content="Schedule a meeting"),
        Message(role="assistant", content="What is it called?"),
        Message(role="user", content="   "),
    ])

    assert [h["role"] for h in history] == ["user", "model"]
    assert history[1]["parts"][0]["text"] == "What is it called?"


@pytest.mark.asyncio
async def test_provider_errors_propagate():
    class Broken(StubLLMProvider):
        async def generate(self, prompt, ctx):
            raise TimeoutError("slow")

    with pytest.raises(TimeoutError):
        await LLMClient(provider=Broken()).generate("hi", [])


def test_openai_requires_api_key(monkeypatch):
    monkeypatch.setattr(settings, "LLM_PROVIDER", "openai")
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)
    with pytest.raises(ValueError, match="Failed to initialize LLM provider 'openai'"):
        providers.get_llm_provider()


def test_openai_chat_messages_mapping():
    from meeting_agent.core.llm.providers.openai import OpenAILLMProvider

    provider = OpenAILLMProvider(model_name="gpt-test", client=object())
    messages = provider._prepare_chat_messages("Standup", [
        Message(role="user", content="Schedule a meeting"),
        Message(role="assistant", content="What is it called?"),
        Message(role="user", content="   "),
    ])

    assert messages[0]["role"] == "system"
    assert [m["role"] for m in messages[1:]] == ["user", "assistant", "user"]
    assert messages[-1] == {"role": "user", "content": "Standup"}


@pytest.mark.asyncio
async def test_openai_generate_uses_chat_completions():
    from types import SimpleNamespace

    from meeting_agent.core.llm.providers.openai import OpenAILLMProvider

    sent = {}

    async def create(**kwargs):
        sent.update(kwargs)
        choice = SimpleNamespace(message=SimpleNamespace(content="  When should it start?  "), finish_reason="stop")
        return SimpleNamespace(choices=[choice])

    fake_client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    provider = OpenAILLMProvider(model_name="gpt-test", client=fake_client)

    reply = await LLMClient(provider=provider).generate("Schedule a meeting", [])

    assert reply == "When should it start?"
    assert sent["model"] == "gpt-test"
    assert sent["temperature"] == settings.LLM_TEMPERATURE
    assert sent["messages"][-1] == {"role": "user", "content": "Schedule a meeting"}
