"""Tests for complete_text() bare LLM call."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.llm.client import complete_text


@pytest.fixture(autouse=True)
def _reset_client():
    """Reset the module-level Anthropic client between tests."""
    import src.llm.client as mod

    mod._client = None
    yield
    mod._client = None


def _mock_client(text: str = "response") -> MagicMock:
    mock_response = MagicMock()
    mock_response.content = [MagicMock(text=text)]
    mock_client = MagicMock()
    mock_client.messages.create = AsyncMock(return_value=mock_response)
    return mock_client


async def test_complete_text_basic() -> None:
    mock_client = _mock_client("statement")

    with (
        patch("src.llm.client._get_client", return_value=mock_client),
        patch("src.llm.client.settings") as mock_settings,
    ):
        mock_settings.classifier_model = "claude-test-model"
        mock_settings.classifier_max_tokens = 150
        result = await complete_text([{"role": "user", "content": "hi"}])

    assert result == "statement"
    mock_client.messages.create.assert_awaited_once()
    call_kwargs = mock_client.messages.create.call_args.kwargs
    assert call_kwargs["messages"] == [{"role": "user", "content": "hi"}]
    assert call_kwargs["model"] == "claude-test-model"
    assert call_kwargs["max_tokens"] == 150


async def test_complete_text_with_system_and_temperature() -> None:
    mock_client = _mock_client()

    with patch("src.llm.client._get_client", return_value=mock_client):
        await complete_text(
            [{"role": "user", "content": "hi"}],
            system="Classify this.",
            temperature=0.3,
            max_tokens=50,
        )

    call_kwargs = mock_client.messages.create.call_args.kwargs
    assert call_kwargs["system"] == "Classify this."
    assert call_kwargs["temperature"] == 0.3
    assert call_kwargs["max_tokens"] == 50


async def test_complete_text_with_custom_model() -> None:
    mock_client = _mock_client()

    with patch("src.llm.client._get_client", return_value=mock_client):
        await complete_text(
            [{"role": "user", "content": "hi"}],
            model="claude-sonnet-4-5-20250929",
        )

    call_kwargs = mock_client.messages.create.call_args.kwargs
    assert call_kwargs["model"] == "claude-sonnet-4-5-20250929"


async def test_complete_text_omits_optional_kwargs() -> None:
    mock_client = _mock_client()

    with patch("src.llm.client._get_client", return_value=mock_client):
        await complete_text([{"role": "user", "content": "hi"}])

    call_kwargs = mock_client.messages.create.call_args.kwargs
    assert "system" not in call_kwargs
    assert "temperature" not in call_kwargs


async def test_complete_text_propagates_errors() -> None:
    mock_client = MagicMock()
    mock_client.messages.create = AsyncMock(side_effect=RuntimeError("down"))

    with (
        patch("src.llm.client._get_client", return_value=mock_client),
        pytest.raises(RuntimeError),
    ):
        await complete_text([{"role": "user", "content": "hi"}])


def test_client_created_once() -> None:
    from src.llm.client import _get_client

    with patch("src.llm.client.anthropic.AsyncAnthropic") as mock_cls:
        first = _get_client()
        second = _get_client()

    assert first is second
    mock_cls.assert_called_once()
