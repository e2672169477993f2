"""Tests for relay keyword detection."""

import pytest

from src.classify.relay import contains_relay_trigger


@pytest.mark.parametrize(
    "text",
    [
        "董事長指示下週一前交報告",
        "葛董說明天要開會",
        "Chairman instructed us to cut costs",
        "The chairman said we need a new vendor",
        "Please prepare the slides",
        "Can you HANDLE this?",
        "請準備資料",
    ],
)
def test_triggers(text: str) -> None:
    assert contains_relay_trigger(text) is True


@pytest.mark.parametrize("text", ["Nice weather today", "午餐吃什麼？", ""])
def test_no_trigger(text: str) -> None:
    assert contains_relay_trigger(text) is False


def test_explicit_keywords() -> None:
    assert contains_relay_trigger("the boss says hi", keywords=("Boss Says",)) is True
    assert contains_relay_trigger("prepare lunch", keywords=("boss says",)) is False


def test_blank_explicit_keyword_never_matches_everything() -> None:
    assert contains_relay_trigger("anything", keywords=("", " ")) is False
