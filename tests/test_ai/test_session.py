"""Tests for ai/session.py."""

import asyncio
from types import SimpleNamespace

import pytest

from formulab.ai.session import FAILED_MESSAGE, AdvisorSession
from formulab.data.store import DatasetStore


class GatedResponses:
    """Blocks every request until ``gate`` is set."""

    def __init__(self, text="### A\n1. idea"):
        self.gate = asyncio.Event()
        self.text = text

    async def create(self, **kwargs):
        await self.gate.wait()
        return SimpleNamespace(output_text=self.text)


def test_default_anchor_is_first_record(store):
    session = AdvisorSession(store)
    assert session.anchor_id == "A"
    assert session.anchor is store["A"]


def test_empty_store():
    session = AdvisorSession(DatasetStore())
    assert session.anchor is None
    assert session.sections() == []
    assert session.preview() is None
    assert asyncio.run(session.ask()) is None


def test_select_unknown_anchor(store):
    session = AdvisorSession(store)
    with pytest.raises(KeyError):
        session.select_anchor("nope")
    assert session.anchor_id == "A"


def test_sections_and_preview_follow_anchor(store):
    session = AdvisorSession(store)
    session.select_anchor("C")
    assert len(session.sections()[0].bullets) == 3
    assert "Anchor experiment ID: C" in session.preview().text


def test_ready_advice(store):
    responses = GatedResponses()
    responses.gate.set()
    session = AdvisorSession(store, client=SimpleNamespace(responses=responses))

    advice = asyncio.run(session.ask())
    assert advice.status == "ready"
    assert advice.anchor_id == "A"
    assert advice.reply.is_structured
    assert not advice.stale
    assert session.advice == advice
    assert session.in_flight == 0


def test_disabled_without_key(store):
    session = AdvisorSession(store)
    advice = asyncio.run(session.ask())
    assert advice.status == "disabled"
    assert "OPENAI_API_KEY" in advice.error
    assert session.advice == advice


@pytest.mark.parametrize("exc, message", [
    (RuntimeError("rate limited"), "rate limited"),
    (RuntimeError(), FAILED_MESSAGE),
])
def test_transport_error(store, exc, message):
    class Failing:
        async def create(self, **kwargs):
            raise exc

    session = AdvisorSession(store, client=SimpleNamespace(responses=Failing()))
    advice = asyncio.run(session.ask())
    assert advice.status == "error"
    assert advice.error == message


def test_superseded_reply_is_stale(store):
    responses = GatedResponses()
    session = AdvisorSession(store, client=SimpleNamespace(responses=responses))

    async def scenario():
        task = asyncio.create_task(session.ask())
        await asyncio.sleep(0)
        assert session.in_flight == 1
        session.select_anchor("B")
        responses.gate.set()
        return await task

    advice = asyncio.run(scenario())
    assert advice.stale
    assert advice.anchor_id == "A"
    assert session.advice is None
    assert session.anchor_id == "B"


def test_reselecting_same_anchor_keeps_advice(store):
    responses = GatedResponses()
    responses.gate.set()
    session = AdvisorSession(store, client=SimpleNamespace(responses=responses))
    advice = asyncio.run(session.ask())
    session.select_anchor("A")
    assert session.advice == advice
    session.select_anchor("B")
    assert session.advice is None
