import sys
import pathlib

import httpx
import pytest

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "clients" / "python"))
from feedbacker_client import FeedbackerClient, OutlineResult  # type: ignore

pytestmark = pytest.mark.anyio


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def feedbacker_client(monkeypatch) -> FeedbackerClient:
    monkeypatch.setenv("API_BEARER_TOKENS", '["token"]')
    monkeypatch.setenv("REQUIRE_AUTH", "true")
    from feedbacker.main import create_app

    app = create_app()
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        client = FeedbackerClient("http://test", bearer_token="token")
        await client.close()
        client._client = httpx.AsyncClient(transport=transport, base_url="http://test")
        try:
            yield client
        finally:
            await client.close()


async def test_outline_round_trip(feedbacker_client: FeedbackerClient):
    result = await feedbacker_client.parse_outline("Market context\n  - why now\n\nAnalysis")
    assert isinstance(result, OutlineResult)
    assert result.topics == ["Market context\n- why now", "Analysis"]
    decoded = await feedbacker_client.decode_topic(result.topics[0])
    assert decoded.subtopics == ["why now"]
    assert await feedbacker_client.encode_topic("Analysis") == "Analysis"
    assert await feedbacker_client.normalize_topics(["a", "A", "b"]) == ["a", "b"]


async def test_feedback_and_aggregate(feedbacker_client: FeedbackerClient):
    stored = await feedbacker_client.serialize_feedback("Pricing", "Great session")
    parts = await feedbacker_client.parse_feedback(stored)
    assert parts.suggested_topics_raw == "Pricing"
    assert parts.freeform_text == "Great session"

    result = await feedbacker_client.aggregate([stored, "- pricing", None])
    assert [(g.label, g.count) for g in result.groups] == [("Pricing", 2)]
    assert await feedbacker_client.extract_suggestions("idea: demos") == ["demos"]
    groups = await feedbacker_client.group_suggestions(["Demos", "demos!"])
    assert groups[0].count == 2


async def test_interest(feedbacker_client: FeedbackerClient):
    rows = await feedbacker_client.tally_interest(["A", "B"], [(1, "more")])
    assert [r.title for r in rows] == ["B", "A"]


async def test_bad_token_raises(feedbacker_client: FeedbackerClient):
    feedbacker_client.bearer_token = "wrong"
    with pytest.raises(httpx.HTTPStatusError):
        await feedbacker_client.extract_suggestions("x")
