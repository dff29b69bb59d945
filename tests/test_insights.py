import json
from datetime import date
from types import SimpleNamespace

import anthropic
import httpx
import pytest

from productivity_dashboard.errors import GenerationError
from productivity_dashboard.insights import (
    FileInsightCache,
    InMemoryInsightCache,
    InsightGenerator,
    build_prompt,
    cached_insight,
    generate_weekly_insight,
)
from productivity_dashboard.schema import Department, ProductivityLog, TaskCategory, TaskStatus


def sample_logs(n=2):
    return [
        ProductivityLog(
            id=f"log-{i}",
            employee_name=f"Employee {i}",
            employee_id=f"E{i}",
            department=Department.HSE,
            date=date(2025, 1, 6),
            task_category=TaskCategory.SUPERVISION,
            task_description="Site walk",
            task_status=TaskStatus.COMPLETE,
            hours=4.0,
            productivity_rating=4,
            blockers="Rain" if i == 0 else "",
        )
        for i in range(n)
    ]


class FakeMessages:
    def __init__(self, text="## Executive Summary", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.text)])


def fake_client(**kwargs):
    return SimpleNamespace(messages=FakeMessages(**kwargs))


def test_build_prompt_reduces_and_caps_logs():
    prompt = build_prompt(sample_logs(150))
    assert "Based on the following 150 productivity log entries" in prompt
    assert "**Blocker Analysis:**" in prompt

    data = json.loads(prompt.split("Data:\n", 1)[1])
    assert len(data) == 100
    assert data[0] == {
        "employeeName": "Employee 0",
        "department": "HSE",
        "taskCategory": "Supervision",
        "taskStatus": "Complete",
        "hours": 4.0,
        "productivityRating": 4,
        "blockers": "Rain",
    }
    assert data[1]["blockers"] == "None"


def test_generate_sends_single_message():
    client = fake_client()
    generator = InsightGenerator(model="claude-test", max_tokens=500, client=client)
    assert generator.generate(sample_logs()) == "## Executive Summary"

    call = client.messages.calls[0]
    assert call["model"] == "claude-test"
    assert call["max_tokens"] == 500
    assert call["messages"][0]["role"] == "user"
    assert "Employee 1" in call["messages"][0]["content"]


def test_generate_rejects_empty_logs():
    with pytest.raises(GenerationError, match="No logs provided"):
        InsightGenerator(client=fake_client()).generate([])


def test_generate_requires_api_key():
    with pytest.raises(GenerationError, match="ANTHROPIC_API_KEY"):
        InsightGenerator(api_key="").generate(sample_logs())


def test_generate_wraps_api_errors_without_retry():
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    client = fake_client(error=anthropic.APIConnectionError(request=request))
    with pytest.raises(GenerationError, match="Failed to generate insights"):
        InsightGenerator(client=client).generate(sample_logs())
    assert len(client.messages.calls) == 1


def test_sdk_client_is_built_without_retries():
    client = InsightGenerator(api_key="sk-test")._get_client()
    assert isinstance(client, anthropic.Anthropic)
    assert client.max_retries == 0


def test_weekly_insight_is_cached():
    cache = InMemoryInsightCache()
    assert cached_insight(cache) is None
    text = generate_weekly_insight(InsightGenerator(client=fake_client(text="insight")), cache, sample_logs())
    assert text == "insight"
    assert cached_insight(cache) == "insight"


def test_weekly_insight_without_logs_keeps_cache():
    cache = InMemoryInsightCache("previous")
    with pytest.raises(GenerationError, match="No data available"):
        generate_weekly_insight(InsightGenerator(client=fake_client()), cache, [])
    assert cache.get() == "previous"


def test_file_cache(tmp_path):
    cache = FileInsightCache(str(tmp_path / "cache" / "insight.md"))
    assert cache.get() is None
    cache.set("# Weekly")
    assert FileInsightCache(str(tmp_path / "cache" / "insight.md")).get() == "# Weekly"
