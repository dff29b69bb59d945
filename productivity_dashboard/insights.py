"""AI-generated narrative insights over productivity logs."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol, Sequence

import anthropic

from productivity_dashboard.errors import GenerationError
from productivity_dashboard.schema import ProductivityLog

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
DEFAULT_MAX_TOKENS = 2000
PROMPT_LOG_LIMIT = 100

_PROMPT_TEMPLATE = """You are a senior business analyst reviewing productivity logs for a corporate team.
Based on the following {count} productivity log entries, provide a comprehensive analysis in markdown format.

Your analysis must include:
1. **Executive Summary:** High-level overview of team performance and business impact
2. **Productivity Trends:** Key patterns in task completion, time allocation, and department performance
3. **Blocker Analysis:** Common obstacles and their impact on productivity
4. **Department Performance:** Identify top-performing and struggling departments with specific metrics
5. **Employee Insights:** Recognition of high performers and areas where support is needed
6. **Actionable Recommendations:** 3-4 specific, implementable suggestions for:
   - Process improvements
   - Resource allocation
   - Employee development
   - Workload balancing

Maintain a strategic, data-driven tone. Be specific with numbers and examples from the data.

Data:
{data}"""


def _simplify(log: ProductivityLog) -> dict[str, Any]:
    return {
        "employeeName": log.employee_name,
        "department": log.department.value,
        "taskCategory": log.task_category.value,
        "taskStatus": log.task_status.value,
        "hours": log.hours,
        "productivityRating": log.productivity_rating,
        "blockers": log.blockers or "None",
    }


def build_prompt(logs: Sequence[ProductivityLog], max_logs: int = PROMPT_LOG_LIMIT) -> str:
    """Analyst prompt embedding at most ``max_logs`` reduced log entries."""

    data = [_simplify(log) for log in list(logs)[:max_logs]]
    return _PROMPT_TEMPLATE.format(count=len(logs), data=json.dumps(data, indent=2))


class InsightGenerator:
    """Single-shot call to the Anthropic Messages API. No retries."""

    def __init__(
        self,
        api_key: str = "",
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        client: Any = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise GenerationError("ANTHROPIC_API_KEY not configured")
            self._client = anthropic.Anthropic(api_key=self.api_key, max_retries=0)
        return self._client

    def generate(self, logs: Sequence[ProductivityLog]) -> str:
        if not logs:
            raise GenerationError("No logs provided")

        client = self._get_client()
        try:
            response = client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": build_prompt(logs)}],
            )
        except anthropic.APIError as exc:
            logger.error("Insight generation failed: %s", exc)
            raise GenerationError(f"Failed to generate insights: {exc}") from exc

        blocks = [block.text for block in response.content if getattr(block, "type", "text") == "text"]
        if not blocks:
            raise GenerationError("Failed to generate insights: empty response")
        logger.info("Generated insight from %d logs with %s", len(logs), self.model)
        return blocks[0]


class InsightCache(Protocol):
    def get(self) -> Optional[str]: ...

    def set(self, text: str) -> None: ...


class InMemoryInsightCache:
    def __init__(self, text: Optional[str] = None) -> None:
        self._text = text

    def get(self) -> Optional[str]:
        return self._text

    def set(self, text: str) -> None:
        self._text = text


class FileInsightCache:
    """Last generated insight kept in a local text file."""

    def __init__(self, path: str) -> None:
        self.path = Path(path)

    def get(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8") or None
        except FileNotFoundError:
            return None

    def set(self, text: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(text, encoding="utf-8")
        except OSError as exc:
            logger.error("Error saving insights to %s: %s", self.path, exc)


def cached_insight(cache: InsightCache) -> Optional[str]:
    return cache.get()


def generate_weekly_insight(generator: InsightGenerator, cache: InsightCache, logs: Sequence[ProductivityLog]) -> str:
    """Generate a fresh insight and remember it in ``cache``."""

    if not logs:
        raise GenerationError("No data available. Please add logs first.")
    text = generator.generate(logs)
    cache.set(text)
    return text
