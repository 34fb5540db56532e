"""
Сервис для работы с OpenAI API: генерация задач, советы коуча, резюме заметок
"""

import json
import logging
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from core.exceptions import AIServiceError, AIUnavailableError
from core.models import TaskPriority

logger = logging.getLogger('dailyfocus.ai')

COACH_FALLBACK = "I'm here to help! Could you rephrase your question?"
SUMMARY_FALLBACK = "Unable to generate summary."

COACH_SYSTEM_PROMPT = (
    "You are an expert productivity coach. Provide helpful, actionable advice to improve "
    "productivity, time management, and focus. Keep responses concise (2-3 paragraphs), "
    "practical, and encouraging."
)

TASKS_SYSTEM_PROMPT = (
    "You break goals down into tasks. Answer with a JSON object of the form "
    '{"tasks": [{"title": "Task title", "description": "Brief description", '
    '"estimated_minutes": 60, "priority": "high", "category": "Work"}]} and nothing else.'
)

TASKS_PROMPT_TEMPLATE = """Break down the following goal into 5-7 specific, actionable tasks.

Goal: {goal}

Requirements:
- Each task should be specific and actionable
- Include realistic time estimates (30-120 minutes each)
- Assign appropriate priorities (high, medium, or low)
- Tasks should be in logical order
- Add relevant categories (Work, Personal, Learning, etc.)
- Provide brief descriptions"""

SUMMARY_PROMPT_TEMPLATE = """Summarize the following note in 2-3 concise sentences, capturing the key points:

{content}"""


class AIService:
    """Одиночные запросы к языковой модели, без повторов и стриминга"""

    def __init__(self, api_key: Optional[str] = None, model: str = "gpt-4o-mini",
                 max_tokens: int = 1000, timeout: int = 30, client: Any = None):
        self.model = model
        self.max_tokens = max_tokens
        self.client = client

        if self.client is None and api_key:
            self.client = AsyncOpenAI(api_key=api_key, timeout=timeout)

        if self.enabled:
            logger.info(f"🤖 AI сервис инициализирован (модель {self.model})")
        else:
            logger.warning("⚠️ AI сервис отключен (нет OPENAI_API_KEY)")

    @property
    def enabled(self) -> bool:
        return self.client is not None

    async def _complete(self, messages: List[Dict[str, str]], json_mode: bool = False) -> str:
        if not self.enabled:
            raise AIUnavailableError("AI features are not configured. Please add OPENAI_API_KEY.")

        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "max_tokens": self.max_tokens,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(**kwargs)
        except Exception as e:
            logger.error(f"❌ Ошибка запроса к OpenAI: {e}")
            raise AIServiceError(f"AI request failed: {e}") from e

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()

    async def generate_tasks(self, goal: str) -> List[Dict[str, Any]]:
        """Разбивка цели на 5-7 конкретных задач"""
        text = await self._complete([
            {"role": "system", "content": TASKS_SYSTEM_PROMPT},
            {"role": "user", "content": TASKS_PROMPT_TEMPLATE.format(goal=goal)},
        ], json_mode=True)

        if not text:
            raise AIServiceError("No response from AI")

        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            logger.error(f"❌ AI вернул не JSON: {text[:200]}")
            raise AIServiceError("Failed to generate tasks with AI") from e

        if isinstance(payload, dict):
            payload = payload.get("tasks")
        if not isinstance(payload, list):
            return []

        tasks = [self._normalize_task(item) for item in payload if isinstance(item, dict)]
        tasks = [t for t in tasks if t["title"]]
        logger.info(f"🧩 Сгенерировано задач: {len(tasks)}")
        return tasks

    @staticmethod
    def _normalize_task(item: Dict[str, Any]) -> Dict[str, Any]:
        priority = str(item.get("priority", "")).lower()
        if priority not in {p.value for p in TaskPriority}:
            priority = TaskPriority.MEDIUM.value

        minutes = item.get("estimated_minutes", item.get("estimatedMinutes"))
        try:
            minutes = int(minutes) if minutes is not None else None
        except (TypeError, ValueError):
            minutes = None
        if minutes is not None and minutes <= 0:
            minutes = None

        return {
            "title": str(item.get("title", "")).strip(),
            "description": item.get("description") or None,
            "estimated_minutes": minutes,
            "priority": priority,
            "category": item.get("category") or None,
        }

    async def coach_advice(self, question: str) -> str:
        text = await self._complete([
            {"role": "system", "content": COACH_SYSTEM_PROMPT},
            {"role": "user", "content": question},
        ])
        return text or COACH_FALLBACK

    async def summarize_note(self, content: str) -> str:
        text = await self._complete([
            {"role": "user", "content": SUMMARY_PROMPT_TEMPLATE.format(content=content)},
        ])
        return text or SUMMARY_FALLBACK

    async def close(self) -> None:
        if self.client is not None and hasattr(self.client, "close"):
            await self.client.close()
