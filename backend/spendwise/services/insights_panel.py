"""
Insights panel controller

Owns the state of one mounted dashboard panel: the insight list and its
loading flag, the "last updated" time, and one answer entry per insight
the user asked to explain. State only changes on the event loop; the two
collaborator calls (insight fetch, answer generation) are the only places
the panel suspends.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Awaitable, Callable, Dict, List, Optional, Set

from spendwise.models.api import InsightRecord

logger = logging.getLogger(__name__)

InsightFetcher = Callable[[], Awaitable[List[InsightRecord]]]
AnswerGenerator = Callable[[str], Awaitable[str]]
Listener = Callable[["InsightsPanel"], None]

FALLBACK_INSIGHT = InsightRecord(
    id="fallback-1",
    category="info",
    title="AI Temporarily Unavailable",
    message="We're working to restore AI insights. Please check back soon.",
)

ANSWER_APOLOGY = "Sorry, I was unable to generate a detailed answer. Please try again."


@dataclass
class AnswerEntry:
    insight_id: str
    answer_text: str = ""
    pending: bool = True


def build_question(insight: InsightRecord) -> str:
    return f"{insight.title}: {insight.action_label}"


class InsightsPanel:
    """Controller for the insights panel of one dashboard view"""

    def __init__(
        self,
        fetch_insights: InsightFetcher,
        generate_answer: AnswerGenerator,
        clock: Callable[[], datetime] = datetime.now
    ):
        self._fetch_insights = fetch_insights
        self._generate_answer = generate_answer
        self._clock = clock

        self.insights: List[InsightRecord] = []
        self.is_loading = True
        self.last_updated: Optional[datetime] = None
        self.answers: Dict[str, AnswerEntry] = {}

        self._listeners: List[Listener] = []
        self._tasks: Set[asyncio.Task] = set()
        self._load_generation = 0

    # Observation

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener after every state change; returns an unsubscribe function"""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error(f"Insights panel listener failed: {e}", exc_info=True)

    @property
    def displayed_insights(self) -> List[InsightRecord]:
        return [] if self.is_loading else list(self.insights)

    def find_insight(self, insight_id: str) -> Optional[InsightRecord]:
        for insight in self.displayed_insights:
            if insight.id == insight_id:
                return insight
        return None

    def answer_for(self, insight_id: str) -> Optional[AnswerEntry]:
        return self.answers.get(insight_id)

    # Insight list

    async def load_insights(self) -> None:
        """Fetch insights, replacing the list; failures degrade to the fallback insight"""
        self._load_generation += 1
        generation = self._load_generation
        self.is_loading = True
        self._notify()

        try:
            insights = list(await self._fetch_insights())
        except Exception as e:
            logger.error(f"Failed to load AI insights: {e}", exc_info=True)
            if generation != self._load_generation:
                return
            # last_updated only moves on a successful fetch
            self.insights = [FALLBACK_INSIGHT]
        else:
            if generation != self._load_generation:
                return
            self.insights = insights
            self.last_updated = self._clock()

        # Answer entries are left alone; stale ones simply stop matching
        self.is_loading = False
        self._notify()

    # Answers

    def toggle_answer(self, insight: InsightRecord) -> Optional[AnswerEntry]:
        """
        Apply the action-click toggle.

        Removes an existing entry for the insight, or inserts a pending one.
        Returns the new entry when a generation call should follow, else None.
        Insights without an action label are ignored.
        """
        if not insight.action_label:
            return None

        if insight.id in self.answers:
            del self.answers[insight.id]
            self._notify()
            return None

        entry = AnswerEntry(insight_id=insight.id)
        self.answers[insight.id] = entry
        self._notify()
        return entry

    async def _resolve_answer(self, insight: InsightRecord, entry: AnswerEntry) -> None:
        question = build_question(insight)
        try:
            answer_text = await self._generate_answer(question)
        except Exception as e:
            logger.error(f"Failed to generate AI answer for insight {insight.id}: {e}", exc_info=True)
            answer_text = ANSWER_APOLOGY

        # Toggled off (or off and on again) while the call was in flight
        if self.answers.get(entry.insight_id) is not entry:
            return

        entry.answer_text = answer_text
        entry.pending = False
        self._notify()

    async def request_answer(self, insight: InsightRecord) -> None:
        """Toggle the answer for an insight, generating it when toggled on"""
        entry = self.toggle_answer(insight)
        if entry is not None:
            await self._resolve_answer(insight, entry)

    # Event entry points for the rendering layer

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def on_mount(self) -> asyncio.Task:
        """Start the initial load; the panel shows placeholders until it finishes"""
        self.is_loading = True
        return self._spawn(self.load_insights())

    def reload(self) -> asyncio.Task:
        self.is_loading = True
        self._notify()
        return self._spawn(self.load_insights())

    def on_action(self, insight_id: str) -> Optional[asyncio.Task]:
        """
        Handle a click on an insight's action control.

        The toggle is applied before returning; the generation call, if any,
        runs in the background. Raises KeyError for ids not on display.
        """
        insight = self.find_insight(insight_id)
        if insight is None:
            raise KeyError(insight_id)

        entry = self.toggle_answer(insight)
        if entry is None:
            return None
        return self._spawn(self._resolve_answer(insight, entry))

    @property
    def pending_tasks(self) -> int:
        return len(self._tasks)

    async def wait_idle(self) -> None:
        """Wait for every scheduled load and generation call to finish"""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        self._listeners.clear()
