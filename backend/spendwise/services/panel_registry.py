"""
In-memory registry of mounted dashboard panels

Panels and their background loads live in this process only. The panel
routes need one long-lived server process (uvicorn); behind the Lambda
handler a panel mounted on one instance is unknown to the others and its
loads only progress while a request is being served.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from spendwise.agents.answers import generate_insight_answer
from spendwise.core.config import settings
from spendwise.services.insights import insight_source
from spendwise.services.insights_panel import AnswerGenerator, InsightFetcher, InsightsPanel

logger = logging.getLogger(__name__)


@dataclass
class MountedPanel:
    panel_id: str
    user_id: str
    panel: InsightsPanel
    last_seen: float = 0.0


class PanelRegistry:
    """Holds panels for the lifetime of the process; nothing is persisted"""

    def __init__(
        self,
        fetcher_for: Callable[[str], InsightFetcher] = insight_source.fetcher_for,
        generate_answer: AnswerGenerator = generate_insight_answer,
        max_per_user: Optional[int] = None,
        idle_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic
    ):
        self.fetcher_for = fetcher_for
        self.generate_answer = generate_answer
        self.max_per_user = max_per_user or settings.MAX_PANELS_PER_USER
        self.idle_seconds = idle_seconds or settings.PANEL_IDLE_SECONDS
        self.clock = clock
        self._panels: Dict[str, MountedPanel] = {}

    def panels_for_user(self, user_id: str) -> List[MountedPanel]:
        return [m for m in self._panels.values() if m.user_id == user_id]

    def prune_idle(self) -> int:
        """Unmount panels nobody has looked at for idle_seconds"""
        cutoff = self.clock() - self.idle_seconds
        idle = [m for m in self._panels.values() if m.last_seen < cutoff]
        for mounted in idle:
            self._remove(mounted)
        if idle:
            logger.info(f"Dropped {len(idle)} idle insights panels")
        return len(idle)

    def mount(self, user_id: str) -> MountedPanel:
        """Create a panel for the user and start its initial load.

        When the user is at the limit their oldest panel is unmounted first.
        """
        self.prune_idle()
        existing = self.panels_for_user(user_id)
        while len(existing) >= self.max_per_user:
            self._remove(existing.pop(0))

        panel = InsightsPanel(self.fetcher_for(user_id), self.generate_answer)
        mounted = MountedPanel(
            panel_id=str(uuid.uuid4()), user_id=user_id, panel=panel, last_seen=self.clock()
        )
        self._panels[mounted.panel_id] = mounted
        panel.on_mount()
        logger.info(f"Mounted insights panel {mounted.panel_id} for user {user_id}")
        return mounted

    def get(self, panel_id: str, user_id: str) -> Optional[MountedPanel]:
        """Panel by id, only if it belongs to the user and has not gone idle"""
        self.prune_idle()
        mounted = self._panels.get(panel_id)
        if not mounted or mounted.user_id != user_id:
            return None
        mounted.last_seen = self.clock()
        return mounted

    def unmount(self, panel_id: str, user_id: str) -> bool:
        mounted = self.get(panel_id, user_id)
        if not mounted:
            return False
        self._remove(mounted)
        return True

    def _remove(self, mounted: MountedPanel):
        del self._panels[mounted.panel_id]
        mounted.panel.close()
        logger.info(f"Unmounted insights panel {mounted.panel_id}")

    def clear(self):
        for mounted in self._panels.values():
            mounted.panel.close()
        self._panels.clear()


panel_registry = PanelRegistry()
