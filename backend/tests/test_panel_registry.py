"""Tests for the mounted panel registry"""
import pytest
from unittest.mock import AsyncMock

from spendwise.services.panel_registry import PanelRegistry


@pytest.fixture
def registry(make_insight):
    fetchers = {}

    def fetcher_for(user_id):
        fetchers[user_id] = AsyncMock(return_value=[make_insight(id=f"{user_id}-1")])
        return fetchers[user_id]

    registry = PanelRegistry(
        fetcher_for=fetcher_for,
        generate_answer=AsyncMock(return_value="answer"),
        max_per_user=2
    )
    registry.fetchers = fetchers
    yield registry
    registry.clear()


class TestPanelRegistry:

    @pytest.mark.asyncio
    async def test_mount_starts_loading(self, registry):
        mounted = registry.mount("user-a")

        assert mounted.user_id == "user-a"
        assert mounted.panel.is_loading is True

        await mounted.panel.wait_idle()

        assert mounted.panel.is_loading is False
        assert [i.id for i in mounted.panel.insights] == ["user-a-1"]
        registry.fetchers["user-a"].assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_enforces_ownership(self, registry):
        mounted = registry.mount("user-a")

        assert registry.get(mounted.panel_id, "user-a") is mounted
        assert registry.get(mounted.panel_id, "user-b") is None
        assert registry.get("unknown", "user-a") is None

    @pytest.mark.asyncio
    async def test_unmount_closes_panel(self, registry):
        mounted = registry.mount("user-a")

        assert registry.unmount(mounted.panel_id, "user-b") is False
        assert registry.unmount(mounted.panel_id, "user-a") is True
        assert registry.get(mounted.panel_id, "user-a") is None
        assert registry.unmount(mounted.panel_id, "user-a") is False

        # The initial load was cancelled before it ran
        await mounted.panel.wait_idle()
        assert mounted.panel.pending_tasks == 0
        registry.fetchers["user-a"].assert_not_awaited()

    @pytest.mark.asyncio
    async def test_oldest_panel_evicted_at_limit(self, registry):
        first = registry.mount("user-a")
        second = registry.mount("user-a")
        other = registry.mount("user-b")

        third = registry.mount("user-a")

        assert registry.get(first.panel_id, "user-a") is None
        assert [m.panel_id for m in registry.panels_for_user("user-a")] == [
            second.panel_id, third.panel_id
        ]
        assert registry.get(other.panel_id, "user-b") is other

    @pytest.mark.asyncio
    async def test_panels_are_independent(self, registry):
        first = registry.mount("user-a")
        second = registry.mount("user-a")
        await first.panel.wait_idle()
        await second.panel.wait_idle()

        task = first.panel.on_action("user-a-1")
        await task

        assert first.panel.answer_for("user-a-1").answer_text == "answer"
        assert second.panel.answer_for("user-a-1") is None


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class TestIdlePanels:

    @pytest.fixture
    def clock(self):
        return FakeClock()

    @pytest.fixture
    def idle_registry(self, make_insight, clock):
        registry = PanelRegistry(
            fetcher_for=lambda user_id: AsyncMock(return_value=[make_insight()]),
            generate_answer=AsyncMock(return_value="answer"),
            max_per_user=5,
            idle_seconds=60,
            clock=clock
        )
        yield registry
        registry.clear()

    @pytest.mark.asyncio
    async def test_idle_panel_is_dropped(self, idle_registry, clock):
        mounted = idle_registry.mount("user-a")

        clock.now += 61

        assert idle_registry.get(mounted.panel_id, "user-a") is None
        assert idle_registry.panels_for_user("user-a") == []

    @pytest.mark.asyncio
    async def test_viewing_keeps_panel_alive(self, idle_registry, clock):
        mounted = idle_registry.mount("user-a")

        for _ in range(3):
            clock.now += 45
            assert idle_registry.get(mounted.panel_id, "user-a") is mounted

    @pytest.mark.asyncio
    async def test_mount_sweeps_other_users_idle_panels(self, idle_registry, clock):
        idle_registry.mount("user-a")
        clock.now += 61

        fresh = idle_registry.mount("user-b")

        assert idle_registry.panels_for_user("user-a") == []
        assert idle_registry.panels_for_user("user-b") == [fresh]

    @pytest.mark.asyncio
    async def test_prune_reports_count(self, idle_registry, clock):
        idle_registry.mount("user-a")
        idle_registry.mount("user-b")
        clock.now += 30
        idle_registry.mount("user-c")
        clock.now += 31

        assert idle_registry.prune_idle() == 2
        assert len(idle_registry.panels_for_user("user-c")) == 1
