"""
Formatter turning insights panel state into the view the dashboard draws
"""

from typing import Optional

from spendwise.models.api import (
    ActionControlView,
    AnswerPanelView,
    InsightCardView,
    InsightRecord,
    PanelView,
)
from spendwise.services.insights_panel import InsightsPanel

PLACEHOLDER_COUNT = 3
PENDING_TEXT = "Generating AI response..."
ACTION_ARROW = "→"

CATEGORY_STYLES = {
    "warning": "bg-gradient-to-r from-red-50 to-pink-50 dark:from-red-900/20 dark:to-pink-900/20 border-l-red-500",
    "success": "bg-gradient-to-r from-green-50 to-emerald-50 dark:from-green-900/20 dark:to-emerald-900/20 border-l-green-500",
    "tip": "bg-gradient-to-r from-blue-50 to-indigo-50 dark:from-blue-900/20 dark:to-indigo-900/20 border-l-blue-500",
}
DEFAULT_STYLE = "bg-gradient-to-r from-gray-50 to-slate-50 dark:from-gray-900/20 dark:to-slate-900/20 border-l-gray-500"

CATEGORY_ICONS = {
    "warning": "⚠️",
    "success": "✅",
    "tip": "💡",
}
DEFAULT_ICON = "ℹ️"


class PanelFormatter:
    """Format panel state into a serialisable view"""

    @staticmethod
    def format_panel(panel: InsightsPanel, panel_id: Optional[str] = None) -> PanelView:
        if panel.is_loading:
            return PanelView(
                panel_id=panel_id,
                is_loading=True,
                placeholders=PLACEHOLDER_COUNT,
                last_updated=PanelFormatter.format_time(panel),
            )

        return PanelView(
            panel_id=panel_id,
            is_loading=False,
            cards=[PanelFormatter.format_card(panel, insight) for insight in panel.insights],
            last_updated=PanelFormatter.format_time(panel),
        )

    @staticmethod
    def format_card(panel: InsightsPanel, insight: InsightRecord) -> InsightCardView:
        action = None
        if insight.action_label:
            action = ActionControlView(
                insight_id=insight.id,
                label=f"{insight.action_label} {ACTION_ARROW}",
            )

        answer = None
        entry = panel.answer_for(insight.id)
        if entry is not None:
            if entry.pending:
                answer = AnswerPanelView(status="pending", text=PENDING_TEXT)
            else:
                answer = AnswerPanelView(status="resolved", text=entry.answer_text)

        return InsightCardView(
            id=insight.id,
            category=insight.category,
            style=PanelFormatter.get_style(insight.category),
            icon=PanelFormatter.get_icon(insight.category),
            title=insight.title,
            message=insight.message,
            confidence=insight.confidence,
            action=action,
            answer=answer,
        )

    @staticmethod
    def format_time(panel: InsightsPanel) -> Optional[str]:
        # %X is the locale's time-of-day representation
        if panel.last_updated is None:
            return None
        return panel.last_updated.strftime("%X")

    @staticmethod
    def get_style(category: str) -> str:
        return CATEGORY_STYLES.get(category, DEFAULT_STYLE)

    @staticmethod
    def get_icon(category: str) -> str:
        return CATEGORY_ICONS.get(category, DEFAULT_ICON)
