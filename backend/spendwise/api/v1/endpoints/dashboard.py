"""Dashboard insights panel endpoints"""
from fastapi import APIRouter, Depends, HTTPException, status

from spendwise.core.deps import get_current_user, get_panel_registry
from spendwise.models.api import PanelView
from spendwise.models.user import UserDB
from spendwise.services.panel_registry import MountedPanel, PanelRegistry
from spendwise.services.panel_view import PanelFormatter

router = APIRouter()


def _get_mounted(registry: PanelRegistry, panel_id: str, user: UserDB) -> MountedPanel:
    mounted = registry.get(panel_id, user.id)
    if not mounted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Panel not found"
        )
    return mounted


@router.post("/panels", response_model=PanelView, status_code=status.HTTP_201_CREATED)
async def mount_panel(
    current_user: UserDB = Depends(get_current_user),
    registry: PanelRegistry = Depends(get_panel_registry)
):
    """Mount an insights panel; insights start loading immediately"""
    mounted = registry.mount(current_user.id)
    return PanelFormatter.format_panel(mounted.panel, mounted.panel_id)


@router.get("/panels/{panel_id}", response_model=PanelView)
async def get_panel(
    panel_id: str,
    current_user: UserDB = Depends(get_current_user),
    registry: PanelRegistry = Depends(get_panel_registry)
):
    """Current view of a mounted panel"""
    mounted = _get_mounted(registry, panel_id, current_user)
    return PanelFormatter.format_panel(mounted.panel, mounted.panel_id)


@router.post("/panels/{panel_id}/reload", response_model=PanelView)
async def reload_panel(
    panel_id: str,
    current_user: UserDB = Depends(get_current_user),
    registry: PanelRegistry = Depends(get_panel_registry)
):
    """Fetch the insights again"""
    mounted = _get_mounted(registry, panel_id, current_user)
    mounted.panel.reload()
    return PanelFormatter.format_panel(mounted.panel, mounted.panel_id)


@router.post("/panels/{panel_id}/insights/{insight_id}/answer", response_model=PanelView)
async def toggle_insight_answer(
    panel_id: str,
    insight_id: str,
    current_user: UserDB = Depends(get_current_user),
    registry: PanelRegistry = Depends(get_panel_registry)
):
    """Action click on an insight: show (and generate) or hide its answer"""
    mounted = _get_mounted(registry, panel_id, current_user)
    try:
        mounted.panel.on_action(insight_id)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Insight not found"
        )
    return PanelFormatter.format_panel(mounted.panel, mounted.panel_id)


@router.delete("/panels/{panel_id}")
async def unmount_panel(
    panel_id: str,
    current_user: UserDB = Depends(get_current_user),
    registry: PanelRegistry = Depends(get_panel_registry)
):
    """Unmount a panel, dropping its answers"""
    if not registry.unmount(panel_id, current_user.id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Panel not found"
        )
    return {"message": "Panel unmounted"}
