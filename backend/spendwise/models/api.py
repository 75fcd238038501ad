from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Literal
from datetime import datetime


InsightCategory = Literal["warning", "info", "success", "tip"]


class InsightRecord(BaseModel):
    """A pre-computed insight as handed to the dashboard panel"""
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    # Kept open so rendering can fall back to the default style
    category: str
    title: str
    message: str
    action_label: Optional[str] = None
    confidence: Optional[float] = None


class InsightCreate(BaseModel):
    category: InsightCategory = "info"
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    action_label: Optional[str] = Field(None, max_length=255)
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0)


class InsightBatchRequest(BaseModel):
    insights: List[InsightCreate] = Field(default_factory=list, max_length=100)


class InsightListResponse(BaseModel):
    insights: List[InsightRecord]
    count: int


class UserProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    external_user_id: str
    name: Optional[str] = None
    image_url: Optional[str] = None
    email: Optional[str] = None
    created_at: datetime


# Panel view models

class ActionControlView(BaseModel):
    insight_id: str
    label: str


class AnswerPanelView(BaseModel):
    status: Literal["pending", "resolved"]
    text: str


class InsightCardView(BaseModel):
    id: str
    category: str
    style: str
    icon: str
    title: str
    message: str
    confidence: Optional[float] = None
    action: Optional[ActionControlView] = None
    answer: Optional[AnswerPanelView] = None


class PanelView(BaseModel):
    panel_id: Optional[str] = None
    heading: str = "AI Insights"
    subheading: str = "Smart analysis of your spending"
    is_loading: bool
    placeholders: int = 0
    cards: List[InsightCardView] = Field(default_factory=list)
    last_updated: Optional[str] = None


class PageResponse(BaseModel):
    view: Literal["guest", "dashboard"]
    message: Optional[str] = None
    user: Optional[UserProfileResponse] = None
    panel: Optional[PanelView] = None
