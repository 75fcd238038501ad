import logging
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import Optional

from spendwise.database import init_db, close_db
from spendwise.core.config import settings, configure_logging
from spendwise.core.deps import get_current_user_optional, get_panel_registry
from spendwise.api.v1.api import api_router
from spendwise.models.api import PageResponse, UserProfileResponse
from spendwise.models.user import UserDB
from spendwise.services.panel_registry import PanelRegistry
from spendwise.services.panel_view import PanelFormatter

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        # get_db retries per request (Lambda cold starts)
        logger.error(f"Database initialization failed: {e}", exc_info=True)
    yield
    get_panel_registry().clear()
    await close_db()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
    debug=settings.DEBUG
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    return {"status": "healthy", "version": settings.VERSION}


@app.get("/", response_model=PageResponse)
async def home_page(
    user: Optional[UserDB] = Depends(get_current_user_optional),
    registry: PanelRegistry = Depends(get_panel_registry)
):
    """Guest view for anonymous visitors, dashboard with a fresh insights panel otherwise"""
    if not user:
        return PageResponse(
            view="guest",
            message=f"Welcome to {settings.APP_NAME}. Sign in to see your spending insights."
        )

    mounted = registry.mount(user.id)
    return PageResponse(
        view="dashboard",
        message=f"Welcome back{', ' + user.name if user.name else ''}",
        user=UserProfileResponse.model_validate(user),
        panel=PanelFormatter.format_panel(mounted.panel, mounted.panel_id)
    )


# Lambda handler; panels live in one process, so dashboard panel routes need uvicorn
from mangum import Mangum
lambda_handler = Mangum(app, lifespan="on")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
