from fastapi import APIRouter

from spendwise.api.v1.endpoints import users, insights, dashboard

api_router = APIRouter()

api_router.include_router(users.router, prefix="/user", tags=["users"])
api_router.include_router(insights.router, prefix="/insights", tags=["insights"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
