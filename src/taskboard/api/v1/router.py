from fastapi import APIRouter

from src.taskboard.api.v1 import comments, dashboard, projects, tasks

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(tasks.router)
api_router.include_router(comments.router)
api_router.include_router(dashboard.router)
