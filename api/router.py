from fastapi import APIRouter
from api.endpoints.profiles import router as profiles_router
from api.endpoints.projects import router as projects_router
from api.endpoints.applications import router as applications_router
from api.endpoints.ai import router as ai_router
from api.endpoints.auditions import router as auditions_router
from api.endpoints.messages import router as messages_router
from api.endpoints.forums import router as forums_router
from api.endpoints.notifications import router as notifications_router
from api.endpoints.health import router as health_router

api_router = APIRouter()
api_router.include_router(profiles_router, tags=["profiles"])
api_router.include_router(projects_router, tags=["projects"])
api_router.include_router(applications_router, tags=["applications"])
api_router.include_router(ai_router, tags=["ai"])
api_router.include_router(auditions_router, tags=["auditions"])
api_router.include_router(messages_router, tags=["messages"])
api_router.include_router(forums_router, tags=["forums"])
api_router.include_router(notifications_router, tags=["notifications"])
api_router.include_router(health_router, tags=["health"])
