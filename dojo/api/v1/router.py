from fastapi import APIRouter

from dojo.api.routers import attendance, classes, grading, promotions, ranks

api_router = APIRouter()

api_router.include_router(ranks.router)
api_router.include_router(classes.router)
api_router.include_router(attendance.router)
api_router.include_router(promotions.router)
api_router.include_router(grading.router)
