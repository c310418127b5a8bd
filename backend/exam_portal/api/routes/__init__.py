"""Exam Portal - API Router."""
from fastapi import APIRouter

from exam_portal.api.routes.auth import router as auth_router
from exam_portal.api.routes.exams import router as exams_router
from exam_portal.api.routes.results import router as results_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(exams_router)
api_router.include_router(results_router)
