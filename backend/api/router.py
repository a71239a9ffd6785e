from __future__ import annotations

from fastapi import APIRouter

from api.routes import (
    admin,
    colleges,
    combined_courses,
    courses,
    departments,
    generation,
    importer,
    levels,
    programs,
    staff,
    venues,
)


api_router = APIRouter()
api_router.include_router(colleges.router, prefix="/colleges", tags=["colleges"])
api_router.include_router(departments.router, prefix="/departments", tags=["departments"])
api_router.include_router(programs.router, prefix="/programs", tags=["programs"])
api_router.include_router(levels.router, prefix="/levels", tags=["levels"])
api_router.include_router(courses.router, prefix="/courses", tags=["courses"])
api_router.include_router(combined_courses.router, prefix="/combined-courses", tags=["combined-courses"])
api_router.include_router(staff.router, prefix="/staff", tags=["staff"])
api_router.include_router(venues.router, prefix="/venues", tags=["venues"])
api_router.include_router(importer.router, prefix="/import", tags=["import"])
api_router.include_router(generation.router, prefix="/generation", tags=["generation"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
