from fastapi import APIRouter
from ministry_hub.api.v1.endpoints import auth, members, library, teachings, journal, prophecy, family, giving, live, messages, leads, courses, health
from ministry_hub.api.v1.endpoints.admin import admin_router

api_router = APIRouter()

# Deep health checks (/health/live, /health/ready)
api_router.include_router(health.router)

# Include endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(members.router, prefix="/members", tags=["Members"])
api_router.include_router(library.router, prefix="/library", tags=["Library"])
api_router.include_router(teachings.router, prefix="/teachings", tags=["Teachings"])
api_router.include_router(journal.router, prefix="/journal", tags=["Journal"])
api_router.include_router(prophecy.router, prefix="/prophecy", tags=["Prophecy"])
api_router.include_router(family.router, prefix="/family", tags=["Family"])
api_router.include_router(giving.router, prefix="/giving", tags=["Giving"])
api_router.include_router(live.router, prefix="/live", tags=["Live Services"])
api_router.include_router(messages.router, prefix="/messages", tags=["Messages"])
api_router.include_router(leads.router, prefix="/leads", tags=["Leads"])
api_router.include_router(courses.router, prefix="/courses", tags=["Courses"])

# Staff console (admin_router already has /admin prefix)
api_router.include_router(admin_router)
