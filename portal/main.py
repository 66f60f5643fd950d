import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portal.api import auth, courses, progress, schedule, attendance
from portal.core.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Student Portal")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(courses.router, prefix="/api/courses", tags=["courses"])
app.include_router(progress.router, prefix="/api/progress", tags=["progress"])
app.include_router(schedule.router, prefix="/api/schedule", tags=["schedule"])
app.include_router(attendance.router, prefix="/api/attendance", tags=["attendance"])
