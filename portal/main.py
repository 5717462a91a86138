# portal/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portal.core.config import CONFIG
from portal.core.session import RequestTracker
from portal.routes.admin_routes import router as admin_router
from portal.routes.attendance_routes import router as attendance_router
from portal.routes.auth_routes import router as auth_router
from portal.routes.marks_routes import router as marks_router
from portal.routes.root import router as root_router
from portal.routes.student_routes import router as student_router
from portal.routes.teacher_routes import router as teacher_router

app = FastAPI(
    title="College Portal",
    version="0.1.0",
)

# CORS (relaxed; tighten if needed)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Latest request token per caller, used to drop stale subject loads
app.state.tracker = RequestTracker(max_keys=CONFIG.TRACKER_MAX_KEYS)

app.include_router(root_router)
app.include_router(auth_router)
app.include_router(marks_router)
app.include_router(attendance_router)
app.include_router(teacher_router)
app.include_router(admin_router)
app.include_router(student_router)
