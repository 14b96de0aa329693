from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from evalcycle.api.health import router as health_router
from evalcycle.api.me import router as me_router
from evalcycle.api.root import router as root_router
from evalcycle.api.cycles import router as cycles_router
from evalcycle.api.evaluations import router as evaluations_router
from evalcycle.api.audit import router as audit_router
from evalcycle.api.employees import router as employees_router
from evalcycle.core.config import settings
from evalcycle.core.errors import register_error_handlers
from evalcycle.core.logging import setup_logging

setup_logging(level=settings.LOG_LEVEL, json_output=settings.LOG_JSON)

app = FastAPI(title="Annual Evaluation Cycle Service")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(root_router)
app.include_router(health_router)
app.include_router(me_router)
app.include_router(cycles_router)
app.include_router(evaluations_router)
app.include_router(audit_router)
app.include_router(employees_router)
