
# teamboard/main.py

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import os
import logging

# Импортируем роутеры
from teamboard.api.analytics import router as analytics_router
from teamboard.api.assignee import router as assignee_router
from teamboard.api.auth import router as auth_router
from teamboard.api.calendar import router as calendar_router
from teamboard.api.comment import router as comment_router
from teamboard.api.milestone import router as milestone_router
from teamboard.api.project import router as project_router
from teamboard.api.quote import router as quote_router
from teamboard.api.user import router as user_router

from teamboard.core.settings import settings
from teamboard.core.exceptions import InvalidMove, NotFoundError, ValidationError
from teamboard.database import init_db

# Логирование
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn.error")

app = FastAPI(
    title="TeamBoard API",
    version="1.0.0",
    description="Team project management: project hierarchy, assignees, calendar and analytics",
)

# Middlewares
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Роутеры
app.include_router(analytics_router)
app.include_router(assignee_router)
app.include_router(auth_router)
app.include_router(calendar_router)
app.include_router(comment_router)
app.include_router(milestone_router)
app.include_router(project_router)
app.include_router(quote_router)
app.include_router(user_router)

# Health check & root
@app.get("/", tags=["Health"])
def root():
    return {"status": "TeamBoard API is running!"}

@app.get("/health", tags=["Health"])
def health():
    return {"ok": True}

@app.on_event("startup")
async def startup_event():
    init_db()
    logger.info(f"Starting TeamBoard API (env={settings.ENV})")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Stopping TeamBoard API")

@app.exception_handler(NotFoundError)
async def not_found_exception_handler(request: Request, exc: NotFoundError):
    return JSONResponse(
        status_code=404,
        content={"detail": str(exc)},
    )

@app.exception_handler(InvalidMove)
async def invalid_move_exception_handler(request: Request, exc: InvalidMove):
    return JSONResponse(
        status_code=409,
        content={"detail": str(exc)},
    )

@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": str(exc)},
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "teamboard.main:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", 8000)),
        reload=settings.DEBUG,
    )
