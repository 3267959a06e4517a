from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from tasklist.app.config import get_settings
from tasklist.app.core.logging_config import configure_logging
from tasklist.app.db import dispose_engine, get_engine, init_db
from tasklist.app.routers import tasks as tasks_router

configure_logging()
settings = get_settings()

app = FastAPI(title="Todo", version="1.0.0", docs_url="/docs", redoc_url=None)
app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")


@app.on_event("startup")
def on_startup() -> None:
    # Initialize database schema on boot (safe no-op if the table already exists)
    init_db(get_engine())


@app.on_event("shutdown")
def on_shutdown() -> None:
    dispose_engine()


app.include_router(tasks_router.pages_router)
app.include_router(tasks_router.api_router)


@app.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}
