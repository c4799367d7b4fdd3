import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from app.core.config import DATABASE_URL, CORS_ORIGINS, LOG_LEVEL, SEED_DATA, SEED_ADMIN_PASSWORD
from app.core.errors import register_exception_handlers
from app.core.logger import configure_logging
from app.services.store import EntityStore
from app.api import (
    auth, users, dashboard, employees, projects, tasks, kpis, transactions,
    payroll, proposals, evaluations, assets, reports
)

logger = logging.getLogger(__name__)


class NoCacheMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"
        return response


def create_app(store: EntityStore | None = None) -> FastAPI:
    configure_logging(LOG_LEVEL)
    if store is None:
        store = EntityStore(DATABASE_URL, seed=SEED_DATA, admin_password=SEED_ADMIN_PASSWORD)

    app = FastAPI(title="GSI Management System", version="1.0.0")
    app.state.store = store

    register_exception_handlers(app)
    app.add_middleware(NoCacheMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for module in (auth, users, dashboard, employees, projects, tasks, kpis, transactions,
                   payroll, proposals, evaluations, assets, reports):
        app.include_router(module.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    logger.info("GSI Management System ready (%s)", DATABASE_URL)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=5000)
