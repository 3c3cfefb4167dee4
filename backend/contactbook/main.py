# contactbook/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from tortoise.exceptions import BaseORMException

from contactbook.config import settings
from contactbook.core.db import init_db, close_db
from contactbook.core.bootstrap import ensure_default_admin, warn_insecure_settings
from contactbook.api.routers import auth, users, contacts
from contactbook.services.icons import ICON_URL_PREFIX

logger = logging.getLogger("uvicorn.error")

# Icons are served straight from disk, so the directory has to exist before mounting
settings.upload_dir.mkdir(parents=True, exist_ok=True)

app = FastAPI(title=settings.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "form")]
        errors.setdefault(".".join(loc) or "request", err.get("msg", "Invalid value"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": {"code": "VALIDATION_ERROR", "message": "Validation failed", "errors": errors}},
    )


@app.exception_handler(BaseORMException)
async def persistence_error_handler(request: Request, exc: BaseORMException):
    # Unclassified storage failures: log everything, tell the client nothing
    logger.exception("[db] unhandled persistence error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
    )


@app.on_event("startup")
async def on_startup():
    warn_insecure_settings()
    settings.upload_dir.mkdir(parents=True, exist_ok=True)
    await init_db()
    # Ensure there's a default admin account on first run
    await ensure_default_admin()


@app.on_event("shutdown")
async def on_shutdown():
    await close_db()


# REST
app.include_router(auth.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(contacts.router, prefix="/api")

# Uploaded icons
app.mount(ICON_URL_PREFIX, StaticFiles(directory=settings.upload_dir), name="uploads")


@app.get("/healthz")
def healthz():
    return {"ok": True}


def run():
    """Console entry point: serve the API with uvicorn."""
    import uvicorn

    uvicorn.run("contactbook.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
