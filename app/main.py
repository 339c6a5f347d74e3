from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1 import api_router
from app.core.config_file import get_settings
from app.core.exceptions import APIException
from app.core.logging import app_logger
from app.core.redis import close_redis_client

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_logger.info(f"Starting Learning Reports API (env={settings.ENV})")
    yield
    await close_redis_client()


app = FastAPI(
    title="Learning Reports API",
    version="0.1.0",
    description="Query builder templates for custom report types and report configuration updates",
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.CORS_ORIGINS.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """Render domain errors translated by the routers."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.as_error(), "data": None})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render request validation errors in the same envelope, grouped by field."""
    details: dict[str, list[str]] = {}
    for error in exc.errors():
        # ("body", "sql") -> "sql", ("header", "X-User-Id") -> "X-User-Id"
        location = error["loc"]
        field = str(location[-1])
        details.setdefault(field, []).append(error["msg"])

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {"code": "VALIDATION_ERROR", "message": "Validation failed", "details": details},
            "data": None,
        },
    )


@app.get("/healthz", tags=["system"])
def healthz():
    return {"status": "ok", "env": settings.ENV, "debug": settings.DEBUG}


app.include_router(api_router, prefix="/api/v1")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
