import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from http import HTTPStatus

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from message_store.api.v1.messages import router as messages_router
from message_store.api.v1.schemas import ErrorResponseSchema
from message_store.application.exceptions import MessageNotFoundError, MessageStoreError
from message_store.application.ports.message_repository import MessageRepositoryPort
from message_store.core.config import Settings
from message_store.infrastructure.cassandra.session import shutdown_session
from message_store.wiring.dependencies import build_message_repository


logger = logging.getLogger(__name__)


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("message_id", "receiver_id", "keyspace", "path", "error"):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


def configure_logging(level: str) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter("%(asctime)s %(levelname)s:%(name)s:%(message)s"))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)


def _error_response(request: Request, status: HTTPStatus, error_code: str, message: str) -> JSONResponse:
    body = ErrorResponseSchema(
        timestamp=datetime.now(timezone.utc).isoformat(),
        status=status.value,
        error=status.phrase,
        message=message,
        path=request.url.path,
        error_code=error_code,
    )
    return JSONResponse(status_code=status.value, content=body.model_dump(by_alias=True))


async def message_not_found_handler(request: Request, exc: MessageNotFoundError) -> JSONResponse:
    logger.info("Message not found", extra={"message_id": str(exc.message_id), "receiver_id": str(exc.receiver_id)})
    return _error_response(request, HTTPStatus.NOT_FOUND, "MESSAGE_NOT_FOUND", str(exc))


async def message_store_error_handler(request: Request, exc: MessageStoreError) -> JSONResponse:
    logger.error("Message store unavailable", extra={"path": request.url.path, "error": str(exc)})
    return _error_response(request, HTTPStatus.SERVICE_UNAVAILABLE, "SERVICE_UNAVAILABLE", "Message store unavailable")


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}" for err in exc.errors()
    )
    return _error_response(request, HTTPStatus.BAD_REQUEST, "VALIDATION_ERROR", details or "Invalid request")


def create_app(settings: Settings | None = None, repository: MessageRepositoryPort | None = None) -> FastAPI:
    """
    Build the application around one Settings value.

    The repository is created in the lifespan handler unless one is passed in,
    so schema bootstrap runs (and may abort startup) before any request is served.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        session = None
        if repository is None:
            app.state.message_repository, session = build_message_repository(settings)
        else:
            app.state.message_repository = repository
        try:
            yield
        finally:
            if session is not None:
                shutdown_session(session)

    app = FastAPI(title="Message Store", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_exception_handler(MessageNotFoundError, message_not_found_handler)
    app.add_exception_handler(MessageStoreError, message_store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(messages_router, tags=["messages"])

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


def run() -> None:
    settings = Settings()
    configure_logging(settings.LOG_LEVEL)
    logger.info("Starting message store (ENV=%s) on %s:%s", settings.ENV, settings.HOST, settings.PORT)
    uvicorn.run(create_app(settings), host=settings.HOST, port=int(settings.PORT), log_config=None)


if __name__ == "__main__":
    run()
