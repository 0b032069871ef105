"""FastAPI application factory."""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from guest_cards.api.models import FillImageRequest
from guest_cards.app_logging import configure_logging
from guest_cards.config import parse_cors_origins
from guest_cards.containers import AppContainer
from guest_cards.domain.guests import GuestRecord
from guest_cards.services.guests import (
    GuestNotFoundError,
    InvalidGuestIdError,
    MissingGuestFieldsError,
)
from guest_cards.services.startup import wait_for_store

GREETING = "Hello! 2 :)"
FILL_IMAGE_PATH = "/fill-image"
MISSING_FIELDS_MESSAGE = "Name and number are required"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        connect_task = asyncio.create_task(
            wait_for_store(
                state_container.guest_repository.ping,
                state_container.retry_policy,
            )
        )
        yield
        connect_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await connect_task
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error(
        request: Request, exc: RequestValidationError
    ) -> Response:
        """Answer unusable fill-image bodies with the missing-fields payload."""
        if request.url.path == FILL_IMAGE_PATH:
            return _missing_fields()
        return await request_validation_exception_handler(request, exc)

    @app.get("/", response_class=PlainTextResponse)
    async def index() -> str:
        """Plain-text greeting."""
        return GREETING

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/guests_list")
    async def guests_list(request: Request) -> Response:
        """Return every stored guest card."""
        state_container: AppContainer = request.app.state.container
        try:
            guests = state_container.guest_service.list_guests()
        except Exception as exc:
            logger.exception("Failed to list guests")
            return _server_error(state_container, exc, "Failed to fetch guests")
        return JSONResponse([_serialize_guest(guest) for guest in guests])

    @app.post(FILL_IMAGE_PATH)
    async def fill_image(
        request: Request, body: FillImageRequest | None = None
    ) -> Response:
        """Render a guest card, upload it and store the record."""
        state_container: AppContainer = request.app.state.container
        if body is None:
            return _missing_fields()
        try:
            record = state_container.guest_service.create_card(
                name=body.name,
                number=body.number,
                two_names=bool(body.two_names),
            )
        except MissingGuestFieldsError:
            return _missing_fields()
        except Exception as exc:
            logger.exception(
                "Failed to create guest card", extra={"guest_name": body.name}
            )
            return _server_error(state_container, exc, "Internal Server Error")
        return JSONResponse({"card": _serialize_guest(record)})

    @app.delete("/guests_list/{guest_id}")
    async def delete_guest(guest_id: str, request: Request) -> Response:
        """Delete a guest card record."""
        state_container: AppContainer = request.app.state.container
        try:
            deleted = state_container.guest_service.delete_guest(guest_id)
        except GuestNotFoundError:
            return _not_found()
        except Exception as exc:
            logger.exception("Failed to delete guest", extra={"guest_id": guest_id})
            return _server_error(state_container, exc, "Failed to delete record")
        return JSONResponse(
            {
                "status": "success",
                "message": "Record deleted successfully",
                "deletedSample": _serialize_guest(deleted),
            }
        )

    @app.get("/get-image/{guest_id}")
    async def get_image(guest_id: str, request: Request) -> Response:
        """Download the stored card image as an attachment."""
        state_container: AppContainer = request.app.state.container
        try:
            record, content = await state_container.guest_service.get_guest_image(
                guest_id
            )
        except InvalidGuestIdError:
            return JSONResponse(
                status_code=400,
                content={"status": "nok", "message": "Invalid guest ID"},
            )
        except GuestNotFoundError:
            return _not_found()
        except Exception as exc:
            logger.exception(
                "Failed to fetch guest image", extra={"guest_id": guest_id}
            )
            return _server_error(state_container, exc, "Failed to fetch image")
        return Response(
            content=content,
            media_type="image/jpeg",
            headers={
                "Content-Disposition": f'attachment; filename="card-{record.id}.jpg"'
            },
        )

    return app


def _serialize_guest(record: GuestRecord) -> dict[str, str]:
    return {
        "id": record.id,
        "name": record.name,
        "number": record.number,
        "imagePath": record.image_path,
    }


def _missing_fields() -> JSONResponse:
    return JSONResponse(
        status_code=400, content={"status": "nok", "message": MISSING_FIELDS_MESSAGE}
    )


def _not_found() -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"status": "not found", "message": "Record not found"},
    )


def _server_error(
    state_container: AppContainer, exc: Exception, fallback: str
) -> JSONResponse:
    """Return a 500 payload, with debug detail in the local environment."""
    message = fallback
    if state_container.settings.environment == "local":
        detail = f"{type(exc).__name__}: {exc}".strip()
        if detail:
            message = f"{fallback} (debug: {detail})"
    return JSONResponse(
        status_code=500, content={"status": "nok", "message": message}
    )
