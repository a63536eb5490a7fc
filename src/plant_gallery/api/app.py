"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Form, HTTPException, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from plant_gallery.api.pages import render_gallery_page
from plant_gallery.app_logging import configure_logging
from plant_gallery.containers import AppContainer
from plant_gallery.domain.dialog import DialogStateError
from plant_gallery.services.sessions import GallerySession


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.container.gallery_service.initial_images()
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/")
    async def start_gallery(request: Request) -> RedirectResponse:
        """Start a fresh gallery session and show it."""
        state_container: AppContainer = request.app.state.container
        session = state_container.session_service.start_session()
        logger.info("Started gallery session", extra={"session_id": session.id})
        return _redirect_to(session)

    @app.get("/sessions/{session_id}", response_class=HTMLResponse)
    async def show_gallery(session_id: str, request: Request) -> HTMLResponse:
        """Render the gallery page for a session."""
        session = _require_session(request, session_id)
        return HTMLResponse(render_gallery_page(session))

    @app.post("/sessions/{session_id}/dialog/open")
    async def open_dialog(session_id: str, request: Request) -> RedirectResponse:
        """Open the upload dialog."""
        session = _require_session(request, session_id)
        session.dialog.open()
        return _redirect_to(session)

    @app.post("/sessions/{session_id}/dialog/close")
    async def close_dialog(session_id: str, request: Request) -> RedirectResponse:
        """Close the upload dialog and discard entered values."""
        session = _require_session(request, session_id)
        session.dialog.close()
        return _redirect_to(session)

    @app.post("/sessions/{session_id}/upload")
    async def upload_image(  # noqa: PLR0913
        session_id: str,
        request: Request,
        image_src: str = Form(default="", alias="imageSrc"),
        name: str = Form(default=""),
        username: str = Form(default=""),
        key: str = Form(default=""),
    ) -> RedirectResponse:
        """Submit the upload dialog form."""
        session = _require_session(request, session_id)
        try:
            outcome = await session.dialog.submit(
                {
                    "imageSrc": image_src,
                    "name": name,
                    "username": username,
                    "key": key,
                }
            )
        except DialogStateError as exc:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT, detail=str(exc)
            ) from exc
        logger.info(
            "Upload submitted",
            extra={"session_id": session.id, "outcome": outcome.value},
        )
        return _redirect_to(session)

    return app


def _require_session(request: Request, session_id: str) -> GallerySession:
    """Return the session for the id or raise 404."""
    state_container: AppContainer = request.app.state.container
    session = state_container.session_service.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return session


def _redirect_to(session: GallerySession) -> RedirectResponse:
    return RedirectResponse(
        url=f"/sessions/{session.id}", status_code=status.HTTP_303_SEE_OTHER
    )
