"""FastAPI server exposing the reservation form to the restaurant site."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bistro.config import get_config, setup_logging
from bistro.models import MAX_GUESTS, MIN_GUESTS, OCCASIONS, TIME_SLOTS
from bistro.services.email_service import EmailService
from bistro.services.reservation_controller import (
    ReservationController,
    UnknownFieldError,
)
from bistro.services.session_manager import FormSession, get_session_manager
from bistro.views import render_form

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan manager."""
    config = get_config()
    logger.info(
        f"Starting Bistro reservation server on {config.server_host}:{config.server_port}"
    )

    email_service = EmailService(config)
    _app.state.email_service = email_service
    logger.info(
        f"✓ Email service ready (configured: {email_service.is_configured()})"
    )

    yield

    await email_service.aclose()
    logger.info("Shutting down Bistro reservation server")


app = FastAPI(
    title="Bistro Reservations API",
    description="Reservation form backend for the Bistro website",
    version="0.1.0",
    lifespan=lifespan,
)

# The static site is served from a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_email_service(request: Request) -> EmailService:
    """Dependency to get the email service from app state.

    Raises:
        HTTPException: If the service is not initialized
    """
    service = getattr(request.app.state, "email_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Email service not initialized")
    return service


def get_form_session(session_id: str) -> FormSession:
    """Dependency resolving a mounted form by ID.

    Raises:
        HTTPException: If the session does not exist
    """
    session = get_session_manager().get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")
    return session


def session_payload(session: FormSession) -> dict:
    """Serialize a session for the site's rendering layer."""
    snapshot = session.controller.snapshot()
    return {
        "session_id": session.session_id,
        "state": snapshot.state.value,
        "draft": snapshot.draft.model_dump(),
        "errors": snapshot.errors,
        "notice": snapshot.notice,
        "view": render_form(snapshot).model_dump(),
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "service": "bistro-reservations"}


@app.get("/reservations/options")
async def reservation_options():
    """Choices offered by the reservation form."""
    return {
        "time_slots": list(TIME_SLOTS),
        "occasions": list(OCCASIONS),
        "guests": {"min": MIN_GUESTS, "max": MAX_GUESTS},
    }


@app.post("/reservations/sessions", status_code=201)
async def create_form_session(
    email_service: EmailService = Depends(get_email_service),
):
    """Mount a new, empty reservation form."""
    config = get_config()
    manager = get_session_manager()
    manager.cleanup_idle_sessions(config.session_max_age_minutes)

    controller = ReservationController(
        email_service,
        fallback_phone=config.whatsapp_number,
        restaurant_name=config.restaurant_name,
    )
    session = manager.create_session(controller)
    return session_payload(session)


@app.get("/reservations/sessions/{session_id}")
async def read_form_session(session: FormSession = Depends(get_form_session)):
    """Current state of a mounted form."""
    return session_payload(session)


@app.patch("/reservations/sessions/{session_id}")
async def update_form_fields(
    request: Request, session: FormSession = Depends(get_form_session)
):
    """Apply field edits in order.

    Request body:
        {"name": "John Doe", "guests": 4}

    Edits are ignored while the form is submitting or confirmed.
    """
    try:
        changes = await request.json()
    except ValueError:
        return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})

    if not isinstance(changes, dict):
        return JSONResponse(
            status_code=400,
            content={"error": "Body must be an object of field values"},
        )

    try:
        for field, value in changes.items():
            session.controller.on_field_change(field, value)
    except UnknownFieldError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    return session_payload(session)


@app.post("/reservations/sessions/{session_id}/submit")
async def submit_form(session: FormSession = Depends(get_form_session)):
    """Validate and send the reservation.

    Waits for the email provider; a submit while another is in flight returns
    the current state without sending again.
    """
    await session.controller.submit()
    return session_payload(session)


@app.post("/reservations/sessions/{session_id}/reset")
async def reset_form(session: FormSession = Depends(get_form_session)):
    """Start another reservation after a confirmed one."""
    session.controller.reset()
    return session_payload(session)


@app.delete("/reservations/sessions/{session_id}", status_code=204)
async def delete_form_session(session: FormSession = Depends(get_form_session)):
    """Unmount a form."""
    get_session_manager().remove_session(session.session_id)
    return Response(status_code=204)


def run_server():
    """Run the FastAPI server using uvicorn.

    This is the main entry point for the server.
    """
    setup_logging()
    config = get_config()

    uvicorn.run(
        "bistro.server:app",
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level.lower(),
        reload=False,
    )


if __name__ == "__main__":
    run_server()
