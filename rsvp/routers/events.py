"""
Events Router - path/method dispatch

    /                         GET  front page
    /{id}                     GET  redirect to /events/{id} (/events -> /)
    /events                   POST create event
    /events/{id}              GET  show event
    /events/{id}/attendees    POST add attendee
                              GET  501, attendee listing is not offered

GET also answers HEAD. Paths with two or three segments must start with
"events"; any other first segment is a 404 rather than an event lookup.

Every other (depth, method) pair ends in 404 or 405.
"""
import logging
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from rsvp.core.config import ATTENDEES_SEGMENT, EVENTS_SEGMENT
from rsvp.core.exceptions import (
    MalformedFormError,
    MethodNotAllowedError,
    NotFoundError,
    NotImplementedRouteError,
    RSVPError,
)
from rsvp.core.utils import event_url, split_path
from rsvp.deps import (
    get_add_attendee_uc,
    get_create_event_uc,
    get_get_event_uc,
    get_renderer,
)
from rsvp.models.event import EventCreate
from rsvp.services.renderer import TemplateRenderer
from rsvp.use_cases.add_attendee import AddAttendeeUseCase
from rsvp.use_cases.create_event import CreateEventUseCase
from rsvp.use_cases.get_event import GetEventUseCase

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


async def _read_form(request: Request) -> FormData:
    try:
        return await request.form()
    except (MultiPartException, StarletteHTTPException, ValueError) as e:
        raise MalformedFormError(str(e)) from e


async def _create_event(request: Request, create_event_uc: CreateEventUseCase) -> Response:
    form = EventCreate.from_form(await _read_form(request))
    segment = await run_in_threadpool(create_event_uc.execute, form)
    return RedirectResponse(event_url(segment), status_code=303)


async def _show_event(segment: str, get_event_uc: GetEventUseCase,
                      renderer: TemplateRenderer) -> Response:
    event = await run_in_threadpool(get_event_uc.execute, segment)
    html = await run_in_threadpool(renderer.render_event, event)
    return HTMLResponse(html)


async def _add_attendee(request: Request, segment: str,
                        add_attendee_uc: AddAttendeeUseCase) -> Response:
    form = await _read_form(request)
    attendee = form.get("attendee")
    if not isinstance(attendee, str):
        attendee = ""
    await run_in_threadpool(add_attendee_uc.execute, segment, attendee)
    return RedirectResponse(event_url(segment), status_code=303)


def allowed_methods(segments: List[str]) -> Optional[Tuple[str, ...]]:
    """
    Methods a path accepts, or None when the path itself does not exist
    and any method on it is a 404.
    """
    depth = len(segments)
    if depth == 0 or depth > 3:
        return None
    if depth == 1:
        return ("GET", "HEAD", "POST") if segments[0] == EVENTS_SEGMENT else ("GET", "HEAD")
    if segments[0] != EVENTS_SEGMENT:
        return None
    if depth == 2:
        return ("GET", "HEAD")
    if segments[2] == ATTENDEES_SEGMENT:
        return ("GET", "HEAD", "POST")
    return None


def method_error(path: str) -> RSVPError:
    """404 or 405 for a method the path does not handle"""
    allowed = allowed_methods(split_path(path))
    if allowed is None:
        return NotFoundError(path)
    return MethodNotAllowedError(allowed)


@router.api_route("/{path:path}", methods=ALL_METHODS)
async def dispatch(
    path: str,
    request: Request,
    renderer: TemplateRenderer = Depends(get_renderer),
    create_event_uc: CreateEventUseCase = Depends(get_create_event_uc),
    get_event_uc: GetEventUseCase = Depends(get_get_event_uc),
    add_attendee_uc: AddAttendeeUseCase = Depends(get_add_attendee_uc),
) -> Response:
    segments = split_path(path)
    method = request.method
    is_read = method in ("GET", "HEAD")
    logger.info(f"{method} {segments}")

    if len(segments) == 0:
        if is_read:
            html = await run_in_threadpool(renderer.render_index)
            return HTMLResponse(html)
        raise NotFoundError(path)

    if len(segments) == 1:
        head = segments[0]
        if is_read:
            if head == EVENTS_SEGMENT:
                return RedirectResponse("/", status_code=302)
            return RedirectResponse(event_url(head), status_code=302)
        if method == "POST" and head == EVENTS_SEGMENT:
            return await _create_event(request, create_event_uc)
        raise method_error(path)

    if segments[0] != EVENTS_SEGMENT:
        raise NotFoundError(path)

    if len(segments) == 2:
        if is_read:
            return await _show_event(segments[1], get_event_uc, renderer)
        raise method_error(path)

    if len(segments) == 3 and segments[2] == ATTENDEES_SEGMENT:
        if method == "POST":
            return await _add_attendee(request, segments[1], add_attendee_uc)
        if is_read:
            # Listing attendees is deliberately unsupported; the event page shows them
            raise NotImplementedRouteError(path)
        raise method_error(path)

    raise NotFoundError(path)
