"""Screener web routes — FastAPI router with Jinja2 pages and a JSON API.

HTML form posts drive the questionnaire controller of the caller's session
(one controller per session cookie). Successful commands redirect back to
the page; rejected ones re-render it with an inline warning.
"""
# ruff: noqa: B008

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse, Response
from starlette.datastructures import FormData

from src.config import settings
from src.data.catalog import BenefitCatalog
from src.eligibility.engine import evaluate_benefits, match_benefits
from src.errors import InvalidSelectionError, InvalidTransitionError, StepValidationError
from src.events import emit
from src.models.enums import InputKind, ScreenerSection
from src.questionnaire.controller import QuestionnaireController
from src.rendering.cards import build_cards, templates
from src.schemas.benefits import UserResponses
from src.schemas.eligibility import EligibilityResult
from src.schemas.events import EventType, SystemEvent
from src.web.sessions import ScreenerSession, SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["screener"])


# ── Dependencies ─────────────────────────────────────────────────────


def get_catalog(request: Request) -> BenefitCatalog:
    return request.app.state.catalog


def get_sessions(request: Request) -> SessionStore:
    return request.app.state.sessions


# ── Helpers ──────────────────────────────────────────────────────────


async def _session_for(request: Request, sessions: SessionStore) -> tuple[ScreenerSession, bool]:
    """Return the caller's session, creating one when the cookie is missing or stale."""
    session = sessions.get(request.cookies.get(settings.web.session_cookie_name))
    if session is not None:
        return session, False

    session = sessions.create()
    await emit(SystemEvent(
        event_type=EventType.SESSION_STARTED,
        session_id=session.id,
        source_module="web.routes",
    ))
    return session, True


def _with_cookie(response: Response, session: ScreenerSession, is_new: bool) -> Response:
    if is_new:
        response.set_cookie(
            settings.web.session_cookie_name,
            str(session.id),
            httponly=True,
            samesite="lax",
        )
    return response


def _render_page(
    request: Request,
    session: ScreenerSession,
    catalog: BenefitCatalog,
    warning: str | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    section = session.section(catalog.status)
    context: dict[str, Any] = {
        "title": settings.web.app_title,
        "section": section.value,
        "warning": warning,
    }
    if section == ScreenerSection.QUESTIONNAIRE:
        context["view"] = session.controller.view
    elif section == ScreenerSection.RESULTS:
        context["cards"] = build_cards(session.matches or [])
    return templates.TemplateResponse(request, "index.html", context, status_code=status_code)


def _apply_form(controller: QuestionnaireController, form: FormData) -> None:
    """Copy the active step's inputs from a form post into the controller."""
    step = controller.active_step
    if step.kind == InputKind.MULTIPLE:
        # Unchecked boxes are simply absent from the post
        controller.set_circumstances([str(v) for v in form.getlist(step.field)])
        return
    value = form.get(step.field)
    if value:
        controller.select(step.field, str(value))


async def _run_command(
    request: Request,
    catalog: BenefitCatalog,
    sessions: SessionStore,
    command: Callable[[ScreenerSession], object],
    name: str,
    strict_form: bool = True,
) -> Response:
    """Apply the posted selections, run a controller command, answer the browser.

    With ``strict_form`` off, a rejected selection is dropped and the command
    still runs.
    """
    session, is_new = await _session_for(request, sessions)
    if not catalog.is_ready:
        return _with_cookie(RedirectResponse("/", status_code=303), session, is_new)

    controller = session.controller
    old_step = controller.current_step
    form = await request.form()
    try:
        if not controller.is_submitted:
            try:
                _apply_form(controller, form)
            except InvalidSelectionError as exc:
                if strict_form:
                    raise
                logger.info("Dropped selection on %s (session=%s): %s", name, session.id, exc)
        command(session)
    except StepValidationError as exc:
        await emit(SystemEvent(
            event_type=EventType.SESSION_VALIDATION_FAILED,
            session_id=session.id,
            data={"step": exc.step, "command": name},
            source_module="web.routes",
        ))
        return _with_cookie(_render_page(request, session, catalog, str(exc), 422), session, is_new)
    except InvalidSelectionError as exc:
        logger.info("Rejected selection (session=%s): %s", session.id, exc)
        return _with_cookie(_render_page(request, session, catalog, str(exc), 400), session, is_new)
    except InvalidTransitionError as exc:
        logger.info("Rejected %s (session=%s): %s", name, session.id, exc)
        return _with_cookie(_render_page(request, session, catalog, str(exc), 409), session, is_new)

    if controller.current_step != old_step:
        await emit(SystemEvent(
            event_type=EventType.SESSION_STEP_CHANGED,
            session_id=session.id,
            data={"from_step": old_step, "to_step": controller.current_step, "command": name},
            source_module="web.routes",
        ))
    return _with_cookie(RedirectResponse("/", status_code=303), session, is_new)


# ── Pages ────────────────────────────────────────────────────────────


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    catalog: BenefitCatalog = Depends(get_catalog),
    sessions: SessionStore = Depends(get_sessions),
) -> Response:
    """The single page: loading, error, questionnaire or results section."""
    session, is_new = await _session_for(request, sessions)
    return _with_cookie(_render_page(request, session, catalog), session, is_new)


@router.post("/questionnaire/next")
async def next_question(
    request: Request,
    catalog: BenefitCatalog = Depends(get_catalog),
    sessions: SessionStore = Depends(get_sessions),
) -> Response:
    return await _run_command(request, catalog, sessions, lambda s: s.controller.advance(), "advance")


@router.post("/questionnaire/previous")
async def previous_question(
    request: Request,
    catalog: BenefitCatalog = Depends(get_catalog),
    sessions: SessionStore = Depends(get_sessions),
) -> Response:
    # Going back is never blocked, not even by a bad value in the post
    return await _run_command(
        request, catalog, sessions, lambda s: s.controller.retreat(), "retreat", strict_form=False,
    )


@router.post("/questionnaire/submit")
async def submit_questionnaire(
    request: Request,
    catalog: BenefitCatalog = Depends(get_catalog),
    sessions: SessionStore = Depends(get_sessions),
) -> Response:
    """Finalize answers and match them against the catalog."""
    checked: list[tuple[ScreenerSession, EligibilityResult]] = []

    def _submit(session: ScreenerSession) -> None:
        answers = session.controller.submit()
        result = evaluate_benefits(catalog.records, answers)
        session.matches = result.matches
        checked.append((session, result))

    response = await _run_command(request, catalog, sessions, _submit, "submit")
    for session, result in checked:
        summary = result.answers_summary
        logger.info(
            "Eligibility checked: %d of %d benefits matched (session=%s)",
            summary["records_matched"],
            summary["records_evaluated"],
            session.id,
        )
        await emit(SystemEvent(
            event_type=EventType.SESSION_SUBMITTED,
            session_id=session.id,
            source_module="web.routes",
        ))
        await emit(SystemEvent(
            event_type=EventType.ELIGIBILITY_CHECKED,
            session_id=session.id,
            data=summary,
            source_module="web.routes",
        ))
    return response


@router.post("/questionnaire/restart")
async def restart_questionnaire(
    request: Request,
    sessions: SessionStore = Depends(get_sessions),
) -> Response:
    """Discard all answers and go back to the first question."""
    session, is_new = await _session_for(request, sessions)
    session.reset()
    await emit(SystemEvent(
        event_type=EventType.SESSION_RESTARTED,
        session_id=session.id,
        source_module="web.routes",
    ))
    return _with_cookie(RedirectResponse("/", status_code=303), session, is_new)


@router.post("/data/retry")
async def retry_data_load(
    catalog: BenefitCatalog = Depends(get_catalog),
) -> Response:
    """Reload the benefits data source after a failed load."""
    await catalog.load()
    return RedirectResponse("/", status_code=303)


# ── JSON API ─────────────────────────────────────────────────────────


@router.post("/api/match")
async def api_match(
    answers: UserResponses,
    explain: bool = Query(False, description="Include per-axis outcomes for every benefit"),
    catalog: BenefitCatalog = Depends(get_catalog),
) -> JSONResponse:
    """Stateless matching of a complete answer set against the catalog."""
    if not catalog.is_ready:
        return JSONResponse(
            {"detail": "Benefits data is not available", "status": catalog.status.value},
            status_code=503,
        )

    if explain:
        result = evaluate_benefits(catalog.records, answers)
        payload: dict[str, Any] = {
            "count": len(result.matches),
            "matches": [m.model_dump(mode="json") for m in result.matches],
            "results": [r.model_dump(mode="json") for r in result.results],
        }
    else:
        matches = match_benefits(catalog.records, answers)
        payload = {"count": len(matches), "matches": [m.model_dump(mode="json") for m in matches]}
    return JSONResponse(payload)


@router.get("/health")
async def health(catalog: BenefitCatalog = Depends(get_catalog)) -> JSONResponse:
    return JSONResponse({
        "status": "ok" if catalog.is_ready else "degraded",
        "catalog": catalog.status.value,
        "records": len(catalog.records),
        "error": catalog.error,
    })
