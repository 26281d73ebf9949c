"""FastAPI server that exposes the question, auth and quiz endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import os

from authlib.integrations.starlette_client import OAuth, OAuthError
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field
from starlette.middleware.sessions import SessionMiddleware
import uvicorn

from trivia_quiz.constants.about import (
    APP_ABOUT_TEXT,
    APP_LICENSE,
    APP_NAME,
    APP_VERSION,
    HEALTH_MESSAGE,
)
from trivia_quiz.constants.network_constants import SESSION_COOKIE_NAME, SESSION_MAX_AGE_SECONDS
from trivia_quiz.core.markdown_renderer import renderer
from trivia_quiz.core.models import AuthenticatedUser, QuestionBatch
from trivia_quiz.core.quiz_manager import QuizManager
from trivia_quiz.core.services.quiz_sessions import QuizSession, QuizSessionError
from trivia_quiz.core.settings import Settings
from trivia_quiz.server.oauth import build_oauth, fetch_identity

logger = logging.getLogger(__name__)

_SESSION_USER_KEY = "user"


class StartQuizPayload(BaseModel):
    """Payload schema for starting a quiz; omitted fields use the configured defaults."""

    target_score: int | None = Field(default=None, gt=0)
    count: int | None = Field(default=None, ge=0)


class AnswerPayload(BaseModel):
    """Payload schema for submitted answers."""

    question_id: int
    selected_option_index: int


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def current_user(request: Request) -> AuthenticatedUser:
    """Dependency returning the logged-in user or failing with 401."""
    payload = request.session.get(_SESSION_USER_KEY)
    if not payload:
        raise HTTPException(status_code=401, detail="Authentication required")
    try:
        return AuthenticatedUser.from_dict(payload)
    except (KeyError, TypeError) as exc:
        request.session.pop(_SESSION_USER_KEY, None)
        raise HTTPException(status_code=401, detail="Authentication required") from exc


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def _questions_payload(batch: QuestionBatch) -> dict[str, object]:
    return {
        "success": True,
        "questions": [question.to_dict() for question in batch.questions],
        "source": batch.source,
        "count": len(batch.questions),
        "timestamp": _timestamp(),
    }


def _quiz_payload(session: QuizSession) -> dict[str, object]:
    selection = session.selection
    questions = []
    for question in selection.questions:
        entry = question.to_dict(include_answer=False)
        entry.update(renderer.render_question(question))
        questions.append(entry)
    return {
        "quizId": session.quiz_id,
        "questions": questions,
        "targetScore": selection.target_score,
        "totalScore": selection.total_score,
        "requestedCount": selection.requested_count,
        "deliveredCount": selection.delivered_count,
        "exactMatch": selection.is_exact_match,
        "underfilled": selection.is_underfilled,
        "answeredQuestionIds": session.answered_ids(),
        "startedAt": session.started_at.isoformat(),
    }


def create_api_app(
    quiz_manager: QuizManager,
    settings: Settings,
    oauth: OAuth | None = None,
) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(
        title=f"{APP_NAME} API",
        version=APP_VERSION,
        description=APP_ABOUT_TEXT,
        license_info={"name": APP_LICENSE},
    )
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=SESSION_COOKIE_NAME,
        max_age=SESSION_MAX_AGE_SECONDS,
        same_site="none" if settings.is_production else "lax",
        https_only=settings.is_production,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)
    oauth = oauth or build_oauth(settings)

    def oauth_client(provider: str):
        client = oauth.create_client(provider) if provider in settings.oauth_providers else None
        if client is None:
            raise HTTPException(status_code=404, detail=f"Login provider '{provider}' is not available")
        return client

    # --- Health ---

    @app.get("/api/health")
    def health(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return {
            "status": "OK",
            "message": HEALTH_MESSAGE,
            "googleSheets": "Connected" if manager.sheets_configured else "Using fallback",
            "timestamp": _timestamp(),
        }

    @app.get("/api/debug")
    def debug(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        def flag(value: str | None) -> str:
            return "Set" if value else "Not set"

        credentials_file_exists = bool(
            settings.credentials_path
            and not settings.credentials_path.lstrip().startswith("{")
            and os.path.exists(settings.credentials_path)
        )
        return {
            "success": True,
            "debug": {
                "environment": {
                    "QUIZ_ENV": settings.environment,
                    "GOOGLE_SPREADSHEET_ID": flag(settings.spreadsheet_id),
                    "GOOGLE_SHEETS_RANGE": settings.sheets_range,
                    "GOOGLE_APPLICATION_CREDENTIALS": flag(settings.credentials_path),
                    "GOOGLE_SERVICE_ACCOUNT_JSON": flag(settings.service_account_json),
                    "oauthProviders": list(settings.oauth_providers),
                },
                "googleSheets": {
                    "configured": manager.sheets_configured,
                    "range": settings.sheets_range,
                },
                "cache": manager.cache_status(),
                "fileChecks": {
                    "envFileExists": os.path.exists(".env"),
                    "credentialsFileExists": credentials_file_exists,
                },
            },
            "timestamp": _timestamp(),
        }

    # --- Questions ---

    @app.get("/api/questions")
    def list_questions(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        return _questions_payload(manager.get_questions())

    @app.get("/api/questions/stats")
    def question_stats(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        stats = manager.get_question_stats()
        stats["lastUpdated"] = _timestamp()
        return {"success": True, "stats": stats}

    @app.post("/api/questions/refresh")
    def refresh_questions(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        batch = manager.refresh_questions()
        return {
            "success": True,
            "message": "Cache refreshed successfully",
            "questions": len(batch.questions),
            "source": batch.source,
            "timestamp": _timestamp(),
        }

    @app.get("/api/questions/{question_id}")
    def get_question(
        question_id: str,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            parsed_id = int(question_id)
        except ValueError:
            parsed_id = 0
        if parsed_id < 1:
            raise HTTPException(status_code=400, detail="Invalid question ID")
        question, source = manager.get_question(parsed_id)
        if question is None:
            raise HTTPException(status_code=404, detail=f"Question with ID {parsed_id} not found")
        return {"success": True, "question": question.to_dict(), "source": source}

    # --- Authentication ---

    @app.get("/api/auth/user")
    def get_user(user: AuthenticatedUser = Depends(current_user)) -> dict[str, object]:
        return {"success": True, "user": user.to_dict()}

    @app.post("/api/auth/logout")
    def logout(
        request: Request,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        payload = request.session.get(_SESSION_USER_KEY)
        if payload and "id" in payload and "provider" in payload:
            manager.abandon_quiz(AuthenticatedUser.from_dict(payload).session_key)
        request.session.clear()
        return {"success": True, "message": "Logged out successfully"}

    @app.get("/api/auth/{provider}")
    async def login(provider: str, request: Request):
        client = oauth_client(provider)
        return await client.authorize_redirect(request, settings.callback_url(provider))

    @app.get("/api/auth/{provider}/callback")
    async def login_callback(
        provider: str,
        request: Request,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> RedirectResponse:
        client = oauth_client(provider)
        frontend_url = settings.frontend_url.rstrip("/")
        try:
            user = await fetch_identity(client, provider, request)
        except OAuthError as exc:
            logger.warning("OAuth login with %s failed: %s", provider, exc.description or exc.error)
            return RedirectResponse(f"{frontend_url}/?error=auth_failed")
        request.session[_SESSION_USER_KEY] = user.to_dict()
        await run_in_threadpool(manager.record_login, user)
        return RedirectResponse(f"{frontend_url}/?auth=success")

    # --- Quiz ---

    @app.post("/api/quiz/start", status_code=201)
    def start_quiz(
        payload: StartQuizPayload | None = None,
        user: AuthenticatedUser = Depends(current_user),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        payload = payload or StartQuizPayload()
        session, source = manager.start_quiz(
            user.session_key, payload.target_score, payload.count
        )
        body = _quiz_payload(session)
        body["success"] = True
        body["source"] = source
        return body

    @app.get("/api/quiz")
    def get_quiz(
        user: AuthenticatedUser = Depends(current_user),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        session = manager.get_quiz(user.session_key)
        if session is None:
            raise HTTPException(status_code=404, detail="No quiz in progress")
        body = _quiz_payload(session)
        body["success"] = True
        return body

    @app.post("/api/quiz/answer", status_code=201)
    def submit_answer(
        payload: AnswerPayload,
        user: AuthenticatedUser = Depends(current_user),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            answer = manager.submit_answer(
                user.session_key, payload.question_id, payload.selected_option_index
            )
        except QuizSessionError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return {
            "success": True,
            "questionId": answer.question_id,
            "selectedOption": answer.selected_option_index,
        }

    @app.post("/api/quiz/submit")
    def submit_quiz(
        user: AuthenticatedUser = Depends(current_user),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            summary = manager.submit_quiz(user.session_key)
        except QuizSessionError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return {"success": True, "results": summary.to_dict()}

    return app


def run_api_server(quiz_manager: QuizManager, settings: Settings) -> None:
    """Serve the API with uvicorn until the process is stopped."""
    app = create_api_app(quiz_manager, settings)
    config = uvicorn.Config(app=app, host=settings.host, port=settings.port, log_level="info")
    server = uvicorn.Server(config)
    server.run()
