"""Review session API routes."""

import logging

from fastapi import APIRouter, status
from pydantic import BaseModel

from idiomcards.api.dependencies import NowDep, ReviewManagerDep
from idiomcards.api.schemas import CardModel, ErrorResponse, api_error
from idiomcards.domain.entities.review_session import ReviewSession
from idiomcards.domain.services.review_manager import NoActiveSessionError
from idiomcards.domain.value_objects.review_decision import InvalidDecisionError
from idiomcards.ports.deck_repository import DeckNotFoundError, StorageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/review", tags=["review"])


# =============================================================================
# Request/Response Models
# =============================================================================


class StartReviewRequest(BaseModel):
    """Request body for starting a review."""

    deck_id: str


class SessionResponse(BaseModel):
    """Current state of the review session."""

    session_id: str | None
    deck_id: str | None
    state: str
    current_card: CardModel | None
    is_flipped: bool
    remaining_count: int
    due_count: int = 0
    message: str | None = None


class AnswerRequest(BaseModel):
    """Learner's decision for the current card."""

    decision: str


class AnswerResponse(BaseModel):
    """Graded card and what comes next."""

    graded_card: CardModel | None
    next_card: CardModel | None
    remaining_count: int
    completed: bool
    stats: dict
    message: str | None = None


class AbortResponse(BaseModel):
    stats: dict


def _session_response(session: ReviewSession, due_count: int = 0) -> SessionResponse:
    card = session.get_current_card()
    return SessionResponse(
        session_id=session.id,
        deck_id=session.deck_id,
        state=session.state.value,
        current_card=CardModel.from_card(card) if card else None,
        is_flipped=session.is_flipped,
        remaining_count=session.get_remaining_count(),
        due_count=due_count,
    )


def _no_session():
    return api_error(
        status.HTTP_404_NOT_FOUND,
        "SESSION_NOT_FOUND",
        "No active review session",
    )


# =============================================================================
# Routes
# =============================================================================


@router.post(
    "/start",
    response_model=SessionResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Deck not found"},
        503: {"model": ErrorResponse, "description": "Storage unavailable"},
    },
)
async def start_review(
    request: StartReviewRequest, review_manager: ReviewManagerDep, now: NowDep
) -> SessionResponse:
    """Start reviewing the due cards of a deck.

    When nothing is due no session is opened and the response carries
    state "idle" and a message.
    """
    try:
        result = await review_manager.start_session(request.deck_id, now)
    except DeckNotFoundError as e:
        raise api_error(status.HTTP_404_NOT_FOUND, "DECK_NOT_FOUND", str(e)) from None
    except StorageError as e:
        logger.error(f"Failed to start review: {e}")
        raise api_error(
            status.HTTP_503_SERVICE_UNAVAILABLE, "STORAGE_UNAVAILABLE", str(e)
        ) from None

    if result.session is None:
        return SessionResponse(
            session_id=None,
            deck_id=request.deck_id,
            state="idle",
            current_card=None,
            is_flipped=False,
            remaining_count=0,
            message=result.message,
        )
    return _session_response(result.session, due_count=result.due_count)


@router.get(
    "/current",
    response_model=SessionResponse,
    responses={404: {"model": ErrorResponse, "description": "No active session"}},
)
async def current_review(review_manager: ReviewManagerDep) -> SessionResponse:
    """Get the running session and the card being shown."""
    session = review_manager.get_active_session()
    if session is None:
        raise _no_session()
    return _session_response(session)


@router.post(
    "/flip",
    response_model=SessionResponse,
    responses={404: {"model": ErrorResponse, "description": "No active session"}},
)
async def flip_card(review_manager: ReviewManagerDep) -> SessionResponse:
    """Toggle between the prompt and the answer side."""
    try:
        review_manager.flip()
    except NoActiveSessionError:
        raise _no_session() from None
    return _session_response(review_manager.get_active_session())


@router.post(
    "/answer",
    response_model=AnswerResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid decision"},
        404: {"model": ErrorResponse, "description": "No active session"},
        409: {"model": ErrorResponse, "description": "Session conflict"},
        503: {"model": ErrorResponse, "description": "Grade could not be saved"},
    },
)
async def answer_card(
    request: AnswerRequest, review_manager: ReviewManagerDep, now: NowDep
) -> AnswerResponse:
    """Grade the current card (again / good / easy) and advance.

    The grade is saved before the next card is returned. On a storage
    failure the same card stays current and can be answered again.
    """
    try:
        result = await review_manager.answer(request.decision, now)
    except InvalidDecisionError as e:
        raise api_error(status.HTTP_400_BAD_REQUEST, "INVALID_DECISION", str(e)) from None
    except NoActiveSessionError:
        raise _no_session() from None
    except StorageError as e:
        logger.error(f"Failed to save grade: {e}")
        raise api_error(
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "STORAGE_UNAVAILABLE",
            f"Could not save review: {e}",
        ) from None
    except ValueError as e:
        raise api_error(status.HTTP_409_CONFLICT, "SESSION_CONFLICT", str(e)) from None

    return AnswerResponse(
        graded_card=CardModel.from_card(result.card) if result.card else None,
        next_card=CardModel.from_card(result.next_card) if result.next_card else None,
        remaining_count=result.remaining_count,
        completed=result.completed,
        stats=result.stats,
        message=result.message,
    )


@router.post(
    "/abort",
    response_model=AbortResponse,
    responses={404: {"model": ErrorResponse, "description": "No active session"}},
)
async def abort_review(review_manager: ReviewManagerDep) -> AbortResponse:
    """Stop the session. Cards answered so far keep their new schedule."""
    try:
        stats = await review_manager.abort_session()
    except NoActiveSessionError:
        raise _no_session() from None
    return AbortResponse(stats=stats)
