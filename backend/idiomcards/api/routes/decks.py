"""Deck management API routes."""

import logging

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from idiomcards.api.dependencies import DeckLibraryDep, NowDep
from idiomcards.api.schemas import CardModel, DeckModel, ErrorResponse, api_error
from idiomcards.domain.constants import Messages
from idiomcards.domain.services.deck_library import EmptyDeckError, InvalidCardError
from idiomcards.ports.deck_repository import DeckNotFoundError, StorageError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/decks", tags=["decks"])


# =============================================================================
# Request/Response Models
# =============================================================================


class DeckInfo(BaseModel):
    """Deck with card and due counts."""

    id: str
    title: str
    card_count: int
    due_count: int
    has_due_cards: bool
    created_at: str


class DecksResponse(BaseModel):
    """Response for deck listing."""

    decks: list[DeckInfo]


class CreateDeckRequest(BaseModel):
    """Save previewed cards as a deck."""

    cards: list[CardModel]
    text: str = ""
    title: str | None = None


class UpdateDeckRequest(BaseModel):
    """Partial deck update."""

    title: str | None = None
    cards: list[CardModel] | None = None


class DeckMutationResponse(BaseModel):
    """Deck after create/update with a notification message."""

    deck: DeckModel
    message: str


class LevelStat(BaseModel):
    level: int
    label: str
    count: int


class StatsResponse(BaseModel):
    """Cards per review level across all decks."""

    levels: list[LevelStat]


def _storage_unavailable(e: StorageError):
    logger.error(f"Deck storage error: {e}")
    return api_error(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        "STORAGE_UNAVAILABLE",
        f"Could not reach deck storage: {e}",
    )


def _deck_not_found(e: DeckNotFoundError):
    return api_error(status.HTTP_404_NOT_FOUND, "DECK_NOT_FOUND", str(e))


def _invalid_card(e: InvalidCardError):
    return api_error(status.HTTP_400_BAD_REQUEST, "INVALID_CARD", str(e))


# =============================================================================
# Routes
# =============================================================================


@router.get(
    "",
    response_model=DecksResponse,
    responses={503: {"model": ErrorResponse, "description": "Storage unavailable"}},
)
async def list_decks(library: DeckLibraryDep, now: NowDep, q: str = "") -> DecksResponse:
    """List decks newest first, optionally filtered by title or card term."""
    try:
        summaries = await library.summaries(now, query=q)
    except StorageError as e:
        raise _storage_unavailable(e) from None

    return DecksResponse(
        decks=[
            DeckInfo(
                id=s.id,
                title=s.title,
                card_count=s.card_count,
                due_count=s.due_count,
                has_due_cards=s.has_due_cards,
                created_at=s.created_at.isoformat(),
            )
            for s in summaries
        ]
    )


@router.post(
    "",
    response_model=DeckMutationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse, "description": "No cards to save"}},
)
async def create_deck(
    request: CreateDeckRequest, library: DeckLibraryDep, now: NowDep
) -> DeckMutationResponse:
    """Save previewed cards as a new deck."""
    try:
        deck = await library.save_deck(
            [c.to_card() for c in request.cards],
            now,
            note_text=request.text,
            title=request.title,
        )
    except EmptyDeckError as e:
        raise api_error(status.HTTP_400_BAD_REQUEST, "EMPTY_DECK", str(e)) from None
    except InvalidCardError as e:
        raise _invalid_card(e) from None
    except StorageError as e:
        raise _storage_unavailable(e) from None

    return DeckMutationResponse(
        deck=DeckModel.from_deck(deck),
        message=Messages.DECK_SAVED.format(title=deck.title),
    )


@router.get("/stats", response_model=StatsResponse)
async def learning_stats(library: DeckLibraryDep) -> StatsResponse:
    """Count cards per review level across all decks."""
    try:
        counts = await library.learning_stats()
    except StorageError as e:
        raise _storage_unavailable(e) from None
    return StatsResponse(
        levels=[LevelStat(level=c.level, label=c.label, count=c.count) for c in counts]
    )


@router.get(
    "/{deck_id}",
    response_model=DeckModel,
    responses={404: {"model": ErrorResponse, "description": "Deck not found"}},
)
async def get_deck(deck_id: str, library: DeckLibraryDep) -> DeckModel:
    """Get one deck with its cards."""
    try:
        deck = await library.get_deck(deck_id)
    except DeckNotFoundError as e:
        raise _deck_not_found(e) from None
    except StorageError as e:
        raise _storage_unavailable(e) from None
    return DeckModel.from_deck(deck)


@router.patch(
    "/{deck_id}",
    response_model=DeckMutationResponse,
    responses={404: {"model": ErrorResponse, "description": "Deck not found"}},
)
async def update_deck(
    deck_id: str, request: UpdateDeckRequest, library: DeckLibraryDep
) -> DeckMutationResponse:
    """Update a deck's title and/or replace its cards."""
    cards = [c.to_card() for c in request.cards] if request.cards is not None else None
    try:
        deck = await library.update_deck(deck_id, title=request.title, cards=cards)
    except DeckNotFoundError as e:
        raise _deck_not_found(e) from None
    except InvalidCardError as e:
        raise _invalid_card(e) from None
    except StorageError as e:
        raise _storage_unavailable(e) from None
    return DeckMutationResponse(deck=DeckModel.from_deck(deck), message=Messages.DECK_UPDATED)


@router.delete(
    "/{deck_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse, "description": "Deck not found"}},
)
async def delete_deck(deck_id: str, library: DeckLibraryDep) -> Response:
    """Delete a deck permanently."""
    try:
        await library.delete_deck(deck_id)
    except DeckNotFoundError as e:
        raise _deck_not_found(e) from None
    except StorageError as e:
        raise _storage_unavailable(e) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
