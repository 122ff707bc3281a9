"""Note parsing API routes."""

from fastapi import APIRouter
from pydantic import BaseModel

from idiomcards.api.dependencies import NowDep
from idiomcards.api.schemas import CardModel
from idiomcards.domain.services.deck_library import build_preview

router = APIRouter(prefix="/api/notes", tags=["notes"])


# =============================================================================
# Request/Response Models
# =============================================================================


class PreviewRequest(BaseModel):
    """Raw note text to turn into cards."""

    text: str


class PreviewResponse(BaseModel):
    """Preview cards, not yet saved."""

    success: bool
    message: str
    title: str
    cards: list[CardModel]


# =============================================================================
# Routes
# =============================================================================


@router.post("/preview", response_model=PreviewResponse)
async def preview_cards(request: PreviewRequest, now: NowDep) -> PreviewResponse:
    """Extract preview cards from note text.

    Parsing never fails; an empty card list means no known section was
    found (or none of its entries were usable).
    """
    preview = build_preview(request.text, now)
    return PreviewResponse(
        success=preview.success,
        message=preview.message,
        title=preview.title,
        cards=[CardModel.from_card(c) for c in preview.cards],
    )
