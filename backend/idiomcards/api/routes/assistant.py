"""AI assistant API routes."""

from fastapi import APIRouter
from pydantic import BaseModel

from idiomcards.api.dependencies import ExampleAssistantDep
from idiomcards.ports.text_generation import ExampleRequest, ExampleResponse

router = APIRouter(prefix="/api/assistant", tags=["assistant"])


class ProvidersResponse(BaseModel):
    providers: list[str]


@router.get("/providers", response_model=ProvidersResponse)
async def list_providers(assistant: ExampleAssistantDep) -> ProvidersResponse:
    """List the provider names that can be selected."""
    return ProvidersResponse(providers=assistant.provider_names)


@router.post("/examples", response_model=ExampleResponse)
async def suggest_examples(
    request: ExampleRequest, assistant: ExampleAssistantDep
) -> ExampleResponse:
    """Generate example sentences for a card's term.

    Provider failures come back as ok=false with a readable message
    instead of an HTTP error; card data is never touched.
    """
    return await assistant.suggest_examples(request)
