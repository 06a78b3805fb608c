"""Welcome route at the service root."""

from fastapi import APIRouter

from bookapi.schemas.book import MessageResponse

router = APIRouter(tags=["root"])

WELCOME_MESSAGE = "Welcome to the Book API. Visit /swagger/index.html for docs."


@router.get(
    "/",
    response_model=MessageResponse,
    summary="Welcome",
    description="Welcome message for the Book API",
)
async def welcome() -> MessageResponse:
    return MessageResponse(message=WELCOME_MESSAGE)
