"""HTTP routes for the confirmation endpoint."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from banker_app.confirmation import ConfirmationHandler


router = APIRouter()


def get_handler(req: Request) -> ConfirmationHandler:
    handler = getattr(req.app.state, "confirmation_handler", None)
    if handler is None:
        raise RuntimeError("Confirmation handler not initialized")
    return handler


# Sync route: FastAPI runs it on its thread pool, so a slow transfer
# never blocks other requests.
@router.get("/transfer/{secret}", response_class=PlainTextResponse)
def confirm_transfer(secret: str, handler: ConfirmationHandler = Depends(get_handler)) -> PlainTextResponse:
    outcome = handler.handle(secret)
    return PlainTextResponse(outcome.body, status_code=outcome.status_code)
