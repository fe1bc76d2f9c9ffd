"""FastAPI application for the confirmation endpoint."""

from fastapi import FastAPI

from banker_app import __version__
from banker_app.api.routes import router
from banker_app.confirmation import ConfirmationHandler


def create_app(handler: ConfirmationHandler) -> FastAPI:
    """Build the app around a configured confirmation handler."""
    app = FastAPI(
        title="Auto Banker",
        version=__version__,
        description="One-click confirmation of low balance top-ups",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    # Inject handler into app state for route access
    app.state.confirmation_handler = handler

    app.include_router(router)

    @app.get("/health")
    def health() -> dict:
        return {
            "status": "ok",
            "version": app.version,
            "notifier": handler.notifier.get_stats(),
        }

    return app
