"""
Dependency injection for API routes.

The lifespan stores the long-lived collaborators on app.state; routes reach
them through these functions so tests can override them.
"""

from fastapi import Request

from triviabot.api.controllers.webhook_controller import WebhookController
from triviabot.core.config.settings import Settings


def get_webhook_controller(request: Request) -> WebhookController:
    controller = getattr(request.app.state, "webhook_controller", None)
    if controller is None:
        raise RuntimeError("Webhook controller not initialized - app lifespan not run")
    return controller


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
