"""
Inbound webhook route.

GroupMe calls POST /submit_message for every message in the group. The route
always answers 200: outcomes are reported in chat, never through HTTP status.
"""

import json

from fastapi import APIRouter, Depends, Request

from triviabot.api.controllers.webhook_controller import WebhookController
from triviabot.api.dependencies import get_webhook_controller
from triviabot.core.logging.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["Webhooks"])


@router.post("/submit_message")
async def submit_message(
    request: Request,
    controller: WebhookController = Depends(get_webhook_controller),
) -> dict[str, str]:
    """
    Process a GroupMe bot callback.

    Body: ``{"text": ..., "name": ..., "user_id": ...}`` plus whatever else
    GroupMe sends, which is ignored.
    """
    body = await request.body()
    try:
        payload = json.loads(body) if body else None
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("Webhook body is not valid JSON")
        payload = None

    result = await controller.handle(payload)
    logger.debug(f"Webhook handled: {result}")
    return {"status": "ok"}
