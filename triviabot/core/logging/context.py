"""
Request context management using contextvars for automatic propagation.

The webhook controller sets the group and user of the inbound message once,
and every logger obtained through get_logger() picks them up.
"""

from contextvars import ContextVar

_group_context: ContextVar[str | None] = ContextVar("group_id", default=None)
_user_context: ContextVar[str | None] = ContextVar("user_id", default=None)


def set_request_context(group_id: str | None = None, user_id: str | None = None) -> None:
    """
    Set the request context for the current async context.

    Args:
        group_id: Chat group the message was posted in
        user_id: Sender of the inbound message
    """
    if group_id is not None:
        _group_context.set(group_id)
    if user_id is not None:
        _user_context.set(user_id)


def get_current_group_context() -> str | None:
    """Get the current group ID from context variables."""
    return _group_context.get()


def get_current_user_context() -> str | None:
    """Get the current user ID from context variables."""
    return _user_context.get()


def clear_request_context() -> None:
    """Reset both context variables, used after a webhook is handled."""
    _group_context.set(None)
    _user_context.set(None)
