from .client import GroupMeMessenger

__all__ = ["GroupMeMessenger"]
