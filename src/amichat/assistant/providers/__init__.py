from .http import HttpAssistantClient

__all__ = ["HttpAssistantClient"]
