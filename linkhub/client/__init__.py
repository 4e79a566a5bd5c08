"""
LinkHub client: API wrapper, cached view state and the `linkhub` CLI.
"""

from .api import LinkService
from .state import LinkClient, LinkForm, Notification, View

__all__ = ["LinkService", "LinkClient", "LinkForm", "Notification", "View"]
