"""
Frontend module - UI-independent application state plus its API/chat clients.

Usage:
    state = AppState(api=ApiClient(), chat=ChatClient.connect())
    state.go_to_login()
    state.login("buyer")
"""

from app.frontend.api_client import ApiClient
from app.frontend.chat_client import ChatClient
from app.frontend.state import (
    AppState, Landing, Login, Dashboard, Marketplace, ProjectDetail, Chat,
    View, view_name, InvalidTransition
)

__all__ = [
    "ApiClient", "ChatClient", "AppState",
    "Landing", "Login", "Dashboard", "Marketplace", "ProjectDetail", "Chat",
    "View", "view_name", "InvalidTransition"
]
