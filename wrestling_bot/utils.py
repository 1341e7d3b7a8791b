# /wrestling_bot/utils.py
from datetime import datetime, timezone

from fastapi import Request

from .completion import CompletionGateway
from .config import Settings


# -------------------- Dependencies --------------------
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_gateway(request: Request) -> CompletionGateway:
    return request.app.state.gateway


# -------------------- Time helpers --------------------
def now_iso() -> str:
    """
    Current UTC time in ISO-8601 string.
    """
    return datetime.now(timezone.utc).isoformat()
