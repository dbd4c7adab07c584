"""Shared route dependencies."""

from fastapi import HTTPException, Request

from gymjournal.config import get_settings
from gymjournal.insights.composite import CompositeInsightsEngine
from gymjournal.insights.service import default_engine


def get_current_user_id(request: Request) -> str:
    """User id injected by the auth gateway. The gateway has already validated it."""
    header = get_settings().user_id_header
    user_id = (request.headers.get(header) or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail=f"Missing {header} header")
    return user_id


def get_insights_engine() -> CompositeInsightsEngine:
    return default_engine
