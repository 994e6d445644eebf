"""Search endpoint."""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from socialhub.api.deps import get_current_user_id, get_session_maker
from socialhub.core.errors import ValidationError
from socialhub.schemas.search import SearchResults
from socialhub.services.search_service import search as run_search

router = APIRouter()


@router.get("", response_model=SearchResults)
async def search(
    search_string: str = Query(""),
    current_user_id: int = Depends(get_current_user_id),
    session_maker: async_sessionmaker[AsyncSession] = Depends(get_session_maker),
):
    """
    Search users by name/username and posts by text.
    """
    term = search_string.strip()
    if not term:
        raise ValidationError("Invalid query")
    return await run_search(session_maker, term)
