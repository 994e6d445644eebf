"""Text search across users and posts."""
import asyncio

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from socialhub.models.post import Post
from socialhub.models.user import User
from socialhub.schemas.post import PostSearchResult
from socialhub.schemas.search import SearchResults
from socialhub.schemas.user import UserSummary

SEARCH_LIMIT = 5


async def _search_users(session_maker: async_sessionmaker[AsyncSession], pattern: str) -> list[UserSummary]:
    async with session_maker() as session:
        result = await session.execute(
            select(User.id, User.profile_picture, User.name, User.username)
            .where(or_(User.name.ilike(pattern), User.username.ilike(pattern)))
            .limit(SEARCH_LIMIT)
        )
        return [UserSummary.model_validate(row._mapping) for row in result.all()]


async def _search_posts(session_maker: async_sessionmaker[AsyncSession], pattern: str) -> list[PostSearchResult]:
    async with session_maker() as session:
        result = await session.execute(
            select(Post.id, Post.user_id, Post.text_content, Post.image)
            .where(Post.text_content.ilike(pattern))
            .limit(SEARCH_LIMIT)
        )
        return [PostSearchResult.model_validate(row._mapping) for row in result.all()]


async def search(session_maker: async_sessionmaker[AsyncSession], term: str) -> SearchResults:
    """Case-insensitive substring search; both queries run concurrently on their own sessions."""
    pattern = f"%{term}%"
    names, posts = await asyncio.gather(
        _search_users(session_maker, pattern),
        _search_posts(session_maker, pattern),
    )
    return SearchResults(names_search=names, posts_search=posts)
