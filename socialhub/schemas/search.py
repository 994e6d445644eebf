"""Search result schema."""
from pydantic import BaseModel

from socialhub.schemas.post import PostSearchResult
from socialhub.schemas.user import UserSummary


class SearchResults(BaseModel):
    names_search: list[UserSummary]
    posts_search: list[PostSearchResult]
