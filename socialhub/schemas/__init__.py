from socialhub.schemas.user import (
    UserCreate,
    UserUpdate,
    UserResponse,
    UserSummary,
    LoginRequest,
    LoginResponse,
)
from socialhub.schemas.post import PostFeedItem, PostSearchResult, SavePostRequest
from socialhub.schemas.comment import CommentCreate, CommentResponse
from socialhub.schemas.story import StoryResponse
from socialhub.schemas.common import MessageResponse, StatusResponse
