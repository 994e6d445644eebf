from socialhub.models.user import User
from socialhub.models.post import Post
from socialhub.models.comment import Comment
from socialhub.models.engagement import Like, SavedPost, UserRelationship
from socialhub.models.story import Story

__all__ = ["User", "Post", "Comment", "Like", "SavedPost", "UserRelationship", "Story"]
