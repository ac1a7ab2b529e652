# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from models.user import User
from models.post import Post
from models.like import Like
from models.comment import Comment
from models.friendship import Friendship

__all__ = [
    "User",
    "Post",
    "Like",
    "Comment",
    "Friendship",
]
