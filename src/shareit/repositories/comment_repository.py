"""Comment repository for database operations."""

from ..models.comment import Comment
from .base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Repository for comment database operations.

    Comments are read through ``Item.comments``; only persistence lives here.
    """

    model = Comment
    table = "comments"
