from .attachments import AttachmentStore
from .authors import AuthorResolver
from .create_post import CreatePostUseCase
from .delete_post import DeletePostUseCase
from .get_post import GetPostUseCase
from .list_posts import ListPostsQuery, ListPostsUseCase
from .update_post import UpdatePostUseCase

__all__ = [
    "AttachmentStore",
    "AuthorResolver",
    "CreatePostUseCase",
    "DeletePostUseCase",
    "GetPostUseCase",
    "ListPostsQuery",
    "ListPostsUseCase",
    "UpdatePostUseCase",
]
