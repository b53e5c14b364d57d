"""Public blog service: anonymous reads of published posts."""

from app.errors import NotFound
from app.repositories.memory import InMemoryStore
from app.schemas.post import Post, PostList
from app.services.posts import PostService


class BlogService:
    def __init__(self, store: InMemoryStore, posts: PostService) -> None:
        self._store = store
        self._posts = posts

    def list_published(self, *, limit: int, tag: str | None = None, hotel_id: str | None = None) -> PostList:
        records = self._store.list_published_posts(limit=limit, tag=tag, tenant_id=hotel_id)
        posts = [self._posts.to_post(record) for record in records]
        return PostList(posts=posts, total=len(posts))

    def get_published(self, *, slug: str, hotel_id: str | None = None) -> Post:
        record = self._store.get_published_post_by_slug(slug, tenant_id=hotel_id)
        if record is None:
            raise NotFound()

        return self._posts.to_post(record)
