from __future__ import annotations

import io
from contextlib import contextmanager
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from conftest import InMemoryPostRepository, InMemoryUserRepository, SteppingClock
from inkwell.application.use_cases.posts.attachments import AttachmentStore
from inkwell.application.use_cases.posts.authors import AuthorResolver
from inkwell.application.use_cases.posts.create_post import CreatePostUseCase
from inkwell.application.use_cases.posts.delete_post import DeletePostUseCase
from inkwell.application.use_cases.posts.get_post import GetPostUseCase
from inkwell.application.use_cases.posts.list_posts import ListPostsQuery, ListPostsUseCase
from inkwell.application.use_cases.posts.update_post import UpdatePostUseCase
from inkwell.domain.identifiers import new_id
from inkwell.domain.posts.entities import (
    AuthorReference,
    ExpandedAuthor,
    ImageUpload,
    PostDraft,
)
from inkwell.domain.posts.exceptions import (
    MediaUploadError,
    NotPostAuthorError,
    PostNotFoundError,
)
from inkwell.domain.users.entities import User
from inkwell.infrastructure.media.staging import TemporaryImageStaging
from inkwell.shared.errors import ImageTooLargeError, UnsupportedImageTypeError


class RecordingUploader:
    def __init__(self, *, fail: Exception | None = None) -> None:
        self.fail = fail
        self.uploaded: list[tuple[Path, bytes]] = []

    def upload(self, path: Path, *, filename: str) -> str:
        if self.fail is not None:
            raise self.fail
        self.uploaded.append((path, path.read_bytes()))
        return f"https://media.example.com/posts/{filename}"


class FailingStaging:
    @contextmanager
    def stage(self, upload: ImageUpload):
        raise AssertionError("staging must not be reached")
        yield  # pragma: no cover


def _image(data: bytes = b"\x89PNG data", content_type: str = "image/png") -> ImageUpload:
    return ImageUpload(filename="photo.png", content_type=content_type, stream=io.BytesIO(data))


@pytest.fixture()
def staging(tmp_path: Path) -> TemporaryImageStaging:
    return TemporaryImageStaging(tmp_path / "staging", max_bytes=1024)


@pytest.fixture()
def uploader() -> RecordingUploader:
    return RecordingUploader()


@pytest.fixture()
def attachments(staging: TemporaryImageStaging, uploader: RecordingUploader) -> AttachmentStore:
    return AttachmentStore(staging=staging, uploader=uploader)


@pytest.fixture()
def authors(users: InMemoryUserRepository) -> AuthorResolver:
    return AuthorResolver(users)


def _seed(posts: InMemoryPostRepository, author: User, count: int) -> list[str]:
    return [
        posts.add(author.id, PostDraft(title=f"Post {i}", content="x" * 20)).id
        for i in range(count)
    ]


def _list(posts, authors) -> ListPostsUseCase:
    return ListPostsUseCase(posts=posts, authors=authors, default_page_size=6)


# Listing


def test_second_page_of_ten_holds_four(posts, authors, alice) -> None:
    _seed(posts, alice, 10)

    page = _list(posts, authors).execute(ListPostsQuery(page="2", page_size="6"))

    assert len(page.items) == 4
    assert page.total_count == 10
    assert page.total_pages == 2
    assert page.current_page == 2


def test_listing_is_newest_first(posts, authors, alice) -> None:
    ids = _seed(posts, alice, 3)

    page = _list(posts, authors).execute(ListPostsQuery())

    assert [post.id for post in page.items] == list(reversed(ids))


def test_listing_breaks_ties_by_insertion_order(users, authors, alice) -> None:
    frozen = SteppingClock(step=timedelta(0))
    posts = InMemoryPostRepository(clock=frozen)
    ids = _seed(posts, alice, 3)

    page = _list(posts, authors).execute(ListPostsQuery())

    assert [post.id for post in page.items] == ids


def test_listing_defaults_bad_paging_input(posts, authors, alice) -> None:
    _seed(posts, alice, 2)
    use_case = _list(posts, authors)

    use_case.execute(ListPostsQuery(page="junk", page_size="-1"))
    use_case.execute(ListPostsQuery(page_size="100000"))

    assert posts.page_calls[0] == {"author_id": None, "offset": 0, "limit": 6}
    assert posts.page_calls[1]["limit"] == 100000


def test_large_page_size_fits_everything_on_one_page(posts, authors, alice) -> None:
    _seed(posts, alice, 150)

    page = _list(posts, authors).execute(ListPostsQuery(page=1, page_size=150))

    assert len(page.items) == 150
    assert page.total_pages == 1


def test_page_past_the_end_is_empty(posts, authors, alice) -> None:
    _seed(posts, alice, 3)

    page = _list(posts, authors).execute(ListPostsQuery(page=5))

    assert page.items == []
    assert page.total_count == 3
    assert page.total_pages == 1
    assert page.current_page == 5


def test_author_filter_limits_items_and_count(posts, authors, alice, bob) -> None:
    _seed(posts, alice, 4)
    bob_ids = _seed(posts, bob, 2)

    page = _list(posts, authors).execute(ListPostsQuery(author_id=bob.id))

    assert {post.id for post in page.items} == set(bob_ids)
    assert page.total_count == 2
    assert all(post.author_id == bob.id for post in page.items)


def test_malformed_author_filter_matches_nothing(posts, authors, alice) -> None:
    _seed(posts, alice, 2)

    page = _list(posts, authors).execute(ListPostsQuery(author_id="not-an-id"))

    assert page.items == []
    assert page.total_count == 0
    assert page.total_pages == 0
    assert posts.page_calls == []


def test_listing_expands_authors(posts, authors, users, alice) -> None:
    _seed(posts, alice, 1)
    ghost_id = new_id()
    posts.add(ghost_id, PostDraft(title="Orphan", content="y" * 20))

    items = _list(posts, authors).execute(ListPostsQuery()).items

    assert items[0].author == AuthorReference(ghost_id)
    assert items[1].author == ExpandedAuthor(
        id=alice.id, username="alice", email="alice@example.com"
    )


def test_reads_are_idempotent(posts, authors, alice) -> None:
    _seed(posts, alice, 7)
    use_case = _list(posts, authors)

    first = use_case.execute(ListPostsQuery(page=2))
    second = use_case.execute(ListPostsQuery(page=2))

    assert first == second


# Single post


def test_get_post_returns_expanded_post(posts, authors, alice) -> None:
    (post_id,) = _seed(posts, alice, 1)

    post = GetPostUseCase(posts=posts, authors=authors).execute(post_id)

    assert post.id == post_id
    assert isinstance(post.author, ExpandedAuthor)


@pytest.mark.parametrize("post_id", [new_id(), "definitely-not-an-id", ""])
def test_get_post_not_found(posts, authors, post_id: str) -> None:
    with pytest.raises(PostNotFoundError):
        GetPostUseCase(posts=posts, authors=authors).execute(post_id)


# Create


def test_create_post_without_image(posts, attachments, authors, alice) -> None:
    use_case = CreatePostUseCase(posts=posts, attachments=attachments, authors=authors)

    post = use_case.execute(alice, "Title", "Long enough content")

    assert post.image_url is None
    assert post.author == ExpandedAuthor(id=alice.id, username="alice", email=alice.email)
    assert len(posts) == 1


def test_create_post_with_image_uploads_then_cleans_up(
    posts, attachments, authors, uploader, alice, staging
) -> None:
    use_case = CreatePostUseCase(posts=posts, attachments=attachments, authors=authors)

    post = use_case.execute(alice, "Title", "Long enough content", _image(b"abc"))

    assert post.image_url == "https://media.example.com/posts/photo.png"
    (staged_path, staged_bytes), = uploader.uploaded
    assert staged_bytes == b"abc"
    assert not staged_path.exists()


def test_oversize_image_creates_no_post(posts, attachments, authors, uploader, alice) -> None:
    use_case = CreatePostUseCase(posts=posts, attachments=attachments, authors=authors)

    with pytest.raises(ImageTooLargeError):
        use_case.execute(alice, "Title", "Long enough content", _image(b"x" * 1025))

    assert len(posts) == 0
    assert uploader.uploaded == []


def test_non_image_creates_no_post(posts, attachments, authors, alice) -> None:
    use_case = CreatePostUseCase(posts=posts, attachments=attachments, authors=authors)

    with pytest.raises(UnsupportedImageTypeError):
        use_case.execute(
            alice, "Title", "Long enough content", _image(content_type="application/pdf")
        )

    assert len(posts) == 0


def test_upload_failure_creates_no_post_and_removes_temp_file(
    posts, staging, authors, alice, tmp_path
) -> None:
    attachments = AttachmentStore(
        staging=staging, uploader=RecordingUploader(fail=ConnectionError("down"))
    )
    use_case = CreatePostUseCase(posts=posts, attachments=attachments, authors=authors)

    with pytest.raises(MediaUploadError) as exc_info:
        use_case.execute(alice, "Title", "Long enough content", _image())

    assert exc_info.value.status == 500
    assert len(posts) == 0
    assert list((tmp_path / "staging").iterdir()) == []


# Update


def test_update_by_author_keeps_image_when_none_given(posts, attachments, authors, alice) -> None:
    created = posts.add(
        alice.id, PostDraft(title="Old", content="old content here", image_url="/uploads/a.png")
    )
    use_case = UpdatePostUseCase(posts=posts, attachments=attachments, authors=authors)

    updated = use_case.execute(created.id, alice, "New title", "new content here")

    assert updated.title == "New title"
    assert updated.image_url == "/uploads/a.png"
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at


def test_update_replaces_image(posts, attachments, authors, alice) -> None:
    created = posts.add(alice.id, PostDraft(title="Old", content="old content here"))
    use_case = UpdatePostUseCase(posts=posts, attachments=attachments, authors=authors)

    updated = use_case.execute(created.id, alice, "Old", "old content here", _image())

    assert updated.image_url == "https://media.example.com/posts/photo.png"


def test_update_by_other_user_is_forbidden_and_leaves_post(
    posts, authors, alice, bob
) -> None:
    created = posts.add(alice.id, PostDraft(title="Mine", content="alice's content"))
    attachments = AttachmentStore(staging=FailingStaging(), uploader=RecordingUploader())
    use_case = UpdatePostUseCase(posts=posts, attachments=attachments, authors=authors)

    with pytest.raises(NotPostAuthorError) as exc_info:
        use_case.execute(created.id, bob, "Stolen", "bob's content now", _image())

    assert exc_info.value.message == "Not authorized to update this post"
    assert posts.get(created.id) == created


def test_update_authorize_returns_stored_post_for_author(
    posts, attachments, authors, alice, bob
) -> None:
    created = posts.add(alice.id, PostDraft(title="Mine", content="alice's content"))
    use_case = UpdatePostUseCase(posts=posts, attachments=attachments, authors=authors)

    assert use_case.authorize(created.id, alice) == created
    with pytest.raises(NotPostAuthorError):
        use_case.authorize(created.id, bob)
    with pytest.raises(PostNotFoundError):
        use_case.authorize("not-an-id", alice)


def test_update_missing_post(posts, attachments, authors, alice) -> None:
    use_case = UpdatePostUseCase(posts=posts, attachments=attachments, authors=authors)

    with pytest.raises(PostNotFoundError):
        use_case.execute(new_id(), alice, "Title", "Long enough content")


# Delete


def test_delete_by_author(posts, alice) -> None:
    created = posts.add(alice.id, PostDraft(title="Bye", content="going away soon"))

    DeletePostUseCase(posts=posts).execute(created.id, alice)

    assert posts.get(created.id) is None


def test_delete_by_other_user_is_forbidden(posts, alice, bob) -> None:
    created = posts.add(alice.id, PostDraft(title="Mine", content="staying right here"))

    with pytest.raises(NotPostAuthorError):
        DeletePostUseCase(posts=posts).execute(created.id, bob)

    assert posts.get(created.id) is not None


def test_delete_unknown_id_is_not_found(posts, alice) -> None:
    with pytest.raises(PostNotFoundError) as exc_info:
        DeletePostUseCase(posts=posts).execute(new_id(), alice)

    assert exc_info.value.status == 404


def test_created_at_is_assigned_by_store(posts, alice) -> None:
    before = datetime(2024, 12, 31, tzinfo=UTC)

    post = posts.add(alice.id, PostDraft(title="Time", content="timestamps matter"))

    assert post.created_at > before
    assert post.created_at == post.updated_at
