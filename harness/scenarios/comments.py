from api.schemas import CommentCreate, CommentResponse, CommentUpdate
from harness import random
from harness.connection import Connection
from harness.errors import NotFoundError, PermissionDeniedError
from harness.runner import scenario
from harness.scenarios import setup
from harness.sdk import comments, posts
from harness.validator import assert_equals, assert_predicate, assert_schema, assert_throws


@scenario
async def comment_lifecycle(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    post = await fixtures.create("post", {"member": await fixtures.create("member")})
    commenter = await fixtures.create("member")
    comment = await fixtures.create("comment", {"post": post, "member": commenter})

    fetched = assert_schema(CommentResponse, await comments.at(connection, post.id, comment.id))
    assert_equals("id", fetched.id, comment.id)
    assert_equals("author", fetched.author_member_id, commenter.id)
    listed = await comments.index(connection, post.id)
    assert_equals("listed", [c.id for c in listed.data], [comment.id])

    await sessions.login("member", post.parents["member"].session.credentials)
    await assert_throws(
        "post author editing someone else's comment",
        lambda: comments.update(connection, post.id, comment.id, CommentUpdate(content=random.paragraph(1))),
        expected=PermissionDeniedError,
    )
    unchanged = await comments.at(connection, post.id, comment.id)
    assert_equals("content unchanged", unchanged.content, comment.payload.content)

    await sessions.login("member", commenter.session.credentials)
    edited = await comments.update(connection, post.id, comment.id, CommentUpdate(content="edited content"))
    assert_equals("edited", edited.content, "edited content")
    erased = await comments.erase(connection, post.id, comment.id)
    assert_predicate("deleted_at set", erased.deleted_at is not None)
    assert_equals("content kept", erased.content, "edited content")
    await assert_throws(
        "second erase", lambda: comments.erase(connection, post.id, comment.id), expected=NotFoundError
    )


@scenario
async def comment_on_erased_post_is_not_found(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    author = await fixtures.create("member")
    post = await fixtures.create("post", {"member": author})

    await sessions.login("member", author.session.credentials)
    await posts.erase(connection, post.id)
    await assert_throws(
        "comment on erased post",
        lambda: comments.create(connection, post.id, CommentCreate(content=random.paragraph(1))),
        expected=NotFoundError,
    )
    await assert_throws(
        "comment on unknown post",
        lambda: comments.create(connection, random.uuid(), CommentCreate(content=random.paragraph(1))),
        expected=NotFoundError,
    )
