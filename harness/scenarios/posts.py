from api.schemas import Page, PostHistoryResponse, PostRequest, PostResponse, PostUpdate
from harness import random
from harness.connection import Connection
from harness.errors import NotFoundError, PermissionDeniedError, ValidationError
from harness.runner import scenario
from harness.scenarios import setup
from harness.sdk import posts
from harness.validator import assert_equals, assert_predicate, assert_schema, assert_throws


@scenario
async def post_erase_by_non_owner_is_forbidden(connection: Connection) -> None:
    """Member B may not erase member A's post; A's own erase is a soft delete."""
    sessions, fixtures = setup(connection)
    author = await fixtures.create("member")
    post = await fixtures.create("post", {"member": author})
    intruder = await fixtures.create("member")
    admin = await fixtures.create("administrator")

    await sessions.login("member", intruder.session.credentials)
    await assert_throws("non-owner erase", lambda: posts.erase(connection, post.id), expected=PermissionDeniedError)
    untouched = await posts.at(connection, post.id)
    assert_equals("still live after refused erase", untouched.deleted_at, None)

    await sessions.login("member", author.session.credentials)
    erased = assert_schema(PostResponse, await posts.erase(connection, post.id))
    assert_equals("id", erased.id, post.id)
    assert_predicate("deleted_at is set", erased.deleted_at is not None)
    assert_equals("title unchanged", erased.title, post.payload.title)
    assert_equals("body unchanged", erased.body, post.payload.body)

    await assert_throws("second erase", lambda: posts.erase(connection, post.id), expected=NotFoundError)
    await assert_throws("member reading an erased post", lambda: posts.at(connection, post.id), expected=NotFoundError)

    async with sessions.with_role("administrator", admin.session.credentials):
        audited = await posts.at(connection, post.id)
        assert_predicate("deleted_at kept for audit", audited.deleted_at is not None)
        assert_equals("audited title", audited.title, post.payload.title)


@scenario
async def post_create_then_at_keeps_id(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    author = await fixtures.create("member")
    thread = await fixtures.create("thread", {"member": author})
    post = await fixtures.create("post", {"member": author, "thread": thread})

    fetched = assert_schema(PostResponse, await posts.at(connection, post.id))
    assert_equals("id", fetched.id, post.id)
    assert_equals("thread", fetched.thread_id, thread.id)
    assert_equals("author", fetched.author_member_id, author.id)
    assert_equals("visibility", fetched.business_status, "public")


@scenario
async def post_non_owner_update_is_forbidden(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    post = await fixtures.create("post", {"member": await fixtures.create("member")})
    other = await fixtures.create("member")

    await sessions.login("member", other.session.credentials)
    await assert_throws(
        "non-owner update",
        lambda: posts.update(connection, post.id, PostUpdate(title=random.paragraph(1))),
        expected=PermissionDeniedError,
    )
    current = await posts.at(connection, post.id)
    assert_equals("title unchanged", current.title, post.payload.title)
    assert_equals("body unchanged", current.body, post.payload.body)


@scenario
async def post_edits_are_recorded_in_history(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    author = await fixtures.create("member")
    post = await fixtures.create("post", {"member": author})
    promoted = await fixtures.create("member")
    admin = await fixtures.create("administrator")
    await fixtures.create("moderator", {"administrator": admin, "member": promoted})

    await sessions.login("member", author.session.credentials)
    first_title = random.paragraph(1)
    await posts.update(connection, post.id, PostUpdate(title=first_title))

    await sessions.login("moderator", promoted.session.credentials)
    moderated_body = random.content(1)
    moderated = await posts.moderate(connection, post.id, PostUpdate(body=moderated_body))
    assert_equals("moderator changed body", moderated.body, moderated_body)
    assert_equals("title kept", moderated.title, first_title)

    history = assert_schema(list[PostHistoryResponse], await posts.histories(connection, post.id))
    assert_equals("two edits", len(history), 2)
    assert_equals("first entry keeps the original title", history[0].title, post.payload.title)
    assert_equals("first editor", history[0].editor_role, "member")
    assert_equals("second entry keeps the first edit", history[1].title, first_title)
    assert_equals("second editor", history[1].editor_role, "moderator")


@scenario
async def post_index_pagination(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    author = await fixtures.create("member")
    for _ in range(3):
        await fixtures.create("post", {"member": author})

    first = assert_schema(
        Page[PostResponse], await posts.index(connection, PostRequest(author_member_id=author.id, page=1, limit=2))
    )
    assert_predicate("data within limit", len(first.data) <= 2)
    assert_equals("current page", first.pagination.current, 1)
    assert_equals("limit echoed", first.pagination.limit, 2)
    assert_equals("records", first.pagination.records, 3)
    assert_equals("pages", first.pagination.pages, 2)

    second = await posts.index(connection, PostRequest(author_member_id=author.id, page=2, limit=2))
    assert_equals("second page current", second.pagination.current, 2)
    assert_equals("second page size", len(second.data), 1)
    seen = {p.id for p in first.data} | {p.id for p in second.data}
    assert_equals("pages do not overlap", len(seen), 3)

    beyond = await posts.index(connection, PostRequest(author_member_id=author.id, page=5, limit=2))
    assert_equals("page past the end is empty", beyond.data, [])

    await assert_throws(
        "zero limit", lambda: posts.index(connection, {"page": 1, "limit": 0}), expected=ValidationError
    )
    await assert_throws(
        "limit above the maximum",
        lambda: posts.index(connection, {"page": 1, "limit": 1001}),
        expected=ValidationError,
    )
    await assert_throws(
        "negative page", lambda: posts.index(connection, {"page": -1, "limit": 10}), expected=ValidationError
    )


@scenario
async def post_private_is_hidden_from_other_members(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    author = await fixtures.create("member")
    post = await fixtures.create("post", {"member": author}, {"business_status": "private"})
    reader = await fixtures.create("member")

    await sessions.login("member", reader.session.credentials)
    await assert_throws("other member reads private post", lambda: posts.at(connection, post.id), expected=NotFoundError)
    listed = await posts.index(connection, PostRequest(author_member_id=author.id))
    assert_equals("not listed for others", listed.data, [])

    await sessions.login("member", author.session.credentials)
    own = await posts.at(connection, post.id)
    assert_equals("author sees it", own.id, post.id)
