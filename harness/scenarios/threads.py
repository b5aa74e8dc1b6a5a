from api.schemas import PostRequest, ThreadResponse, ThreadUpdate
from harness import random
from harness.connection import Connection
from harness.errors import NotFoundError, PermissionDeniedError
from harness.runner import scenario
from harness.scenarios import setup
from harness.sdk import posts, threads
from harness.validator import assert_equals, assert_predicate, assert_schema, assert_throws


@scenario
async def thread_lifecycle(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    owner = await fixtures.create("member")
    thread = await fixtures.create("thread", {"member": owner})
    await fixtures.create("post", {"member": owner, "thread": thread})

    fetched = assert_schema(ThreadResponse, await threads.at(connection, thread.id))
    assert_equals("id", fetched.id, thread.id)
    in_thread = await posts.index(connection, PostRequest(thread_id=thread.id))
    assert_equals("post filed in thread", in_thread.pagination.records, 1)

    other = await fixtures.create("member")
    await sessions.login("member", other.session.credentials)
    await assert_throws(
        "non-owner rename",
        lambda: threads.update(connection, thread.id, ThreadUpdate(title=random.name(2))),
        expected=PermissionDeniedError,
    )
    await assert_throws("non-owner erase", lambda: threads.erase(connection, thread.id), expected=PermissionDeniedError)
    assert_equals("title unchanged", (await threads.at(connection, thread.id)).title, thread.payload.title)

    await sessions.login("member", owner.session.credentials)
    renamed = await threads.update(connection, thread.id, ThreadUpdate(title="renamed thread"))
    assert_equals("renamed", renamed.title, "renamed thread")

    erased = await threads.erase(connection, thread.id)
    assert_predicate("deleted_at set", erased.deleted_at is not None)
    assert_equals("title kept", erased.title, "renamed thread")
    await assert_throws("read after erase", lambda: threads.at(connection, thread.id), expected=NotFoundError)
    await assert_throws("second erase", lambda: threads.erase(connection, thread.id), expected=NotFoundError)
