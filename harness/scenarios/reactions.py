from api.schemas import ReactionCreate, ReactionRequest, ReactionResponse
from harness.connection import Connection
from harness.errors import ConflictError, PermissionDeniedError
from harness.invoker import invoke
from harness.runner import scenario
from harness.scenarios import setup
from harness.sdk import reactions
from harness.validator import assert_equals, assert_predicate, assert_schema, assert_throws


@scenario
async def reaction_is_unique_per_member_and_comment(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    comment = await fixtures.create("comment", {"post": await fixtures.create("post", {"member": await fixtures.create("member")})})
    reactor = await fixtures.create("member")

    await sessions.login("member", reactor.session.credentials)
    body = ReactionCreate(comment_id=comment.id, reaction_type="like")
    first = await invoke(reactions.create, connection, body)
    second = await invoke(reactions.create, connection, body)
    assert_predicate("first reaction accepted", first.is_ok)
    assert_schema(ReactionResponse, first.unwrap())
    assert_predicate("second reaction refused", isinstance(second.error, ConflictError))

    own = await reactions.index(connection, ReactionRequest(comment_id=comment.id))
    assert_equals("one live reaction", own.pagination.records, 1)


@scenario
async def reaction_erase_then_react_again_revives(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    comment = await fixtures.create("comment", {"post": await fixtures.create("post", {"member": await fixtures.create("member")})})
    reactor = await fixtures.create("member")
    reaction = await fixtures.create("reaction", {"comment": comment, "member": reactor})

    await sessions.login("member", reactor.session.credentials)
    erased = await reactions.erase(connection, reaction.id)
    assert_predicate("deleted_at set", erased.deleted_at is not None)

    revived = await reactions.create(connection, ReactionCreate(comment_id=comment.id, reaction_type="dislike"))
    assert_equals("same record", revived.id, reaction.id)
    assert_equals("type switched", revived.reaction_type, "dislike")
    assert_equals("live again", revived.deleted_at, None)


@scenario
async def reaction_on_own_comment_is_forbidden(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    author = await fixtures.create("member")
    comment = await fixtures.create("comment", {"post": await fixtures.create("post", {"member": author})})

    await sessions.login("member", author.session.credentials)
    await assert_throws(
        "react to own comment",
        lambda: reactions.create(connection, ReactionCreate(comment_id=comment.id, reaction_type="like")),
        expected=PermissionDeniedError,
    )


@scenario
async def reaction_detail_is_owner_only(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    comment = await fixtures.create("comment", {"post": await fixtures.create("post", {"member": await fixtures.create("member")})})
    reactor = await fixtures.create("member")
    reaction = await fixtures.create("reaction", {"comment": comment, "member": reactor})
    stranger = await fixtures.create("member")

    async with sessions.using(reactor.session):
        fetched = await reactions.at(connection, reaction.id)
        assert_equals("id", fetched.id, reaction.id)
    async with sessions.using(stranger.session):
        await assert_throws("stranger reads reaction", lambda: reactions.at(connection, reaction.id), expected=PermissionDeniedError)
        await assert_throws("stranger erases reaction", lambda: reactions.erase(connection, reaction.id), expected=PermissionDeniedError)
    async with sessions.using(reactor.session):
        assert_equals("still live", (await reactions.at(connection, reaction.id)).deleted_at, None)
