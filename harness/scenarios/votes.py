from api.schemas import VoteCreate, VoteRequest
from harness.connection import Connection
from harness.errors import ConflictError, NotFoundError, PermissionDeniedError
from harness.runner import scenario
from harness.scenarios import setup
from harness.sdk import votes
from harness.validator import assert_equals, assert_throws


@scenario
async def vote_is_unique_and_owner_erased(connection: Connection) -> None:
    sessions, fixtures = setup(connection)
    post = await fixtures.create("post", {"member": await fixtures.create("member")})
    voter = await fixtures.create("member")
    vote = await fixtures.create("vote", {"post": post, "member": voter})
    assert_equals("vote type", vote.payload.vote_type, "up")

    async with sessions.using(voter.session):
        await assert_throws(
            "second vote on the same post",
            lambda: votes.create(connection, VoteCreate(post_id=post.id, vote_type="down")),
            expected=ConflictError,
        )

    other = await fixtures.create("member")
    async with sessions.using(other.session):
        await assert_throws("non-owner erase", lambda: votes.erase(connection, vote.id), expected=PermissionDeniedError)

    async with sessions.using(voter.session):
        listed = await votes.index(connection, VoteRequest(post_id=post.id))
        assert_equals("vote still there", [v.id for v in listed.data], [vote.id])
        await votes.erase(connection, vote.id)
        await assert_throws("second erase", lambda: votes.erase(connection, vote.id), expected=NotFoundError)
        listed = await votes.index(connection, VoteRequest(post_id=post.id))
        assert_equals("vote gone", listed.data, [])
