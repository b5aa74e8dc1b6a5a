"""
End-to-end harness for the discussion-board API.

Typical use inside a scenario:

    sessions = ActorSessionManager(connection)
    fixtures = FixtureBuilder(connection, sessions)
    author = await fixtures.create("member")
    post = await fixtures.create("post", {"member": author})
    ...
"""

from harness.connection import Connection
from harness.errors import (
    ApiError,
    AuthError,
    ConflictError,
    ExpectationError,
    FixtureDependencyError,
    HarnessError,
    NotFoundError,
    PermissionDeniedError,
    RegistrationError,
    ScenarioNotFoundError,
    SchemaAssertionError,
    ValidationError,
)
from harness.fixtures import Fixture, FixtureBuilder
from harness.invoker import Result, invoke
from harness.session import Credentials, Session, ActorSessionManager
from harness.validator import assert_equals, assert_predicate, assert_schema, assert_throws

__all__ = [
    "ActorSessionManager",
    "ApiError",
    "AuthError",
    "ConflictError",
    "Connection",
    "Credentials",
    "ExpectationError",
    "Fixture",
    "FixtureBuilder",
    "FixtureDependencyError",
    "HarnessError",
    "NotFoundError",
    "PermissionDeniedError",
    "RegistrationError",
    "Result",
    "ScenarioNotFoundError",
    "SchemaAssertionError",
    "Session",
    "ValidationError",
    "assert_equals",
    "assert_predicate",
    "assert_schema",
    "assert_throws",
    "invoke",
]
