"""
The scenario suite. Every module here is imported by ``runner.discover``;
each scenario is one linear business workflow.
"""

from harness.connection import Connection
from harness.fixtures import FixtureBuilder
from harness.session import ActorSessionManager


def setup(connection: Connection) -> tuple[ActorSessionManager, FixtureBuilder]:
    sessions = ActorSessionManager(connection)
    return sessions, FixtureBuilder(connection, sessions)
