"""
Typed client for the discussion-board API, one module per resource.

Every function takes the connection first and returns the validated response
model; non-2xx responses raise the matching ``harness.errors.ApiError``.
"""

from harness.sdk import (
    appeals,
    attendance,
    auth,
    comments,
    members,
    moderation,
    notifications,
    posts,
    reactions,
    reports,
    threads,
    votes,
)

__all__ = [
    "appeals",
    "attendance",
    "auth",
    "comments",
    "members",
    "moderation",
    "notifications",
    "posts",
    "reactions",
    "reports",
    "threads",
    "votes",
]
