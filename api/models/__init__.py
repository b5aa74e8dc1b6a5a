"""
API data models. Single import surface for DB entities.

Accounts and roles: UserAccount, ConsentRecord, Member, Administrator, Moderator, Guest
Board content: Thread, Post, PostEditHistory, Comment, CommentReaction, Vote
Moderation: ContentReport, ModerationAction, Appeal, Notification
Attendance: AttendanceRecord
"""

from api.models.models import (
    UserAccount,
    ConsentRecord,
    Member,
    Administrator,
    Moderator,
    Guest,
    Thread,
    Post,
    PostEditHistory,
    Comment,
    CommentReaction,
    Vote,
    ContentReport,
    ModerationAction,
    Appeal,
    Notification,
    AttendanceRecord,
)

__all__ = [
    "UserAccount",
    "ConsentRecord",
    "Member",
    "Administrator",
    "Moderator",
    "Guest",
    "Thread",
    "Post",
    "PostEditHistory",
    "Comment",
    "CommentReaction",
    "Vote",
    "ContentReport",
    "ModerationAction",
    "Appeal",
    "Notification",
    "AttendanceRecord",
]
