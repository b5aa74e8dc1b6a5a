from api.config import Base
from api.models.types import UTCDateTime, utcnow
from sqlalchemy import Column, String, Text, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship


class UserAccount(Base):
    __tablename__ = "user_accounts"
    id = Column(String, primary_key=True, index=True)  # uuid
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, nullable=False)


class ConsentRecord(Base):
    __tablename__ = "consent_records"
    id = Column(String, primary_key=True, index=True)  # uuid
    user_account_id = Column(String, ForeignKey("user_accounts.id"), index=True, nullable=False)
    policy_type = Column(String, nullable=False)
    policy_version = Column(String, nullable=False)
    consent_action = Column(String, nullable=False)  # granted|revoked
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)


class Member(Base):
    __tablename__ = "members"
    id = Column(String, primary_key=True, index=True)  # uuid
    user_account_id = Column(String, ForeignKey("user_accounts.id"), unique=True, nullable=False)
    nickname = Column(String, unique=True, index=True, nullable=False)
    status = Column(String, nullable=False, default="active")  # active|suspended|banned
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, nullable=False)
    deleted_at = Column(UTCDateTime, nullable=True)

    account = relationship("UserAccount", foreign_keys=[user_account_id])


class Administrator(Base):
    __tablename__ = "administrators"
    id = Column(String, primary_key=True, index=True)  # uuid
    user_account_id = Column(String, ForeignKey("user_accounts.id"), unique=True, nullable=False)
    nickname = Column(String, nullable=False)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)

    account = relationship("UserAccount", foreign_keys=[user_account_id])


class Moderator(Base):
    __tablename__ = "moderators"
    id = Column(String, primary_key=True, index=True)  # uuid
    member_id = Column(String, ForeignKey("members.id"), unique=True, nullable=False)
    assigned_by_administrator_id = Column(String, ForeignKey("administrators.id"), nullable=False)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    revoked_at = Column(UTCDateTime, nullable=True)

    member = relationship("Member", foreign_keys=[member_id])


class Guest(Base):
    __tablename__ = "guests"
    id = Column(String, primary_key=True, index=True)  # uuid
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)


class Thread(Base):
    __tablename__ = "threads"
    id = Column(String, primary_key=True, index=True)  # uuid
    author_member_id = Column(String, ForeignKey("members.id"), index=True, nullable=False)
    title = Column(String, nullable=False)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, nullable=False)
    deleted_at = Column(UTCDateTime, nullable=True)


class Post(Base):
    __tablename__ = "posts"
    id = Column(String, primary_key=True, index=True)  # uuid
    thread_id = Column(String, ForeignKey("threads.id"), index=True, nullable=True)
    author_member_id = Column(String, ForeignKey("members.id"), index=True, nullable=False)
    title = Column(String, nullable=False)
    body = Column(Text, nullable=False)
    business_status = Column(String, nullable=False, default="public")  # public|private
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, nullable=False)
    deleted_at = Column(UTCDateTime, nullable=True)

    histories = relationship("PostEditHistory", backref="post", cascade="all, delete-orphan")


class PostEditHistory(Base):
    __tablename__ = "post_edit_histories"
    id = Column(String, primary_key=True, index=True)  # uuid
    post_id = Column(String, ForeignKey("posts.id"), index=True, nullable=False)
    editor_role = Column(String, nullable=False)
    editor_id = Column(String, nullable=False)
    title = Column(String, nullable=False)  # title before the edit
    body = Column(Text, nullable=False)  # body before the edit
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)


class Comment(Base):
    __tablename__ = "comments"
    id = Column(String, primary_key=True, index=True)  # uuid
    post_id = Column(String, ForeignKey("posts.id"), index=True, nullable=False)
    author_member_id = Column(String, ForeignKey("members.id"), index=True, nullable=False)
    content = Column(Text, nullable=False)
    is_locked = Column(Boolean, default=False, nullable=False)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, nullable=False)
    deleted_at = Column(UTCDateTime, nullable=True)


class CommentReaction(Base):
    __tablename__ = "comment_reactions"
    __table_args__ = (UniqueConstraint("member_id", "comment_id"),)
    id = Column(String, primary_key=True, index=True)  # uuid
    member_id = Column(String, ForeignKey("members.id"), index=True, nullable=False)
    comment_id = Column(String, ForeignKey("comments.id"), index=True, nullable=False)
    reaction_type = Column(String, nullable=False)  # like|dislike
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, nullable=False)
    deleted_at = Column(UTCDateTime, nullable=True)


class Vote(Base):
    __tablename__ = "votes"
    __table_args__ = (UniqueConstraint("member_id", "post_id"),)
    id = Column(String, primary_key=True, index=True)  # uuid
    member_id = Column(String, ForeignKey("members.id"), index=True, nullable=False)
    post_id = Column(String, ForeignKey("posts.id"), index=True, nullable=False)
    vote_type = Column(String, nullable=False)  # up|down
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)


class ContentReport(Base):
    __tablename__ = "content_reports"
    id = Column(String, primary_key=True, index=True)  # uuid
    reporter_member_id = Column(String, ForeignKey("members.id"), index=True, nullable=False)
    post_id = Column(String, ForeignKey("posts.id"), nullable=True)
    comment_id = Column(String, ForeignKey("comments.id"), nullable=True)
    reason = Column(Text, nullable=False)
    status = Column(String, nullable=False, default="open")  # open|resolved
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, nullable=False)


class ModerationAction(Base):
    __tablename__ = "moderation_actions"
    id = Column(String, primary_key=True, index=True)  # uuid
    actor_role = Column(String, nullable=False)  # moderator|administrator
    actor_id = Column(String, nullable=False)
    target_member_id = Column(String, ForeignKey("members.id"), index=True, nullable=False)
    action_type = Column(String, nullable=False)  # warn|hide|remove|suspend|ban
    reason = Column(Text, nullable=False)
    post_id = Column(String, ForeignKey("posts.id"), nullable=True)
    comment_id = Column(String, ForeignKey("comments.id"), nullable=True)
    report_id = Column(String, ForeignKey("content_reports.id"), nullable=True)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, nullable=False)


class Appeal(Base):
    __tablename__ = "appeals"
    id = Column(String, primary_key=True, index=True)  # uuid
    appellant_member_id = Column(String, ForeignKey("members.id"), index=True, nullable=False)
    moderation_action_id = Column(String, ForeignKey("moderation_actions.id"), index=True, nullable=False)
    reason = Column(Text, nullable=False)
    status = Column(String, nullable=False, default="pending")  # pending|accepted|rejected
    resolution_comment = Column(Text, nullable=True)
    reviewed_by_role = Column(String, nullable=True)
    reviewed_by_id = Column(String, nullable=True)
    reviewed_at = Column(UTCDateTime, nullable=True)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, nullable=False)
    deleted_at = Column(UTCDateTime, nullable=True)


class Notification(Base):
    __tablename__ = "notifications"
    id = Column(String, primary_key=True, index=True)  # uuid
    user_account_id = Column(String, ForeignKey("user_accounts.id"), index=True, nullable=False)
    title = Column(String, nullable=False)
    body = Column(Text, nullable=False)
    read_at = Column(UTCDateTime, nullable=True)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"
    __table_args__ = (UniqueConstraint("member_id", "session_label", "checked_at"),)
    id = Column(String, primary_key=True, index=True)  # uuid
    member_id = Column(String, ForeignKey("members.id"), index=True, nullable=False)
    recorded_by_role = Column(String, nullable=False)
    recorded_by_id = Column(String, nullable=False)
    session_label = Column(String, nullable=False)
    checked_at = Column(UTCDateTime, nullable=False)
    status = Column(String, nullable=False)  # present|late|absent|leave
    exception_reason = Column(Text, nullable=True)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, nullable=False)
