"""
API schemas package. Import from submodules or from this package.

These are the request/response structures shared by the service and the
harness SDK.

Example:
    from api.schemas import PostCreate, PostResponse
    from api.schemas.board_schemas import PostResponse
"""

from api.schemas.page_schemas import Page, PageRequest, Pagination
from api.schemas.auth_schemas import (
    AdministratorJoin,
    AuthTokenPayload,
    Authorized,
    Consent,
    LoginRequest,
    MemberJoin,
    ModeratorJoin,
    RefreshRequest,
    Role,
    Token,
)
from api.schemas.member_schemas import MemberRequest, MemberResponse, MemberUpdate
from api.schemas.board_schemas import (
    CommentCreate,
    CommentRequest,
    CommentResponse,
    CommentUpdate,
    PostCreate,
    PostHistoryResponse,
    PostRequest,
    PostResponse,
    PostUpdate,
    ReactionCreate,
    ReactionRequest,
    ReactionResponse,
    ThreadCreate,
    ThreadRequest,
    ThreadResponse,
    ThreadUpdate,
    VoteCreate,
    VoteRequest,
    VoteResponse,
)
from api.schemas.moderation_schemas import (
    AppealCreate,
    AppealRequest,
    AppealResponse,
    AppealReview,
    AppealUpdate,
    ModerationActionCreate,
    ModerationActionRequest,
    ModerationActionResponse,
    ModerationActionUpdate,
    NotificationCreate,
    NotificationRequest,
    NotificationResponse,
    NotificationUpdate,
    ReportCreate,
    ReportRequest,
    ReportResponse,
)
from api.schemas.attendance_schemas import (
    AttendanceCreate,
    AttendanceRequest,
    AttendanceResponse,
    AttendanceUpdate,
)

__all__ = [
    # pagination
    "Page",
    "PageRequest",
    "Pagination",
    # auth
    "AdministratorJoin",
    "AuthTokenPayload",
    "Authorized",
    "Consent",
    "LoginRequest",
    "MemberJoin",
    "ModeratorJoin",
    "RefreshRequest",
    "Role",
    "Token",
    # members
    "MemberRequest",
    "MemberResponse",
    "MemberUpdate",
    # board
    "CommentCreate",
    "CommentRequest",
    "CommentResponse",
    "CommentUpdate",
    "PostCreate",
    "PostHistoryResponse",
    "PostRequest",
    "PostResponse",
    "PostUpdate",
    "ReactionCreate",
    "ReactionRequest",
    "ReactionResponse",
    "ThreadCreate",
    "ThreadRequest",
    "ThreadResponse",
    "ThreadUpdate",
    "VoteCreate",
    "VoteRequest",
    "VoteResponse",
    # moderation
    "AppealCreate",
    "AppealRequest",
    "AppealResponse",
    "AppealReview",
    "AppealUpdate",
    "ModerationActionCreate",
    "ModerationActionRequest",
    "ModerationActionResponse",
    "ModerationActionUpdate",
    "NotificationCreate",
    "NotificationRequest",
    "NotificationResponse",
    "NotificationUpdate",
    "ReportCreate",
    "ReportRequest",
    "ReportResponse",
    # attendance
    "AttendanceCreate",
    "AttendanceRequest",
    "AttendanceResponse",
    "AttendanceUpdate",
]
