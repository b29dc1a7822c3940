"""Domain entities package."""

from .academics import (
    ATTENDANCE_STATUSES,
    GRADE_POINTS,
    Assignment,
    AttendanceRecord,
    Exam,
    Grade,
    Subject,
    Submission,
    letter_for_percentage,
)
from .chat import (
    MESSAGE_TYPES,
    ChatMessage,
    ChatRoom,
    RoomParticipant,
    RoomSummary,
    class_room_id,
    direct_room_id,
)
from .email_log import EmailLog
from .event import Club, ClubMembership, Event, EventRegistration
from .fee import FEE_STATUSES, Fee
from .notification import (
    NOTIFICATION_CATEGORIES,
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    Notification,
    RecipientMode,
)
from .payment import (
    ALLOWED_TRANSITIONS,
    PAYMENT_METHODS,
    PAYMENT_TYPES,
    REFUND_STATUSES,
    TERMINAL_STATUSES,
    Payment,
    PaymentGatewayConfig,
    PaymentMethod,
    PaymentStatus,
    Refund,
    TransitionResult,
    can_transition,
)
from .uploaded_file import UploadedFile
from .user import (
    DETAILS_BY_ROLE,
    AdminDetails,
    Profile,
    RoleDetails,
    StudentDetails,
    TeacherDetails,
    User,
    UserRole,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "ATTENDANCE_STATUSES",
    "AdminDetails",
    "Assignment",
    "AttendanceRecord",
    "ChatMessage",
    "ChatRoom",
    "Club",
    "ClubMembership",
    "DETAILS_BY_ROLE",
    "EmailLog",
    "Event",
    "EventRegistration",
    "Exam",
    "FEE_STATUSES",
    "Fee",
    "GRADE_POINTS",
    "Grade",
    "MESSAGE_TYPES",
    "NOTIFICATION_CATEGORIES",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_TYPES",
    "Notification",
    "PAYMENT_METHODS",
    "PAYMENT_TYPES",
    "Payment",
    "PaymentGatewayConfig",
    "PaymentMethod",
    "PaymentStatus",
    "Profile",
    "REFUND_STATUSES",
    "RecipientMode",
    "Refund",
    "RoleDetails",
    "RoomParticipant",
    "RoomSummary",
    "StudentDetails",
    "Subject",
    "Submission",
    "TERMINAL_STATUSES",
    "TeacherDetails",
    "TransitionResult",
    "UploadedFile",
    "User",
    "UserRole",
    "can_transition",
    "class_room_id",
    "direct_room_id",
    "letter_for_percentage",
]
