from .academics import (
    AssignmentCreate,
    AssignmentRead,
    AttendanceMarkInput,
    AttendanceRead,
    AttendanceRequest,
    ExamCreate,
    ExamRead,
    GradeEntryInput,
    GradeRead,
    GradesRequest,
    StudentAssignmentRead,
    StudentAttendanceRead,
    StudentPerformanceRead,
    SubjectAttendanceSummaryRead,
    SubjectCreate,
    SubjectRead,
    SubjectUpdate,
    SubmissionGradeRequest,
    SubmissionRead,
    SubmitAssignmentRequest,
    TeacherAssignmentRead,
)
from .auth import (
    ForgotPasswordRequest,
    ForgotPasswordResponse,
    LoginRequest,
    LoginResponse,
    RegisterStudentRequest,
    Token,
)
from .base import APIModel, MessageResponse, Page, PageMeta, page_of
from .chat import (
    ChatMessageRead,
    ChatStatsRead,
    MessageCreate,
    MessageUpdate,
    ParticipantRead,
    RoomRead,
    RoomSummaryRead,
)
from .email import (
    AttendanceNotificationRequest,
    BulkEmailItem,
    BulkEmailRequest,
    BulkEmailResponse,
    EmailLogRead,
    EmailSentResponse,
    EmailStatsRead,
    EmailTestRequest,
    EventInvitationRequest,
    ExamNotificationRequest,
    FeeReminderRequest,
    SendEmailRequest,
    WelcomeEmailRequest,
)
from .event import (
    ClubCreate,
    ClubRead,
    EventCreate,
    EventRead,
    EventUpdate,
    MembershipRead,
    RegistrationRead,
)
from .fee import FeeCreate, FeeRead, FeeSummaryRead, FeeUpdate
from .notification import (
    BulkNotificationCreate,
    ClassNotificationCreate,
    MarkAllReadResponse,
    NotificationContent,
    NotificationCreate,
    NotificationCreatedRead,
    NotificationRead,
    NotificationStatsRead,
)
from .payment import (
    AmountBreakdown,
    CheckoutRequest,
    GatewayConfigCreate,
    GatewayConfigRead,
    GatewayConfigUpdate,
    GatewayRefundRead,
    GatewayRefundRequest,
    GatewayRefundStatusRead,
    OrderRead,
    PaymentCreate,
    PaymentLinkRead,
    PaymentMethodCreate,
    PaymentMethodRead,
    PaymentMethodUpdate,
    PaymentRead,
    PaymentStatsRead,
    PaymentStatusChangeRead,
    PaymentStatusUpdate,
    RefundCreate,
    RefundRead,
    RefundResultRead,
    RefundStatusUpdate,
    VerifyPaymentRead,
    VerifyPaymentRequest,
    WebhookAck,
)
from .upload import AvatarRead, UploadRead
from .user import (
    AdminDetailsRead,
    DashboardStatsRead,
    ProfileInput,
    ProfileRead,
    ProfileUpdate,
    StudentCreate,
    StudentDetailsInput,
    StudentDetailsRead,
    StudentDetailsUpdate,
    StudentUpdate,
    TeacherCreate,
    TeacherDetailsInput,
    TeacherDetailsRead,
    TeacherDetailsUpdate,
    TeacherUpdate,
    UserRead,
    UserSummaryRead,
)

__all__ = [
    "APIModel",
    "AdminDetailsRead",
    "AmountBreakdown",
    "AssignmentCreate",
    "AssignmentRead",
    "AttendanceMarkInput",
    "AttendanceNotificationRequest",
    "AttendanceRead",
    "AttendanceRequest",
    "AvatarRead",
    "BulkEmailItem",
    "BulkEmailRequest",
    "BulkEmailResponse",
    "BulkNotificationCreate",
    "ChatMessageRead",
    "ChatStatsRead",
    "CheckoutRequest",
    "ClassNotificationCreate",
    "ClubCreate",
    "ClubRead",
    "DashboardStatsRead",
    "EmailLogRead",
    "EmailSentResponse",
    "EmailStatsRead",
    "EmailTestRequest",
    "EventCreate",
    "EventInvitationRequest",
    "EventRead",
    "EventUpdate",
    "ExamCreate",
    "ExamNotificationRequest",
    "ExamRead",
    "FeeCreate",
    "FeeRead",
    "FeeReminderRequest",
    "FeeSummaryRead",
    "FeeUpdate",
    "ForgotPasswordRequest",
    "ForgotPasswordResponse",
    "GatewayConfigCreate",
    "GatewayConfigRead",
    "GatewayConfigUpdate",
    "GatewayRefundRead",
    "GatewayRefundRequest",
    "GatewayRefundStatusRead",
    "GradeEntryInput",
    "GradeRead",
    "GradesRequest",
    "LoginRequest",
    "LoginResponse",
    "MarkAllReadResponse",
    "MembershipRead",
    "MessageCreate",
    "MessageResponse",
    "MessageUpdate",
    "NotificationContent",
    "NotificationCreate",
    "NotificationCreatedRead",
    "NotificationRead",
    "NotificationStatsRead",
    "OrderRead",
    "Page",
    "PageMeta",
    "ParticipantRead",
    "PaymentCreate",
    "PaymentLinkRead",
    "PaymentMethodCreate",
    "PaymentMethodRead",
    "PaymentMethodUpdate",
    "PaymentRead",
    "PaymentStatsRead",
    "PaymentStatusChangeRead",
    "PaymentStatusUpdate",
    "ProfileInput",
    "ProfileRead",
    "ProfileUpdate",
    "RefundCreate",
    "RefundRead",
    "RefundResultRead",
    "RefundStatusUpdate",
    "RegisterStudentRequest",
    "RegistrationRead",
    "RoomRead",
    "RoomSummaryRead",
    "SendEmailRequest",
    "StudentAssignmentRead",
    "StudentAttendanceRead",
    "StudentCreate",
    "StudentDetailsInput",
    "StudentDetailsRead",
    "StudentDetailsUpdate",
    "StudentPerformanceRead",
    "StudentUpdate",
    "SubjectAttendanceSummaryRead",
    "SubjectCreate",
    "SubjectRead",
    "SubjectUpdate",
    "SubmissionGradeRequest",
    "SubmissionRead",
    "SubmitAssignmentRequest",
    "TeacherAssignmentRead",
    "TeacherCreate",
    "TeacherDetailsInput",
    "TeacherDetailsRead",
    "TeacherDetailsUpdate",
    "TeacherUpdate",
    "Token",
    "UploadRead",
    "UserRead",
    "UserSummaryRead",
    "VerifyPaymentRead",
    "VerifyPaymentRequest",
    "WebhookAck",
    "WelcomeEmailRequest",
    "page_of",
]
