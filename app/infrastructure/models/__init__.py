"""SQLAlchemy models for the infrastructure layer."""

from .academics import (
    AssignmentModel,
    AssignmentSubmissionModel,
    AttendanceModel,
    ExamModel,
    GradeModel,
    SubjectModel,
)
from .chat import ChatMessageModel, ChatRoomMemberModel, ChatRoomModel
from .email_log import EmailLogModel
from .event import ClubMembershipModel, ClubModel, EventModel, EventRegistrationModel
from .fee import FeeModel
from .notification import NotificationModel, NotificationRecipientModel
from .payment import (
    PaymentGatewayConfigModel,
    PaymentMethodModel,
    PaymentModel,
    RefundModel,
)
from .uploaded_file import UploadedFileModel
from .user import AdminProfileModel, StudentProfileModel, TeacherProfileModel, UserModel

__all__ = [
    "AdminProfileModel",
    "AssignmentModel",
    "AssignmentSubmissionModel",
    "AttendanceModel",
    "ChatMessageModel",
    "ChatRoomMemberModel",
    "ChatRoomModel",
    "ClubMembershipModel",
    "ClubModel",
    "EmailLogModel",
    "EventModel",
    "EventRegistrationModel",
    "ExamModel",
    "FeeModel",
    "GradeModel",
    "NotificationModel",
    "NotificationRecipientModel",
    "PaymentGatewayConfigModel",
    "PaymentMethodModel",
    "PaymentModel",
    "RefundModel",
    "StudentProfileModel",
    "SubjectModel",
    "TeacherProfileModel",
    "UploadedFileModel",
    "UserModel",
]
