"""Repository implementations for infrastructure layer."""

from .assignment_repository import AssignmentRepository
from .attendance_repository import AttendanceRepository
from .chat_repository import ChatRepository
from .club_repository import ClubRepository
from .email_log_repository import EmailLogRepository
from .event_repository import EventRepository
from .exam_repository import ExamRepository
from .fee_repository import FeeRepository
from .grade_repository import GradeRepository
from .notification_repository import NotificationRepository
from .payment_gateway_config_repository import PaymentGatewayConfigRepository
from .payment_method_repository import PaymentMethodRepository
from .payment_repository import PaymentRepository
from .refund_repository import RefundRepository
from .subject_repository import SubjectRepository
from .uploaded_file_repository import UploadedFileRepository
from .user_repository import UserRepository

__all__ = [
    "AssignmentRepository",
    "AttendanceRepository",
    "ChatRepository",
    "ClubRepository",
    "EmailLogRepository",
    "EventRepository",
    "ExamRepository",
    "FeeRepository",
    "GradeRepository",
    "NotificationRepository",
    "PaymentGatewayConfigRepository",
    "PaymentMethodRepository",
    "PaymentRepository",
    "RefundRepository",
    "SubjectRepository",
    "UploadedFileRepository",
    "UserRepository",
]
