from app.schemas.common import PageParams, Pagination
from app.schemas.user import (
    SignupRequest,
    LoginRequest,
    UserSummary,
    UserResponse,
    TokenResponse,
    UserFilters,
    UserList,
)
from app.schemas.professional import (
    WorkingHours,
    ProfessionalCreate,
    ProfessionalStatusUpdate,
    ProfessionalFilters,
    ProfessionalSummary,
    ProfessionalResponse,
    ProfessionalList,
)
from app.schemas.payment import (
    PaymentCreate,
    PaymentUpdate,
    PaymentFilters,
    PaymentResponse,
    PaymentDetailResponse,
    PaymentList,
)
from app.schemas.appointment import (
    AppointmentCreate,
    AppointmentUpdate,
    AppointmentCancel,
    AppointmentFilters,
    AppointmentResponse,
    AppointmentList,
)
from app.schemas.notification import (
    NotificationFilters,
    NotificationResponse,
    NotificationList,
)

__all__ = [
    "PageParams",
    "Pagination",
    "SignupRequest",
    "LoginRequest",
    "UserSummary",
    "UserResponse",
    "TokenResponse",
    "UserFilters",
    "UserList",
    "WorkingHours",
    "ProfessionalCreate",
    "ProfessionalStatusUpdate",
    "ProfessionalFilters",
    "ProfessionalSummary",
    "ProfessionalResponse",
    "ProfessionalList",
    "PaymentCreate",
    "PaymentUpdate",
    "PaymentFilters",
    "PaymentResponse",
    "PaymentDetailResponse",
    "PaymentList",
    "AppointmentCreate",
    "AppointmentUpdate",
    "AppointmentCancel",
    "AppointmentFilters",
    "AppointmentResponse",
    "AppointmentList",
    "NotificationFilters",
    "NotificationResponse",
    "NotificationList",
]
