from datetime import datetime
from enum import Enum
from sqlalchemy import String, DateTime, ForeignKey, Text, Integer, Float, Boolean, JSON, Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base


class ServiceType(str, Enum):
    """Kinds of service a professional offers."""
    DOCTOR = "Doctor"
    DENTIST = "Dentist"
    SALON = "Salon"
    SPA = "Spa"
    GYM = "Gym"
    CONSULTANT = "Consultant"
    THERAPIST = "Therapist"
    TRAINER = "Trainer"
    OTHER = "Other"


class Professional(Base):
    """Service provider profile, one per user."""

    __tablename__ = "professionals"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    service_type: Mapped[ServiceType] = mapped_column(
        SAEnum(
            ServiceType,
            native_enum=False,
            length=20,
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        index=True,
    )
    specialization: Mapped[str | None] = mapped_column(String(255), nullable=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    # {"start": "09:00", "end": "18:00", "days": ["Monday", ...]}
    working_hours: Mapped[dict] = mapped_column(JSON, nullable=False)
    rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    total_reviews: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="professional")
    appointments: Mapped[list["Appointment"]] = relationship(
        "Appointment",
        back_populates="professional",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Professional {self.id} {self.service_type.value}>"
