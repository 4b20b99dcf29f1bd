import time
import uuid
from datetime import datetime, timezone
from typing import Literal

from pydantic import EmailStr
from sqlalchemy import JSON, DateTime
from sqlmodel import Field, SQLModel

DAY_MS = 24 * 60 * 60 * 1000


def get_datetime_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_ms() -> int:
    return int(time.time() * 1000)


Role = Literal["user", "admin"]
UserStatus = Literal["active", "blocked"]
SubscriptionStatus = Literal["free", "pro", "trial"]
PlanInterval = Literal["monthly", "yearly"]
PracticeType = Literal["accent", "tone", "storyteller", "scramble", "impromptu"]


# User profiles

class UserProfileBase(SQLModel):
    email: EmailStr | None = Field(default=None, max_length=255)
    roles: list[str] = Field(default_factory=lambda: ["user"], sa_type=JSON)
    status: str = Field(default="active", max_length=20)


class UserProfile(UserProfileBase, table=True):
    uid: str = Field(primary_key=True, max_length=128)
    created_at: int = Field(default_factory=now_ms)
    updated_at: int | None = None


class UserProfileUpdate(SQLModel):
    email: EmailStr | None = Field(default=None, max_length=255)
    roles: list[Role] | None = None
    status: UserStatus | None = None


class UserProfilePublic(UserProfileBase):
    uid: str
    created_at: int | None = None


# Subscriptions, keyed by user id (one document per user)

class SubscriptionBase(SQLModel):
    status: str = Field(default="free", max_length=20)
    plan: str = Field(default="free_tier", max_length=100)
    subscription_id: str | None = Field(default=None, max_length=255)
    trial_start: int | None = None
    trial_end: int | None = None
    current_period_end: int | None = None


class Subscription(SubscriptionBase, table=True):
    user_id: str = Field(primary_key=True, max_length=128)


class SubscriptionUpdate(SQLModel):
    status: SubscriptionStatus | None = None
    plan: str | None = Field(default=None, max_length=100)
    subscription_id: str | None = Field(default=None, max_length=255)
    trial_start: int | None = None
    trial_end: int | None = None
    current_period_end: int | None = None


class SubscriptionPublic(SubscriptionBase):
    user_id: str


# Pricing

class PricingConfigBase(SQLModel):
    plan_name: str = Field(min_length=1, max_length=100)
    price: float = Field(ge=0)
    currency: str = Field(default="USD", max_length=10)
    interval: str = Field(default="monthly", max_length=10)
    features: list[str] = Field(default_factory=list, sa_type=JSON)
    is_active: bool = True


class PricingConfig(PricingConfigBase, table=True):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True, max_length=64)
    created_at: int = Field(default_factory=now_ms)
    updated_at: int = Field(default_factory=now_ms)


class PricingConfigCreate(PricingConfigBase):
    interval: PlanInterval = "monthly"


class PricingConfigUpdate(SQLModel):
    plan_name: str | None = Field(default=None, min_length=1, max_length=100)
    price: float | None = Field(default=None, ge=0)
    currency: str | None = Field(default=None, max_length=10)
    interval: PlanInterval | None = None
    features: list[str] | None = None
    is_active: bool | None = None


class PricingConfigPublic(PricingConfigBase):
    id: str
    created_at: int | None = None
    updated_at: int | None = None


# Practice history (accent, tone, storyteller, scramble, impromptu)

class PracticeHistoryItemBase(SQLModel):
    practice_type: str = Field(max_length=20, index=True)
    prompt: str = Field(default="", max_length=5000)
    response: str | None = Field(default=None, max_length=5000)
    language: str | None = Field(default=None, max_length=50)
    accent: str | None = Field(default=None, max_length=50)
    emotion: str | None = Field(default=None, max_length=20)
    image_urls: list[str] = Field(default_factory=list, sa_type=JSON)
    recording_ref: str | None = Field(default=None)
    analysis: dict | None = Field(default=None, sa_type=JSON)


class PracticeHistoryItemCreate(PracticeHistoryItemBase):
    practice_type: PracticeType


class PracticeHistoryItemUpdate(SQLModel):
    response: str | None = Field(default=None, max_length=5000)
    recording_ref: str | None = None
    analysis: dict | None = None


class PracticeHistoryItem(PracticeHistoryItemBase, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: str = Field(index=True, max_length=128)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_type=DateTime(timezone=True),  # type: ignore
    )


class PracticeHistoryItemPublic(PracticeHistoryItemBase):
    id: uuid.UUID
    user_id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Speech analysis history (interview practice)

class AnalysisHistoryItemBase(SQLModel):
    topic: str = Field(max_length=2000)
    transcript: str | None = None
    recording_ref: str | None = None
    analysis: dict | None = Field(default=None, sa_type=JSON)


class AnalysisHistoryItemCreate(AnalysisHistoryItemBase):
    pass


class AnalysisHistoryItemUpdate(SQLModel):
    transcript: str | None = None
    recording_ref: str | None = None
    analysis: dict | None = None


class AnalysisHistoryItem(AnalysisHistoryItemBase, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: str = Field(index=True, max_length=128)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )


class AnalysisHistoryItemPublic(AnalysisHistoryItemBase):
    id: uuid.UUID
    user_id: str
    created_at: datetime | None = None


# Interview questions (bulk loaded)

class InterviewQuestionBase(SQLModel):
    question: str = Field(min_length=1, max_length=5000)
    category: str = Field(max_length=20)
    type: str = Field(max_length=20)
    difficulty: str = Field(max_length=10)
    company: str | None = Field(default=None, max_length=255)
    tags: list[str] = Field(default_factory=list, sa_type=JSON)


class InterviewQuestionCreate(InterviewQuestionBase):
    category: Literal["Behavioral", "Technical"]
    type: Literal["General", "Backend", "Frontend", "Full Stack", "DevOps"]
    difficulty: Literal["Easy", "Medium", "Hard"]


class InterviewQuestion(InterviewQuestionBase, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)


# Generic message
class Message(SQLModel):
    message: str
