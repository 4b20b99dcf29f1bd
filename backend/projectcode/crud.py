import logging
import uuid
from datetime import datetime
from typing import Any

from sqlmodel import Session, select

from projectcode.core.config import settings
from projectcode.exceptions import NotFoundError
from projectcode.models import (
    DAY_MS,
    AnalysisHistoryItem,
    AnalysisHistoryItemCreate,
    AnalysisHistoryItemUpdate,
    InterviewQuestion,
    InterviewQuestionCreate,
    PracticeHistoryItem,
    PracticeHistoryItemCreate,
    PracticeHistoryItemUpdate,
    PricingConfig,
    PricingConfigCreate,
    PricingConfigUpdate,
    Subscription,
    SubscriptionUpdate,
    UserProfile,
    UserProfileUpdate,
    get_datetime_utc,
    now_ms,
)

logger = logging.getLogger(__name__)


# User profiles

def get_user_profile(*, session: Session, uid: str) -> UserProfile | None:
    return session.get(UserProfile, uid)


def create_user_profile(*, session: Session, uid: str, email: str | None) -> UserProfile:
    """Create a profile with the default role and start the free trial."""
    created = now_ms()
    db_profile = UserProfile(uid=uid, email=email, roles=["user"], status="active", created_at=created)
    session.add(db_profile)
    session.commit()
    session.refresh(db_profile)

    set_user_subscription(
        session=session,
        user_id=uid,
        subscription_in=build_trial_subscription(now=created),
    )
    return db_profile


def list_user_profiles(*, session: Session) -> list[UserProfile]:
    return list(session.exec(select(UserProfile)).all())


def update_user_profile(*, session: Session, uid: str, profile_in: UserProfileUpdate) -> UserProfile:
    db_profile = session.get(UserProfile, uid)
    if not db_profile:
        raise NotFoundError(f"User with ID {uid} not found")
    profile_data = profile_in.model_dump(exclude_unset=True)
    db_profile.sqlmodel_update(profile_data, update={"updated_at": now_ms()})
    session.add(db_profile)
    session.commit()
    session.refresh(db_profile)
    return db_profile


def promote_to_admin(*, session: Session, uid: str) -> UserProfile:
    db_profile = session.get(UserProfile, uid)
    if not db_profile:
        raise NotFoundError(f"User with ID {uid} not found")
    roles = list(db_profile.roles or ["user"])
    if "admin" not in roles:
        roles.append("admin")
    db_profile.roles = roles
    db_profile.updated_at = now_ms()
    session.add(db_profile)
    session.commit()
    session.refresh(db_profile)
    return db_profile


def seed_admin_profile(*, session: Session, uid: str, email: str | None) -> UserProfile:
    """Create or update a profile so that it carries the admin role."""
    db_profile = session.get(UserProfile, uid)
    if db_profile:
        db_profile.roles = ["user", "admin"]
        db_profile.email = email
        db_profile.status = "active"
        db_profile.updated_at = now_ms()
    else:
        db_profile = UserProfile(uid=uid, email=email, roles=["user", "admin"], status="active")
    session.add(db_profile)
    session.commit()
    session.refresh(db_profile)
    return db_profile


# Subscriptions

def build_trial_subscription(*, now: int) -> SubscriptionUpdate:
    return SubscriptionUpdate(
        status="trial",
        plan="pro_tier",
        trial_start=now,
        trial_end=now + settings.TRIAL_DAYS * DAY_MS,
    )


def set_user_subscription(
    *, session: Session, user_id: str, subscription_in: SubscriptionUpdate
) -> Subscription:
    """Merge the given fields into the user's subscription, creating it if needed."""
    data = subscription_in.model_dump(exclude_unset=True)
    db_sub = session.get(Subscription, user_id)
    if db_sub:
        db_sub.sqlmodel_update(data)
    else:
        db_sub = Subscription(user_id=user_id, **data)
    session.add(db_sub)
    session.commit()
    session.refresh(db_sub)
    return db_sub


def update_user_subscription(
    *, session: Session, user_id: str, subscription_in: SubscriptionUpdate
) -> Subscription:
    if not session.get(UserProfile, user_id):
        raise NotFoundError(f"User with ID {user_id} not found")
    return set_user_subscription(session=session, user_id=user_id, subscription_in=subscription_in)


def get_user_subscription(*, session: Session, user_id: str, now: int | None = None) -> Subscription:
    """
    Return the user's subscription.

    A missing subscription starts a trial. An expired trial is downgraded to
    the free tier and the downgrade is persisted.
    """
    now = now if now is not None else now_ms()
    db_sub = session.get(Subscription, user_id)
    if db_sub is None:
        return set_user_subscription(
            session=session,
            user_id=user_id,
            subscription_in=build_trial_subscription(now=now),
        )

    if db_sub.status == "trial" and db_sub.trial_end and now > db_sub.trial_end:
        logger.info("Trial expired for user %s, downgrading to free tier", user_id)
        return set_user_subscription(
            session=session,
            user_id=user_id,
            subscription_in=SubscriptionUpdate(status="free", plan="free_tier"),
        )
    return db_sub


# Pricing

DEFAULT_PRICING: list[dict[str, Any]] = [
    {
        "id": "free",
        "plan_name": "Free",
        "price": 0,
        "currency": "USD",
        "interval": "monthly",
        "features": [
            "AI-Powered Tutorial Generation",
            "3 Projects",
            "3 Learning Paths",
            "Community Support",
            "5 interview questions per day",
        ],
        "is_active": True,
    },
    {
        "id": "pro",
        "plan_name": "Pro",
        "price": 199,
        "currency": "INR",
        "interval": "monthly",
        "features": [
            "AI-Powered Tutorial Generation",
            "Unlimited Projects",
            "Unlimited Learning Paths",
            "Personalized Assistance",
            "Priority Support",
            "Unlimited interview questions",
            "Unlimited AI-Powered Tutorials",
        ],
        "is_active": True,
    },
]


def _seed_default_pricing(session: Session) -> list[PricingConfig]:
    stamp = now_ms()
    configs = [PricingConfig(**entry, created_at=stamp, updated_at=stamp) for entry in DEFAULT_PRICING]
    for config in configs:
        session.add(config)
    session.commit()
    for config in configs:
        session.refresh(config)
    return configs


def get_pricing_configs(*, session: Session) -> list[PricingConfig]:
    configs = list(session.exec(select(PricingConfig)).all())
    if not configs:
        logger.info("Pricing table empty, seeding default plans")
        return _seed_default_pricing(session)
    return configs


def get_pricing_config(*, session: Session, pricing_id: str) -> PricingConfig | None:
    return session.get(PricingConfig, pricing_id)


def create_pricing_config(*, session: Session, pricing_in: PricingConfigCreate) -> PricingConfig:
    stamp = now_ms()
    db_pricing = PricingConfig.model_validate(pricing_in, update={"created_at": stamp, "updated_at": stamp})
    session.add(db_pricing)
    session.commit()
    session.refresh(db_pricing)
    return db_pricing


def update_pricing_config(
    *, session: Session, pricing_id: str, pricing_in: PricingConfigUpdate
) -> PricingConfig:
    db_pricing = session.get(PricingConfig, pricing_id)
    if not db_pricing:
        raise NotFoundError(f"Pricing plan {pricing_id} not found")
    db_pricing.sqlmodel_update(pricing_in.model_dump(exclude_unset=True), update={"updated_at": now_ms()})
    session.add(db_pricing)
    session.commit()
    session.refresh(db_pricing)
    return db_pricing


# Practice and analysis history

def _newest_first(items: list[Any]) -> list[Any]:
    def created_key(item: Any) -> float:
        created: datetime | None = item.created_at
        return created.timestamp() if created else 0.0

    return sorted(items, key=created_key, reverse=True)


def add_practice_history_item(
    *, session: Session, user_id: str, item_in: PracticeHistoryItemCreate
) -> PracticeHistoryItem:
    db_item = PracticeHistoryItem.model_validate(item_in, update={"user_id": user_id})
    session.add(db_item)
    session.commit()
    session.refresh(db_item)
    return db_item


def get_practice_history_item(*, session: Session, user_id: str, item_id: uuid.UUID) -> PracticeHistoryItem:
    db_item = session.get(PracticeHistoryItem, item_id)
    if not db_item or db_item.user_id != user_id:
        raise NotFoundError("History item not found")
    return db_item


def update_practice_history_item(
    *, session: Session, user_id: str, item_id: uuid.UUID, item_in: PracticeHistoryItemUpdate
) -> PracticeHistoryItem:
    db_item = get_practice_history_item(session=session, user_id=user_id, item_id=item_id)
    db_item.sqlmodel_update(item_in.model_dump(exclude_unset=True), update={"updated_at": get_datetime_utc()})
    session.add(db_item)
    session.commit()
    session.refresh(db_item)
    return db_item


def list_practice_history(
    *, session: Session, user_id: str, limit: int | None = None
) -> list[PracticeHistoryItem]:
    statement = (
        select(PracticeHistoryItem)
        .where(PracticeHistoryItem.user_id == user_id)
        .order_by(PracticeHistoryItem.created_at.desc())
        .limit(settings.PRACTICE_HISTORY_LIMIT if limit is None else limit)
    )
    return _newest_first(list(session.exec(statement).all()))


def add_analysis_history_item(
    *, session: Session, user_id: str, item_in: AnalysisHistoryItemCreate
) -> AnalysisHistoryItem:
    db_item = AnalysisHistoryItem.model_validate(item_in, update={"user_id": user_id})
    session.add(db_item)
    session.commit()
    session.refresh(db_item)
    return db_item


def update_analysis_history_item(
    *, session: Session, user_id: str, item_id: uuid.UUID, item_in: AnalysisHistoryItemUpdate
) -> AnalysisHistoryItem:
    db_item = session.get(AnalysisHistoryItem, item_id)
    if not db_item or db_item.user_id != user_id:
        raise NotFoundError("History item not found")
    db_item.sqlmodel_update(item_in.model_dump(exclude_unset=True))
    session.add(db_item)
    session.commit()
    session.refresh(db_item)
    return db_item


def list_analysis_history(
    *, session: Session, user_id: str, limit: int | None = None
) -> list[AnalysisHistoryItem]:
    statement = (
        select(AnalysisHistoryItem)
        .where(AnalysisHistoryItem.user_id == user_id)
        .order_by(AnalysisHistoryItem.created_at.desc())
        .limit(settings.ANALYSIS_HISTORY_LIMIT if limit is None else limit)
    )
    return _newest_first(list(session.exec(statement).all()))


# Interview questions

def bulk_create_questions(*, session: Session, questions: list[InterviewQuestionCreate]) -> int:
    for question in questions:
        session.add(InterviewQuestion.model_validate(question))
    session.commit()
    return len(questions)
