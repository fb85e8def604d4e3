from sqlalchemy.orm import Session

from carnival.controller.auth_controller import get_profile
from carnival.controller.i18n import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES, is_supported
from carnival.errors import Unauthorized, ValidationFailed
from carnival.models.user_model import User

# columns the profile always carries a value for; an explicit null leaves them as they are
NON_NULLABLE_FIELDS = (
    "language_preference",
    "notification_preferences",
    "location_sharing_enabled",
    "emergency_contacts",
    "preferences",
)


def ensure_self(user: User, user_id: str):
    # profiles are only readable and writable by their owner
    if user.id != user_id:
        raise Unauthorized()


def _check_language(language):
    if not is_supported(language):
        raise ValidationFailed(
            f"Unsupported language '{language}'. Supported: {', '.join(SUPPORTED_LANGUAGES)}",
            "UNSUPPORTED_LANGUAGE",
        )


# ------------------ Retrieve Profile ------------------
async def retrieve_profile(db: Session, user: User, user_id: str):
    ensure_self(user, user_id)
    return get_profile(db, user)


# ------------------ Update Profile ------------------
async def update_profile(db: Session, user: User, user_id: str, update_data: dict):
    ensure_self(user, user_id)
    profile = get_profile(db, user)

    update_data = {
        key: val for key, val in update_data.items()
        if val is not None or key not in NON_NULLABLE_FIELDS
    }
    if "language_preference" in update_data:
        _check_language(update_data["language_preference"])

    for key, val in update_data.items():
        setattr(profile, key, val)
    db.commit()
    db.refresh(profile)
    return profile


# ------------------ Language Preference ------------------
async def retrieve_language(db: Session, user: User, user_id: str) -> str:
    ensure_self(user, user_id)
    profile = get_profile(db, user)
    return profile.language_preference or DEFAULT_LANGUAGE


async def update_language(db: Session, user: User, user_id: str, language: str) -> str:
    ensure_self(user, user_id)
    _check_language(language)
    profile = get_profile(db, user)
    profile.language_preference = language
    db.commit()
    return profile.language_preference
