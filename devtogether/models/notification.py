"""
Notification Models
===================

Notifications arrive from the feed with a type tag and a free-form
``data`` map. Each type is modelled as its own variant carrying a
payload model whose fields are all optional, so routing code can rely
on attribute access instead of probing the map.

Payload keys arrive camelCase (``projectId``) and are exposed
snake_case (``project_id``). Unknown keys are kept as extras.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any, ClassVar, Dict, Literal, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from devtogether.core.enums import NotificationType
from devtogether.core.exceptions import MalformedInputError
from devtogether.core.logging import AccessLogger

_access_log = AccessLogger("notification")

M = TypeVar("M", bound=BaseModel)


# =====================================
# Payloads
# =====================================

class NotificationPayload(BaseModel):
    """Base payload: every field optional, blank strings treated as absent."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _blank_to_none(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            return {
                key: (None if isinstance(value, str) and not value.strip() else value)
                for key, value in data.items()
            }
        return data


class ModerationPayload(NotificationPayload):
    organization_id: Optional[str] = None
    organization_name: Optional[str] = None
    project_id: Optional[str] = None
    project_title: Optional[str] = None
    # "organizations" or "projects" when the producer tags the review queue
    target_type: Optional[str] = Field(default=None, alias="type")
    priority: Optional[str] = None


class ApplicationPayload(NotificationPayload):
    application_id: Optional[str] = None
    project_id: Optional[str] = None
    project_title: Optional[str] = None
    organization_name: Optional[str] = None
    status: Optional[str] = None


class ProjectPayload(NotificationPayload):
    project_id: Optional[str] = None
    project_title: Optional[str] = None
    organization_id: Optional[str] = None
    status: Optional[str] = None


class TeamPayload(NotificationPayload):
    project_id: Optional[str] = None
    project_title: Optional[str] = None
    message_id: Optional[str] = None


class FeedbackPayload(NotificationPayload):
    feedback_id: Optional[str] = None
    developer_id: Optional[str] = None
    organization_id: Optional[str] = None


class AchievementPayload(NotificationPayload):
    achievement_id: Optional[str] = None
    achievement_name: Optional[str] = None


class SystemPayload(NotificationPayload):
    action_url: Optional[str] = None


# =====================================
# Notification variants
# =====================================

class NotificationBase(BaseModel):
    """
    Fields shared by every notification variant.

    Attributes:
        id: Notification id
        user_id: Recipient id
        title: Short title shown in the dropdown
        message: Body text
        read: Read flag
        created_at: Creation timestamp
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    payload_model: ClassVar[Type[NotificationPayload]] = NotificationPayload

    id: Optional[str] = None
    user_id: Optional[str] = None
    title: Optional[str] = None
    message: Optional[str] = None
    read: bool = False
    created_at: Optional[datetime] = None

    @property
    def notification_type(self) -> Optional[NotificationType]:
        """The type tag as an enum, None for unrecognised types."""
        try:
            return NotificationType(self.type)  # type: ignore[attr-defined]
        except ValueError:
            return None


class ModerationNotification(NotificationBase):
    payload_model: ClassVar[Type[NotificationPayload]] = ModerationPayload

    type: Literal["moderation"] = "moderation"
    data: ModerationPayload = Field(default_factory=ModerationPayload)


class ApplicationNotification(NotificationBase):
    payload_model: ClassVar[Type[NotificationPayload]] = ApplicationPayload

    type: Literal["application"] = "application"
    data: ApplicationPayload = Field(default_factory=ApplicationPayload)


class ProjectNotification(NotificationBase):
    """Project lifecycle events; ``status_change`` shares the project payload."""

    payload_model: ClassVar[Type[NotificationPayload]] = ProjectPayload

    type: Literal["project", "status_change"] = "project"
    data: ProjectPayload = Field(default_factory=ProjectPayload)


class TeamNotification(NotificationBase):
    """Workspace activity: team events, chat messages and promotions."""

    payload_model: ClassVar[Type[NotificationPayload]] = TeamPayload

    type: Literal["team", "chat", "promotion"] = "team"
    data: TeamPayload = Field(default_factory=TeamPayload)


class FeedbackNotification(NotificationBase):
    payload_model: ClassVar[Type[NotificationPayload]] = FeedbackPayload

    type: Literal["feedback"] = "feedback"
    data: FeedbackPayload = Field(default_factory=FeedbackPayload)


class AchievementNotification(NotificationBase):
    payload_model: ClassVar[Type[NotificationPayload]] = AchievementPayload

    type: Literal["achievement"] = "achievement"
    data: AchievementPayload = Field(default_factory=AchievementPayload)


class SystemNotification(NotificationBase):
    payload_model: ClassVar[Type[NotificationPayload]] = SystemPayload

    type: Literal["system"] = "system"
    data: SystemPayload = Field(default_factory=SystemPayload)


class UnrecognizedNotification(NotificationBase):
    """A notification whose type tag is outside the known set."""

    type: str = ""
    data: Dict[str, Any] = Field(default_factory=dict)


Notification = Annotated[
    Union[
        ModerationNotification,
        ApplicationNotification,
        ProjectNotification,
        TeamNotification,
        FeedbackNotification,
        AchievementNotification,
        SystemNotification,
    ],
    Field(discriminator="type"),
]

AnyNotification = Union[
    ModerationNotification,
    ApplicationNotification,
    ProjectNotification,
    TeamNotification,
    FeedbackNotification,
    AchievementNotification,
    SystemNotification,
    UnrecognizedNotification,
]

_notification_adapter: TypeAdapter[Notification] = TypeAdapter(Notification)

NOTIFICATION_VARIANTS: Dict[NotificationType, Type[NotificationBase]] = {
    NotificationType.MODERATION: ModerationNotification,
    NotificationType.APPLICATION: ApplicationNotification,
    NotificationType.PROJECT: ProjectNotification,
    NotificationType.STATUS_CHANGE: ProjectNotification,
    NotificationType.TEAM: TeamNotification,
    NotificationType.CHAT: TeamNotification,
    NotificationType.PROMOTION: TeamNotification,
    NotificationType.FEEDBACK: FeedbackNotification,
    NotificationType.ACHIEVEMENT: AchievementNotification,
    NotificationType.SYSTEM: SystemNotification,
}


# =====================================
# Parsing
# =====================================

def parse_notification_type(value: Any) -> NotificationType:
    """
    Strictly parse a notification type tag.

    Raises:
        MalformedInputError: If the tag is missing or unknown
    """
    if isinstance(value, NotificationType):
        return value
    if isinstance(value, str):
        try:
            return NotificationType(value.strip().lower())
        except ValueError:
            pass
    raise MalformedInputError("type", value, "unknown notification type")


_PRESERVED_KEYS = ("type", "data")


def _validate_dropping_invalid(model: Type[M], data: Mapping[str, Any], scope: str) -> M:
    """
    Validate ``data``, discarding top-level keys that fail validation.

    Error locations are reported by alias, so a key is dropped when
    either its own name or its camelCase alias is flagged. If the
    remainder still fails, only the type tag and payload are kept.
    """
    if any(not isinstance(key, str) for key in data):
        for key in data:
            if not isinstance(key, str):
                _access_log.log_malformed_input(f"{scope}.{key!r}", data[key], "non-string key dropped")
        data = {key: value for key, value in data.items() if isinstance(key, str)}

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        invalid = {str(err["loc"][0]) for err in exc.errors() if err["loc"]}

    cleaned = {}
    for key, value in data.items():
        if key in invalid or to_camel(key) in invalid:
            _access_log.log_malformed_input(f"{scope}.{key}", value, "invalid value dropped")
            continue
        cleaned[key] = value

    try:
        return model.model_validate(cleaned)
    except ValidationError:
        _access_log.log_malformed_input(scope, dict(data), "replaced with defaults")

    try:
        return model.model_validate({key: data[key] for key in _PRESERVED_KEYS if key in data})
    except ValidationError:
        return model()


def parse_notification(raw: Mapping[str, Any], strict: bool = False) -> AnyNotification:
    """
    Build a typed notification from a raw feed record.

    In the default lenient mode this never raises: unknown type tags
    produce an UnrecognizedNotification and invalid fields are dropped.

    Args:
        raw: Notification record as delivered by the feed
        strict: Raise instead of degrading

    Returns:
        Notification variant matching the type tag

    Raises:
        MalformedInputError: In strict mode, for any invalid input
    """
    if not isinstance(raw, Mapping):
        if strict:
            raise MalformedInputError("notification", raw, "expected an object")
        _access_log.log_malformed_input("notification", raw, "expected an object")
        return UnrecognizedNotification()

    try:
        notification_type = parse_notification_type(raw.get("type"))
    except MalformedInputError as exc:
        if strict:
            raise
        _access_log.log_malformed_input(exc.field, exc.value, exc.reason)
        envelope = {key: value for key, value in raw.items() if key != "data"}
        data = raw.get("data")
        envelope["type"] = str(raw.get("type") or "")
        envelope["data"] = dict(data) if isinstance(data, Mapping) else {}
        return _validate_dropping_invalid(UnrecognizedNotification, envelope, "notification")

    variant = NOTIFICATION_VARIANTS[notification_type]
    record = {**raw, "type": notification_type.value}

    if strict:
        if record.get("data") is None:
            record["data"] = {}
        try:
            return _notification_adapter.validate_python(record)
        except ValidationError as exc:
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            raise MalformedInputError(location or "notification", raw, first["msg"]) from exc

    data = raw.get("data")
    if data is None:
        data = {}
    elif not isinstance(data, Mapping):
        _access_log.log_malformed_input("data", data, "expected an object")
        data = {}
    record["data"] = _validate_dropping_invalid(variant.payload_model, data, "data")
    return _validate_dropping_invalid(variant, record, "notification")
