"""
Event Schemas.

Typed views over the records returned by ``GET /users/{username}/events``.

The upstream payload is loosely typed and varies with the ``type`` tag, so
each known tag gets its own model and everything else falls through to
``UnknownEvent``. All models ignore fields they do not use and default the
ones they do, so a sparse record still renders.

Usage:
    from github_activity.schemas.event import parse_events

    events = parse_events(response.json())
    for event in events:
        print(event.describe("2024-01-01 10:00"))
"""

from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from github_activity.core.exceptions import ResponseParseError


def _empty_if_null(value: Any) -> Any:
    return {} if value is None else value


def _blank_if_null(value: Any) -> Any:
    return "" if value is None else value


# Upstream sends null for objects and strings it has nothing to put in.
NullableObject = BeforeValidator(_empty_if_null)
NullableText = BeforeValidator(_blank_if_null)


class _Lenient(BaseModel):
    """Base that ignores unknown upstream fields."""

    model_config = ConfigDict(extra="ignore", frozen=True)


class Actor(_Lenient):
    login: Annotated[str, NullableText] = ""


class Repo(_Lenient):
    name: Annotated[str, NullableText] = ""


class TitledRef(_Lenient):
    """The issue or pull request an event refers to; only the title is shown."""

    title: str | None = None


class PushPayload(_Lenient):
    commits: list[Any] | None = None


class IssuesPayload(_Lenient):
    action: str | None = None
    issue: Annotated[TitledRef, NullableObject] = Field(default_factory=TitledRef)


class PullRequestPayload(_Lenient):
    action: str | None = None
    pull_request: Annotated[TitledRef, NullableObject] = Field(default_factory=TitledRef)


class CreatePayload(_Lenient):
    ref_type: str | None = None
    ref: str | None = None


class _EventBase(_Lenient):
    """Fields shared by every event record."""

    type: str
    actor: Actor = Field(default_factory=Actor)
    repo: Repo = Field(default_factory=Repo)
    created_at: Annotated[str, NullableText] = ""

    @field_validator("actor", "repo", "payload", mode="before", check_fields=False)
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return _empty_if_null(value)

    @property
    def style_key(self) -> str:
        """Key into the formatter's icon and color table."""
        return self.type

    def describe(self, when: str) -> str | None:
        """Human-readable sentence for this event, or None to drop it."""
        raise NotImplementedError


class PushEvent(_EventBase):
    type: Literal["PushEvent"]
    payload: PushPayload = Field(default_factory=PushPayload)

    @property
    def commit_count(self) -> int:
        return len(self.payload.commits or [])

    def describe(self, when: str) -> str | None:
        return (
            f"{self.actor.login} pushed {self.commit_count} commit(s) "
            f"to {self.repo.name} at {when}"
        )


class IssuesEvent(_EventBase):
    type: Literal["IssuesEvent"]
    payload: IssuesPayload = Field(default_factory=IssuesPayload)

    @property
    def style_key(self) -> str:
        return f"{self.type}.{self.payload.action}"

    def describe(self, when: str) -> str | None:
        # Only opened/closed are reported; reopened, labeled, etc. are dropped.
        if self.payload.action not in ("opened", "closed"):
            return None
        title = self.payload.issue.title or ""
        return (
            f'{self.actor.login} {self.payload.action} an issue in '
            f'{self.repo.name}: "{title}" at {when}'
        )


class PullRequestEvent(_EventBase):
    type: Literal["PullRequestEvent"]
    payload: PullRequestPayload = Field(default_factory=PullRequestPayload)

    @property
    def style_key(self) -> str:
        return f"{self.type}.{self.payload.action}"

    def describe(self, when: str) -> str | None:
        if self.payload.action not in ("opened", "closed"):
            return None
        title = self.payload.pull_request.title or ""
        return (
            f'{self.actor.login} {self.payload.action} a pull request in '
            f'{self.repo.name}: "{title}" at {when}'
        )


class WatchEvent(_EventBase):
    type: Literal["WatchEvent"]

    def describe(self, when: str) -> str | None:
        return f"{self.actor.login} starred {self.repo.name} at {when}"


class ForkEvent(_EventBase):
    type: Literal["ForkEvent"]

    def describe(self, when: str) -> str | None:
        return f"{self.actor.login} forked {self.repo.name} at {when}"


class CreateEvent(_EventBase):
    type: Literal["CreateEvent"]
    payload: CreatePayload = Field(default_factory=CreatePayload)

    def describe(self, when: str) -> str | None:
        message = f"{self.actor.login} created a {self.payload.ref_type or ''}"
        if self.payload.ref:
            message += f" ({self.payload.ref})"
        return f"{message} in {self.repo.name} at {when}"


class UnknownEvent(_EventBase):
    """Any tag without a dedicated model."""

    type: str = "UnknownEvent"
    payload: dict[str, Any] = Field(default_factory=dict)

    @field_validator("type", mode="before")
    @classmethod
    def _missing_type(cls, value: Any) -> Any:
        if not value:
            return "UnknownEvent"
        return value if isinstance(value, str) else str(value)

    @property
    def style_key(self) -> str:
        return "other"

    def describe(self, when: str) -> str | None:
        return (
            f"{self.actor.login} performed an activity of type {self.type} "
            f"in {self.repo.name} at {when}"
        )


KNOWN_EVENT_TYPES = frozenset({
    "PushEvent",
    "IssuesEvent",
    "PullRequestEvent",
    "WatchEvent",
    "ForkEvent",
    "CreateEvent",
})


def _event_tag(value: Any) -> str:
    """Pick the union member for a raw record; unknown tags map to 'other'."""
    if isinstance(value, dict):
        tag = value.get("type")
    else:
        tag = getattr(value, "type", None)
    return tag if isinstance(tag, str) and tag in KNOWN_EVENT_TYPES else "other"


ActivityEvent = Annotated[
    Union[
        Annotated[PushEvent, Tag("PushEvent")],
        Annotated[IssuesEvent, Tag("IssuesEvent")],
        Annotated[PullRequestEvent, Tag("PullRequestEvent")],
        Annotated[WatchEvent, Tag("WatchEvent")],
        Annotated[ForkEvent, Tag("ForkEvent")],
        Annotated[CreateEvent, Tag("CreateEvent")],
        Annotated[UnknownEvent, Tag("other")],
    ],
    Discriminator(_event_tag),
]

_event_list_adapter = TypeAdapter(list[ActivityEvent])


def parse_events(raw: Any) -> list[ActivityEvent]:
    """
    Validate a decoded JSON array into typed events, preserving order.

    Raises:
        ResponseParseError: If ``raw`` is not a list of event objects
    """
    if not isinstance(raw, list):
        raise ResponseParseError(
            f"Unexpected response: expected a JSON array, got {type(raw).__name__}"
        )
    try:
        return _event_list_adapter.validate_python(raw)
    except ValidationError as e:
        raise ResponseParseError(
            f"Error parsing response JSON: {e.error_count()} invalid event record(s)"
        ) from e
