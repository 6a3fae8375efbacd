"""Data models for the commit message generation pipeline.

Contains:
- ChatMessage: One entry of the outbound request
- StreamEventChunk: One decoded event-stream chunk
- TokenUsage / UsageAccumulator: Token accounting
- CommitType / StructuredCommitEntry: The model-emitted commit payload
- LLMResult: The pipeline's output
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gitbuddy.config import UsageMode

logger = logging.getLogger(__name__)


class Role(str, Enum):
    """Author of a chat message."""

    SYSTEM = "system"
    USER = "user"


class ChatMessage(BaseModel):
    """A single message of the outbound chat request."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role=Role.USER, content=content)


class TokenUsage(BaseModel):
    """Token counts reported by the endpoint.

    Missing or null fields count as zero.
    """

    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    total_tokens: int = Field(default=0, ge=0)

    @field_validator("prompt_tokens", "completion_tokens", "total_tokens", mode="before")
    @classmethod
    def none_is_zero(cls, v):
        """Treat null counts as a zero contribution."""
        if v is None:
            return 0
        return v


class ChoiceDelta(BaseModel):
    """Incremental message fragment of a streamed choice."""

    role: Optional[str] = None
    content: str = ""

    @field_validator("content", mode="before")
    @classmethod
    def none_is_empty(cls, v):
        """Role-only and final chunks carry a null content."""
        if v is None:
            return ""
        return v


class StreamChoice(BaseModel):
    """One choice inside a stream chunk."""

    index: int = 0
    delta: ChoiceDelta = Field(default_factory=ChoiceDelta)
    finish_reason: Optional[str] = None

    @property
    def delta_content(self) -> str:
        return self.delta.content


class StreamEventChunk(BaseModel):
    """A decoded `data:` payload of the chat completion event stream.

    Only `choices` and `usage` are consumed; the identifying fields are kept
    for debugging and vary between vendors, so all of them are optional.
    """

    id: Optional[str] = None
    model: Optional[str] = None
    object: Optional[str] = None
    created: Optional[int] = None
    choices: list[StreamChoice] = []
    usage: Optional[TokenUsage] = None

    @field_validator("choices", mode="before")
    @classmethod
    def ensure_choices_list(cls, v):
        """Ensure choices is a list."""
        if v is None:
            return []
        return v


@dataclass
class UsageAccumulator:
    """Running token totals for one streamed request.

    Starts at zero and only grows. With UsageMode.INCREMENTAL every usage
    record is added field by field; with UsageMode.CUMULATIVE each record
    is a running snapshot and the totals keep the largest value seen.
    """

    mode: UsageMode = UsageMode.INCREMENTAL
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def fold(self, usage: Optional[TokenUsage]) -> None:
        """Fold one chunk's usage record into the totals."""
        if usage is None:
            return
        if self.mode is UsageMode.CUMULATIVE:
            self.prompt_tokens = max(self.prompt_tokens, usage.prompt_tokens)
            self.completion_tokens = max(self.completion_tokens, usage.completion_tokens)
            self.total_tokens = max(self.total_tokens, usage.total_tokens)
        else:
            self.prompt_tokens += usage.prompt_tokens
            self.completion_tokens += usage.completion_tokens
            self.total_tokens += usage.total_tokens

    def snapshot(self) -> TokenUsage:
        """Copy the current totals into an immutable TokenUsage."""
        return TokenUsage(
            prompt_tokens=self.prompt_tokens,
            completion_tokens=self.completion_tokens,
            total_tokens=self.total_tokens,
        )


class CommitType(str, Enum):
    """Conventional Commits type tags."""

    FEAT = "feat"
    FIX = "fix"
    DOCS = "docs"
    STYLE = "style"
    REFACTOR = "refactor"
    TEST = "test"
    CHORE = "chore"
    CI = "ci"
    REVERT = "revert"
    BUILD = "build"
    PERF = "perf"


# Unrecognized types are mapped here instead of failing the whole batch
FALLBACK_COMMIT_TYPE = CommitType.CHORE


class StructuredCommitEntry(BaseModel):
    """One commit message as emitted by the model.

    Attributes:
        type: Conventional commit type (feat, fix, docs, etc.).
        scope: Affected component (auth, api, ...), optional.
        subject: Short imperative summary.
        body: Detailed description, optional.
        footer: Footer text such as BREAKING CHANGE notes, optional.
    """

    model_config = ConfigDict(frozen=True)

    type: CommitType
    scope: Optional[str] = None
    subject: str
    body: Optional[str] = None
    footer: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        """Lowercase the type and down-map unknown values to the fallback type."""
        if not isinstance(v, str):
            return v
        normalized = v.strip().lower()
        if normalized in CommitType._value2member_map_:
            return normalized
        logger.warning(
            "Unknown commit type %r, using %r", v, FALLBACK_COMMIT_TYPE.value
        )
        return FALLBACK_COMMIT_TYPE.value

    @field_validator("body", "footer", mode="before")
    @classmethod
    def join_line_lists(cls, v):
        """Accept a list of lines where a single text block is expected."""
        if isinstance(v, list):
            return "\n".join(str(item) for item in v if item is not None)
        return v

    def get_scope(self) -> Optional[str]:
        """Get the scope if provided and not blank."""
        if self.scope and self.scope.strip():
            return self.scope.strip()
        return None

    def get_body(self) -> Optional[str]:
        """Get the body if provided and not blank."""
        if self.body and self.body.strip():
            return self.body.strip()
        return None

    def get_footer(self) -> Optional[str]:
        """Get the footer if provided and not blank."""
        if self.footer and self.footer.strip():
            return self.footer.strip()
        return None


@dataclass(frozen=True)
class LLMResult:
    """Result of a generation call: ready-to-use messages plus token usage.

    Attributes:
        commit_message: The first candidate, or "" when the model returned none.
        commit_messages: All formatted candidates in model order.
        usage: Token totals for the request.
    """

    commit_message: str
    commit_messages: list[str] = field(default_factory=list)
    usage: TokenUsage = field(default_factory=TokenUsage)
