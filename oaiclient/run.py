"""Assistant runs and run steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from .pagination import Pagination, encode_query
from .thread import ThreadMessage, ThreadRequest

E = TypeVar("E", bound=Enum)


class RunStatus(str, Enum):
    """The life-cycle state of a run."""

    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    FAILED = "failed"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class RequiredActionType(str, Enum):
    """What a run needs from the caller before it can continue."""

    SUBMIT_TOOL_OUTPUTS = "submit_tool_outputs"


class RunErrorCode(str, Enum):
    """Why a run failed."""

    SERVER_ERROR = "server_error"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"


class TruncationStrategy(str, Enum):
    """How a thread is shortened to fit the model's context."""

    AUTO = "auto"
    LAST_MESSAGES = "last_messages"


class RunStepStatus(str, Enum):
    """The state of one step of a run."""

    IN_PROGRESS = "in_progress"
    CANCELLING = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class RunStepType(str, Enum):
    """What a run step did."""

    MESSAGE_CREATION = "message_creation"
    TOOL_CALLS = "tool_calls"


def _value(item: Any) -> Any:
    return item.value if isinstance(item, Enum) else item


def _enum(cls: type[E], value: Any) -> E | str:
    """Return the enum member for ``value``, or the plain string if unknown."""
    if value is None:
        return ""
    try:
        return cls(value)
    except ValueError:
        return value


def _opt_int(value: Any) -> int | None:
    return int(value) if value is not None else None


def _opt_float(value: Any) -> float | None:
    return float(value) if value is not None else None


@dataclass
class ThreadTruncationStrategy:
    """The truncation strategy of a run; ``last_messages`` goes with LAST_MESSAGES."""

    type: TruncationStrategy | str = ""
    last_messages: int | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.type:
            out["type"] = _value(self.type)
        if self.last_messages is not None:
            out["last_messages"] = self.last_messages
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ThreadTruncationStrategy:
        return cls(
            type=_enum(TruncationStrategy, data.get("type")),
            last_messages=_opt_int(data.get("last_messages")),
        )


@dataclass
class RunLastError:
    """The last error a run or step ran into."""

    code: RunErrorCode | str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunLastError:
        return cls(
            code=_enum(RunErrorCode, data.get("code")),
            message=data.get("message") or "",
        )


@dataclass
class RunRequiredAction:
    """An action the caller must take; ``tool_calls`` are the calls to answer."""

    type: RequiredActionType | str = ""
    tool_calls: list[dict[str, Any]] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunRequiredAction:
        submit = data.get("submit_tool_outputs")
        return cls(
            type=_enum(RequiredActionType, data.get("type")),
            tool_calls=(
                list(submit.get("tool_calls") or []) if submit is not None else None
            ),
        )


@dataclass
class Run:
    """A run of an assistant on a thread."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    thread_id: str = ""
    assistant_id: str = ""
    status: RunStatus | str = ""
    required_action: RunRequiredAction | None = None
    last_error: RunLastError | None = None
    expires_at: int = 0
    started_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    model: str = ""
    instructions: str = ""
    tools: list[dict[str, Any]] = field(default_factory=list)
    file_ids: list[str] = field(default_factory=list)
    metadata: dict[str, Any] | None = None
    usage: dict[str, Any] = field(default_factory=dict)
    temperature: float | None = None
    max_prompt_tokens: int = 0
    max_completion_tokens: int = 0
    truncation_strategy: ThreadTruncationStrategy | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Run:
        required = data.get("required_action")
        last_error = data.get("last_error")
        truncation = data.get("truncation_strategy")
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            thread_id=data.get("thread_id") or "",
            assistant_id=data.get("assistant_id") or "",
            status=_enum(RunStatus, data.get("status")),
            required_action=(
                RunRequiredAction.from_dict(required) if required else None
            ),
            last_error=RunLastError.from_dict(last_error) if last_error else None,
            expires_at=int(data.get("expires_at") or 0),
            started_at=_opt_int(data.get("started_at")),
            cancelled_at=_opt_int(data.get("cancelled_at")),
            failed_at=_opt_int(data.get("failed_at")),
            completed_at=_opt_int(data.get("completed_at")),
            model=data.get("model") or "",
            instructions=data.get("instructions") or "",
            tools=list(data.get("tools") or []),
            file_ids=list(data.get("file_ids") or []),
            metadata=data.get("metadata"),
            usage=dict(data.get("usage") or {}),
            temperature=_opt_float(data.get("temperature")),
            max_prompt_tokens=int(data.get("max_prompt_tokens") or 0),
            max_completion_tokens=int(data.get("max_completion_tokens") or 0),
            truncation_strategy=(
                ThreadTruncationStrategy.from_dict(truncation) if truncation else None
            ),
        )


@dataclass
class RunList:
    """A page of runs."""

    runs: list[Run] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunList:
        return cls(runs=[Run.from_dict(r) for r in data.get("data") or []])


@dataclass
class RunRequest:
    """The parameters of a new run.

    ``tool_choice``, ``response_format`` and ``parallel_tool_calls`` are sent
    as given whenever they are not None.
    """

    assistant_id: str
    model: str = ""
    instructions: str = ""
    additional_instructions: str = ""
    additional_messages: list[ThreadMessage] = field(default_factory=list)
    tools: list[dict[str, Any]] = field(default_factory=list)
    metadata: dict[str, Any] | None = None
    temperature: float | None = None
    top_p: float | None = None
    max_prompt_tokens: int = 0
    max_completion_tokens: int = 0
    truncation_strategy: ThreadTruncationStrategy | None = None
    tool_choice: Any = None
    response_format: Any = None
    parallel_tool_calls: Any = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"assistant_id": self.assistant_id}
        for name in ("model", "instructions", "additional_instructions"):
            value = getattr(self, name)
            if value:
                out[name] = value
        if self.additional_messages:
            out["additional_messages"] = [m.to_dict() for m in self.additional_messages]
        if self.tools:
            out["tools"] = list(self.tools)
        if self.metadata:
            out["metadata"] = dict(self.metadata)
        if self.temperature is not None:
            out["temperature"] = self.temperature
        if self.top_p is not None:
            out["top_p"] = self.top_p
        if self.max_prompt_tokens:
            out["max_prompt_tokens"] = self.max_prompt_tokens
        if self.max_completion_tokens:
            out["max_completion_tokens"] = self.max_completion_tokens
        if self.truncation_strategy is not None:
            out["truncation_strategy"] = self.truncation_strategy.to_dict()
        for name in ("tool_choice", "response_format", "parallel_tool_calls"):
            value = getattr(self, name)
            if value is not None:
                out[name] = value
        return out


@dataclass
class RunModifyRequest:
    """New metadata for a run."""

    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"metadata": dict(self.metadata)} if self.metadata else {}


@dataclass
class ToolOutput:
    """The result of one tool call."""

    tool_call_id: str
    output: Any


@dataclass
class SubmitToolOutputsRequest:
    """The results of the tool calls a run asked for."""

    tool_outputs: list[ToolOutput] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tool_outputs": [
                {"tool_call_id": o.tool_call_id, "output": o.output}
                for o in self.tool_outputs
            ]
        }


@dataclass
class CreateThreadAndRunRequest(RunRequest):
    """A run together with the thread to create for it."""

    thread: ThreadRequest = field(default_factory=ThreadRequest)

    def to_dict(self) -> dict[str, Any]:
        return super().to_dict() | {"thread": self.thread.to_dict()}


@dataclass
class StepDetails:
    """What a step did: created a message or made tool calls."""

    type: RunStepType | str = ""
    message_id: str | None = None
    tool_calls: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StepDetails:
        creation = data.get("message_creation")
        return cls(
            type=_enum(RunStepType, data.get("type")),
            message_id=(creation.get("message_id") or "") if creation else None,
            tool_calls=list(data.get("tool_calls") or []),
        )


@dataclass
class RunStep:
    """One step of a run."""

    id: str = ""
    object: str = ""
    created_at: int = 0
    assistant_id: str = ""
    thread_id: str = ""
    run_id: str = ""
    type: RunStepType | str = ""
    status: RunStepStatus | str = ""
    step_details: StepDetails = field(default_factory=StepDetails)
    last_error: RunLastError | None = None
    expired_at: int | None = None
    cancelled_at: int | None = None
    failed_at: int | None = None
    completed_at: int | None = None
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunStep:
        last_error = data.get("last_error")
        return cls(
            id=data.get("id") or "",
            object=data.get("object") or "",
            created_at=int(data.get("created_at") or 0),
            assistant_id=data.get("assistant_id") or "",
            thread_id=data.get("thread_id") or "",
            run_id=data.get("run_id") or "",
            type=_enum(RunStepType, data.get("type")),
            status=_enum(RunStepStatus, data.get("status")),
            step_details=StepDetails.from_dict(data.get("step_details") or {}),
            last_error=RunLastError.from_dict(last_error) if last_error else None,
            expired_at=_opt_int(data.get("expired_at")),
            cancelled_at=_opt_int(data.get("cancelled_at")),
            failed_at=_opt_int(data.get("failed_at")),
            completed_at=_opt_int(data.get("completed_at")),
            metadata=data.get("metadata"),
        )


@dataclass
class RunStepList:
    """A page of run steps."""

    run_steps: list[RunStep] = field(default_factory=list)
    first_id: str = ""
    last_id: str = ""
    has_more: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RunStepList:
        return cls(
            run_steps=[RunStep.from_dict(s) for s in data.get("data") or []],
            first_id=data.get("first_id") or "",
            last_id=data.get("last_id") or "",
            has_more=bool(data.get("has_more", False)),
        )


class Runs:
    """Run calls made through a transport."""

    def __init__(self, transport: Any) -> None:
        self._transport = transport

    def _call(self, method: str, path: str, body: Any = None) -> dict[str, Any]:
        return self._transport.request(method, path, body, True) or {}

    def create(self, thread_id: str, request: RunRequest) -> Run:
        """Start a run on a thread."""
        return Run.from_dict(
            self._call("POST", f"/threads/{thread_id}/runs", request.to_dict())
        )

    def retrieve(self, thread_id: str, run_id: str) -> Run:
        """Fetch a run."""
        return Run.from_dict(self._call("GET", f"/threads/{thread_id}/runs/{run_id}"))

    def modify(self, thread_id: str, run_id: str, request: RunModifyRequest) -> Run:
        """Change a run's metadata."""
        return Run.from_dict(
            self._call(
                "POST", f"/threads/{thread_id}/runs/{run_id}", request.to_dict()
            )
        )

    def list(self, thread_id: str, pagination: Pagination | None = None) -> RunList:
        """Fetch the runs of a thread."""
        query = encode_query((pagination or Pagination()).query_params())
        return RunList.from_dict(self._call("GET", f"/threads/{thread_id}/runs{query}"))

    def submit_tool_outputs(
        self, thread_id: str, run_id: str, request: SubmitToolOutputsRequest
    ) -> Run:
        """Send the results of the tool calls a run is waiting for."""
        path = f"/threads/{thread_id}/runs/{run_id}/submit_tool_outputs"
        return Run.from_dict(self._call("POST", path, request.to_dict()))

    def cancel(self, thread_id: str, run_id: str) -> Run:
        """Cancel a run in progress."""
        return Run.from_dict(
            self._call("POST", f"/threads/{thread_id}/runs/{run_id}/cancel")
        )

    def create_thread_and_run(self, request: CreateThreadAndRunRequest) -> Run:
        """Create a thread and start a run on it in one call."""
        return Run.from_dict(self._call("POST", "/threads/runs", request.to_dict()))

    def retrieve_step(self, thread_id: str, run_id: str, step_id: str) -> RunStep:
        """Fetch one step of a run."""
        path = f"/threads/{thread_id}/runs/{run_id}/steps/{step_id}"
        return RunStep.from_dict(self._call("GET", path))

    def list_steps(
        self, thread_id: str, run_id: str, pagination: Pagination | None = None
    ) -> RunStepList:
        """Fetch the steps of a run."""
        query = encode_query((pagination or Pagination()).query_params())
        path = f"/threads/{thread_id}/runs/{run_id}/steps{query}"
        return RunStepList.from_dict(self._call("GET", path))