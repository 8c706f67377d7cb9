#
# src/gotestadapter/events.py
#
"""
Load and run lifecycle events, and the emitter that delivers them to listeners.
"""
from collections.abc import Callable
from enum import Enum
from typing import Generic, TypeAlias, TypeVar

import structlog
from attrs import define, field

from gotestadapter.telemetry import StructLogger
from gotestadapter.tree import SuiteNode

log: StructLogger = structlog.get_logger("events")


class SuiteState(str, Enum):
    RUNNING = "running"
    COMPLETED = "completed"


class TestState(str, Enum):
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    ERRORED = "errored"


# --- Load events ---
@define(frozen=True, slots=True)
class LoadStarted:
    @property
    def type(self) -> str:
        return "started"

    def to_dict(self) -> dict:
        return {"type": self.type}


@define(frozen=True, slots=True)
class LoadFinished:
    """Discovery finished; exactly one of `suite` or `errored` is set."""
    suite: SuiteNode | None = field(default=None)
    errored: str | None = field(default=None)

    @property
    def type(self) -> str:
        return "finished"

    def to_dict(self) -> dict:
        data: dict = {"type": self.type}
        if self.suite is not None:
            data["suite"] = self.suite.to_dict()
        if self.errored is not None:
            data["errorMessage"] = self.errored
        return data


# --- Run events ---
@define(frozen=True, slots=True)
class RunStarted:
    tests: tuple[str, ...] = field(converter=tuple)

    @property
    def type(self) -> str:
        return "started"

    def to_dict(self) -> dict:
        return {"type": self.type, "tests": list(self.tests)}


@define(frozen=True, slots=True)
class RunFinished:
    cancelled: bool = field(default=False)

    @property
    def type(self) -> str:
        return "finished"

    def to_dict(self) -> dict:
        data: dict = {"type": self.type}
        if self.cancelled:
            data["cancelled"] = True
        return data


@define(frozen=True, slots=True)
class SuiteEvent:
    suite: str
    state: SuiteState

    @property
    def type(self) -> str:
        return "suite"

    def to_dict(self) -> dict:
        return {"type": self.type, "suite": self.suite, "state": self.state.value}


@define(frozen=True, slots=True)
class TestEvent:
    __test__ = False

    test: str
    state: TestState
    message: str | None = field(default=None)

    @property
    def type(self) -> str:
        return "test"

    def to_dict(self) -> dict:
        data: dict = {"type": self.type, "test": self.test, "state": self.state.value}
        if self.message:
            data["message"] = self.message
        return data


LoadEvent: TypeAlias = LoadStarted | LoadFinished
RunEvent: TypeAlias = RunStarted | RunFinished | SuiteEvent | TestEvent

E = TypeVar("E")


class EventEmitter(Generic[E]):
    """Synchronous fan-out of events to subscribed listeners."""

    def __init__(self, name: str):
        self.name = name
        self._listeners: list[Callable[[E], None]] = []
        self._disposed = False

    def subscribe(self, listener: Callable[[E], None]) -> Callable[[], None]:
        """Registers `listener`; the returned callable unsubscribes it."""
        if self._disposed:
            raise RuntimeError(f"Event emitter '{self.name}' has been disposed.")
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def fire(self, event: E) -> None:
        if self._disposed:
            log.debug("Dropping event fired on disposed emitter", emitter=self.name, event=event)
            return
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # a broken listener must not stop delivery to the others
                log.exception("Event listener raised", emitter=self.name)

    def dispose(self) -> None:
        self._listeners.clear()
        self._disposed = True

    @property
    def is_disposed(self) -> bool:
        return self._disposed


# 🔼⚙️
