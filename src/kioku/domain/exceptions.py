"""Exceptions raised by the kioku domain and its adapters."""


class KiokuError(Exception):
    """Base class for all kioku errors."""


class InvalidScheduleStateError(KiokuError, ValueError):
    """A CardScheduleState carries a value outside its documented domain."""

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid schedule state: {field}={value!r} ({reason})")


class InvalidSchedulerConfigError(KiokuError, ValueError):
    """A SchedulerConfig is internally inconsistent."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("Invalid scheduler config: " + "; ".join(problems))


class InvalidOutcomeError(KiokuError, ValueError):
    """A graded quality or swipe direction could not be mapped to an outcome."""


class ScheduleStoreError(KiokuError):
    """The persistence collaborator failed to load or save a schedule state."""
