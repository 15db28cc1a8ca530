"""Domain errors shared by repositories, services and the API layer."""


class ScenarioError(Exception):
    """Base error with a stable, caller-facing message."""

    default_message = "Scenario error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ScenarioError):
    """Malformed required input."""

    default_message = "Validation error"


class NotFoundError(ScenarioError):
    """Resource not found."""

    default_message = "Resource not found"


class StoreUnavailable(ScenarioError):
    """Scenario store could not be reached or failed mid-query."""

    default_message = "Scenario store unavailable"


class QueryTimeout(StoreUnavailable):
    """Query exceeded its request-scoped timeout."""

    default_message = "Scenario store query timed out"


class RefreshPartialFailure(ScenarioError):
    """One or more (locale, stage) snapshot replaces failed."""

    default_message = "Snapshot refresh failed"

    def __init__(self, failures: list[tuple[str, str, str]]):
        self.failures = failures
        detail = ", ".join(f"{locale}/{stage}: {error}" for locale, stage, error in failures)
        super().__init__(f"{len(failures)} snapshot stage(s) failed: {detail}")


class TransactionConflict(StoreUnavailable):
    """Transaction aborted by a concurrent writer; safe to retry."""

    default_message = "Transaction conflict"
