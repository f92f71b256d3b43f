class AutomationError(Exception):
    """Base automation config error with machine-readable code."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        super().__init__(message)


class MissingParameterError(AutomationError):
    def __init__(self, field: str, action: str) -> None:
        self.field = field
        self.action = action
        super().__init__("MISSING_PARAMETER", f"{field} is required for {action} action")


class NotFoundError(AutomationError):
    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__("NOT_FOUND", f"Failed to find automation: {reference}")


class UnresolvableReferenceError(AutomationError):
    """Entity exists but carries no config id, i.e. it was defined in YAML."""

    def __init__(self, reference: str) -> None:
        self.reference = reference
        super().__init__(
            "UNRESOLVABLE_REFERENCE",
            f"Automation {reference} does not have a config ID (may be defined in YAML, not UI)",
        )


class UpstreamError(AutomationError):
    def __init__(self, operation: str, status_code: int, reason: str) -> None:
        self.operation = operation
        self.status_code = status_code
        self.reason = reason
        super().__init__("UPSTREAM_ERROR", f"Failed to {operation}: {reason}")


class UnknownActionError(AutomationError):
    def __init__(self, action: str) -> None:
        self.action = action
        super().__init__("UNKNOWN_ACTION", f"Unknown action: {action}")
