from enum import StrEnum


class ConfigAction(StrEnum):
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    DUPLICATE = "duplicate"


class AutomationMode(StrEnum):
    SINGLE = "single"
    PARALLEL = "parallel"
    QUEUED = "queued"
    RESTART = "restart"
