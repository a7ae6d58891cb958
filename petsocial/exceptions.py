import math
from typing import Any


class PetSocialError(Exception):
    """Base class for application errors. ``context`` is returned as error details."""

    def __init__(self, message: str = "An unexpected error occurred", context: dict[str, Any] | None = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidArgument(PetSocialError, ValueError):
    """Malformed input to a library call, e.g. an out-of-range coordinate. Maps to 400."""

    def __init__(self, message: str = "Invalid argument", field: str | None = None, value: Any = None):
        ctx: dict[str, Any] = {}
        if field:
            ctx["field"] = field
            # nan and inf are not valid JSON
            ctx["value"] = str(value) if isinstance(value, float) and not math.isfinite(value) else value
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(PetSocialError):
    """Maps to 404."""

    def __init__(self, resource: str = "resource", resource_id: str | None = None):
        message = f"{resource} not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' not found"
        ctx = {"resource": resource}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
