"""User-facing text for store failures."""

from rentals.exceptions import StoreError

_STORE_ERROR_MESSAGES = {
    "permission-denied": "Permission denied. Please check the application store access rules.",
    "unavailable": "The application store is unavailable. Please try again later.",
    "not-found": "The application store was not found. Please check configuration.",
}


def describe_store_error(exc: StoreError, action: str = "submit") -> str:
    """Map a store failure to the message shown to the user.

    Known error codes get a fixed message; anything else falls back to
    ``"Failed to <action>: <detail>"``.
    """
    message = _STORE_ERROR_MESSAGES.get(exc.code)
    if message is not None:
        return message
    return f"Failed to {action}: {exc}"
