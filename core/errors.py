"""Error taxonomy for the HUD core.

Sensor and service failures are converted into literal fallback values at
each call site; only programming errors (such as a second writer claiming an
owned slot) are allowed to propagate.
"""


class HudError(Exception):
    """Base exception for HUD core errors."""


class SensorDenied(HudError):
    """The user refused access to a device capability (e.g. geolocation)."""


class SensorUnavailable(HudError):
    """A device capability is missing, disabled or unreachable."""


class ServiceError(HudError):
    """The Answer Engine call failed or returned unusable data."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(HudError):
    """The Answer Engine succeeded but its text is not in the expected shape."""

    def __init__(self, message: str, text: str = "") -> None:
        super().__init__(message)
        self.text = text


class SlotOwnershipError(HudError):
    """A component tried to write a state slot owned by another component."""
