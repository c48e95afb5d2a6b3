from typing import Any, Optional


class OffersError(Exception):
    """
    Base class for errors raised by the offers engine.
    Carries a human readable message so routes can surface it as-is.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownVariantError(OffersError):
    """
    A discriminant field (type / cadence / duration / status / ...) held a
    value outside its documented set and the caller asked for strict decoding.
    """

    def __init__(self, variant: str, value: Any, allowed: Optional[list] = None):
        self.variant = variant
        self.value = value
        self.allowed = allowed or []
        msg = f"Unrecognized {variant}: {value!r}"
        if self.allowed:
            msg += f" (expected one of: {', '.join(self.allowed)})"
        super().__init__(msg)
