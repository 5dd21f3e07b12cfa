"""Wizard error taxonomy."""


class WizardError(Exception):
    """Base class for errors raised by the wizard and the canvas."""
    pass


class ValidationError(WizardError):
    """Bad or missing input. Rejected before any state changes."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"{field}: {message}")


class NotFoundError(WizardError):
    """Reference to a template or layer that does not exist."""

    def __init__(self, kind: str, ref: str):
        self.kind = kind
        self.ref = ref
        super().__init__(f"Unknown {kind}: {ref}")


class GatewayError(WizardError):
    """AI call failed or returned content we could not parse."""
    pass
