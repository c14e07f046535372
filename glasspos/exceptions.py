"""
Error taxonomy for the pricing core and its providers.

Every error carries the context needed to render an actionable message
(field name, operation code, thickness). The core raises them synchronously;
the HTTP layer in main.py maps them to status codes.
"""


class GlassPOSError(Exception):
    """Base exception for all GlassPOS errors."""

    def __init__(self, message: str, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict:
        """Serializable form for API responses."""
        return {"error": type(self).__name__, "message": self.message, **self.context}


# --- Caller input errors ---

class PricingError(GlassPOSError, ValueError):
    """Raised when a calculation request cannot be priced."""


class InvalidDimensions(PricingError):
    """A dimension (or other numeric line input) is missing, non-numeric or out of range."""

    def __init__(self, field: str, value=None, reason: str = "must be greater than zero"):
        super().__init__(f"Invalid {field}: {value!r} {reason}", field=field, value=_jsonable(value))
        self.field = field
        self.value = value


class MissingDiameter(InvalidDimensions):
    """Circular cut requested without a positive diameter."""

    def __init__(self, value=None):
        super().__init__("diameter", value, reason="is required for a circular cut")


class UnknownOperation(PricingError):
    """Operation code (or operation family) is not registered."""

    def __init__(self, code, kind: str = "operation"):
        super().__init__(f"Unknown {kind} code: {code!r}", code=str(code), kind=kind)
        self.code = code


class RateNotFound(PricingError):
    """No thickness tier covers the requested thickness."""

    def __init__(self, family, thickness_mm):
        family = getattr(family, "value", family)
        super().__init__(
            f"No {family} rate configured for thickness {thickness_mm} mm",
            family=family,
            thickness_mm=_jsonable(thickness_mm),
        )
        self.family = family
        self.thickness_mm = thickness_mm


class ManualInputRequired(PricingError):
    """Manual operation priced without operator-supplied meterage or price."""

    def __init__(self, code):
        code = getattr(code, "value", code)
        super().__init__(
            f"Operation {code} is manual: supply manual meters or a manual price",
            code=code,
        )
        self.code = code


# --- Configuration errors ---

class ConfigurationError(GlassPOSError):
    """Base for invalid persisted configuration."""


class InvalidTierConfiguration(ConfigurationError):
    """Thickness tiers overlap, are inverted, or are otherwise malformed."""

    def __init__(self, family, detail: str):
        family = getattr(family, "value", family)
        super().__init__(f"Invalid {family} tiers: {detail}", family=family, detail=detail)
        self.family = family
        self.detail = detail


# --- Catalog errors ---

class CatalogError(GlassPOSError):
    """Base for glass-catalog lookups."""


class GlassTypeNotFound(CatalogError):
    def __init__(self, glass_type_id):
        super().__init__(
            f"Glass type {glass_type_id} not found or inactive",
            glass_type_id=glass_type_id,
        )
        self.glass_type_id = glass_type_id


def _jsonable(value):
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
