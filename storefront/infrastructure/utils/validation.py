"""Client-side input validation run before any network call."""

import re

from storefront.domain.models.order import ShippingAddress


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize ValidationError.

        Args:
            message: Human-readable error message, suitable for the user.
            field: Optional field name that failed validation.
        """
        self.message = message
        self.field = field
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


REQUIRED_ADDRESS_FIELDS = ("name", "email", "phone", "street", "city", "state", "pincode")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\d{10}$")
PINCODE_PATTERN = re.compile(r"^\d{6}$")


def validate_email(email: str) -> None:
    if not EMAIL_PATTERN.match(email or ""):
        raise ValidationError("Please enter a valid email address", field="email")


def validate_phone(phone: str) -> None:
    if not PHONE_PATTERN.match(phone or ""):
        raise ValidationError("Please enter a valid 10-digit phone number", field="phone")


def validate_pincode(pincode: str) -> None:
    if not PINCODE_PATTERN.match(pincode or ""):
        raise ValidationError("Please enter a valid 6-digit pincode", field="pincode")


def validate_shipping_address(address: ShippingAddress) -> None:
    """Validate a checkout address.

    Checks run in the order the checkout form reports them: required fields
    first, then email, phone, and pincode formats.

    Raises:
        ValidationError: For the first failing field.
    """
    for field in REQUIRED_ADDRESS_FIELDS:
        value = getattr(address, field)
        if not value or not value.strip():
            raise ValidationError(f"Please enter {field}", field=field)

    validate_email(address.email.strip())
    validate_phone(address.phone.strip())
    validate_pincode(address.pincode.strip())


def validate_quantity(quantity: int) -> None:
    if quantity < 1:
        raise ValidationError("Quantity must be at least 1", field="quantity")


def validate_entity_id(entity_id: str, field: str = "id") -> None:
    """Reject ids that would produce a malformed request path."""
    if not entity_id or not entity_id.strip():
        raise ValidationError(f"{field} cannot be empty", field=field)
    if "/" in entity_id or ".." in entity_id:
        raise ValidationError(f"{field} contains invalid characters", field=field)
