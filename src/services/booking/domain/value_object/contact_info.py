from dataclasses import dataclass

from services.shared.domain.exception import ValidationException


@dataclass(frozen=True)
class ContactInfo:
    """予約者の連絡先"""

    name: str
    email: str
    phone: str | None = None

    def __post_init__(self) -> None:
        name = (self.name or "").strip()
        email = (self.email or "").strip().lower()
        if len(name) < 2:
            raise ValidationException("Name must be at least 2 characters", field="guest_name")
        if len(name) > 100:
            raise ValidationException("Name is too long (max 100 characters)", field="guest_name")
        local, _, domain = email.partition("@")
        if not local or "." not in domain:
            raise ValidationException("Valid email required", field="guest_email")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "email", email)
        object.__setattr__(self, "phone", (self.phone or "").strip() or None)
