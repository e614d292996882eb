from .booking_draft import BookingDraft

__all__ = ["BookingDraft"]
