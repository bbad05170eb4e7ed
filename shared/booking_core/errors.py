class AvailabilityError(Exception):
    pass


class InvalidSlotLabel(AvailabilityError, ValueError):
    def __init__(self, label):
        self.label = label
        super().__init__(f"Invalid time slot: {label!r}")


class SlotNoLongerAvailable(AvailabilityError):
    def __init__(self, slot_label: str, booking_date: str):
        self.slot_label = slot_label
        self.booking_date = booking_date
        super().__init__(f"Time slot {slot_label} on {booking_date} is no longer available")


class PriceMismatch(AvailabilityError, ValueError):
    pass
