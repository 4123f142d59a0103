"""
Error taxonomy. Every error is recoverable; intent handlers turn them into
advisory text and a failed IntentResult.
"""

from typing import Optional


class GameError(Exception):
    """Base class for rejected player intents."""

    code = "game_error"

    def __init__(self, message: str, advisory: Optional[str] = None):
        super().__init__(message)
        self.advisory = advisory or message


class InsufficientResource(GameError):
    code = "insufficient_resource"

    def __init__(self, resource: str, required: int, available: int):
        self.resource = resource
        self.required = required
        self.available = available
        super().__init__(
            f"Need {required} {resource}, have {available}",
            f"¡Ay caramba! We're out of {resource}. Ask a classmate for a gift or restock!",
        )


class InsufficientFunds(GameError):
    code = "insufficient_funds"

    def __init__(self, required: int, available: int):
        self.required = required
        self.available = available
        super().__init__(
            f"Need ${required}, have ${available}",
            f"Not enough colones, amigo. You need ${required} but only have ${available}.",
        )


class SlotOccupied(GameError):
    code = "slot_occupied"

    def __init__(self, slot_id: int):
        self.slot_id = slot_id
        super().__init__(f"Slot {slot_id} is occupied", "That spot is already busy with guests!")


class SlotEmpty(GameError):
    code = "slot_empty"

    def __init__(self, slot_id: int):
        self.slot_id = slot_id
        super().__init__(f"Slot {slot_id} is empty", "Nobody is there to check out yet.")


class NotReady(GameError):
    code = "not_ready"

    def __init__(self, slot_id: int, remaining_ms: int):
        self.slot_id = slot_id
        self.remaining_ms = remaining_ms
        super().__init__(
            f"Slot {slot_id} finishes in {remaining_ms} ms",
            "Paciencia! The guests are still enjoying the tour.",
        )


class NoCapacity(GameError):
    code = "no_capacity"

    def __init__(self):
        super().__init__("No empty slot", "¡Qué pena! No more room. We need more capacity!")


class MaxTierReached(GameError):
    code = "max_tier_reached"

    def __init__(self, service_id: str, tier: int):
        self.service_id = service_id
        self.tier = tier
        super().__init__(
            f"{service_id} is already at tier {tier}",
            "That service is already the best in the valley!",
        )


class UnknownService(GameError):
    code = "unknown_service"

    def __init__(self, service_id: str):
        self.service_id = service_id
        super().__init__(f"Unknown service: {service_id}")


class UnknownResource(GameError):
    code = "unknown_resource"

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(
            f"Unknown resource: {resource}",
            f"Nobody in the village sells {resource}, amigo.",
        )


class UnknownSlot(GameError):
    code = "unknown_slot"

    def __init__(self, slot_id: int):
        self.slot_id = slot_id
        super().__init__(f"Unknown slot: {slot_id}")


class UnknownBooking(GameError):
    code = "unknown_booking"

    def __init__(self, booking_id: str):
        self.booking_id = booking_id
        super().__init__(f"Unknown booking: {booking_id}")


class InvalidAmount(GameError):
    code = "invalid_amount"

    def __init__(self, amount):
        self.amount = amount
        super().__init__(f"Amount must be positive, got {amount}")


class OracleError(Exception):
    """Advisory oracle failure. Never rolls back game state."""

    code = "oracle_error"


class OracleUnavailable(OracleError):
    code = "oracle_unavailable"


class OracleMalformed(OracleError):
    code = "oracle_malformed"
