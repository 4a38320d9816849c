"""Pure domain layer: DTOs, clock, and statement/VAT/year-end calculations."""

from bookkeeping_kernel.domain.clock import Clock, DeterministicClock, SystemClock

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
]
