"""AttemptPhase — the states an attempt task moves through."""

import enum


class AttemptPhase(enum.StrEnum):
    """Waiting-for-slot -> Sleeping -> Running -> Done, or Cancelled.

    Cancelled is only entered from WAITING_FOR_SLOT or SLEEPING; an attempt
    cancelled while RUNNING still finishes as Done with its own result.
    """

    WAITING_FOR_SLOT = "waiting_for_slot"
    SLEEPING = "sleeping"
    RUNNING = "running"
    DONE = "done"
    CANCELLED = "cancelled"
