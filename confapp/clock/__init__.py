"""Demo clock and the vote gate that reads it.

Apps that need "current time" must ask the clock owned by this app instead of
calling ``timezone.now()`` directly, so operators can shift perceived time
during rehearsals.
"""

from .gate import GateDecision
from .gate import evaluate
from .gate import is_open
from .service import ClockState
from .service import VirtualClock
from .service import from_epoch_millis
from .service import get_clock
from .service import to_epoch_millis

__all__ = [
    "ClockState",
    "GateDecision",
    "VirtualClock",
    "evaluate",
    "from_epoch_millis",
    "get_clock",
    "is_open",
    "to_epoch_millis",
]
