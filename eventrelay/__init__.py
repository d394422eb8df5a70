"""eventrelay: in-process pub/sub fan-out from event emitters to sinks.

Sources (any object with ``on``/``remove_listener``) are connected to an
``EventDispatcher`` together with their handlers; the handlers are live
only while the dispatcher runs.  Sinks (windows, consumers, files) are
attached and receive every ``broadcast()`` until they are detached or
signal ``"closed"``.
"""

__version__ = "0.1.0"
__description__ = "In-process pub/sub fan-out from event emitters to sinks"

from eventrelay.core.dispatcher import BroadcastError, EventDispatcher, InvalidStateError
from eventrelay.emitter import Emitter, EventEmitter
from eventrelay.sinks import Sink

__all__ = [
    "BroadcastError",
    "Emitter",
    "EventDispatcher",
    "EventEmitter",
    "InvalidStateError",
    "Sink",
    "__version__",
]
