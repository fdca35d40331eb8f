"""Token sinks for Pincel runs.

- protocol: Emitter protocol (``emit(kind, value)``)
- collector: TokenCollector, records pairs in memory
- debug: DebugEmitter, one readable line per token
"""

from pincel.emitters.collector import TokenCollector
from pincel.emitters.debug import DebugEmitter
from pincel.emitters.protocol import Emitter

__all__ = ["DebugEmitter", "Emitter", "TokenCollector"]
