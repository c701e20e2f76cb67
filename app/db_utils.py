"""
Serialization of auction operations.

The auction has a single operator, but a browser double-click or two open
tabs can still send overlapping requests. Each operation reads the full
snapshot, validates, computes and persists it; these locks make sure that
sequence runs one at a time within the process.

The locks are process-local. Run a single worker process per auction.
"""

import threading
from typing import Any

# Application-level locks for critical sections
_auction_lock = threading.RLock()


class AuctionLock:
    """
    Context manager for auction state changes.

    Held from loading the snapshot until the new one is committed. Setup
    changes take it too, since they check whether the auction has started.
    Reentrant, so a locked operation can call the locked bid reads.
    """

    _lock = _auction_lock

    def __enter__(self) -> 'AuctionLock':
        self._lock.acquire()
        return self

    def __exit__(
        self,
        exc_type: type | None,
        exc_val: BaseException | None,
        exc_tb: Any
    ) -> None:
        self._lock.release()
