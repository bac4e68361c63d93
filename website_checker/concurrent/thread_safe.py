"""
Thread-safe primitives for the concurrent website checker.
"""

import queue
import threading
from typing import Any, Iterator, Optional

from website_checker.utils.errors import ChannelClosedError


class _Closed:
    """Marker queued behind the last item when a channel closes."""

    def __repr__(self) -> str:
        return "<closed>"


_CLOSED = _Closed()


class Channel:
    """
    Unbounded multi-producer, multi-consumer queue that can be closed.

    Closing stops further sends. Items already buffered are still delivered;
    once the buffer is drained every receiver gets ChannelClosedError, which
    is how consumers learn that nothing more will arrive.

    Producers may register with attach_sender(); when the last registered
    producer calls detach_sender() the channel closes itself.
    """

    def __init__(self, name: str = "channel"):
        """
        Initialize channel.

        Args:
            name: Name used in error messages and stats
        """
        self.name = name
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self._senders = 0
        self._sent = 0
        self._received = 0

    def _closed_error(self) -> ChannelClosedError:
        return ChannelClosedError(f"{self.name} is closed", {"channel": self.name})

    def send(self, item: Any) -> None:
        """
        Put an item into the channel.

        Raises:
            ChannelClosedError: If the channel is closed
        """
        with self._lock:
            if self._closed:
                raise self._closed_error()
            # under the lock so the close marker always lands behind it
            self._queue.put_nowait(item)
            self._sent += 1

    def recv(self, timeout: Optional[float] = None) -> Any:
        """
        Take the next item, blocking until one is available.

        Args:
            timeout: Optional timeout in seconds

        Returns:
            The oldest buffered item

        Raises:
            ChannelClosedError: If the channel is closed and drained
            queue.Empty: If the timeout expires first
        """
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            # put the marker back for the next receiver
            self._queue.put_nowait(_CLOSED)
            raise self._closed_error()

        with self._lock:
            self._received += 1
        return item

    def close(self) -> None:
        """Close the channel and wake every blocked receiver. Idempotent."""
        with self._lock:
            self._close_locked()

    def _close_locked(self) -> None:
        if not self._closed:
            self._closed = True
            self._queue.put_nowait(_CLOSED)

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def clear(self) -> int:
        """
        Discard every buffered item without closing the channel.

        Returns:
            Number of items removed
        """
        removed_count = 0
        closed_seen = False
        try:
            while True:
                item = self._queue.get_nowait()
                if item is _CLOSED:
                    closed_seen = True
                else:
                    removed_count += 1
        except queue.Empty:
            pass

        if closed_seen:
            self._queue.put_nowait(_CLOSED)

        with self._lock:
            self._received += removed_count
        return removed_count

    def attach_sender(self) -> int:
        """
        Register a producer.

        Returns:
            Number of registered producers

        Raises:
            ChannelClosedError: If the channel is already closed
        """
        with self._lock:
            if self._closed:
                raise self._closed_error()
            self._senders += 1
            return self._senders

    def detach_sender(self) -> int:
        """
        Unregister a producer, closing the channel when none remain.

        Returns:
            Number of producers still registered
        """
        with self._lock:
            if self._senders > 0:
                self._senders -= 1
            if self._senders == 0:
                self._close_locked()
            return self._senders

    def qsize(self) -> int:
        """Number of buffered items."""
        with self._lock:
            return self._sent - self._received

    def get_stats(self) -> dict:
        """
        Get channel statistics.

        Returns:
            Dictionary with channel statistics
        """
        with self._lock:
            return {
                "name": self.name,
                "closed": self._closed,
                "senders": self._senders,
                "sent_count": self._sent,
                "received_count": self._received,
                "pending_items": self._sent - self._received
            }

    def __iter__(self) -> Iterator[Any]:
        """Yield items until the channel is closed and drained."""
        while True:
            try:
                yield self.recv()
            except ChannelClosedError:
                return
