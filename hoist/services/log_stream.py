"""
Live Log Streams

Event source over a held-open HTTP response and the cancellable
subscription used to follow it.
"""

import json
from typing import Any, Callable, Dict, List, Optional

import requests

from hoist.exceptions import RetrievalError, StreamClosedError
from hoist.models.logs import LogEntry, Scope

Handler = Callable[..., Any]


class LogStream:
    """
    Push-based source of LogEntry events.

    Events:
    - ``log``: one LogEntry per record, in arrival order
    - ``error``: RetrievalError for transport, decode or log handler failures
    - ``end``: the remote side closed the stream

    A stream is consumed once. After it ends it cannot be pumped again.
    """

    EVENTS = ("log", "error", "end")

    def __init__(
        self,
        scope: Scope,
        opener: Callable[[], requests.Response],
        default_app: Optional[str] = None,
    ):
        self.scope = scope
        self.default_app = default_app
        self._opener = opener
        self._handlers: Dict[str, List[Handler]] = {event: [] for event in self.EVENTS}
        self._response: Optional[requests.Response] = None
        self._pumping = False
        self.closed = False
        self.ended = False

    def on(self, event: str, handler: Handler) -> Handler:
        """Register a handler for an event."""
        self._check_event(event)
        self._handlers[event].append(handler)
        return handler

    def off(self, event: str, handler: Handler) -> None:
        """Remove a handler (no-op if it is not registered)."""
        self._check_event(event)
        if handler in self._handlers[event]:
            self._handlers[event].remove(handler)

    def emit(self, event: str, *args: Any) -> None:
        """
        Call every handler registered for ``event``.

        An ``error`` with no handlers is raised instead of dropped.
        """
        self._check_event(event)
        handlers = list(self._handlers[event])

        if event == "error" and not handlers:
            raise args[0]

        for handler in handlers:
            handler(*args)

    def pump(self) -> None:
        """
        Open the stream and emit events until it ends or is closed.

        Blocks the calling thread while waiting for records.

        Raises:
            StreamClosedError: If the stream has already ended
        """
        if self.ended:
            raise StreamClosedError(str(self.scope))

        self._pumping = True
        try:
            self._response = self._opener()
            for line in self._response.iter_lines(decode_unicode=True):
                if self.closed:
                    break
                if not line:
                    continue
                entry = self._decode(line)
                if entry is not None:
                    self._deliver(entry)
        except RetrievalError as e:
            self.emit("error", e)
        except requests.RequestException as e:
            self.emit(
                "error",
                RetrievalError(f"Log stream for '{self.scope}' failed", context=str(e)),
            )
        finally:
            self._pumping = False
            self.ended = True
            self._close_response()

        self.emit("end")

    def close(self) -> None:
        """Stop reading. Safe to call from a ``log`` handler."""
        self.closed = True
        if not self._pumping:
            self._close_response()

    def _deliver(self, entry: LogEntry) -> None:
        # A failing log handler does not end the stream
        try:
            self.emit("log", entry)
        except Exception as e:
            self.emit(
                "error",
                RetrievalError(
                    f"Could not handle record from log stream for '{self.scope}'",
                    context=f"{type(e).__name__}: {e}",
                ),
            )

    def _decode(self, line: Any) -> Optional[LogEntry]:
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")

        try:
            data = json.loads(line)
        except ValueError as e:
            self.emit(
                "error",
                RetrievalError(
                    f"Malformed record in log stream for '{self.scope}'",
                    context=str(e),
                ),
            )
            return None

        if not isinstance(data, dict):
            self.emit(
                "error",
                RetrievalError(
                    f"Unexpected record in log stream for '{self.scope}'",
                    context=repr(data)[:200],
                ),
            )
            return None

        return LogEntry.from_dict(data, default_app=self.default_app)

    def _close_response(self) -> None:
        if self._response is not None:
            self._response.close()
            self._response = None

    def _check_event(self, event: str) -> None:
        if event not in self.EVENTS:
            raise ValueError(f"Unknown log stream event: {event}")


class LogSubscription:
    """
    Handle for a followed log stream.

    ``stop()`` unsubscribes deterministically and closes the stream.
    """

    def __init__(self, stream: LogStream, handler: Handler):
        self.stream = stream
        self.handler = handler
        self._stopped = False

    @property
    def active(self) -> bool:
        return not self._stopped and not self.stream.ended

    def run(self) -> None:
        """
        Follow the stream until it ends or the subscription is stopped.

        KeyboardInterrupt stops the subscription and is re-raised.
        """
        if self._stopped:
            return

        try:
            self.stream.pump()
        except KeyboardInterrupt:
            self.stop()
            raise

    def stop(self) -> None:
        if self._stopped:
            return
        self._stopped = True
        self.stream.off("log", self.handler)
        self.stream.close()


def consume_stream(stream: LogStream, formatter) -> LogSubscription:
    """
    Render every entry of ``stream`` as it arrives.

    Each event is rendered on its own, ungrouped and labelled with the
    entry's app.

    Args:
        stream: Live log stream
        formatter: LogFormatter used for output

    Returns:
        LogSubscription controlling the stream
    """

    def handle_log(entry: LogEntry) -> None:
        formatter.render(entry, entry.app)

    stream.on("log", handle_log)
    return LogSubscription(stream, handle_log)
