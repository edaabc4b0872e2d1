"""UDP transport for station messages: a sender and a pausable receiver."""

from __future__ import annotations

import logging
import select
import socket
import threading
from enum import Enum
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)

# Remote endpoint that feedback messages go to.
DEFAULT_REMOTE_ADDRESS = "192.168.88.128"
DEFAULT_REMOTE_PORT = 60000

# Local endpoint the receiver listens on (any interface).
DEFAULT_LOCAL_HOST = "0.0.0.0"
DEFAULT_LOCAL_PORT = 60001

_MAX_DATAGRAM = 65535


class RunState(Enum):
    """Run state of a worker that can be paused, resumed and stopped."""

    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


class _Packable(Protocol):
    def pack(self) -> bytes: ...


class NetSender:
    """Sends packed messages as UDP datagrams to a fixed remote endpoint."""

    def __init__(self, address: str = DEFAULT_REMOTE_ADDRESS, port: int = DEFAULT_REMOTE_PORT) -> None:
        self.address = address
        self.port = port
        self._socket: Optional[socket.socket] = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def send(self, message: _Packable) -> int:
        """Send one message and return the number of bytes written."""
        if self._socket is None:
            raise RuntimeError("sender is closed")
        return self._socket.sendto(message.pack(), (self.address, self.port))

    def close(self) -> None:
        """Close the socket; further sends raise RuntimeError."""
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def __enter__(self) -> NetSender:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class NetReceiver:
    """Receives UDP datagrams; starts paused and blocks reading while paused."""

    def __init__(
        self,
        host: str = DEFAULT_LOCAL_HOST,
        port: int = DEFAULT_LOCAL_PORT,
        on_data: Optional[Callable[[bytes], None]] = None,
    ) -> None:
        self.host = host
        self.port = port
        self.on_data = on_data
        self._socket: Optional[socket.socket] = None
        self._cond = threading.Condition()
        self._state = RunState.PAUSED

    @property
    def state(self) -> RunState:
        """The current run state."""
        with self._cond:
            return self._state

    def start(self) -> int:
        """Bind the listening socket and return the bound port."""
        if self.state is RunState.STOPPED:
            raise RuntimeError("receiver is closed")
        if self._socket is None:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            try:
                sock.bind((self.host, self.port))
            except OSError:
                sock.close()
                raise
            sock.setblocking(False)
            self._socket = sock
            logger.debug("listening on port %d", sock.getsockname()[1])
        return self._socket.getsockname()[1]

    def receive_pending(self) -> list[bytes]:
        """Read and parse every datagram waiting on the socket.

        While the receiver is paused this blocks until it is resumed or closed.
        Returns the datagrams that were read.
        """
        sock = self._socket
        if sock is None:
            raise RuntimeError("receiver is not started")
        received: list[bytes] = []
        while self.state is not RunState.STOPPED and self._has_pending(sock):
            with self._cond:
                while self._state is RunState.PAUSED:
                    self._cond.wait()
                if self._state is RunState.STOPPED:
                    break
            try:
                data = sock.recv(_MAX_DATAGRAM)
            except (BlockingIOError, OSError):
                break
            self.parse(data)
            received.append(data)
        return received

    def parse(self, data: bytes) -> str:
        """Handle one datagram: log it as text and pass it to ``on_data``."""
        text = bytes(data).decode("utf-8", errors="replace")
        logger.debug("%s", text)
        if self.on_data is not None:
            self.on_data(bytes(data))
        return text

    def request_pause(self) -> None:
        """Pause reading if it is running."""
        with self._cond:
            if self._state is RunState.RUNNING:
                self._state = RunState.PAUSED

    def request_resume(self) -> None:
        """Resume reading if it is paused."""
        with self._cond:
            if self._state is RunState.PAUSED:
                self._state = RunState.RUNNING
                self._cond.notify_all()

    def close(self) -> None:
        """Stop the receiver, wake any waiting reader and close the socket."""
        with self._cond:
            self._state = RunState.STOPPED
            self._cond.notify_all()
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def __enter__(self) -> NetReceiver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _has_pending(sock: socket.socket) -> bool:
        try:
            readable, _, _ = select.select([sock], [], [], 0)
        except (OSError, ValueError):
            return False
        return bool(readable)