"""Station facade: observable axis state driven by the simulation and network threads."""

from __future__ import annotations

import argparse
import logging
import threading
import time
from typing import Callable, Optional

from rcwssim.net import (
    DEFAULT_LOCAL_HOST,
    DEFAULT_LOCAL_PORT,
    DEFAULT_REMOTE_ADDRESS,
    DEFAULT_REMOTE_PORT,
    NetReceiver,
    NetSender,
)
from rcwssim.simulation import Simulation
from rcwssim.units import angle_rad_to_deg, speed_rads_to_rpm

logger = logging.getLogger(__name__)

GUN_AZI_UPPER_BOUND = 180
"""Upper gun azimuth mount limit in degrees."""

GUN_AZI_LOWER_BOUND = -180
"""Lower gun azimuth mount limit in degrees."""

GUN_HGH_UPPER_BOUND = 50
"""Upper gun elevation mount limit in degrees."""

GUN_HGH_LOWER_BOUND = -10
"""Lower gun elevation mount limit in degrees."""

_JOIN_TIMEOUT = 2.0
_RECEIVE_POLL = 0.01


def _fuzzy_equal(a: float, b: float) -> bool:
    """Relative float comparison with single-precision tolerance."""
    return abs(a - b) * 100000.0 <= min(abs(a), abs(b))


class _Observed:
    """A property that notifies subscribers when its value really changes."""

    def __init__(self, kind: type) -> None:
        self.kind = kind
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Optional[Rcws], objtype: Optional[type] = None):
        if obj is None:
            return self
        return obj._values[self.name]

    def __set__(self, obj: Rcws, value) -> None:
        obj._assign(self.name, self.kind(value))


class Rcws:
    """Weapon station state shown to a user interface.

    Angles are in degrees and speeds in rpm. Setting ``is_started`` pauses or
    resumes the simulation.
    """

    gun_azi_angle = _Observed(float)
    gun_hgh_angle = _Observed(float)
    ofd_azi_angle = _Observed(float)
    ofd_hgh_angle = _Observed(float)
    gun_azi_speed = _Observed(float)
    gun_hgh_speed = _Observed(float)
    ofd_azi_speed = _Observed(float)
    ofd_hgh_speed = _Observed(float)
    is_started = _Observed(bool)

    PROPERTIES = (
        "gun_azi_angle",
        "gun_hgh_angle",
        "ofd_azi_angle",
        "ofd_hgh_angle",
        "gun_azi_speed",
        "gun_hgh_speed",
        "ofd_azi_speed",
        "ofd_hgh_speed",
        "is_started",
    )

    def __init__(
        self,
        simulation: Optional[Simulation] = None,
        receiver: Optional[NetReceiver] = None,
    ) -> None:
        self.simulation = simulation if simulation is not None else Simulation()
        self.receiver = receiver if receiver is not None else NetReceiver()
        self._values: dict[str, object] = {
            name: (False if name == "is_started" else 0.0) for name in self.PROPERTIES
        }
        self._subscribers: dict[str, list[Callable[[], None]]] = {
            name: [] for name in self.PROPERTIES
        }
        self._lock = threading.Lock()
        self._threads: list[threading.Thread] = []
        self._stopping = threading.Event()
        self.subscribe("is_started", self.manage_threads)

    def subscribe(self, name: str, callback: Callable[[], None]) -> None:
        """Call ``callback`` with no arguments whenever property ``name`` changes."""
        if name not in self._subscribers:
            raise ValueError(f"unknown property: {name}")
        with self._lock:
            self._subscribers[name].append(callback)

    def _assign(self, name: str, value) -> None:
        old = self._values[name]
        if isinstance(value, bool):
            if old == value:
                return
        elif _fuzzy_equal(old, value):
            return
        self._values[name] = value
        with self._lock:
            callbacks = list(self._subscribers[name])
        for callback in callbacks:
            callback()

    def start_threads(self) -> None:
        """Start the simulation thread and the receiving thread."""
        if self._threads:
            raise RuntimeError("threads are already started")
        self._stopping.clear()
        self.simulation.on_update = self.data_update
        self._threads = [
            threading.Thread(target=self._run_simulation, name="rcws-simulation", daemon=True),
            threading.Thread(target=self._run_receiver, name="rcws-receiver", daemon=True),
        ]
        for thread in self._threads:
            thread.start()

    def _run_simulation(self) -> None:
        try:
            self.simulation.run()
        except OSError:
            logger.exception("simulation stopped by a network error")

    def _run_receiver(self) -> None:
        try:
            self.receiver.start()
        except (OSError, RuntimeError) as exc:
            logger.warning("receiver bind failed: %s", exc)
            return
        while not self._stopping.is_set():
            try:
                self.receiver.receive_pending()
            except RuntimeError:
                break
            self._stopping.wait(_RECEIVE_POLL)

    def manage_threads(self) -> None:
        """Resume the simulation when started and pause it otherwise."""
        if self.is_started:
            self.simulation.request_resume()
        else:
            self.simulation.request_pause()

    def data_update(self) -> None:
        """Refresh the optical director values from the simulation model."""
        ofd = self.simulation.ofd
        self.ofd_azi_angle = angle_rad_to_deg(ofd.azi_angle)
        self.ofd_azi_speed = speed_rads_to_rpm(ofd.azi_speed)
        self.ofd_hgh_angle = angle_rad_to_deg(ofd.hgh_angle)
        self.ofd_hgh_speed = speed_rads_to_rpm(ofd.hgh_speed)

    def shutdown(self) -> None:
        """Stop the simulation and the receiver and wait for their threads."""
        self._stopping.set()
        self.simulation.stop()
        self.receiver.close()
        for thread in self._threads:
            thread.join(_JOIN_TIMEOUT)
        self._threads = []

    def __enter__(self) -> Rcws:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


def _parse_args(argv: Optional[list[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="rcwssim", description="Run the weapon station simulator.")
    parser.add_argument("--remote-address", default=DEFAULT_REMOTE_ADDRESS)
    parser.add_argument("--remote-port", type=int, default=DEFAULT_REMOTE_PORT)
    parser.add_argument("--local-host", default=DEFAULT_LOCAL_HOST)
    parser.add_argument("--local-port", type=int, default=DEFAULT_LOCAL_PORT)
    parser.add_argument(
        "--duration",
        type=float,
        default=None,
        help="seconds to run; runs until interrupted when omitted",
    )
    args = parser.parse_args(argv)
    if args.duration is not None and args.duration < 0:
        parser.error("--duration must not be negative")
    return args


def main(argv: Optional[list[str]] = None) -> int:
    """Run the simulator, sending feedback messages until stopped."""
    args = _parse_args(argv)
    sender = NetSender(args.remote_address, args.remote_port)
    receiver = NetReceiver(args.local_host, args.local_port)
    rcws = Rcws(Simulation(sender), receiver)
    try:
        rcws.start_threads()
        rcws.is_started = True
        if args.duration is None:
            while True:
                time.sleep(1.0)
        else:
            time.sleep(args.duration)
    except KeyboardInterrupt:
        pass
    finally:
        rcws.shutdown()
        sender.close()
    print(
        f"ofd azimuth {rcws.ofd_azi_angle:.3f} deg {rcws.ofd_azi_speed:.3f} rpm, "
        f"elevation {rcws.ofd_hgh_angle:.3f} deg {rcws.ofd_hgh_speed:.3f} rpm"
    )
    return 0