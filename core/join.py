# core/join.py
"""
Two-request join for the scale/sample pair.

``start`` issues both requests at once. Completions arrive in any order on
transport worker threads and are handled one at a time under a lock. The
render callback fires on the single completion that moves the join into
``BOTH_READY``; later completions overwrite their slot without rendering
again until the next ``start``.
"""
import threading
from concurrent.futures import Future
from enum import Enum
from functools import partial
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Set

from core.envelope import Command, RequestDescriptor, RpcOutcome
from utils.logging_config import get_logger

logger = get_logger(__name__)

RenderFn = Callable[[Sequence[float], Sequence[float]], None]


class Transport(Protocol):
    def submit(self, descriptor: RequestDescriptor, callback: Callable[[RpcOutcome], None]) -> Future:
        ...


class JoinPhase(Enum):
    NONE_READY = "none_ready"
    ONE_READY = "one_ready"
    BOTH_READY = "both_ready"


class JoinCoordinator:
    def __init__(self, transport: Transport, render: RenderFn) -> None:
        self.transport = transport
        self.render = render
        self._lock = threading.Lock()
        self._slots: Dict[Command, Optional[List[float]]] = {c: None for c in Command}
        self._pending: Set[Command] = set()
        self._generation = 0
        self._settled = threading.Event()
        self._rendered = False
        self.render_count = 0

    @property
    def phase(self) -> JoinPhase:
        filled = sum(1 for v in self._slots.values() if v is not None)
        if filled == len(self._slots):
            return JoinPhase.BOTH_READY
        return JoinPhase.ONE_READY if filled else JoinPhase.NONE_READY

    @property
    def scale_values(self) -> Optional[List[float]]:
        return self._slots[Command.SCALE]

    @property
    def sample_values(self) -> Optional[List[float]]:
        return self._slots[Command.SAMPLE]

    @property
    def settled(self) -> bool:
        return self._settled.is_set()

    def start(self) -> int:
        """Issue both requests and return the generation they belong to."""
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._slots = {c: None for c in Command}
            self._pending = set(Command)
            self._rendered = False
            self._settled.clear()
        logger.debug("Starting fetch generation %d", generation)
        for command in (Command.SCALE, Command.SAMPLE):
            descriptor = RequestDescriptor.for_command(command)
            self.transport.submit(descriptor, partial(self.on_complete, generation))
        return generation

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until both requests of the current generation settle. Returns True if a render fired."""
        self._settled.wait(timeout)
        with self._lock:
            return self._rendered

    def on_complete(self, generation: int, outcome: RpcOutcome) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug("Dropping %s completion from stale generation %d", outcome.descriptor.command, generation)
                return
            command = Command.parse(outcome.descriptor.command)
            if command is not None:
                self._pending.discard(command)
            try:
                self._apply(command, outcome)
            finally:
                if not self._pending:
                    self._settled.set()

    def _apply(self, command: Optional[Command], outcome: RpcOutcome) -> None:
        name = outcome.descriptor.command
        if not outcome.ok:
            logger.error("got error for %s: %s", name, outcome.failure)
            return
        if command is None:
            logger.warning("no idea about: %s", name)
            return
        values = outcome.envelope.values
        if values is None:
            logger.warning("%s returned no values yet", name)
            return

        was_ready = self.phase is JoinPhase.BOTH_READY
        self._slots[command] = list(values)
        if was_ready or self.phase is not JoinPhase.BOTH_READY:
            return

        scale, samples = self._slots[Command.SCALE], self._slots[Command.SAMPLE]
        logger.info("got scale: %d got samples: %d", len(scale), len(samples))
        self.render_count += 1
        self._rendered = True
        try:
            self.render(scale, samples)
        except Exception:
            logger.exception("Rendering the spectrum failed")
