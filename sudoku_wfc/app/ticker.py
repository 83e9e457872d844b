"""Start/stop-controllable periodic tick source."""

from __future__ import annotations
from enum import Enum
import queue
import threading

from .events import Tick


DEFAULT_INTERVAL = 0.05


class _Control(Enum):
    START = "start"
    STOP = "stop"
    CLOSE = "close"


class Ticker:
    """
    Background thread that puts a Tick into `inbox` every `interval`
    seconds between start() and stop().
    
    Control messages are queued, so a stop() issued right after start()
    is never lost.
    """
    
    def __init__(self, inbox: queue.Queue, interval: float = DEFAULT_INTERVAL):
        self.inbox = inbox
        self.interval = interval
        self._control: queue.Queue = queue.Queue()
        self._thread = threading.Thread(target=self._run, name="sudoku-wfc-ticker", daemon=True)
        self._thread.start()
    
    def start(self) -> None:
        self._control.put(_Control.START)
    
    def stop(self) -> None:
        self._control.put(_Control.STOP)
    
    def close(self, timeout: float = 1.0) -> None:
        """Terminate the thread."""
        self._control.put(_Control.CLOSE)
        self._thread.join(timeout)
    
    def __enter__(self) -> Ticker:
        return self
    
    def __exit__(self, *exc) -> None:
        self.close()
    
    def _run(self) -> None:
        while True:
            command = self._control.get()
            if command is _Control.CLOSE:
                return
            if command is not _Control.START:
                continue
            
            while True:
                self.inbox.put(Tick())
                try:
                    command = self._control.get(timeout=self.interval)
                except queue.Empty:
                    continue
                if command is _Control.STOP:
                    break
                if command is _Control.CLOSE:
                    return
