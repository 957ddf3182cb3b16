import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, List

from operadash import labels
from operadash.client import EngineError
from operadash.constants import MAX_WORKERS
from operadash.dashboard.messaging._message import ErrorOccurred, Message
from operadash.dashboard.messaging._message_bus import MessageBus
from operadash.logger import Logger

log = Logger().setup_logger('TaskRunner')


class TaskRunner:
    """
    Runs blocking work off the control loop.

    Every submitted task posts exactly one message on the bus: the message it
    returns, or ErrorOccurred when it raises.
    """

    def __init__(self, bus: MessageBus, max_workers: int = MAX_WORKERS) -> None:
        self.bus = bus
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='operadash')
        self._timers: List[threading.Timer] = []
        self._in_flight = 0
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        with self._lock:
            return self._in_flight > 0

    def submit(self, fn: Callable[..., Message], *args) -> Future:
        with self._lock:
            self._in_flight += 1
        return self._executor.submit(self._run, fn, *args)

    def _run(self, fn: Callable[..., Message], *args) -> None:
        try:
            message = fn(*args)
        except EngineError as e:
            message = ErrorOccurred(error=str(e))
        except Exception as e:  # pylint: disable=broad-except
            log.exception(labels.LOG_TASK_FAILED.format(getattr(fn, '__name__', fn), e))
            message = ErrorOccurred(error=str(e))
        finally:
            with self._lock:
                self._in_flight -= 1
        self.bus.put(message)

    def schedule(self, delay: float, message: Message) -> threading.Timer:
        """Post message after delay seconds."""
        timer = threading.Timer(delay, self.bus.put, args=(message,))
        timer.daemon = True
        self._timers = [t for t in self._timers if t.is_alive()]
        self._timers.append(timer)
        timer.start()
        return timer

    def shutdown(self) -> None:
        for timer in self._timers:
            timer.cancel()
        self._timers.clear()
        self._executor.shutdown(wait=False, cancel_futures=True)
