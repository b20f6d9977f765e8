"""
Subscription health-ping.

While a session is active the server is pinged every few seconds
(GET /api/v3/{workspace}/ping). The reported status drives two flags:

- delinquent / expired: should_show_paywall
- logout: should_logout; the loop stops itself and the session is cleared
- anything else: both flags cleared

A failed tick is logged and ignored; the next tick runs on schedule.
"""

import logging
import threading
from collections.abc import Callable

from ..api_client import SkyclerkClient, SkyclerkError
from ..schemas import PingResponse, PingStatus

logger = logging.getLogger(__name__)


class PingService:
    """Background subscription-status poller on a daemon thread."""

    DEFAULT_INTERVAL = 10.0
    JOIN_TIMEOUT = 5.0

    def __init__(
        self,
        client: SkyclerkClient,
        on_logout: Callable[[], None] | None = None,
        interval_seconds: float = DEFAULT_INTERVAL,
    ):
        """
        Initialize the ping service.

        Args:
            client: API client (its Session is cleared on a forced logout
                when no on_logout callback is given)
            on_logout: Called after the server requests a logout
            interval_seconds: Delay between ticks
        """
        self.client = client
        self.on_logout = on_logout
        self.interval_seconds = interval_seconds
        self.join_timeout = self.JOIN_TIMEOUT

        self.should_show_paywall = False
        self.should_logout = False

        self._lock = threading.Lock()
        self._stop_event: threading.Event | None = None
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start pinging. A loop that is already running is cancelled first."""
        with self._lock:
            previous = self._cancel_locked()
        self._join(previous)

        with self._lock:
            self._cancel_locked()
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(stop_event,),
                name="skyclerk-ping",
                daemon=True,
            )
            self._stop_event = stop_event
            self._thread = thread
        thread.start()
        logger.debug(f"Started ping loop (every {self.interval_seconds}s)")

    def stop(self) -> None:
        """Cancel further ticks and wait for the loop thread to exit.

        Safe to call when not running, and from the loop thread itself.
        """
        with self._lock:
            previous = self._cancel_locked()
        self._join(previous)

    def _cancel_locked(self) -> threading.Thread | None:
        thread = self._thread
        if self._stop_event is not None:
            self._stop_event.set()
            logger.debug("Stopped ping loop")
        self._stop_event = None
        self._thread = None
        return thread

    def _join(self, thread: threading.Thread | None) -> None:
        if thread is None or thread is threading.current_thread():
            return
        thread.join(timeout=self.join_timeout)
        if thread.is_alive():
            logger.warning(f"Ping thread did not exit within {self.join_timeout}s")

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval_seconds):
            try:
                self.ping(stop_event)
            except Exception as e:
                logger.error(f"Unexpected error in ping loop: {e}", exc_info=True)

    def ping(self, stop_event: threading.Event | None = None) -> str | None:
        """
        Run one tick.

        Args:
            stop_event: Cancellation event of the loop running this tick;
                once it is set, the result is discarded

        Returns:
            The lower-cased status, or None if the request failed or the
            loop was cancelled while the request was in flight
        """
        try:
            response = self.client.get(
                self.client.workspace_url("ping"), decoder=PingResponse.from_api_response
            )
        except SkyclerkError as e:
            logger.debug(f"Ping failed, retrying on next tick: {e}")
            return None

        status = response.normalized_status
        previous = None

        with self._lock:
            if stop_event is not None and stop_event.is_set():
                logger.debug(f"Discarding ping result {status!r} from a cancelled loop")
                return None

            if status in (PingStatus.DELINQUENT.value, PingStatus.EXPIRED.value):
                if not self.should_show_paywall:
                    logger.warning(f"Subscription is {status}")
                self.should_show_paywall = True
                self.should_logout = False
            elif status == PingStatus.LOGOUT.value:
                logger.warning("Server requested logout")
                self.should_show_paywall = False
                self.should_logout = True
                # Only the loop that saw the logout is cancelled
                if stop_event is None or stop_event is self._stop_event:
                    previous = self._cancel_locked()
                else:
                    stop_event.set()
            else:
                self.should_show_paywall = False
                self.should_logout = False

        if status == PingStatus.LOGOUT.value:
            self._join(previous)
            if self.on_logout is not None:
                self.on_logout()
            else:
                self.client.session.clear()

        return status
