# core/session.py

"""
Principal lifecycle for one consumer (a request, a view, a worker).

- refresh() cancels whatever fetch is still in flight before starting
  a new one, so a slow stale response can never overwrite a fresher
  Principal. A cancelled refresh() returns immediately.
- Commits swap the whole Principal under a lock; readers take
  snapshot() and always see a consistent (loaded, principal) pair.
- logout() and a rejected token clear the Principal; close() cancels
  in-flight work when the consumer goes away.
"""

from dataclasses import dataclass
from threading import Event, Lock, Thread
from typing import Callable, Optional

import requests

from core.access import Principal
from core.logging_config import logger
from core.profile_client import fetch_principal


PrincipalFetcher = Callable[[str, requests.Session], Optional[Principal]]


@dataclass(frozen=True)
class SessionSnapshot:
    loaded: bool
    principal: Optional[Principal]


class FetchHandle:
    """
    One in-flight profile fetch.

    The request runs on a worker thread; run() waits until it finishes
    or the handle is cancelled, whichever comes first. Cancelling wakes
    the waiter at once and closes the HTTP session. The abandoned worker
    is bounded by PROFILE_TIMEOUT_SECONDS and its result is discarded.
    """

    def __init__(self, generation: int):
        self.generation = generation
        self.http = requests.Session()
        self._cancelled = Event()
        self._wake = Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self):
        if self._cancelled.is_set():
            return
        self._cancelled.set()
        self._wake.set()
        self.http.close()

    def finish(self):
        self.http.close()

    def run(self, call: Callable[[], Optional[Principal]]) -> Optional[Principal]:
        """Run `call` off-thread. Returns None if cancelled before it finishes."""
        outcome = {}

        def worker():
            try:
                outcome["value"] = call()
            except Exception as e:
                outcome["error"] = e
            finally:
                self._wake.set()

        Thread(target=worker, name=f"profile-fetch-{self.generation}", daemon=True).start()
        self._wake.wait()

        if self.cancelled:
            logger.debug(f"Profile fetch #{self.generation} aborted")
            return None
        if "error" in outcome:
            raise outcome["error"]
        return outcome.get("value")


class PrincipalSession:
    def __init__(self, fetcher: PrincipalFetcher = None):
        self._fetcher = fetcher or (lambda token, http: fetch_principal(token, http=http))
        self._lock = Lock()
        self._generation = 0
        self._inflight: Optional[FetchHandle] = None
        self._loaded = False
        self._principal: Optional[Principal] = None

    # -----------------------------------------------------
    # Reads
    # -----------------------------------------------------
    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot(loaded=self._loaded, principal=self._principal)

    @property
    def principal(self) -> Optional[Principal]:
        return self.snapshot().principal

    # -----------------------------------------------------
    # Fetch lifecycle
    # -----------------------------------------------------
    def begin_fetch(self) -> FetchHandle:
        """Start a fetch: cancels the previous one and marks the session as loading."""
        with self._lock:
            if self._inflight is not None:
                logger.debug(f"Cancelling stale profile fetch #{self._inflight.generation}")
                self._inflight.cancel()
            self._generation += 1
            handle = FetchHandle(self._generation)
            self._inflight = handle
            self._loaded = False
            return handle

    def commit(self, handle: FetchHandle, principal: Optional[Principal]) -> bool:
        """Publish the result of `handle`. Cancelled or superseded fetches are dropped."""
        with self._lock:
            if handle.cancelled or handle is not self._inflight:
                logger.debug(f"Dropping result of cancelled profile fetch #{handle.generation}")
                return False
            self._principal = principal
            self._loaded = True
            self._inflight = None
        handle.finish()
        return True

    def refresh(self, access_token: Optional[str]) -> SessionSnapshot:
        handle = self.begin_fetch()

        principal = None
        if access_token:
            principal = handle.run(lambda: self._fetcher(access_token, handle.http))

        self.commit(handle, principal)
        return self.snapshot()

    # -----------------------------------------------------
    # Teardown
    # -----------------------------------------------------
    def logout(self):
        with self._lock:
            if self._inflight is not None:
                self._inflight.cancel()
                self._inflight = None
            self._principal = None
            self._loaded = True

    def close(self):
        with self._lock:
            if self._inflight is not None:
                self._inflight.cancel()
                self._inflight = None
