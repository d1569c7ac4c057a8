"""
Process-wide logging context: device id, session id, app version and the
mapped diagnostic context (MDC) interpolated by ``%did``, ``%sid``, ``%app``
and ``%X{key}``.

The template engine renders against an explicit LogContext, so tests can pass
their own instance. Appenders without an explicit context use the default
instance, constructed on first use by default_context() and replaced with a
fresh one by reset_for_tests().
"""
from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

UNKNOWN_ID = "unknown"

DEVICE_ID_KEY = "logging.device-hash"
SESSION_ID_KEY = "logging.session-hash"
APP_VERSION_KEY = "logging.app-version"

RESERVED_KEYS = (DEVICE_ID_KEY, SESSION_ID_KEY, APP_VERSION_KEY)


class LogContext:
    """Thread-safe holder for ids, app version and the diagnostic map."""

    def __init__(
        self,
        *,
        device_id: Optional[str] = None,
        session_id: Optional[str] = None,
        app_version: Optional[str] = None,
        mdc: Optional[Dict[str, str]] = None,
    ) -> None:
        self._lock = threading.RLock()
        self._device_id = device_id
        self._session_id = session_id
        self._app_version = app_version
        self._mdc: Dict[str, str] = {str(k): str(v) for k, v in (mdc or {}).items()}

    # ── Ids and version ────────────────────────────────────────────

    @property
    def device_id(self) -> Optional[str]:
        return self._device_id

    @device_id.setter
    def device_id(self, value: Optional[str]) -> None:
        with self._lock:
            self._device_id = value

    @property
    def session_id(self) -> Optional[str]:
        return self._session_id

    @session_id.setter
    def session_id(self, value: Optional[str]) -> None:
        with self._lock:
            self._session_id = value

    @property
    def app_version(self) -> Optional[str]:
        return self._app_version

    @app_version.setter
    def app_version(self, value: Optional[str]) -> None:
        with self._lock:
            self._app_version = value

    def start_session(self) -> str:
        """Assign and return a fresh random session id."""
        session_id = uuid.uuid4().hex[:12]
        self.session_id = session_id
        return session_id

    def device_id_or_unknown(self) -> str:
        return self._device_id or UNKNOWN_ID

    def session_id_or_unknown(self) -> str:
        return self._session_id or UNKNOWN_ID

    def app_version_or_empty(self) -> str:
        return self._app_version or ""

    # ── Diagnostic map ─────────────────────────────────────────────

    def put(self, key: str, value: object) -> None:
        with self._lock:
            self._mdc[str(key)] = str(value)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        with self._lock:
            return self._mdc.get(key, default)

    def remove(self, key: str) -> None:
        with self._lock:
            self._mdc.pop(key, None)

    def clear_mdc(self) -> None:
        with self._lock:
            self._mdc.clear()

    def mdc_snapshot(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._mdc)

    @contextmanager
    def scoped(self, **values: object) -> Iterator["LogContext"]:
        """Set MDC values for the duration of a ``with`` block, then restore them."""
        with self._lock:
            previous = {key: self._mdc.get(key) for key in values}
            for key, value in values.items():
                self._mdc[key] = str(value)
        try:
            yield self
        finally:
            with self._lock:
                for key, old in previous.items():
                    if old is None:
                        self._mdc.pop(key, None)
                    else:
                        self._mdc[key] = old

    def lookup(self, key: str) -> str:
        """Resolve ``%X{key}``: reserved id/version keys first, then the MDC, else ''."""
        if key == DEVICE_ID_KEY:
            return self.device_id_or_unknown()
        if key == SESSION_ID_KEY:
            return self.session_id_or_unknown()
        if key == APP_VERSION_KEY:
            return self.app_version_or_empty()
        with self._lock:
            return self._mdc.get(key, "")

    def __repr__(self) -> str:
        return (
            f"LogContext(device_id={self._device_id!r}, session_id={self._session_id!r}, "
            f"app_version={self._app_version!r}, mdc_keys={sorted(self._mdc)})"
        )


_default: Optional[LogContext] = None
_default_lock = threading.Lock()


def default_context() -> LogContext:
    """Return the process-wide context, creating it on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = LogContext()
    return _default


def reset_for_tests() -> LogContext:
    """Replace the process-wide context with an empty one and return it."""
    global _default
    with _default_lock:
        _default = LogContext()
    return _default
