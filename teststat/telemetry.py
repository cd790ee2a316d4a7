"""Optional Logfire integration for verification spans and logs."""
from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional

_logfire = None
_configured = False


def _load_logfire():
    global _logfire
    if _logfire is not None:
        return _logfire
    try:
        import logfire
    except ImportError:
        _logfire = False
        return _logfire
    _logfire = logfire
    return _logfire


def _env_truthy(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _stderr_enabled() -> bool:
    # Test output is the primary channel; mirror to stderr only on request.
    return _env_truthy(os.getenv("TESTSTAT_TELEMETRY_STDERR"))


def _console_setting():
    env_console = os.getenv("TESTSTAT_LOGFIRE_CONSOLE")
    if env_console is not None:
        return None if _env_truthy(env_console) else False
    return None


def enabled() -> bool:
    logfire = _load_logfire()
    if not logfire:
        return False
    flag = os.getenv("TESTSTAT_LOGFIRE")
    if flag is not None:
        return _env_truthy(flag)
    return False


def configure() -> bool:
    logfire = _load_logfire()
    if not logfire or not enabled():
        return False
    global _configured
    if not _configured:
        try:
            logfire.configure(console=_console_setting())
        except Exception:
            return False
        _configured = True
    return True


@contextmanager
def span(name: str, **attrs: Any) -> Iterator[None]:
    if not configure():
        yield
        return
    with _load_logfire().span(name, **attrs):
        yield


def log(level: str, message: str, **attrs: Any) -> None:
    if _stderr_enabled():
        print(f"[teststat] {message} {attrs}", file=sys.stderr)
    if not configure():
        return
    logfire = _load_logfire()
    fn = getattr(logfire, level, None) or logfire.info
    fn(message, **attrs)
