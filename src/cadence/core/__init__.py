"""cadence core — shared substrate for every wrapper.

ARCHITECTURE
────────────
::

    clock.py     ─ Scheduler protocol, SystemScheduler, ManualScheduler
    errors.py    ─ CadenceError hierarchy (exhaustion, serialization, config)
    encoding.py  ─ canonical structural encoding for argument keys
    logging.py   ─ structlog configuration and helpers
    settings.py  ─ CadenceSettings (pydantic-settings, CADENCE_ prefix)

Nothing in ``core`` depends on ``execution`` or ``functional``.
"""

from cadence.core.clock import (
    ManualScheduler,
    Scheduler,
    SystemScheduler,
    TimerHandle,
    get_default_scheduler,
    set_default_scheduler,
)
from cadence.core.encoding import argument_key, canonical_encode, plain_encode
from cadence.core.errors import (
    CadenceError,
    ConfigError,
    ErrorCategory,
    ExhaustionError,
    MaxAttemptsReached,
    MaxRetriesReached,
    SerializationError,
)
from cadence.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
    unbind_context,
)
from cadence.core.settings import CadenceSettings, get_settings

__all__ = [
    # clock
    "Scheduler",
    "TimerHandle",
    "SystemScheduler",
    "ManualScheduler",
    "get_default_scheduler",
    "set_default_scheduler",
    # encoding
    "canonical_encode",
    "plain_encode",
    "argument_key",
    # errors
    "ErrorCategory",
    "CadenceError",
    "ConfigError",
    "ExhaustionError",
    "MaxRetriesReached",
    "MaxAttemptsReached",
    "SerializationError",
    # logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "unbind_context",
    "clear_context",
    "LogContext",
    # settings
    "CadenceSettings",
    "get_settings",
]
