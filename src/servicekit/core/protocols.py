"""Protocol interfaces for all servicekit abstractions.

All inter-layer communication uses these Protocols - structural typing,
no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, TypeVar, runtime_checkable

from servicekit.core.types import BitFlag, BitMask

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Step engine: persistence port
# ---------------------------------------------------------------------------

@runtime_checkable
class IStepPersistenceHandler(Protocol):
    """Read/write access to the cumulative step-completion bitmask of one process.

    ``store`` must be safe to call twice with the same value.
    """

    def get(self) -> BitMask: ...

    def store(self, bits: BitMask) -> None: ...


# ---------------------------------------------------------------------------
# Step engine: step identity
# ---------------------------------------------------------------------------

@runtime_checkable
class IStepValue(Protocol):
    """A described step: one bit flag plus a human readable description."""

    @property
    def bit(self) -> BitFlag: ...

    @property
    def description(self) -> str: ...


# ---------------------------------------------------------------------------
# Peripheral collaborators (not implemented by servicekit)
# ---------------------------------------------------------------------------

@runtime_checkable
class IMailSender(Protocol):
    """Outbound mail transport."""

    def send_message(
        self,
        mail_to: list[str],
        mail_from: str,
        subject: str,
        body: str,
        *,
        cc: list[str] | None = None,
        bcc: list[str] | None = None,
        attachments: Mapping[str, bytes] | None = None,
    ) -> bool: ...


@runtime_checkable
class IObjectMapper(Protocol):
    """Object-to-object field mapping."""

    def map(self, source: Any, destination_type: type[T]) -> T: ...


@runtime_checkable
class IHeaderStorage(Protocol):
    """Thread-scoped storage of propagated request headers (tracing, tenant, language)."""

    def set_headers(self, headers: Mapping[str, list[str]]) -> None: ...

    def get_headers(self) -> Mapping[str, list[str]] | None: ...

    def clear(self) -> None: ...
