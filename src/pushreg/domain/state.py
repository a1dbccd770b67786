"""Observable registration state owned by the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from logging import getLogger
from types import EllipsisType
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Callable

log = getLogger(__name__)

ENABLE_LABEL: Final[str] = "Enable push notifications"
DISABLE_LABEL: Final[str] = "Disable push notifications"


@dataclass(slots=True, frozen=True)
class RegistrationSnapshot:
    """Read-only view of the published fields at one point in time."""

    is_registered: bool = False
    is_loading: bool = False
    info_message: str | None = None
    error_message: str | None = None

    @property
    def toggle_label(self) -> str:
        return DISABLE_LABEL if self.is_registered else ENABLE_LABEL


@dataclass(slots=True, frozen=True)
class StateChange:
    """Notification delivered to subscribers after a publish changed something."""

    changed: frozenset[str]
    snapshot: RegistrationSnapshot

    def __contains__(self, name: object) -> bool:
        return name in self.changed


type StateSubscriber = Callable[[StateChange], None]


@dataclass(slots=True)
class ObservableRegistrationState:
    """Mutable registration state with change notifications.

    Only the orchestrator writes through :meth:`publish`; consumers read
    :meth:`snapshot` or register a callback with :meth:`subscribe`. Each
    publish applies its batch of field updates at once and notifies every
    subscriber a single time, listing the fields whose value actually changed.
    The cached session is private to the orchestrator and never announced.
    """

    _current: RegistrationSnapshot = field(default_factory=RegistrationSnapshot)
    cached_session: str | None = None
    _subscribers: list[StateSubscriber] = field(default_factory=list[StateSubscriber])

    @property
    def is_registered(self) -> bool:
        return self._current.is_registered

    @property
    def is_loading(self) -> bool:
        return self._current.is_loading

    @property
    def info_message(self) -> str | None:
        return self._current.info_message

    @property
    def error_message(self) -> str | None:
        return self._current.error_message

    def snapshot(self) -> RegistrationSnapshot:
        return self._current

    def subscribe(self, callback: StateSubscriber) -> Callable[[], None]:
        """Register ``callback`` for change notifications and return an unsubscriber."""

        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(
        self,
        *,
        is_registered: bool | None = None,
        is_loading: bool | None = None,
        info_message: str | None | EllipsisType = ...,
        error_message: str | None | EllipsisType = ...,
    ) -> StateChange | None:
        """Apply the given field updates and notify subscribers of real changes.

        Boolean fields are left untouched when passed ``None``; message fields
        are left untouched unless passed explicitly, so ``None`` clears them.
        """

        updates: dict[str, object] = {}
        if is_registered is not None:
            updates["is_registered"] = is_registered
        if is_loading is not None:
            updates["is_loading"] = is_loading
        if info_message is not ...:
            updates["info_message"] = info_message
        if error_message is not ...:
            updates["error_message"] = error_message

        changed = frozenset(
            name for name, value in updates.items() if getattr(self._current, name) != value
        )
        if not changed:
            return None

        self._current = replace(self._current, **updates)  # type: ignore[arg-type]
        change = StateChange(changed=changed, snapshot=self._current)
        self._notify(change)
        return change

    def _notify(self, change: StateChange) -> None:
        for subscriber in tuple(self._subscribers):
            try:
                subscriber(change)
            except Exception:
                log.exception("State subscriber %r failed", subscriber)
