"""Daily journaling reminder.

The reminder time is the one piece of state that survives a relaunch. It
is stored under ``reminderTime`` as ``"HH:MM"``; changing it persists the
value and reschedules a single recurring notification under a fixed key,
so rescheduling replaces instead of stacking duplicates.

:class:`SchedulerNotifier` is an in-process :class:`Notifier` built on
APScheduler, for hosts without an OS notification service (desktop
prototypes, tests). APScheduler is imported lazily so the module can be
imported without pulling it in.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from datetime import time
from typing import Any

from loguru import logger

from daybook.core.exceptions import ConfigurationError, FileIOError
from daybook.core.result import ErrorKind, Result, capture
from daybook.core.settings import SettingsStore

from .protocols import NotificationPermission, Notifier

SETTINGS_KEY = "reminderTime"
REMINDER_KEY = "journalReminder"
DEFAULT_TIME = time(20, 0)
DEFAULT_TITLE = "Time to journal"
DEFAULT_BODY = "Take a moment to write about your day."
PERMISSION_DENIED_MESSAGE = (
    "Notifications are turned off for this app. Enable them in Settings to get journaling reminders."
)

DeliverFn = Callable[[str, str], Any]


def parse_time(value: str) -> time:
    """Parse ``"HH:MM"`` into a time of day."""
    try:
        hour_str, minute_str = str(value).strip().split(":")
        return time(int(hour_str), int(minute_str))
    except ValueError as e:
        raise ConfigurationError(f"Invalid time of day {value!r}, expected HH:MM") from e


def format_time(value: time) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


class ReminderSetting:
    """Persisted reminder time wired to a notifier.

    Args:
        settings: Key/value store the time is persisted in.
        notifier: Notification service that owns the recurring schedule.
        key: Fixed schedule identifier.
        default: Time used when nothing (or garbage) is stored.
    """

    def __init__(
        self,
        settings: SettingsStore,
        notifier: Notifier,
        *,
        key: str = REMINDER_KEY,
        default: time = DEFAULT_TIME,
        title: str = DEFAULT_TITLE,
        body: str = DEFAULT_BODY,
    ):
        self._settings = settings
        self._notifier = notifier
        self.key = key
        self.title = title
        self.body = body
        self._time = self._load(default)

    @classmethod
    def from_config(cls, config, settings: SettingsStore, notifier: Notifier) -> ReminderSetting:
        """Build from a :class:`daybook.core.config.Config`."""
        return cls(
            settings,
            notifier,
            key=config.get("reminder.key", REMINDER_KEY),
            default=parse_time(config.get("reminder.default_time", format_time(DEFAULT_TIME))),
            title=config.get("reminder.title", DEFAULT_TITLE),
            body=config.get("reminder.body", DEFAULT_BODY),
        )

    def _load(self, default: time) -> time:
        stored = self._settings.get(SETTINGS_KEY)
        if stored is None:
            return default
        try:
            return parse_time(stored)
        except ConfigurationError as e:
            logger.warning(f"Ignoring stored reminder time: {e}")
            return default

    @property
    def time(self) -> time:
        return self._time

    async def set_time(self, value: time) -> Result[time]:
        """Persist a new reminder time and reschedule the notification.

        The time is stored even when notifications are not permitted, so the
        reminder starts working as soon as the user enables them. A failed
        write leaves the previous time in place.
        """
        value = value.replace(second=0, microsecond=0)
        try:
            self._settings.set(SETTINGS_KEY, format_time(value))
        except FileIOError as e:
            logger.warning(f"Reminder time not saved: {e}")
            return Result.failure(ErrorKind.MEDIA_IO_FAILURE, str(e))
        self._time = value
        return await self.schedule()

    async def schedule(self) -> Result[time]:
        """(Re)schedule the recurring notification at the stored time."""
        permitted = await self._ensure_permission()
        if not permitted.ok:
            return permitted

        result = await capture(
            self._notifier.schedule_recurring(self.key, self._time, self.title, self.body),
            ErrorKind.MEDIA_IO_FAILURE,
            action="reminder scheduling",
        )
        if not result.ok:
            return result
        logger.info(f"Reminder {self.key} scheduled daily at {format_time(self._time)}")
        return Result.success(self._time)

    async def _ensure_permission(self) -> Result[None]:
        checked = await capture(
            self._notifier.permission_status(), ErrorKind.MEDIA_IO_FAILURE, action="notification permission"
        )
        if not checked.ok:
            return checked
        status = checked.value
        if status == NotificationPermission.NOT_DETERMINED:
            requested = await capture(
                self._notifier.request_permission(), ErrorKind.MEDIA_IO_FAILURE, action="notification permission"
            )
            if not requested.ok:
                return requested
            status = NotificationPermission.GRANTED if requested.value else NotificationPermission.DENIED
        if status == NotificationPermission.DENIED:
            logger.info("Notification permission denied; reminder not scheduled")
            return Result.failure(ErrorKind.PERMISSION_DENIED, PERMISSION_DENIED_MESSAGE)
        return Result.success()


class SchedulerNotifier:
    """Notifier backed by APScheduler's ``AsyncIOScheduler``.

    Must be used from a running asyncio event loop. Notifications are
    delivered by calling ``deliver(title, body)``, which defaults to
    logging them.

    Args:
        deliver: Sync or async callable invoked when a reminder fires.
        timezone: Timezone for cron triggers. Empty uses the local zone.
    """

    def __init__(self, deliver: DeliverFn | None = None, timezone: str | None = None):
        self._deliver = deliver or self._log_notification
        self._timezone = timezone or None
        self._scheduler: Any = None  # AsyncIOScheduler, lazily created

    @classmethod
    def from_config(cls, config, deliver: DeliverFn | None = None) -> SchedulerNotifier:
        """Build from a :class:`daybook.core.config.Config`, honouring ``reminder.timezone``."""
        return cls(deliver, timezone=config.get("reminder.timezone") or None)

    async def permission_status(self) -> NotificationPermission:
        return NotificationPermission.GRANTED

    async def request_permission(self) -> bool:
        return True

    def _ensure_started(self) -> Any:
        if self._scheduler is None:
            from apscheduler.schedulers.asyncio import AsyncIOScheduler

            kwargs = {"timezone": self._timezone} if self._timezone else {}
            self._scheduler = AsyncIOScheduler(**kwargs)
            self._scheduler.start()
            logger.debug("SchedulerNotifier started")
        return self._scheduler

    async def schedule_recurring(self, key: str, at: time, title: str, body: str) -> None:
        from apscheduler.triggers.cron import CronTrigger

        scheduler = self._ensure_started()
        trigger_kwargs: dict[str, Any] = {"hour": at.hour, "minute": at.minute}
        if self._timezone:
            trigger_kwargs["timezone"] = self._timezone
        scheduler.add_job(
            self._fire,
            trigger=CronTrigger(**trigger_kwargs),
            id=key,
            kwargs={"title": title, "body": body},
            replace_existing=True,
        )
        logger.debug(f"Registered reminder {key}: {format_time(at)}")

    async def cancel(self, key: str) -> None:
        if self._scheduler is not None and self._scheduler.get_job(key) is not None:
            self._scheduler.remove_job(key)

    def job_ids(self) -> list[str]:
        if self._scheduler is None:
            return []
        return [job.id for job in self._scheduler.get_jobs()]

    def next_fire_time(self, key: str) -> Any:
        if self._scheduler is None:
            return None
        job = self._scheduler.get_job(key)
        return job.next_run_time if job is not None else None

    def shutdown(self) -> None:
        if self._scheduler is not None:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
            logger.debug("SchedulerNotifier shut down")

    async def _fire(self, title: str, body: str) -> None:
        try:
            outcome = self._deliver(title, body)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as e:
            logger.warning(f"Reminder delivery failed: {e}")

    @staticmethod
    def _log_notification(title: str, body: str) -> None:
        logger.info(f"Reminder: {title} - {body}")
