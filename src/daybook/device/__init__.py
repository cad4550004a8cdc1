"""Device seams: collaborator protocols, lock screen, reminders."""

from .lock import LockScreen
from .protocols import (
    AudioDecoder,
    AudioPlayer,
    AudioRecorder,
    Authenticator,
    MediaPicker,
    NotificationPermission,
    Notifier,
    PrintService,
)
from .reminders import ReminderSetting, SchedulerNotifier

__all__ = [
    "AudioDecoder",
    "AudioPlayer",
    "AudioRecorder",
    "Authenticator",
    "LockScreen",
    "MediaPicker",
    "NotificationPermission",
    "Notifier",
    "PrintService",
    "ReminderSetting",
    "SchedulerNotifier",
]
