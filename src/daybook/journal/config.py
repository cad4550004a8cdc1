"""Configuration dataclasses for the journal view model and media capture.

These are pure data containers with sensible defaults.
Override them from YAML config, env vars, or constructor args.

Date formats are ``str.format`` templates with ``{weekday}``, ``{day}``,
``{month}`` and ``{year}`` fields, so the day is never zero-padded.
"""

from __future__ import annotations

from dataclasses import dataclass, field

HEADER_DATE_FORMAT = "{weekday} {day} {month}"
FOOTER_DATE_FORMAT = "{weekday}, {day} {month}"


@dataclass(frozen=True)
class AudioFormat:
    """Recording format handed to the audio subsystem.

    Attributes:
        codec: Encoder name understood by the recorder.
        sample_rate: Samples per second.
        channels: 1 for mono.
        extension: File suffix for recorded clips.
    """

    codec: str = "aac"
    sample_rate: int = 12000
    channels: int = 1
    extension: str = ".m4a"


@dataclass
class JournalConfig:
    """Settings for the journal session.

    Attributes:
        waveform_buckets: Number of bars drawn for an audio clip.
        header_date_format: Editor heading date, e.g. ``Sunday 18 October``.
        footer_date_format: Entry card and print footer date.
        seed_sample_entries: Start a fresh session with the starter entries.
        audio_format: Format used for new recordings.
    """

    waveform_buckets: int = 60
    header_date_format: str = HEADER_DATE_FORMAT
    footer_date_format: str = FOOTER_DATE_FORMAT
    seed_sample_entries: bool = True
    audio_format: AudioFormat = field(default_factory=AudioFormat)

    @classmethod
    def from_config(cls, config) -> JournalConfig:
        """Build from a :class:`daybook.core.config.Config`."""
        seed = config.get("journal.seed_sample_entries", True)
        if isinstance(seed, str):
            seed = seed.strip().lower() in ("1", "true", "yes", "on")
        return cls(
            waveform_buckets=config.get_int("journal.waveform_buckets", 60),
            header_date_format=config.get("journal.header_date_format") or HEADER_DATE_FORMAT,
            footer_date_format=config.get("journal.footer_date_format") or FOOTER_DATE_FORMAT,
            seed_sample_entries=bool(seed),
        )
