"""Media session: images and audio attached while an entry is being edited.

A session lives exactly as long as the open editor. It is seeded from the
entry being edited (or starts empty for a new one) and ends either in
:meth:`MediaSession.commit`, whose results are merged into the entry, or
:meth:`MediaSession.discard`.

Recordings made during the session are tracked until committed. Discarding
the session deletes them, so cancelling an editor never leaves orphaned
audio files behind. A recording whose stop fails is deleted on the spot.
Removing a clip deletes its file straight away; clips the entry already
had are remembered in :attr:`MediaSession.removed_clips` so the owner can
drop them from the stored entry even if the editor is cancelled.

Recorder::

    IDLE --start_recording--> RECORDING --stop_recording--> IDLE (clip appended)

Picker::

    IDLE --pick_images--> PICKING --stream exhausted/failed--> IDLE
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import StrEnum
from pathlib import Path
from typing import Any
from uuid import uuid4

import aiofiles.os
import numpy as np
from loguru import logger

from daybook.core.exceptions import MediaIOError
from daybook.core.result import ErrorKind, Result, capture, kind_for

from .config import AudioFormat
from .models import AudioClip, ImageBlob

WAVEFORM_BUCKETS = 60


class RecorderState(StrEnum):
    IDLE = "idle"
    RECORDING = "recording"


class PickerState(StrEnum):
    IDLE = "idle"
    PICKING = "picking"


def waveform(samples: Sequence[float] | np.ndarray, buckets: int = WAVEFORM_BUCKETS) -> list[float]:
    """Downsample decoded audio into at most *buckets* bar heights.

    Takes the absolute value of one sample every ``len(samples) // buckets``
    samples. Display only: the result is never stored or compared.
    """
    if buckets <= 0:
        raise ValueError("buckets must be positive")
    data = np.abs(np.asarray(samples, dtype=np.float32).ravel())
    if data.size == 0:
        return []
    stride = max(data.size // buckets, 1)
    return data[::stride][:buckets].tolist()


async def delete_clip_file(clip: AudioClip) -> bool:
    """Delete a clip's backing file. Returns False when it was already gone."""
    try:
        await aiofiles.os.remove(clip.path)
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning(f"Could not delete audio file {clip.path}: {e}")
        return False
    return True


class MediaSession:
    """Editor-scoped image and audio attachments.

    Args:
        media_dir: Directory new recordings are written to.
        recorder: Audio capture collaborator.
        images: Images already on the entry being edited.
        audio_clips: Clips already on the entry being edited.
        audio_format: Format requested from the recorder.
        waveform_buckets: Default bar count for :meth:`load_waveform`.
    """

    def __init__(
        self,
        media_dir: str | Path,
        recorder: Any = None,
        *,
        images: Iterable[ImageBlob] = (),
        audio_clips: Iterable[AudioClip] = (),
        audio_format: AudioFormat | None = None,
        waveform_buckets: int = WAVEFORM_BUCKETS,
    ):
        self.media_dir = Path(media_dir).expanduser()
        self._recorder = recorder
        self.audio_format = audio_format or AudioFormat()
        self.waveform_buckets = waveform_buckets
        self._images: list[ImageBlob] = []
        self._digests: set[str] = set()
        self._clips: list[AudioClip] = list(audio_clips)
        self._uncommitted: list[AudioClip] = []
        self._removed: list[AudioClip] = []
        self._handle: Any = None
        self._destination: Path | None = None
        self.recorder_state = RecorderState.IDLE
        self.picker_state = PickerState.IDLE
        self.add_images(images)

    # -- Images -------------------------------------------------------------

    @property
    def images(self) -> list[ImageBlob]:
        return list(self._images)

    def add_image(self, blob: ImageBlob) -> bool:
        """Append *blob* unless an image with identical bytes is already attached."""
        if blob.digest in self._digests and any(blob.data == img.data for img in self._images):
            logger.debug(f"Skipping duplicate image {blob.digest[:8]}")
            return False
        self._images.append(blob)
        self._digests.add(blob.digest)
        return True

    def add_images(self, blobs: Iterable[ImageBlob]) -> int:
        return sum(1 for blob in blobs if self.add_image(blob))

    def remove_image(self, index: int) -> ImageBlob | None:
        if not 0 <= index < len(self._images):
            return None
        removed = self._images.pop(index)
        if not any(img.digest == removed.digest for img in self._images):
            self._digests.discard(removed.digest)
        return removed

    async def pick_images(self, picker) -> Result[int]:
        """Run the system picker and attach every new image it yields.

        Images accepted before a picker failure are kept.
        """
        if self.picker_state == PickerState.PICKING:
            return Result.failure(ErrorKind.MEDIA_IO_FAILURE, "Picker already open")

        self.picker_state = PickerState.PICKING
        added = 0
        try:
            async for blob in picker.pick(allow_multiple=True, images_only=True):
                if self.add_image(blob):
                    added += 1
        except (MediaIOError, OSError, ValueError) as e:
            logger.warning(f"Image picker failed after {added} image(s): {e}")
            return Result.failure(kind_for(e, ErrorKind.MEDIA_IO_FAILURE), str(e))
        finally:
            self.picker_state = PickerState.IDLE
        return Result.success(added)

    # -- Audio --------------------------------------------------------------

    @property
    def audio_clips(self) -> list[AudioClip]:
        return list(self._clips)

    @property
    def is_recording(self) -> bool:
        return self.recorder_state == RecorderState.RECORDING

    @property
    def uncommitted_clips(self) -> list[AudioClip]:
        return list(self._uncommitted)

    @property
    def removed_clips(self) -> list[AudioClip]:
        """Clips the entry already had whose files this session deleted."""
        return list(self._removed)

    def _new_recording_path(self) -> Path:
        return self.media_dir / f"{uuid4().hex}{self.audio_format.extension}"

    async def start_recording(self) -> Result[Path]:
        if self._recorder is None:
            return Result.failure(ErrorKind.MEDIA_IO_FAILURE, "No audio recorder available")
        if self.is_recording:
            return Result.failure(ErrorKind.MEDIA_IO_FAILURE, "Already recording")

        try:
            await aiofiles.os.makedirs(self.media_dir, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create media directory {self.media_dir}: {e}")
            return Result.failure(ErrorKind.MEDIA_IO_FAILURE, str(e))

        destination = self._new_recording_path()
        result = await capture(
            self._recorder.start(destination, self.audio_format),
            ErrorKind.MEDIA_IO_FAILURE,
            action="start recording",
        )
        if not result.ok:
            return result
        self._handle = result.value
        self._destination = destination
        self.recorder_state = RecorderState.RECORDING
        logger.debug(f"Recording to {destination}")
        return Result.success(destination)

    async def stop_recording(self) -> Result[AudioClip]:
        """Stop the recorder and append the finished clip."""
        if not self.is_recording:
            return Result.failure(ErrorKind.MEDIA_IO_FAILURE, "Not recording")

        handle, self._handle = self._handle, None
        destination, self._destination = self._destination, None
        self.recorder_state = RecorderState.IDLE
        result = await capture(self._recorder.stop(handle), ErrorKind.MEDIA_IO_FAILURE, action="stop recording")
        if not result.ok:
            # partial file the recorder may have written
            await delete_clip_file(AudioClip(path=destination))
            return result

        clip = AudioClip(path=Path(result.value))
        self._clips.append(clip)
        self._uncommitted.append(clip)
        logger.debug(f"Recorded {clip.name}")
        return Result.success(clip)

    async def remove_clip(self, clip: AudioClip) -> bool:
        """Detach *clip* and delete its file. There is no undo."""
        if clip not in self._clips:
            return False
        self._clips.remove(clip)
        if clip in self._uncommitted:
            self._uncommitted.remove(clip)
        else:
            self._removed.append(clip)
        await delete_clip_file(clip)
        return True

    async def play(self, clip: AudioClip, player) -> Result[None]:
        return await capture(player.play(clip.path), ErrorKind.MEDIA_IO_FAILURE, action=f"play {clip.name}")

    async def load_waveform(self, clip: AudioClip, decoder, buckets: int | None = None) -> list[float]:
        """Bar heights for *clip*; empty when the clip cannot be decoded."""
        result = await capture(
            decoder.read_samples(clip.path), ErrorKind.MEDIA_IO_FAILURE, action=f"decode {clip.name}"
        )
        if not result.ok:
            return []
        return waveform(result.value, buckets or self.waveform_buckets)

    # -- Lifecycle ----------------------------------------------------------

    def commit(self) -> tuple[list[ImageBlob], list[AudioClip]]:
        """Hand the attachments over to the entry; recordings are no longer ours to delete."""
        self._uncommitted.clear()
        return self.images, self.audio_clips

    async def discard(self) -> int:
        """Abandon the session, deleting recordings that were never committed.

        Returns the number of files deleted.
        """
        if self.is_recording:
            await self.stop_recording()

        deleted = 0
        for clip in self._uncommitted:
            if await delete_clip_file(clip):
                deleted += 1
            if clip in self._clips:
                self._clips.remove(clip)
        if self._uncommitted:
            logger.debug(f"Discarded {len(self._uncommitted)} uncommitted recording(s)")
        self._uncommitted.clear()
        self._images.clear()
        self._digests.clear()
        return deleted
