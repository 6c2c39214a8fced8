"""Sequential bulk synthesis driver.

Responsibilities:
- Merge each item with the shared defaults (item, then defaults, then
  built-in fallbacks) into provider-neutral request parameters.
- Derive output paths for items that do not name one.
- Run items strictly in order through the synthesis service, stopping at the
  first failure.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from ..audio.encoding import AudioEncoding, extension_for_name, parse_encoding
from ..errors import BatchError, FastTTSError
from ..models.datatypes import SynthesisRequestParams, parse_gender
from ..providers.base import ProviderId
from ..synthesis import SynthesisService
from ..telemetry.logger import RunLogger
from .config import BulkConfig, BulkDefaults, BulkItem

_FALLBACK_LANGUAGE = "en-US"
_FALLBACK_RATE = 1.0
_FALLBACK_PITCH = 0.0
_FALLBACK_VOLUME_GAIN_DB = 0.0


def _first_set(*values):
    for value in values:
        if value is not None:
            return value
    return None


def effective_encoding_name(item: BulkItem, defaults: BulkDefaults) -> str:
    """Return the raw encoding name an item resolves to."""

    return _first_set(item.encoding, defaults.encoding) or AudioEncoding.LINEAR16.value


def derive_output_path(item: BulkItem, defaults: BulkDefaults, item_number: int) -> Path:
    """Return the output path for a 1-based item number.

    An explicit item `output` wins. Otherwise the file is named
    `item_{n}.{ext}`, placed under `defaults.output_dir` when set. Unknown
    encodings yield the `bin` extension here and are rejected later.
    """

    if item.output is not None:
        return Path(item.output)
    extension = extension_for_name(effective_encoding_name(item, defaults))
    file_name = f"item_{item_number}.{extension}"
    if defaults.output_dir is not None:
        return Path(defaults.output_dir) / file_name
    return Path(file_name)


def resolve_effective_params(item: BulkItem, defaults: BulkDefaults) -> SynthesisRequestParams:
    """Merge one item with the defaults into request parameters.

    Raises:
        UnsupportedEncodingError: If the effective encoding name is unknown.
    """

    gender_name = _first_set(item.gender, defaults.gender)
    effects = _first_set(item.effects_profile_ids, defaults.effects_profile_ids)
    return SynthesisRequestParams(
        text=item.text,
        is_ssml=bool(_first_set(item.ssml, defaults.ssml, False)),
        language_code=_first_set(item.language, defaults.language, _FALLBACK_LANGUAGE),
        voice_name=_first_set(item.voice, defaults.voice),
        gender=parse_gender(gender_name) if gender_name is not None else None,
        speaking_rate=_first_set(item.rate, defaults.rate, _FALLBACK_RATE),
        pitch=_first_set(item.pitch, defaults.pitch, _FALLBACK_PITCH),
        volume_gain_db=_first_set(
            item.volume_gain_db, defaults.volume_gain_db, _FALLBACK_VOLUME_GAIN_DB
        ),
        sample_rate_hertz=_first_set(item.sample_rate, defaults.sample_rate),
        encoding=parse_encoding(effective_encoding_name(item, defaults)),
        effects_profile_ids=tuple(effects or ()),
    )


class BatchRunner:
    """Run every item of a bulk config with the primary provider."""

    def __init__(
        self,
        service: SynthesisService,
        on_item_written: Callable[[Path], None] | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        self.service = service
        self.on_item_written = on_item_written
        self.run_logger = run_logger if run_logger is not None else RunLogger()

    def run(self, config: BulkConfig) -> list[Path]:
        """Synthesize all items in order and return the written paths.

        Raises:
            BatchError: On the first failing item. Files written by earlier
                items are left in place and later items are not attempted.
        """

        written: list[Path] = []
        self.run_logger.log_stage_start("bulk", items=len(config.items))
        for item_number, item in enumerate(config.items, start=1):
            try:
                output = derive_output_path(item, config.defaults, item_number)
                params = resolve_effective_params(item, config.defaults)
                path = self.service.synthesize_to_file(ProviderId.GOOGLE, params, output)
            except FastTTSError as exc:
                self.run_logger.log_stage_failure("bulk", type(exc).__name__)
                raise BatchError(item_number, exc) from exc
            written.append(path)
            if self.on_item_written is not None:
                self.on_item_written(path)
        self.run_logger.log_stage_complete("bulk", written=len(written))
        return written
