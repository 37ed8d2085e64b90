"""Front-end pipeline: select, normalize, phonemize, encode, then resample.

Each stage is a pure function of its input `Utterance` plus the shared,
read-only `Resources`, and returns a new `Utterance`. Batches run one
utterance per worker thread; a failure in one utterance is returned as an
`UtteranceFailure` and never affects its siblings.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Any, Literal, Protocol

from voxfront.audio.buffer import AudioBuffer, ResampleSpec, SampleFormat, remix_channels
from voxfront.audio.resample import resample
from voxfront.config import AppConfig, load_config
from voxfront.detect import LanguageDetector, ScriptDetector, SelectionSource, select_language
from voxfront.encoding import encode
from voxfront.errors import (
    FailureStage,
    InferenceFailure,
    UtteranceCancelled,
    UtteranceFailure,
    VoxfrontError,
)
from voxfront.languages import resolve_language_pack
from voxfront.models import (
    FrontendMetadata,
    FrontendRequest,
    FrontendResponse,
    SymbolModel,
    UtteranceError,
    UtteranceResult,
)
from voxfront.resources import Resources
from voxfront.symbols import Symbol
from voxfront.text.sentences import split_sentences

logger = logging.getLogger(__name__)

UtteranceStage = Literal["raw", "detected", "normalized", "phonemized", "encoded"]


@dataclass(frozen=True)
class Utterance:
    """One unit of text on its way to token IDs."""

    text: str
    stage: UtteranceStage = "raw"
    language: str | None = None
    language_source: SelectionSource | None = None
    normalizer_id: str | None = None
    normalized: str | None = None
    symbols: tuple[Symbol, ...] = ()
    token_ids: tuple[int, ...] = ()


class InferenceEngine(Protocol):
    """Acoustic model that turns token IDs into a waveform."""

    native_sample_rate_hz: int
    channels: int

    def infer(
        self, token_ids: Sequence[int], language: str, params: Mapping[str, Any]
    ) -> AudioBuffer: ...


@dataclass(frozen=True)
class SynthesisResult:
    """Resampled audio ready for an audio writer."""

    utterance: Utterance
    audio: AudioBuffer

    @property
    def sample_rate_hz(self) -> int:
        return self.audio.sample_rate_hz

    @property
    def channels(self) -> int:
        return self.audio.channels

    @property
    def sample_format(self) -> SampleFormat:
        return self.audio.sample_format


class FrontendPipeline:
    """Runs utterances through the front-end stages with shared resources."""

    def __init__(
        self,
        resources: Resources,
        config: AppConfig | None = None,
        detector: LanguageDetector | None = None,
    ) -> None:
        self.resources = resources
        self.config = config or load_config()
        self.detector = detector or ScriptDetector()

    def select(self, utterance: Utterance, override: str | None = None) -> Utterance:
        selection = select_language(
            utterance.text,
            override,
            detector=self.detector,
            default_language=self.config.default_language,
            threshold=self.config.detector_threshold,
        )
        return replace(
            utterance,
            stage="detected",
            language=selection.language,
            language_source=selection.source,
        )

    def normalize(self, utterance: Utterance) -> Utterance:
        pack = resolve_language_pack(self._language(utterance))
        normalized = pack.normalize(utterance.text, self.resources)
        return replace(
            utterance,
            stage="normalized",
            normalized=normalized.normalized,
            normalizer_id=normalized.normalizer_id,
        )

    def phonemize(self, utterance: Utterance) -> Utterance:
        pack = resolve_language_pack(self._language(utterance))
        symbols = pack.phonemize(utterance.normalized or "", self.resources)
        return replace(utterance, stage="phonemized", symbols=symbols)

    def encode(self, utterance: Utterance) -> Utterance:
        token_ids = encode(utterance.symbols, self.resources.vocabulary)
        return replace(utterance, stage="encoded", token_ids=token_ids)

    def run(
        self,
        text: str,
        language: str | None = None,
        cancel: threading.Event | None = None,
    ) -> Utterance:
        """Run every forward stage, raising on cancellation or failure."""
        utterance = Utterance(text=text)
        for stage, step in self._stages(language):
            if cancel is not None and cancel.is_set():
                raise UtteranceCancelled(f"Cancelled before {stage}")
            utterance = step(utterance)
        logger.debug(
            "Encoded %d symbol(s) as %d token(s) [%s]",
            len(utterance.symbols),
            len(utterance.token_ids),
            utterance.language,
        )
        return utterance

    def run_safe(
        self,
        text: str,
        language: str | None = None,
        cancel: threading.Event | None = None,
    ) -> Utterance | UtteranceFailure:
        """Like `run`, but return failures as values."""
        utterance = Utterance(text=text)
        for stage, step in self._stages(language):
            if cancel is not None and cancel.is_set():
                return UtteranceFailure.from_exception(
                    text, stage, UtteranceCancelled(f"Cancelled before {stage}")
                )
            try:
                utterance = step(utterance)
            except Exception as exc:
                logger.exception("Utterance failed during %s", stage)
                return UtteranceFailure.from_exception(text, stage, exc)
        return utterance

    def process_batch(
        self,
        texts: Sequence[str],
        language: str | None = None,
        cancel: threading.Event | None = None,
    ) -> list[Utterance | UtteranceFailure]:
        """Run many utterances concurrently, keeping input order."""
        if not texts:
            return []
        workers = min(self.config.workers, len(texts))
        if workers <= 1:
            return [self.run_safe(text, language, cancel) for text in texts]
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="voxfront") as executor:
            return list(executor.map(lambda text: self.run_safe(text, language, cancel), texts))

    def process_text(
        self,
        text: str,
        language: str | None = None,
        cancel: threading.Event | None = None,
    ) -> list[Utterance | UtteranceFailure]:
        """Split long text into sentences and run them as a batch."""
        pieces = split_sentences(text, max_chars=self.config.max_sentence_chars)
        return self.process_batch(pieces, language, cancel)

    def resample_spec(
        self,
        engine: InferenceEngine,
        *,
        target_rate_hz: float | None = None,
        quality: str | None = None,
        output_format: SampleFormat | None = None,
    ) -> ResampleSpec:
        spec = ResampleSpec(
            source_rate_hz=engine.native_sample_rate_hz,
            target_rate_hz=target_rate_hz if target_rate_hz is not None else self.config.target_sample_rate_hz,
            channels=self.config.target_channels,
            quality=quality or self.config.resample_quality,  # type: ignore[arg-type]
            output_format=output_format,
        )
        spec.validate()
        return spec

    def synthesize(
        self,
        utterance: Utterance,
        engine: InferenceEngine,
        *,
        target_rate_hz: float | None = None,
        quality: str | None = None,
        output_format: SampleFormat | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> SynthesisResult:
        """Call the engine on an encoded utterance and resample its output.

        The resample spec is validated before the engine runs, so an invalid
        target never costs an inference call.
        """
        if utterance.stage != "encoded" or utterance.language is None:
            raise ValueError(f"Utterance must be encoded before synthesis, got stage {utterance.stage!r}")
        spec = self.resample_spec(
            engine, target_rate_hz=target_rate_hz, quality=quality, output_format=output_format
        )

        try:
            audio = engine.infer(utterance.token_ids, utterance.language, params or {})
        except Exception as exc:
            raise InferenceFailure(f"Inference failed: {exc}") from exc
        if audio.sample_rate_hz != engine.native_sample_rate_hz:
            raise InferenceFailure(
                f"Engine returned {audio.sample_rate_hz} Hz audio, expected {engine.native_sample_rate_hz} Hz"
            )

        audio = remix_channels(audio, spec.channels)
        return SynthesisResult(utterance=utterance, audio=resample(audio, spec))

    def synthesize_batch(
        self,
        texts: Sequence[str],
        engine: InferenceEngine,
        language: str | None = None,
        cancel: threading.Event | None = None,
        **options: Any,
    ) -> list[SynthesisResult | UtteranceFailure]:
        """Run the front end and synthesis for each text, isolating failures."""
        results: list[SynthesisResult | UtteranceFailure] = []
        for outcome in self.process_batch(texts, language, cancel):
            if isinstance(outcome, UtteranceFailure):
                results.append(outcome)
                continue
            if cancel is not None and cancel.is_set():
                results.append(
                    UtteranceFailure.from_exception(
                        outcome.text, "synthesize", UtteranceCancelled("Cancelled before synthesize")
                    )
                )
                continue
            try:
                results.append(self.synthesize(outcome, engine, **options))
            except VoxfrontError as exc:
                logger.warning("Synthesis failed for %r: %s", outcome.text, exc)
                results.append(UtteranceFailure.from_exception(outcome.text, "synthesize", exc))
        return results

    def _stages(self, language: str | None) -> list[tuple[FailureStage, Callable[[Utterance], Utterance]]]:
        return [
            ("select", lambda utterance: self.select(utterance, language)),
            ("normalize", self.normalize),
            ("phonemize", self.phonemize),
            ("encode", self.encode),
        ]

    @staticmethod
    def _language(utterance: Utterance) -> str:
        if utterance.language is None:
            raise ValueError("Utterance language has not been selected")
        return utterance.language


def run_frontend(request: FrontendRequest, pipeline: FrontendPipeline) -> FrontendResponse:
    """Run an API request through the pipeline and build the response payload."""
    if request.split:
        outcomes = pipeline.process_text(request.text, request.language)
    else:
        outcomes = [pipeline.run_safe(request.text, request.language)]
    return build_response(outcomes, pipeline.resources)


def build_response(
    outcomes: Sequence[Utterance | UtteranceFailure], resources: Resources
) -> FrontendResponse:
    utterances: list[UtteranceResult] = []
    errors: list[UtteranceError] = []
    for outcome in outcomes:
        if isinstance(outcome, UtteranceFailure):
            errors.append(
                UtteranceError(
                    text=outcome.text,
                    stage=outcome.stage,
                    kind=outcome.kind,
                    message=outcome.message,
                )
            )
            continue
        utterances.append(
            UtteranceResult(
                text=outcome.text,
                language=outcome.language or "und",
                language_source=outcome.language_source or "default",
                normalizer_id=outcome.normalizer_id or "",
                normalized=outcome.normalized or "",
                symbols=[
                    SymbolModel(text=symbol.text, kind=symbol.kind, tone=symbol.tone, stress=symbol.stress)
                    for symbol in outcome.symbols
                ],
                token_ids=list(outcome.token_ids),
            )
        )

    metadata = FrontendMetadata(
        vocabulary_size=resources.vocabulary.size(),
        resources=f"{resources.name}@{resources.version}",
        utterance_count=len(outcomes),
    )
    return FrontendResponse(metadata=metadata, utterances=utterances, errors=errors)
