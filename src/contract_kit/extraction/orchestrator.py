# src/contract_kit/extraction/orchestrator.py

import asyncio
import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from time import monotonic
from typing import Any

from contract_kit.chunking import chunk_with_overlap
from contract_kit.observability import names
from contract_kit.observability.base import MetricsHook, NoOpMetricsHook
from contract_kit.prompts import Prompt, PromptsLibrary

from .backends import ExtractionBackend, LLMExtractionBackend
from .config import (
    PRIMARY_BACKEND,
    SECONDARY_BACKEND,
    BackendConfig,
    ExtractionConfig,
)
from .errors import (
    EmptyResponseError,
    ExtractionFailedError,
    InvalidDocumentError,
    QuotaExceededError,
    ResponseParseError,
)
from .merge import merge_partial_records
from .models import DEGRADED_SUFFIX, FALLBACK_SUFFIX, ExtractionResult
from .parsing import parse_json_record
from .schemas import BUILTIN_SCHEMAS, ContractSchema, get_schema

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _BackendOutput:
    """Either a raw single-call answer or an already merged chunk record."""

    raw: str | None = None
    record: dict[str, Any] | None = None
    chunk_count: int = 1


class ExtractionOrchestrator:
    """Turn contract text into a schema-shaped record.

    The primary backend is tried first. Documents too large for one call are
    split, extracted chunk by chunk and merged in chunk order. Any primary
    failure other than a quota condition reruns the whole request on the
    secondary backend. Unparseable answers degrade to the schema's empty
    record instead of failing.
    """

    def __init__(
        self,
        primary: ExtractionBackend,
        secondary: ExtractionBackend,
        config: ExtractionConfig = ExtractionConfig(),
        prompts: PromptsLibrary | None = None,
        schemas: Mapping[str, ContractSchema] = BUILTIN_SCHEMAS,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self.primary = primary
        self.secondary = secondary
        self.config = config
        self.prompts = prompts or PromptsLibrary()
        self.schemas = schemas
        self.metrics_hook = metrics_hook

    @classmethod
    def from_config(
        cls,
        primary: BackendConfig = PRIMARY_BACKEND,
        secondary: BackendConfig = SECONDARY_BACKEND,
        config: ExtractionConfig = ExtractionConfig(),
        prompts: PromptsLibrary | None = None,
        schemas: Mapping[str, ContractSchema] = BUILTIN_SCHEMAS,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> "ExtractionOrchestrator":
        """Build both backends from their configs and wire them together."""
        return cls(
            LLMExtractionBackend.from_config(primary, metrics_hook=metrics_hook),
            LLMExtractionBackend.from_config(secondary, metrics_hook=metrics_hook),
            config=config,
            prompts=prompts,
            schemas=schemas,
            metrics_hook=metrics_hook,
        )

    async def extract(self, document: str, contract_type: str) -> ExtractionResult:
        """Extract ``contract_type`` fields from ``document``.

        Raises:
            InvalidDocumentError: Document empty or too short.
            UnsupportedSchemaError: Unknown contract type.
            QuotaExceededError: Primary backend is out of quota.
            ExtractionFailedError: Both backends failed.
        """
        start = monotonic()
        if not document or len(document.strip()) < self.config.min_document_length:
            raise InvalidDocumentError("Contract text is too short or empty")

        schema = get_schema(contract_type, self.schemas)
        prompt = self.prompts.get(schema.prompt_name, schema.prompt_version)

        logger.info(
            "Starting %s extraction: length=%d, estimated_tokens=%d",
            contract_type,
            len(document),
            self._estimate_tokens(document),
        )

        output, backend_used = await self._run_with_fallback(prompt, document)

        degraded = False
        if output.record is not None:
            data = output.record
        else:
            try:
                data = parse_json_record(output.raw or "")
            except ResponseParseError as exc:
                logger.warning("Could not parse %s response: %s", backend_used, exc)
                logger.debug("Raw response: %r", output.raw)
                data = schema.empty_record()
                backend_used += DEGRADED_SUFFIX
                degraded = True
                self.metrics_hook.increment(names.EXTRACTION_DEGRADED_TOTAL)

        result = ExtractionResult(
            data=data,
            backend_used=backend_used,
            required_fields=schema.required_fields,
            degraded=degraded,
            chunk_count=output.chunk_count,
        )

        elapsed_ms = 1000 * (monotonic() - start)
        self.metrics_hook.record_latency(names.EXTRACTION_DURATION, elapsed_ms)
        self.metrics_hook.increment(
            names.EXTRACTION_REQUESTS_TOTAL, labels={"contract_type": contract_type}
        )
        self.metrics_hook.record_gauge(names.EXTRACTION_CONFIDENCE, result.confidence)
        logger.info(
            "Extraction complete using %s. Confidence: %d%%",
            backend_used,
            result.confidence,
        )
        return result

    async def summarize(self, result: ExtractionResult, contract_type: str) -> str:
        """Plain-English summary of an extraction result.

        Uses the backend that produced ``result`` first and the other one if
        that fails.

        Raises:
            UnsupportedSchemaError: Unknown contract type.
            ExtractionFailedError: Neither backend produced a summary.
        """
        get_schema(contract_type, self.schemas)
        prompt = self.prompts.get(*self.config.summary_prompt)
        values = {
            "contract_type": contract_type,
            "extracted_data": json.dumps(result.data, indent=2),
        }
        user_prompt = prompt.render(**values)
        system = prompt.render_system(**values)

        backends = [self.primary, self.secondary]
        if result.backend_used.startswith(self.secondary.name):
            backends.reverse()

        errors: list[BaseException] = []
        for backend in backends:
            try:
                summary = await backend.extract(
                    user_prompt, "", system=system, json_output=False
                )
                if not summary.strip():
                    raise EmptyResponseError(backend.name)
                return summary.strip()
            except Exception as exc:
                logger.warning("Summary with %s failed: %s", backend.name, exc)
                errors.append(exc)

        raise ExtractionFailedError(errors[0], errors[-1])

    async def _run_with_fallback(
        self, prompt: Prompt, document: str
    ) -> tuple[_BackendOutput, str]:
        try:
            output = await self._run_backend(self.primary, prompt, document)
            return output, self.primary.name
        except Exception as exc:
            self.metrics_hook.increment(
                names.EXTRACTION_BACKEND_ERRORS, labels={"backend": self.primary.name}
            )
            if self.primary.is_quota_error(exc):
                logger.warning("%s quota exceeded: %s", self.primary.name, exc)
                self.metrics_hook.increment(names.EXTRACTION_QUOTA_ERRORS)
                raise QuotaExceededError(self.primary.name, exc) from exc
            primary_error = exc

        logger.warning(
            "%s failed (%s), falling back to %s",
            self.primary.name,
            primary_error,
            self.secondary.name,
        )
        self.metrics_hook.increment(names.EXTRACTION_FALLBACKS_TOTAL)

        try:
            output = await self._run_backend(self.secondary, prompt, document)
        except Exception as exc:
            self.metrics_hook.increment(
                names.EXTRACTION_BACKEND_ERRORS, labels={"backend": self.secondary.name}
            )
            logger.error("Both backends failed")
            raise ExtractionFailedError(primary_error, exc) from exc
        return output, self.secondary.name + FALLBACK_SUFFIX

    async def _run_backend(
        self, backend: ExtractionBackend, prompt: Prompt, document: str
    ) -> _BackendOutput:
        system = prompt.render_system()
        schema_prompt = prompt.render()
        opener = self.config.document_opener
        terminator = self.config.document_terminator
        estimated = self._estimate_tokens(system + schema_prompt + document)

        if estimated <= backend.token_limit:
            logger.info(
                "[%s] Processing single request (%d tokens)", backend.name, estimated
            )
            raw = await backend.extract(
                schema_prompt, opener + document + terminator, system=system
            )
            if not raw.strip():
                raise EmptyResponseError(backend.name)
            return _BackendOutput(raw=raw)

        chunks = chunk_with_overlap(
            document,
            chunk_size=backend.max_chunk_chars,
            overlap=0,
            config=self.config.chunking,
            metrics_hook=self.metrics_hook,
        ) or [document]
        logger.info("[%s] Processing %d chunks", backend.name, len(chunks))

        notice = self.prompts.get(*self.config.chunk_notice_prompt)
        calls = [
            backend.extract(
                schema_prompt + notice.render(index=str(i + 1), total=str(len(chunks))),
                opener + chunk + terminator,
                system=system,
            )
            for i, chunk in enumerate(chunks)
        ]
        self.metrics_hook.increment(
            names.EXTRACTION_CHUNK_CALLS_TOTAL, len(calls), labels={"backend": backend.name}
        )

        if self.config.concurrent_chunks:
            outcomes = await asyncio.gather(*calls, return_exceptions=True)
        else:
            outcomes = []
            for call in calls:
                try:
                    outcomes.append(await call)
                except Exception as exc:
                    outcomes.append(exc)

        failures = [o for o in outcomes if isinstance(o, BaseException)]
        if len(failures) == len(outcomes):
            raise failures[0]

        # Merge strictly in chunk order, whatever order the calls finished in
        records: list[dict[str, Any]] = []
        parsed = 0
        for i, outcome in enumerate(outcomes):
            if isinstance(outcome, BaseException):
                logger.warning(
                    "[%s] Chunk %d/%d failed: %s", backend.name, i + 1, len(chunks), outcome
                )
                self.metrics_hook.increment(names.EXTRACTION_CHUNK_FAILURES)
                records.append({})
                continue
            try:
                records.append(parse_json_record(outcome))
                parsed += 1
            except ResponseParseError as exc:
                logger.warning(
                    "[%s] Failed to parse chunk %d/%d response: %s",
                    backend.name,
                    i + 1,
                    len(chunks),
                    exc,
                )
                self.metrics_hook.increment(names.EXTRACTION_CHUNK_FAILURES)
                records.append({})

        if not parsed:
            # Nothing usable came back; let the parse step fall back to defaults
            return _BackendOutput(raw="", chunk_count=len(chunks))
        return _BackendOutput(
            record=merge_partial_records(records), chunk_count=len(chunks)
        )

    def _estimate_tokens(self, text: str) -> int:
        return math.ceil(len(text) / self.config.chars_per_token)
