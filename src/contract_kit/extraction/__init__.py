from .backends import ExtractionBackend, LLMExtractionBackend
from .confidence import calculate_confidence, resolve_path
from .config import (
    DEFAULT_QUOTA_MARKERS,
    PRIMARY_BACKEND,
    SECONDARY_BACKEND,
    BackendConfig,
    ExtractionConfig,
)
from .errors import (
    ContractKitError,
    EmptyResponseError,
    ExtractionFailedError,
    InvalidDocumentError,
    QuotaExceededError,
    ResponseParseError,
    UnsupportedSchemaError,
)
from .merge import merge_partial_records
from .models import ExtractionResult
from .orchestrator import ExtractionOrchestrator
from .parsing import parse_json_record, strip_code_fences
from .schemas import (
    BUILTIN_SCHEMAS,
    LEASE_SCHEMA,
    LISTING_SCHEMA,
    PURCHASE_SCHEMA,
    ContractSchema,
    get_schema,
)

__all__ = [
    # Orchestration
    "ExtractionOrchestrator",
    "ExtractionConfig",
    "ExtractionResult",
    # Backends
    "BackendConfig",
    "DEFAULT_QUOTA_MARKERS",
    "PRIMARY_BACKEND",
    "SECONDARY_BACKEND",
    "ExtractionBackend",
    "LLMExtractionBackend",
    # Records
    "calculate_confidence",
    "merge_partial_records",
    "parse_json_record",
    "resolve_path",
    "strip_code_fences",
    # Schemas
    "BUILTIN_SCHEMAS",
    "ContractSchema",
    "LEASE_SCHEMA",
    "LISTING_SCHEMA",
    "PURCHASE_SCHEMA",
    "get_schema",
    # Errors
    "ContractKitError",
    "EmptyResponseError",
    "ExtractionFailedError",
    "InvalidDocumentError",
    "QuotaExceededError",
    "ResponseParseError",
    "UnsupportedSchemaError",
]
