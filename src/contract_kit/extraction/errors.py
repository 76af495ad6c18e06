# src/contract_kit/extraction/errors.py


class ContractKitError(Exception):
    """Base class for errors raised by the extraction pipeline."""


class InvalidDocumentError(ContractKitError):
    """The document is empty or too short to analyze."""


class UnsupportedSchemaError(ContractKitError):
    """No schema is registered under the requested contract type."""

    def __init__(self, contract_type: str) -> None:
        super().__init__(f"Unsupported contract type: {contract_type!r}")
        self.contract_type = contract_type


class EmptyResponseError(ContractKitError):
    """A backend answered with no content."""

    def __init__(self, backend: str) -> None:
        super().__init__(f"{backend} returned an empty response")
        self.backend = backend


class ResponseParseError(ContractKitError):
    """Backend output could not be coerced into a JSON object."""


class QuotaExceededError(ContractKitError):
    """The primary backend reported a quota or rate-limit condition.

    Raised instead of falling back: the secondary backend would not fix a
    quota problem and would spend its own quota too.
    """

    def __init__(self, backend: str, error: BaseException) -> None:
        super().__init__(
            f"{backend} quota exceeded. Please wait a few minutes and try again."
        )
        self.backend = backend
        self.error = error


class ExtractionFailedError(ContractKitError):
    """Both backends failed for the same request."""

    def __init__(self, primary_error: BaseException, fallback_error: BaseException) -> None:
        super().__init__(
            "Analysis failed with both backends. "
            f"Primary error: {primary_error}; fallback error: {fallback_error}"
        )
        self.primary_error = primary_error
        self.fallback_error = fallback_error
