# src/contract_kit/observability/names.py

"""Standard metric names for contract-kit observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
"""

# ============================================================================
# Segmentation & Chunking Metrics
# ============================================================================

# Duration
SEGMENTATION_DURATION = "segmentation_duration"
CHUNKING_DURATION = "chunking_duration"

# Counters
SEGMENTATION_SECTIONS_FOUND = "segmentation_sections_found"
CHUNKING_CHUNKS_CREATED = "chunking_chunks_created"
CHUNKING_CHUNKS_DROPPED = "chunking_chunks_dropped"


# ============================================================================
# Coverage Budgeting Metrics
# ============================================================================

# Duration
BUDGETING_DURATION = "budgeting_duration"

# Counters
BUDGETING_REQUESTS_TOTAL = "budgeting_requests_total"

# Gauges
BUDGETING_COVERAGE = "budgeting_coverage"


# ============================================================================
# Relevance Ranking Metrics
# ============================================================================

# Duration
RANKING_DURATION = "ranking_duration"

# Counters
RANKING_REQUESTS_TOTAL = "ranking_requests_total"
RANKING_BATCH_FAILURES = "ranking_embedding_batch_failures"
RANKING_FALLBACKS_TOTAL = "ranking_fallbacks_total"

# Gauges
RANKING_CANDIDATES = "ranking_candidates"


# ============================================================================
# Extraction Metrics
# ============================================================================

# Duration
EXTRACTION_DURATION = "extraction_duration"

# Counters
EXTRACTION_REQUESTS_TOTAL = "extraction_requests_total"
EXTRACTION_CHUNK_CALLS_TOTAL = "extraction_chunk_calls_total"
EXTRACTION_CHUNK_FAILURES = "extraction_chunk_failures"
EXTRACTION_BACKEND_ERRORS = "extraction_backend_errors"
EXTRACTION_FALLBACKS_TOTAL = "extraction_fallbacks_total"
EXTRACTION_QUOTA_ERRORS = "extraction_quota_errors"
EXTRACTION_DEGRADED_TOTAL = "extraction_degraded_total"

# Gauges
EXTRACTION_CONFIDENCE = "extraction_confidence"


# ============================================================================
# LLM Metrics
# ============================================================================

# Duration
LLM_COMPLETION_DURATION = "llm_completion_duration"

# Counters
LLM_REQUESTS_TOTAL = "llm_requests_total"

# Counters (token usage - monotonic over time for cost/rate tracking)
LLM_TOKENS_PROMPT = "llm_tokens_prompt"
LLM_TOKENS_COMPLETION = "llm_tokens_completion"
LLM_TOKENS_TOTAL = "llm_tokens_total"


# ============================================================================
# Embeddings Metrics
# ============================================================================

# Duration
EMBEDDINGS_DURATION = "embeddings_duration"

# Counters
EMBEDDINGS_REQUESTS_TOTAL = "embeddings_requests_total"
EMBEDDINGS_ERRORS_TOTAL = "embeddings_errors_total"
