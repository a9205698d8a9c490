"""Mix execution domain exports."""

from .document_loading import expand_input_pattern, load_job_documents, load_schema_document
from .mix_contracts import LoadedDocuments, MixOutcome, MixRequest
from .mix_use_case import MixExecutionError, execute_mix_jobs, execute_mix_request
from .schema_composition import GENERATED_BANNER, compose_documents, with_generated_banner

__all__ = [
    "GENERATED_BANNER",
    "LoadedDocuments",
    "MixExecutionError",
    "MixOutcome",
    "MixRequest",
    "compose_documents",
    "execute_mix_jobs",
    "execute_mix_request",
    "expand_input_pattern",
    "load_job_documents",
    "load_schema_document",
    "with_generated_banner",
]
