from typing import Dict

from ..models import Environment, SearchPayload, UploadPayload


def build_embedding_text(payload: UploadPayload) -> str:
    """Fingerprint used for retrieval. Environment fields are left out on purpose."""
    return " ".join([
        payload.problem.error_type,
        payload.problem.error_message,
        payload.problem.agent_summary,
        payload.solution.agent_explanation,
    ])


def build_query_text(payload: SearchPayload) -> str:
    return f"{payload.problem.error_message} {payload.problem.agent_summary}"


def normalize_tag(value: str) -> str:
    return value.lower()


def build_metadata(payload: UploadPayload, created_at: str) -> Dict[str, str]:
    return {
        "error_type": payload.problem.error_type,
        "error_message": payload.problem.error_message,
        "agent_summary": payload.problem.agent_summary,
        "solution_payload": payload.solution.solution_payload,
        "agent_explanation": payload.solution.agent_explanation,
        "language": normalize_tag(payload.environment.language),
        "primary_library": normalize_tag(payload.environment.primary_library),
        "created_at": created_at,
    }


def build_environment_filter(environment: Environment) -> Dict[str, Dict[str, str]]:
    """Exact-match metadata filter on the lowercased environment tags."""
    return {
        "language": {"$eq": normalize_tag(environment.language)},
        "primary_library": {"$eq": normalize_tag(environment.primary_library)},
    }
