from datetime import datetime
from typing import Any, Dict, List, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

# -------------------------
# UPLOAD / SEARCH PAYLOADS
# -------------------------

class ProblemReport(BaseModel):
    error_type: str = Field(min_length=1)
    error_message: str = Field(min_length=1)
    agent_summary: str = Field(min_length=1)


class Environment(BaseModel):
    language: str = Field(min_length=1)
    primary_library: str = Field(min_length=1)


class Solution(BaseModel):
    solution_payload: str = Field(min_length=1)
    agent_explanation: str = Field(min_length=1)


class UploadPayload(BaseModel):
    problem: ProblemReport
    environment: Environment
    solution: Solution


class SearchProblem(BaseModel):
    error_message: str = Field(min_length=1)
    agent_summary: str = Field(min_length=1)


class SearchPayload(BaseModel):
    problem: SearchProblem
    environment: Environment


# -------------------------
# SEARCH RESULTS
# -------------------------

class ResultProblem(BaseModel):
    error_type: str = ""
    title: str = ""
    description: str = ""


class ResultSolution(BaseModel):
    solution_payload: str = ""
    agent_explanation: str = ""


class ResultEnvironment(BaseModel):
    language: str = ""
    primary_library: Optional[str] = None


class SearchResult(BaseModel):
    bugId: str
    score: float = 0.0
    solution: ResultSolution
    environment: ResultEnvironment
    problem: ResultProblem

    @classmethod
    def from_metadata(cls, bug_id: str, score: Optional[float], metadata: Optional[Dict[str, Any]]) -> "SearchResult":
        """Rebuild a result from index metadata; title/description carry agent_summary/error_message."""
        meta = metadata or {}
        return cls(
            bugId=bug_id,
            score=float(score or 0),
            solution=ResultSolution(
                solution_payload=str(meta.get("solution_payload") or ""),
                agent_explanation=str(meta.get("agent_explanation") or ""),
            ),
            environment=ResultEnvironment(
                language=str(meta.get("language") or ""),
                primary_library=meta.get("primary_library") or None,
            ),
            problem=ResultProblem(
                error_type=str(meta.get("error_type") or ""),
                title=str(meta.get("agent_summary") or ""),
                description=str(meta.get("error_message") or ""),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class LookupOutcome(BaseModel):
    """Tagged result of a point lookup: found, not_found or failed."""

    status: Literal["found", "not_found", "failed"]
    result: Optional[SearchResult] = None
    error: Optional[str] = None


# -------------------------
# FALLBACK STORE
# -------------------------

class UploadInput(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=500)
    code: str = Field(min_length=1)
    tags: List[str] = Field(min_length=1, max_length=5)


class SearchInput(BaseModel):
    query: str = Field(min_length=1)


class Entry(BaseModel):
    id: str
    title: str
    description: str
    code: str
    tags: List[str]
    createdAt: datetime


# -------------------------
# VALIDATION
# -------------------------

M = TypeVar("M", bound=BaseModel)


def parse_payload(model: Type[M], data: Any) -> M:
    """Validate *data* against *model*, raising ValidationError with one line per issue."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        lines = []
        for err in e.errors():
            path = ".".join(str(part) for part in err["loc"]) or "payload"
            lines.append(f"{path}: {err['msg']}")
        raise ValidationError("\n".join(lines)) from e
