from pydantic import Field, field_validator
from typing import Optional

from ..common.base import CamelModel
from .base import Score

class GradeRecordRequest(CamelModel):
    student_id: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1, max_length=100)
    score: Score
    term: Optional[str] = Field(None, max_length=50)

    @field_validator('score')
    @classmethod
    def validate_score(cls, v):
        if isinstance(v, str) and not v.strip():
            raise ValueError("score must not be empty")
        return v.strip() if isinstance(v, str) else v

    @field_validator('term')
    @classmethod
    def blank_term_is_none(cls, v):
        return v or None

    model_config = {
        "json_schema_extra": {
            "example": {
                "studentId": "user3",
                "subject": "Mathematics",
                "score": "A+",
                "term": "Midterm"
            }
        }
    }
