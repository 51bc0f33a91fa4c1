from typing import Optional

from ..common.base import CamelModel
from .base import Score

class GradeResponse(CamelModel):
    id: str
    student_id: str
    class_id: str
    subject: str
    score: Score
    term: Optional[str] = None
    school_id: str
