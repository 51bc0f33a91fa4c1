from pydantic import BaseModel, ConfigDict
from typing import Optional, Union

# Numeric score or letter grade
Score = Union[int, float, str]

class GradeInDB(BaseModel):
    id: str
    student_id: str
    class_id: str
    subject: str
    score: Score
    term: Optional[str] = None
    school_id: str

    model_config = ConfigDict(from_attributes=True)
