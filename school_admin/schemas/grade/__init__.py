from .base import GradeInDB, Score
from .requests import GradeRecordRequest
from .responses import GradeResponse
