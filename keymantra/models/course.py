# Data models exchanged with API clients
# keymantra/models/course.py
from pydantic import BaseModel
from typing import Optional

class CourseOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None

class QuestionRecord(BaseModel):
    """A question as seen from one course: position, prompt and its answer text."""
    id: int
    sort_position: Optional[int] = None  # None outside of a course context
    title: str
    answer_content: Optional[str] = None

class UserOut(BaseModel):
    user_id: str
    email: str
    name: str
    created: bool
