# keymantra/endpoints/recitation.py
from fastapi import APIRouter, HTTPException, Depends
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from keymantra.models.course import QuestionRecord
from keymantra.services.course_service import course_service
from keymantra.utils.db import get_db

router = APIRouter()

@router.get("/{course_id}", response_model=List[QuestionRecord])
async def get_flashcards(course_id: int, db: AsyncSession = Depends(get_db)):
    """Full question/answer list; the client hides answers until a card is held."""
    if not await course_service.get_course(db, course_id):
        raise HTTPException(status_code=404, detail="Course not found")
    return await course_service.get_questions_with_answers(db, course_id)
