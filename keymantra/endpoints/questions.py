# keymantra/endpoints/questions.py
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from keymantra.models.course import QuestionRecord
from keymantra.services.course_service import course_service
from keymantra.utils.db import get_db

router = APIRouter()

class QuestionUpdate(BaseModel):
    title: Optional[str] = None
    answer_content: Optional[str] = None

@router.get("/{question_id}", response_model=QuestionRecord)
async def get_question(question_id: int, db: AsyncSession = Depends(get_db)):
    question = await course_service.get_question(db, question_id)
    if not question:
        raise HTTPException(status_code=404, detail="Question not found")
    return question

@router.put("/{question_id}", response_model=QuestionRecord)
async def update_question(question_id: int, update: QuestionUpdate, db: AsyncSession = Depends(get_db)):
    question = await course_service.update_question(db, question_id, update.title, update.answer_content)
    if not question:
        raise HTTPException(status_code=404, detail="Question not found")
    return question

@router.delete("/{question_id}")
async def delete_question(question_id: int, db: AsyncSession = Depends(get_db)):
    if not await course_service.delete_question(db, question_id):
        raise HTTPException(status_code=404, detail="Question not found")
    return {"message": "Question deleted"}
