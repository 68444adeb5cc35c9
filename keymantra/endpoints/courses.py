# Endpoints for managing courses and the ordered questions inside them
# keymantra/endpoints/courses.py
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from keymantra.models.course import CourseOut, QuestionRecord
from keymantra.services.course_service import course_service
from keymantra.utils.db import get_db

router = APIRouter()

class CourseCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Course name must not be blank")
        return v

class QuestionCreate(BaseModel):
    title: str = Field(..., min_length=1)
    answer_content: Optional[str] = None
    sort_order: Optional[int] = Field(None, description="Position in the course; appended at the end when omitted.")

class QuestionOrder(BaseModel):
    question_ids: List[int]


async def _require_course(db: AsyncSession, course_id: int) -> CourseOut:
    course = await course_service.get_course(db, course_id)
    if not course:
        raise HTTPException(status_code=404, detail="Course not found")
    return course


@router.get("/", response_model=List[CourseOut])
async def list_courses(db: AsyncSession = Depends(get_db)):
    return await course_service.list_courses(db)

@router.post("/", response_model=CourseOut, status_code=201)
async def create_course(course: CourseCreate, db: AsyncSession = Depends(get_db)):
    return await course_service.create_course(db, course.name, course.description)

@router.get("/{course_id}", response_model=CourseOut)
async def get_course(course_id: int, db: AsyncSession = Depends(get_db)):
    return await _require_course(db, course_id)

@router.delete("/{course_id}")
async def delete_course(course_id: int, db: AsyncSession = Depends(get_db)):
    if not await course_service.delete_course(db, course_id):
        raise HTTPException(status_code=404, detail="Course not found")
    return {"message": "Course deleted"}

@router.get("/{course_id}/questions", response_model=List[QuestionRecord])
async def list_course_questions(course_id: int, db: AsyncSession = Depends(get_db)):
    await _require_course(db, course_id)
    return await course_service.get_questions_with_answers(db, course_id)

@router.post("/{course_id}/questions", response_model=QuestionRecord, status_code=201)
async def add_question(course_id: int, question: QuestionCreate, db: AsyncSession = Depends(get_db)):
    await _require_course(db, course_id)
    return await course_service.add_question(
        db, course_id, question.title, question.answer_content, question.sort_order
    )

@router.put("/{course_id}/questions/order", response_model=List[QuestionRecord])
async def reorder_questions(course_id: int, order: QuestionOrder, db: AsyncSession = Depends(get_db)):
    await _require_course(db, course_id)
    try:
        return await course_service.reorder_course(db, course_id, order.question_ids)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
