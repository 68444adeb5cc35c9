# keymantra/endpoints/dictation.py
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from keymantra.dictation.matcher import Verdict, check
from keymantra.dictation.tokens import segment
from keymantra.dictation.tracker import InputTracker
from keymantra.services.course_service import course_service
from keymantra.utils.config import settings
from keymantra.utils.db import get_db
from keymantra.utils.logger import logger

router = APIRouter()

class DeckEntry(BaseModel):
    id: int
    sort_position: int
    title: str
    token_count: int
    playable: bool

class DictationDeck(BaseModel):
    course_id: int
    questions: List[DeckEntry]

class CheckRequest(BaseModel):
    question_id: int
    user_input: str
    caret: Optional[int] = None  # Defaults to the end of the input

class CheckResponse(BaseModel):
    verdicts: List[Verdict]
    all_correct: bool
    active_slot: int
    expected_tokens: List[str]
    extra_tokens: int


async def _deck(db: AsyncSession, course_id: int) -> DictationDeck:
    if not await course_service.get_course(db, course_id):
        raise HTTPException(status_code=404, detail="Course not found")
    records = await course_service.get_questions_with_answers(db, course_id)
    entries = []
    for record in records:
        token_count = len(segment(record.answer_content))
        entries.append(DeckEntry(
            id=record.id,
            sort_position=record.sort_position,
            title=record.title,
            token_count=token_count,
            playable=token_count > 0,
        ))
    return DictationDeck(course_id=course_id, questions=entries)

@router.get("/", response_model=DictationDeck)
async def get_default_deck(db: AsyncSession = Depends(get_db)):
    return await _deck(db, settings.default_course_id)

@router.get("/{course_id}", response_model=DictationDeck)
async def get_deck(course_id: int, db: AsyncSession = Depends(get_db)):
    """Lists a course's questions for dictation without giving the answers away."""
    return await _deck(db, course_id)

@router.post("/check", response_model=CheckResponse)
async def check_answer(request: CheckRequest, db: AsyncSession = Depends(get_db)):
    question = await course_service.get_question(db, request.question_id)
    if not question:
        raise HTTPException(status_code=404, detail="Question not found")

    expected = segment(question.answer_content)
    if not expected:
        logger.warning(f"Check requested for question {question.id}, which has no answer content.")
        raise HTTPException(status_code=422, detail="Question has no answer to dictate")

    tracker = InputTracker(expected_count=len(expected))
    tracker.edit(request.user_input, request.caret)
    result = check(expected, tracker.user_tokens, settings.ignored_punctuation)
    logger.debug(f"Checked question {question.id}: all_correct={result.all_correct}")

    return CheckResponse(
        verdicts=result.verdicts,
        all_correct=result.all_correct,
        active_slot=tracker.active_slot,
        expected_tokens=expected,
        extra_tokens=result.extra_tokens,
    )
