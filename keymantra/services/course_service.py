# keymantra/services/course_service.py
from typing import List, Optional, Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from keymantra.models.course import CourseOut, QuestionRecord
from keymantra.models.tables import Answer, Course, CourseQuestion, Question, QuestionAnswer
from keymantra.utils.logger import logger


class DataAccessError(Exception):
    """Raised when the database rejects or fails an operation."""


class DuplicateEntryError(DataAccessError):
    """Raised when a course link or sort order already exists."""


class CourseService:
    async def list_courses(self, session: AsyncSession) -> List[CourseOut]:
        result = await session.execute(select(Course).order_by(Course.id.asc()))
        return [_course_out(c) for c in result.scalars().all()]

    async def get_course(self, session: AsyncSession, course_id: int) -> Optional[CourseOut]:
        course = await session.get(Course, course_id)
        return _course_out(course) if course else None

    async def create_course(self, session: AsyncSession, name: str, description: Optional[str]) -> CourseOut:
        course = Course(name=name, description=description)
        try:
            session.add(course)
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception(f"Failed to create course '{name}': {e}")
            raise DataAccessError("Failed to create course") from e
        logger.info(f"Created course {course.id} '{name}'.")
        return _course_out(course)

    async def delete_course(self, session: AsyncSession, course_id: int) -> bool:
        """Deletes a course and its question links. The questions themselves are kept."""
        course = await session.get(Course, course_id)
        if not course:
            return False
        try:
            await session.execute(delete(CourseQuestion).where(CourseQuestion.course_id == course_id))
            await session.delete(course)
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception(f"Failed to delete course {course_id}: {e}")
            raise DataAccessError("Failed to delete course") from e
        logger.info(f"Deleted course {course_id}.")
        return True

    async def add_question(self, session: AsyncSession, course_id: int, title: str,
                           answer_content: Optional[str] = None,
                           sort_order: Optional[int] = None) -> QuestionRecord:
        """
        Creates a question (and its answer, when given) and appends it to a course.
        Without an explicit sort order the question goes after the current last one.
        """
        try:
            if sort_order is None:
                result = await session.execute(
                    select(func.max(CourseQuestion.sort_order)).where(CourseQuestion.course_id == course_id)
                )
                sort_order = (result.scalar() or 0) + 1

            question = Question(title=title)
            session.add(question)
            await session.flush()

            if answer_content is not None:
                answer = Answer(content=answer_content)
                session.add(answer)
                await session.flush()
                session.add(QuestionAnswer(question_id=question.id, answer_id=answer.id))

            session.add(CourseQuestion(course_id=course_id, question_id=question.id, sort_order=sort_order))
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            logger.warning(f"Sort order {sort_order} is already taken in course {course_id}.")
            raise DuplicateEntryError(f"Sort order {sort_order} already exists in course {course_id}") from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception(f"Failed to add question to course {course_id}: {e}")
            raise DataAccessError("Failed to add question") from e

        logger.info(f"Added question {question.id} to course {course_id} at position {sort_order}.")
        return QuestionRecord(id=question.id, sort_position=sort_order, title=title, answer_content=answer_content)

    async def get_question(self, session: AsyncSession, question_id: int) -> Optional[QuestionRecord]:
        """Fetches a question with its (first) answer, outside of any course."""
        first_answer = _first_answer_subquery()
        result = await session.execute(
            select(Question.id, Question.title, Answer.content)
            .outerjoin(first_answer, first_answer.c.question_id == Question.id)
            .outerjoin(Answer, Answer.id == first_answer.c.answer_id)
            .where(Question.id == question_id)
        )
        row = result.first()
        if row is None:
            return None
        return QuestionRecord(id=row.id, title=row.title, answer_content=row.content)

    async def update_question(self, session: AsyncSession, question_id: int,
                              title: Optional[str] = None,
                              answer_content: Optional[str] = None) -> Optional[QuestionRecord]:
        question = await session.get(Question, question_id)
        if not question:
            return None
        try:
            if title is not None:
                question.title = title
            if answer_content is not None:
                result = await session.execute(
                    select(Answer)
                    .join(QuestionAnswer, QuestionAnswer.answer_id == Answer.id)
                    .where(QuestionAnswer.question_id == question_id)
                    .order_by(Answer.id.asc())
                )
                answer = result.scalars().first()
                if answer:
                    answer.content = answer_content
                else:
                    answer = Answer(content=answer_content)
                    session.add(answer)
                    await session.flush()
                    session.add(QuestionAnswer(question_id=question_id, answer_id=answer.id))
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception(f"Failed to update question {question_id}: {e}")
            raise DataAccessError("Failed to update question") from e
        logger.info(f"Updated question {question_id}.")
        return await self.get_question(session, question_id)

    async def delete_question(self, session: AsyncSession, question_id: int) -> bool:
        """Removes a question from every course together with its answers."""
        question = await session.get(Question, question_id)
        if not question:
            return False
        try:
            result = await session.execute(
                select(QuestionAnswer.answer_id).where(QuestionAnswer.question_id == question_id)
            )
            answer_ids = list(result.scalars().all())
            await session.execute(delete(CourseQuestion).where(CourseQuestion.question_id == question_id))
            await session.execute(delete(QuestionAnswer).where(QuestionAnswer.question_id == question_id))
            if answer_ids:
                await session.execute(delete(Answer).where(Answer.id.in_(answer_ids)))
            await session.delete(question)
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception(f"Failed to delete question {question_id}: {e}")
            raise DataAccessError("Failed to delete question") from e
        logger.info(f"Deleted question {question_id}.")
        return True

    async def reorder_course(self, session: AsyncSession, course_id: int, question_ids: Sequence[int]) -> List[QuestionRecord]:
        """
        Rewrites the sort orders of a course to 1..n following `question_ids`.
        The list must name exactly the course's questions, each once.
        """
        result = await session.execute(select(CourseQuestion).where(CourseQuestion.course_id == course_id))
        links = {link.question_id: link for link in result.scalars().all()}
        if len(question_ids) != len(set(question_ids)) or set(question_ids) != set(links):
            raise ValueError("The new order must list every question of the course exactly once")

        try:
            # Park every link below the lowest position in use first so the
            # unique (course_id, sort_order) constraint holds between statements.
            floor = min([0] + [link.sort_order for link in links.values()])
            for i, question_id in enumerate(question_ids):
                links[question_id].sort_order = floor - (i + 1)
            await session.flush()
            for i, question_id in enumerate(question_ids):
                links[question_id].sort_order = i + 1
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.exception(f"Failed to reorder course {course_id}: {e}")
            raise DataAccessError("Failed to reorder course") from e
        logger.info(f"Reordered {len(question_ids)} questions in course {course_id}.")
        return await self.get_questions_with_answers(session, course_id)

    async def get_questions_with_answers(self, session: AsyncSession, course_id: int) -> List[QuestionRecord]:
        """
        Returns the course's questions in learning order (sort order, then id).
        Questions without an answer come back with `answer_content=None`.
        """
        first_answer = _first_answer_subquery()
        try:
            result = await session.execute(
                select(Question.id, CourseQuestion.sort_order, Question.title, Answer.content)
                .select_from(CourseQuestion)
                .join(Question, CourseQuestion.question_id == Question.id)
                .outerjoin(first_answer, first_answer.c.question_id == Question.id)
                .outerjoin(Answer, Answer.id == first_answer.c.answer_id)
                .where(CourseQuestion.course_id == course_id)
                .order_by(CourseQuestion.sort_order.asc(), Question.id.asc())
            )
        except SQLAlchemyError as e:
            logger.exception(f"Failed to load questions for course {course_id}: {e}")
            raise DataAccessError("Failed to load questions") from e
        return [
            QuestionRecord(id=row.id, sort_position=row.sort_order, title=row.title, answer_content=row.content)
            for row in result.all()
        ]


def _first_answer_subquery():
    # One answer per question in practice; the lowest id wins otherwise.
    return (
        select(QuestionAnswer.question_id, func.min(QuestionAnswer.answer_id).label("answer_id"))
        .group_by(QuestionAnswer.question_id)
        .subquery()
    )


def _course_out(course: Course) -> CourseOut:
    return CourseOut(id=course.id, name=course.name, description=course.description)


course_service = CourseService()
