# keymantra/models/tables.py
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    ForeignKey,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base
from datetime import datetime


Base = declarative_base()


class User(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True, index=True)  # Identity provider's user id
    email = Column(String, nullable=False, default="")
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class Course(Base):
    __tablename__ = "courses"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class Question(Base):
    __tablename__ = "questions"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class Answer(Base):
    __tablename__ = "answers"
    id = Column(Integer, primary_key=True, index=True)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)


class QuestionAnswer(Base):
    __tablename__ = "question_answers"
    question_id = Column(Integer, ForeignKey("questions.id"), primary_key=True)
    answer_id = Column(Integer, ForeignKey("answers.id"), primary_key=True)


class CourseQuestion(Base):
    __tablename__ = "course_questions"
    __table_args__ = (
        UniqueConstraint("course_id", "question_id", name="uq_course_question"),
        UniqueConstraint("course_id", "sort_order", name="uq_course_sort_order"),
    )
    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("questions.id"), nullable=False, index=True)
    sort_order = Column(Integer, nullable=False)
