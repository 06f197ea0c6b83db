"""SQLAlchemy ORM models for product questions and answers."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from .base import Base


class QuestionModel(Base):
    """SQLAlchemy ORM model for product_questions table."""

    __tablename__ = "product_questions"

    id = Column(Uuid, primary_key=True)
    product_id = Column(Uuid, ForeignKey("products.id"), nullable=False, index=True)
    user_id = Column(Uuid, nullable=True)
    question_text = Column(Text, nullable=False)
    asker_name = Column(String(100), nullable=True)
    asker_email = Column(String(255), nullable=True)
    status = Column(String(20), nullable=False, default="Pending", index=True)
    helpful_count = Column(Integer, nullable=False, default=0)
    answered_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, nullable=True)

    answers = relationship(
        "AnswerModel",
        back_populates="question",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="AnswerModel.created_at",
    )


class AnswerModel(Base):
    """SQLAlchemy ORM model for product_answers table."""

    __tablename__ = "product_answers"

    id = Column(Uuid, primary_key=True)
    question_id = Column(Uuid, ForeignKey("product_questions.id"), nullable=False, index=True)
    user_id = Column(Uuid, nullable=True)
    answer_text = Column(Text, nullable=False)
    answerer_name = Column(String(100), nullable=True)
    is_official = Column(Boolean, nullable=False, default=False)
    status = Column(String(20), nullable=False, default="Pending", index=True)
    helpful_count = Column(Integer, nullable=False, default=0)
    unhelpful_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)

    question = relationship("QuestionModel", back_populates="answers")
