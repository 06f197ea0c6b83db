"""Application DTOs for product questions and answers."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from core.domain.entities.question import ProductAnswer, ProductQuestion

ANONYMOUS_ASKER = "Anonymous"
OFFICIAL_ANSWERER = "ClimaSite Support"
COMMUNITY_ANSWERER = "Community Member"


class AnswerDto(BaseModel):
    id: UUID
    question_id: UUID
    answer_text: str
    answerer_name: str
    is_official: bool
    status: str
    helpful_count: int
    unhelpful_count: int
    helpful_percentage: float
    created_at: datetime

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, answer: ProductAnswer) -> "AnswerDto":
        default_name = OFFICIAL_ANSWERER if answer.is_official else COMMUNITY_ANSWERER
        return cls(
            id=answer.id,
            question_id=answer.question_id,
            answer_text=answer.answer_text,
            answerer_name=answer.answerer_name or default_name,
            is_official=answer.is_official,
            status=answer.status.value,
            helpful_count=answer.helpful_count,
            unhelpful_count=answer.unhelpful_count,
            helpful_percentage=round(answer.helpful_percentage, 2),
            created_at=answer.created_at,
        )


class QuestionDto(BaseModel):
    """A question with its approved answers (official first, then most helpful)."""

    id: UUID
    product_id: UUID
    question_text: str
    asker_name: str
    status: str
    helpful_count: int
    created_at: datetime
    answered_at: Optional[datetime] = None
    answer_count: int
    answers: List[AnswerDto] = Field(default_factory=list)

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, question: ProductQuestion, approved_only: bool = True) -> "QuestionDto":
        answers = question.approved_answers if approved_only else list(question.answers)
        ordered = sorted(
            answers,
            key=lambda a: (not a.is_official, -a.helpful_count, a.created_at),
        )
        return cls(
            id=question.id,
            product_id=question.product_id,
            question_text=question.question_text,
            asker_name=question.asker_name or ANONYMOUS_ASKER,
            status=question.status.value,
            helpful_count=question.helpful_count,
            created_at=question.created_at,
            answered_at=question.answered_at,
            answer_count=len(answers),
            answers=[AnswerDto.from_entity(a) for a in ordered],
        )


class ProductQuestionsDto(BaseModel):
    product_id: UUID
    total_questions: int
    answered_questions: int
    page: int
    page_size: int
    questions: List[QuestionDto] = Field(default_factory=list)

    model_config = {"frozen": True}


class PendingModerationDto(BaseModel):
    questions: List[QuestionDto] = Field(default_factory=list)
    answers: List[AnswerDto] = Field(default_factory=list)
    total_pending: int = 0

    model_config = {"frozen": True}


class CreatedDto(BaseModel):
    """Identifier of a newly created record."""

    id: UUID

    model_config = {"frozen": True}
