"""Product Q&A endpoints, public and moderation."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from apps.api.deps import get_mediator, require_admin
from apps.api.errors import unwrap
from core.application.dtos.question_dto import (
    AnswerDto,
    CreatedDto,
    PendingModerationDto,
    ProductQuestionsDto,
    QuestionDto,
)
from core.application.features.questions import (
    AnswerQuestionCommand,
    AskQuestionCommand,
    GetPendingModerationQuery,
    GetProductQuestionsQuery,
    ModerateAnswerCommand,
    ModerateQuestionCommand,
    VoteQuestionHelpfulCommand,
)
from core.application.mediator import Mediator
from core.domain.enums import ModerationStatus

router = APIRouter(prefix="/questions", tags=["questions"])
admin_router = APIRouter(prefix="/admin", tags=["admin-questions"], dependencies=[Depends(require_admin)])


class AnswerBody(BaseModel):
    answer_text: str
    answerer_name: Optional[str] = None
    is_official: bool = False


class ModerationBody(BaseModel):
    status: ModerationStatus


@router.post("", response_model=CreatedDto, status_code=status.HTTP_201_CREATED)
async def ask_question(command: AskQuestionCommand, mediator: Mediator = Depends(get_mediator)) -> CreatedDto:
    """Submit a question; it is shown once approved."""
    return unwrap(await mediator.send(command))


@router.post("/{question_id}/answers", response_model=CreatedDto, status_code=status.HTTP_201_CREATED)
async def answer_question(
    question_id: UUID,
    body: AnswerBody,
    mediator: Mediator = Depends(get_mediator),
) -> CreatedDto:
    command = AnswerQuestionCommand(question_id=question_id, **body.model_dump())
    return unwrap(await mediator.send(command))


@router.get("/product/{product_id}", response_model=ProductQuestionsDto)
async def get_product_questions(
    product_id: UUID,
    page: int = Query(default=1),
    page_size: int = Query(default=10),
    include_unanswered: bool = Query(default=True),
    mediator: Mediator = Depends(get_mediator),
) -> ProductQuestionsDto:
    query = GetProductQuestionsQuery(
        product_id=product_id,
        page=page,
        page_size=page_size,
        include_unanswered=include_unanswered,
    )
    return unwrap(await mediator.send(query))


@router.post("/{question_id}/helpful", response_model=QuestionDto)
async def vote_helpful(question_id: UUID, mediator: Mediator = Depends(get_mediator)) -> QuestionDto:
    return unwrap(await mediator.send(VoteQuestionHelpfulCommand(question_id=question_id)))


@admin_router.get("/questions/pending", response_model=PendingModerationDto)
async def get_pending(
    limit: int = Query(default=100, ge=1, le=500),
    mediator: Mediator = Depends(get_mediator),
) -> PendingModerationDto:
    return unwrap(await mediator.send(GetPendingModerationQuery(limit=limit)))


@admin_router.put("/questions/{question_id}/status", response_model=QuestionDto)
async def moderate_question(
    question_id: UUID,
    body: ModerationBody,
    mediator: Mediator = Depends(get_mediator),
) -> QuestionDto:
    return unwrap(await mediator.send(ModerateQuestionCommand(question_id=question_id, status=body.status)))


@admin_router.put("/answers/{answer_id}/status", response_model=AnswerDto)
async def moderate_answer(
    answer_id: UUID,
    body: ModerationBody,
    mediator: Mediator = Depends(get_mediator),
) -> AnswerDto:
    return unwrap(await mediator.send(ModerateAnswerCommand(answer_id=answer_id, status=body.status)))
