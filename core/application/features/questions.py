"""
Community questions and answers on product pages.

New questions and community answers wait for moderation; only approved
content is shown on the storefront. Official answers come from staff and
are published straight away.
"""
from typing import List, Optional
from uuid import UUID

from core.application.dtos.question_dto import (
    AnswerDto,
    CreatedDto,
    PendingModerationDto,
    ProductQuestionsDto,
    QuestionDto,
)
from core.application.mediator import Request, RequestHandler, RequestValidator, handles, validates
from core.application.result import Result
from core.application.validation import check_max_length, is_valid_email
from core.domain.entities.question import ProductAnswer, ProductQuestion
from core.domain.enums import ModerationStatus
from core.infrastructure.logging import get_logger

logger = get_logger(__name__)

QUESTION_NOT_FOUND = "Question not found"
MIN_TEXT_LENGTH = 10


class AskQuestionCommand(Request):
    product_id: UUID
    question_text: Optional[str] = None
    asker_name: Optional[str] = None
    asker_email: Optional[str] = None


class AnswerQuestionCommand(Request):
    question_id: UUID
    answer_text: Optional[str] = None
    answerer_name: Optional[str] = None
    is_official: bool = False


class GetProductQuestionsQuery(Request):
    product_id: UUID
    page: int = 1
    page_size: int = 10
    include_unanswered: bool = True


class VoteQuestionHelpfulCommand(Request):
    question_id: UUID


class ModerateQuestionCommand(Request):
    question_id: UUID
    status: ModerationStatus


class ModerateAnswerCommand(Request):
    answer_id: UUID
    status: ModerationStatus


class GetPendingModerationQuery(Request):
    limit: int = 100


@validates(AskQuestionCommand)
class AskQuestionValidator(RequestValidator[AskQuestionCommand]):
    def validate(self, request: AskQuestionCommand) -> List[str]:
        errors: List[str] = []
        text = (request.question_text or "").strip()
        if len(text) < MIN_TEXT_LENGTH:
            errors.append("Question must be at least 10 characters.")
        elif len(text) > 2000:
            errors.append("Question cannot exceed 2000 characters.")
        check_max_length(errors, request.asker_name, "Name", 100)
        if request.asker_email and not is_valid_email(request.asker_email):
            errors.append("Invalid email format")
        return errors


@validates(AnswerQuestionCommand)
class AnswerQuestionValidator(RequestValidator[AnswerQuestionCommand]):
    def validate(self, request: AnswerQuestionCommand) -> List[str]:
        errors: List[str] = []
        text = (request.answer_text or "").strip()
        if len(text) < MIN_TEXT_LENGTH:
            errors.append("Answer must be at least 10 characters.")
        elif len(text) > 5000:
            errors.append("Answer cannot exceed 5000 characters.")
        check_max_length(errors, request.answerer_name, "Name", 100)
        return errors


@validates(GetProductQuestionsQuery)
class GetProductQuestionsValidator(RequestValidator[GetProductQuestionsQuery]):
    def validate(self, request: GetProductQuestionsQuery) -> List[str]:
        errors: List[str] = []
        if request.page < 1:
            errors.append("Page must be at least 1")
        if not 1 <= request.page_size <= 50:
            errors.append("Page size must be between 1 and 50")
        return errors


@handles(AskQuestionCommand)
class AskQuestionHandler(RequestHandler[AskQuestionCommand, Result[CreatedDto]]):
    async def handle(self, request: AskQuestionCommand) -> Result[CreatedDto]:
        async with self.context.uow() as uow:
            product = await uow.products.get(request.product_id)
            if product is None:
                return Result.not_found("Product not found")

            question = ProductQuestion(
                product_id=product.id,
                question_text=request.question_text,
                user_id=self.user.user_id,
                asker_name=request.asker_name,
                asker_email=request.asker_email,
            )
            await uow.questions.save(question)
            await uow.commit()

        logger.info(f"📧 Question {question.id} on {product.sku} awaiting moderation")
        return Result.success(CreatedDto(id=question.id))


@handles(AnswerQuestionCommand)
class AnswerQuestionHandler(RequestHandler[AnswerQuestionCommand, Result[CreatedDto]]):
    async def handle(self, request: AnswerQuestionCommand) -> Result[CreatedDto]:
        if request.is_official and not self.user.is_admin:
            return Result.forbidden("Only administrators can post official answers")

        async with self.context.uow() as uow:
            question = await uow.questions.get(request.question_id)
            if question is None:
                return Result.not_found(QUESTION_NOT_FOUND)

            answer = question.add_answer(
                ProductAnswer(
                    question_id=question.id,
                    answer_text=request.answer_text,
                    user_id=self.user.user_id,
                    answerer_name=request.answerer_name,
                    is_official=request.is_official,
                    status=ModerationStatus.APPROVED if request.is_official else ModerationStatus.PENDING,
                )
            )
            await uow.questions.save(question)
            await uow.commit()

        return Result.success(CreatedDto(id=answer.id))


@handles(GetProductQuestionsQuery)
class GetProductQuestionsHandler(RequestHandler[GetProductQuestionsQuery, Result[ProductQuestionsDto]]):
    async def handle(self, request: GetProductQuestionsQuery) -> Result[ProductQuestionsDto]:
        async with self.context.uow() as uow:
            page = await uow.questions.list_approved(
                request.product_id,
                page=request.page,
                page_size=request.page_size,
                include_unanswered=request.include_unanswered,
            )

        return Result.success(
            ProductQuestionsDto(
                product_id=request.product_id,
                total_questions=page.total_questions,
                answered_questions=page.answered_questions,
                page=request.page,
                page_size=request.page_size,
                questions=[QuestionDto.from_entity(q) for q in page.questions],
            )
        )


@handles(VoteQuestionHelpfulCommand)
class VoteQuestionHelpfulHandler(RequestHandler[VoteQuestionHelpfulCommand, Result[QuestionDto]]):
    async def handle(self, request: VoteQuestionHelpfulCommand) -> Result[QuestionDto]:
        async with self.context.uow() as uow:
            question = await uow.questions.get(request.question_id)
            if question is None or question.status != ModerationStatus.APPROVED:
                return Result.not_found(QUESTION_NOT_FOUND)

            question.add_helpful_vote()
            await uow.questions.save(question)
            await uow.commit()

        return Result.success(QuestionDto.from_entity(question))


@handles(ModerateQuestionCommand)
class ModerateQuestionHandler(RequestHandler[ModerateQuestionCommand, Result[QuestionDto]]):
    async def handle(self, request: ModerateQuestionCommand) -> Result[QuestionDto]:
        if not self.user.is_admin:
            return Result.forbidden()

        async with self.context.uow() as uow:
            question = await uow.questions.get(request.question_id)
            if question is None:
                return Result.not_found(QUESTION_NOT_FOUND)

            question.set_status(request.status)
            await uow.questions.save(question)
            await uow.commit()

        logger.info(f"Question {question.id} moderated: {request.status.value}")
        return Result.success(QuestionDto.from_entity(question, approved_only=False))


@handles(ModerateAnswerCommand)
class ModerateAnswerHandler(RequestHandler[ModerateAnswerCommand, Result[AnswerDto]]):
    async def handle(self, request: ModerateAnswerCommand) -> Result[AnswerDto]:
        if not self.user.is_admin:
            return Result.forbidden()

        async with self.context.uow() as uow:
            question = await uow.questions.get_by_answer(request.answer_id)
            answer = question.get_answer(request.answer_id) if question else None
            if answer is None:
                return Result.not_found("Answer not found")

            answer.set_status(request.status)
            await uow.questions.save(question)
            await uow.commit()

        return Result.success(AnswerDto.from_entity(answer))


@handles(GetPendingModerationQuery)
class GetPendingModerationHandler(RequestHandler[GetPendingModerationQuery, Result[PendingModerationDto]]):
    async def handle(self, request: GetPendingModerationQuery) -> Result[PendingModerationDto]:
        if not self.user.is_admin:
            return Result.forbidden()

        async with self.context.uow() as uow:
            questions = await uow.questions.list_pending_questions(request.limit)
            answers = await uow.questions.list_pending_answers(request.limit)

        return Result.success(
            PendingModerationDto(
                questions=[QuestionDto.from_entity(q, approved_only=False) for q in questions],
                answers=[AnswerDto.from_entity(a) for a in answers],
                total_pending=len(questions) + len(answers),
            )
        )
