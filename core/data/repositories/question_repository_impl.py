"""SQLAlchemy implementation of QuestionRepository."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.entities.question import ProductAnswer, ProductQuestion
from core.domain.enums import ModerationStatus
from core.domain.repositories.question_repository import QuestionPage, QuestionRepository

from ..mappers import AnswerMapper, QuestionMapper
from ..models.question_model import AnswerModel, QuestionModel


class SqlAlchemyQuestionRepository(QuestionRepository):
    """Concrete implementation of QuestionRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, question_id: UUID) -> Optional[ProductQuestion]:
        model = await self._session.get(QuestionModel, question_id)
        return QuestionMapper.to_domain(model) if model else None

    async def get_by_answer(self, answer_id: UUID) -> Optional[ProductQuestion]:
        result = await self._session.execute(
            select(QuestionModel)
            .join(AnswerModel, AnswerModel.question_id == QuestionModel.id)
            .where(AnswerModel.id == answer_id)
        )
        model = result.scalar_one_or_none()
        return QuestionMapper.to_domain(model) if model else None

    async def list_approved(
        self,
        product_id: UUID,
        page: int = 1,
        page_size: int = 10,
        include_unanswered: bool = True,
    ) -> QuestionPage:
        """Approved questions of a product, newest first.

        Both counters are taken after the ``include_unanswered`` filter.

        Args:
            product_id: Product identifier
            page: 1-based page number
            page_size: Questions per page
            include_unanswered: False keeps only answered questions

        Returns:
            QuestionPage with the page of questions and the counters
        """
        query = select(QuestionModel).where(
            QuestionModel.product_id == product_id,
            QuestionModel.status == ModerationStatus.APPROVED.value,
        )
        if not include_unanswered:
            query = query.where(QuestionModel.answered_at.is_not(None))

        total = await self._session.scalar(select(func.count()).select_from(query.subquery()))
        answered = await self._session.scalar(
            select(func.count()).select_from(
                query.where(QuestionModel.answered_at.is_not(None)).subquery()
            )
        )

        result = await self._session.execute(
            query.order_by(QuestionModel.created_at.desc())
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        return QuestionPage(
            questions=[QuestionMapper.to_domain(model) for model in result.scalars().all()],
            total_questions=total or 0,
            answered_questions=answered or 0,
        )

    async def list_pending_questions(self, limit: int = 100) -> List[ProductQuestion]:
        result = await self._session.execute(
            select(QuestionModel)
            .where(QuestionModel.status == ModerationStatus.PENDING.value)
            .order_by(QuestionModel.created_at)
            .limit(limit)
        )
        return [QuestionMapper.to_domain(model) for model in result.scalars().all()]

    async def list_pending_answers(self, limit: int = 100) -> List[ProductAnswer]:
        result = await self._session.execute(
            select(AnswerModel)
            .where(AnswerModel.status == ModerationStatus.PENDING.value)
            .order_by(AnswerModel.created_at)
            .limit(limit)
        )
        return [AnswerMapper.to_domain(model) for model in result.scalars().all()]

    async def save(self, question: ProductQuestion) -> None:
        existing = await self._session.get(QuestionModel, question.id)

        if existing:
            QuestionMapper.update_persistence(question, existing)
        else:
            self._session.add(QuestionMapper.to_persistence(question))

        await self._session.flush()
