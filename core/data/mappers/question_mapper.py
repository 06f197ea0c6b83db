"""Static mappers for product questions and answers."""

from core.domain.entities.question import ProductAnswer, ProductQuestion
from core.domain.enums import ModerationStatus

from ..models.question_model import AnswerModel, QuestionModel
from .collections import sync_children


class AnswerMapper:
    """Static mapper for ProductAnswer ↔ AnswerModel transformation."""

    @staticmethod
    def to_domain(model: AnswerModel) -> ProductAnswer:
        return ProductAnswer(
            id=model.id,
            question_id=model.question_id,
            user_id=model.user_id,
            answer_text=model.answer_text,
            answerer_name=model.answerer_name,
            is_official=model.is_official,
            status=ModerationStatus(model.status),
            helpful_count=model.helpful_count,
            unhelpful_count=model.unhelpful_count,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(entity: ProductAnswer) -> AnswerModel:
        model = AnswerModel(id=entity.id, created_at=entity.created_at)
        return AnswerMapper.update_persistence(entity, model)

    @staticmethod
    def update_persistence(entity: ProductAnswer, model: AnswerModel) -> AnswerModel:
        model.user_id = entity.user_id
        model.answer_text = entity.answer_text
        model.answerer_name = entity.answerer_name
        model.is_official = entity.is_official
        model.status = entity.status.value
        model.helpful_count = entity.helpful_count
        model.unhelpful_count = entity.unhelpful_count
        model.updated_at = entity.updated_at
        return model


class QuestionMapper:
    """Static mapper for ProductQuestion ↔ QuestionModel with nested answers."""

    @staticmethod
    def to_domain(model: QuestionModel) -> ProductQuestion:
        return ProductQuestion(
            id=model.id,
            product_id=model.product_id,
            user_id=model.user_id,
            question_text=model.question_text,
            asker_name=model.asker_name,
            asker_email=model.asker_email,
            status=ModerationStatus(model.status),
            helpful_count=model.helpful_count,
            answered_at=model.answered_at,
            answers=[AnswerMapper.to_domain(answer) for answer in model.answers],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(entity: ProductQuestion) -> QuestionModel:
        model = QuestionModel(id=entity.id, product_id=entity.product_id, created_at=entity.created_at)
        model.answers = []
        return QuestionMapper.update_persistence(entity, model)

    @staticmethod
    def update_persistence(entity: ProductQuestion, model: QuestionModel) -> QuestionModel:
        model.user_id = entity.user_id
        model.question_text = entity.question_text
        model.asker_name = entity.asker_name
        model.asker_email = entity.asker_email
        model.status = entity.status.value
        model.helpful_count = entity.helpful_count
        model.answered_at = entity.answered_at
        model.updated_at = entity.updated_at
        model.answers = sync_children(
            model.answers,
            entity.answers,
            key=lambda a: a.id,
            create=AnswerMapper.to_persistence,
            update=AnswerMapper.update_persistence,
        )
        return model
