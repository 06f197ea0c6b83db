"""Repository interface for product questions and answers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional
from uuid import UUID

from ..entities.question import ProductAnswer, ProductQuestion


@dataclass
class QuestionPage:
    questions: List[ProductQuestion] = field(default_factory=list)
    total_questions: int = 0
    answered_questions: int = 0


class QuestionRepository(ABC):

    @abstractmethod
    async def get(self, question_id: UUID) -> Optional[ProductQuestion]:
        pass

    @abstractmethod
    async def get_by_answer(self, answer_id: UUID) -> Optional[ProductQuestion]:
        """Question owning the given answer."""
        pass

    @abstractmethod
    async def list_approved(
        self,
        product_id: UUID,
        page: int = 1,
        page_size: int = 10,
        include_unanswered: bool = True,
    ) -> QuestionPage:
        """Approved questions of a product, newest first."""
        pass

    @abstractmethod
    async def list_pending_questions(self, limit: int = 100) -> List[ProductQuestion]:
        pass

    @abstractmethod
    async def list_pending_answers(self, limit: int = 100) -> List[ProductAnswer]:
        pass

    @abstractmethod
    async def save(self, question: ProductQuestion) -> None:
        pass
