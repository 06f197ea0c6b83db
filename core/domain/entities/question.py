"""Product questions and answers (community Q&A)."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from ..clock import utcnow
from ..enums import ModerationStatus
from .rules import optional_text, required_text


@dataclass
class ProductAnswer:
    question_id: UUID
    answer_text: str
    user_id: Optional[UUID] = None
    answerer_name: Optional[str] = None
    is_official: bool = False
    status: ModerationStatus = ModerationStatus.PENDING
    helpful_count: int = 0
    unhelpful_count: int = 0
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.answer_text = required_text(self.answer_text, "Answer text", 5000)
        self.answerer_name = optional_text(self.answerer_name, "Name", 100)

    @property
    def total_votes(self) -> int:
        return self.helpful_count + self.unhelpful_count

    @property
    def helpful_percentage(self) -> float:
        if not self.total_votes:
            return 0.0
        return self.helpful_count / self.total_votes * 100

    def set_status(self, status: ModerationStatus) -> None:
        self.status = status
        self.updated_at = utcnow()


@dataclass
class ProductQuestion:
    """A shopper's question about a product; visible once approved."""
    product_id: UUID
    question_text: str
    user_id: Optional[UUID] = None
    asker_name: Optional[str] = None
    asker_email: Optional[str] = None
    status: ModerationStatus = ModerationStatus.PENDING
    helpful_count: int = 0
    answered_at: Optional[datetime] = None
    answers: List[ProductAnswer] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        self.question_text = required_text(self.question_text, "Question text", 2000)
        self.asker_name = optional_text(self.asker_name, "Name", 100)
        self.asker_email = optional_text(self.asker_email, "Email", 255)

    def add_answer(self, answer: ProductAnswer) -> ProductAnswer:
        self.answers.append(answer)
        if self.answered_at is None:
            self.mark_as_answered()
        return answer

    def get_answer(self, answer_id: UUID) -> Optional[ProductAnswer]:
        return next((a for a in self.answers if a.id == answer_id), None)

    def mark_as_answered(self) -> None:
        self.answered_at = utcnow()
        self.updated_at = self.answered_at

    def set_status(self, status: ModerationStatus) -> None:
        self.status = status
        if status == ModerationStatus.APPROVED and self.answered_at is None and self.answers:
            self.answered_at = utcnow()
        self.updated_at = utcnow()

    def add_helpful_vote(self) -> None:
        self.helpful_count += 1
        self.updated_at = utcnow()

    @property
    def approved_answers(self) -> List[ProductAnswer]:
        return [a for a in self.answers if a.status == ModerationStatus.APPROVED]

    @property
    def has_approved_answer(self) -> bool:
        return bool(self.approved_answers)
