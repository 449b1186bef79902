from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Generic, List, Literal, Optional, TypeVar, Union
from .constants import Difficulty, HintType, TIME_PER_QUESTION

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class CountryRecord(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    country: str
    capital: str
    difficulty: Difficulty
    fact: str

class Question(CamelModel):
    id: int
    country: str
    correct_capital: str
    alternatives: List[str]
    fact: str
    time_remaining: int

class PublicQuestion(CamelModel):
    """What a client sees of a question: no answer, no fact."""
    id: int
    country: str
    alternatives: List[str]
    time_remaining: int

    @classmethod
    def from_question(cls, question: Question) -> "PublicQuestion":
        return cls(
            id=question.id,
            country=question.country,
            alternatives=list(question.alternatives),
            time_remaining=question.time_remaining,
        )

class AnswerRecord(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    question_id: int
    selected_answer: Optional[str] = None
    is_correct: bool
    points_earned: int
    time_spent: int

class QuizResult(CamelModel):
    session_id: str
    difficulty: Difficulty
    question_quantity: int
    total_score: int
    correct_answers: int
    incorrect_answers: int
    accuracy_percentage: float
    performance_message: str
    completed_at: datetime

class QuestionView(CamelModel):
    question: PublicQuestion
    progress: str
    hints_available: int

class AnswerFeedback(CamelModel):
    is_correct: bool
    correct_answer: str
    points_earned: int
    message: str
    is_last_question: bool

class HintResult(CamelModel):
    hint_type: HintType
    hint_data: Union[List[str], str]
    hints_remaining: int

class StartQuizRequest(CamelModel):
    difficulty: Difficulty
    question_quantity: Literal[5, 10, 15, 20]

class StartQuizResponse(CamelModel):
    id: str
    difficulty: Difficulty
    question_quantity: int
    hints_available: int

class SubmitAnswerRequest(CamelModel):
    question_id: int = Field(gt=0)
    selected_answer: Optional[str] = None
    time_spent: int = Field(ge=0, le=TIME_PER_QUESTION)

class UseHintRequest(CamelModel):
    question_id: int = Field(gt=0)
    hint_type: HintType

class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str

DataT = TypeVar("DataT")

class ResponseMetadata(BaseModel):
    timestamp: str

class SuccessResponse(BaseModel, Generic[DataT]):
    success: bool = True
    data: DataT
    metadata: ResponseMetadata
