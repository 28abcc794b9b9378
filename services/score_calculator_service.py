"""
Score Calculator Service
"""

from typing import Dict, List, Optional, Tuple

from models.question import Question
from models.score import CategoryResult, Score
from services.score_history_service import ScoreHistoryService


class ScoreCalculatorService:
    """
    Scores submitted exams: correctness, percentage and per-category breakdown
    """

    def __init__(self, history: ScoreHistoryService):
        self.history = history

    @staticmethod
    def tally(questions: List[Question],
              answers_given: Dict[str, int]) -> Tuple[int, Dict[str, CategoryResult]]:
        """
        Compare each answer with the question's correct index

        An unanswered question counts as wrong.

        Args:
            questions: The exam's question set
            answers_given: Mapping question_id -> chosen option index

        Returns:
            (correct count, per-category {correct, total})
        """
        correct = 0
        breakdown: Dict[str, CategoryResult] = {}

        for question in questions:
            result = breakdown.setdefault(question.category, CategoryResult())
            result.total += 1
            if answers_given.get(question.question_id) == question.correct_answer_index:
                correct += 1
                result.correct += 1

        return correct, breakdown

    def score(self,
              questions: List[Question],
              answers_given: Dict[str, int],
              time_spent: int,
              exam_type: str,
              exam_set_id: Optional[str] = None,
              session_id: Optional[str] = None) -> Score:
        """
        Score an attempt and persist the result

        Only answers for questions in the set are kept on the record.
        """
        correct, breakdown = self.tally(questions, answers_given)
        question_ids = {q.question_id for q in questions}
        kept_answers = {qid: idx for qid, idx in answers_given.items() if qid in question_ids}

        return self.history.create(
            total_questions=len(questions),
            correct_answers=correct,
            time_spent=max(0, int(time_spent)),
            exam_type=exam_type,
            answers_given=kept_answers,
            category_breakdown=breakdown,
            exam_set_id=exam_set_id,
            session_id=session_id,
        )

    def record_summary(self,
                       total_questions: int,
                       correct_answers: int,
                       time_spent: int,
                       exam_type: str,
                       answers_given: Optional[Dict[str, int]] = None,
                       category_breakdown: Optional[Dict[str, CategoryResult]] = None,
                       exam_set_id: Optional[str] = None) -> Score:
        """
        Persist a client-computed result. The percentage is always recomputed
        from the counts, whatever total the client claimed.
        """
        return self.history.create(
            total_questions=total_questions,
            correct_answers=correct_answers,
            time_spent=time_spent,
            exam_type=exam_type,
            answers_given=answers_given,
            category_breakdown=category_breakdown,
            exam_set_id=exam_set_id,
        )
