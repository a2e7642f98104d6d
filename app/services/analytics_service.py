"""
Analytics service for quiz and student performance tracking
"""
import logging
from typing import Dict, List, Any
from sqlalchemy.orm import Session, selectinload
from uuid import UUID
from collections import defaultdict

from app.exceptions import NotFoundError
from app.models import Attempt, Quiz, Question, User

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Service for generating performance analytics"""

    WEAK_PERCENTAGE = 60.0
    STRONG_PERCENTAGE = 80.0

    def get_quiz_statistics(self, db: Session, quiz_id: UUID) -> Dict[str, Any]:
        """
        Get aggregate results for a quiz

        Args:
            db: Database session
            quiz_id: Quiz UUID

        Returns:
            Dictionary with attempt totals, score spread and per-question stats
        """
        quiz = (
            db.query(Quiz)
            .options(selectinload(Quiz.questions).selectinload(Question.options))
            .filter(Quiz.id == quiz_id)
            .first()
        )
        if not quiz:
            raise NotFoundError("Quiz not found")

        attempts = (
            db.query(Attempt)
            .options(selectinload(Attempt.answers))
            .filter(Attempt.quiz_id == quiz_id)
            .all()
        )

        total_attempts = len(attempts)
        unique_students = len(set(a.user_id for a in attempts))

        if attempts:
            avg_score = sum(a.score for a in attempts) / total_attempts
            avg_percentage = sum(a.percentage for a in attempts) / total_attempts
            highest = max(a.score for a in attempts)
            lowest = min(a.score for a in attempts)
        else:
            avg_score = avg_percentage = 0.0
            highest = lowest = 0

        return {
            "quiz_id": quiz.id,
            "title": quiz.title,
            "total_attempts": total_attempts,
            "unique_students": unique_students,
            "average_score": round(avg_score, 2),
            "average_percentage": round(avg_percentage, 2),
            "highest_score": highest,
            "lowest_score": lowest,
            "questions": self._question_statistics(quiz, attempts)
        }

    def _question_statistics(self, quiz: Quiz, attempts: List[Attempt]) -> List[Dict[str, Any]]:
        """Correct rate per current question; answers to replaced questions are skipped"""

        correct_options = {
            question.id: {o.id for o in question.options if o.is_correct}
            for question in quiz.questions
        }
        answered = defaultdict(int)
        correct = defaultdict(int)

        for attempt in attempts:
            for answer in attempt.answers:
                if answer.question_id not in correct_options:
                    continue
                answered[answer.question_id] += 1
                if answer.option_id in correct_options[answer.question_id]:
                    correct[answer.question_id] += 1

        stats = []
        for question in quiz.questions:
            count = answered[question.id]
            stats.append({
                "question_id": question.id,
                "text": question.text,
                "order": question.order,
                "attempts": count,
                "correct_count": correct[question.id],
                "correct_rate": round(correct[question.id] / count * 100, 2) if count else 0.0
            })

        return stats

    def get_user_performance(self, db: Session, user_id: UUID) -> Dict[str, Any]:
        """
        Get performance summary for a student

        Args:
            db: Database session
            user_id: User UUID

        Returns:
            Dictionary with totals, per-quiz breakdown and recommendations
        """
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFoundError("User not found")

        attempts = (
            db.query(Attempt)
            .options(selectinload(Attempt.quiz))
            .filter(Attempt.user_id == user_id)
            .order_by(Attempt.submitted_at.asc())
            .all()
        )

        total_attempts = len(attempts)
        if attempts:
            avg_percentage = sum(a.percentage for a in attempts) / total_attempts
            best_percentage = max(a.percentage for a in attempts)
        else:
            avg_percentage = best_percentage = 0.0

        breakdown = self._quiz_breakdown(attempts)

        return {
            "user_id": user.id,
            "username": user.username,
            "total_attempts": total_attempts,
            "quizzes_taken": len(breakdown),
            "total_score": sum(a.score for a in attempts),
            "average_percentage": round(avg_percentage, 2),
            "best_percentage": round(best_percentage, 2),
            "quiz_breakdown": breakdown,
            "recommendations": self._generate_recommendations(total_attempts, avg_percentage, breakdown)
        }

    def _quiz_breakdown(self, attempts: List[Attempt]) -> List[Dict[str, Any]]:
        """Best result per quiz, strongest first"""

        per_quiz: Dict[UUID, Dict[str, Any]] = {}

        for attempt in attempts:
            entry = per_quiz.setdefault(attempt.quiz_id, {
                "quiz_id": attempt.quiz_id,
                "quiz_title": attempt.quiz.title,
                "attempts": 0,
                "best_score": 0,
                "best_percentage": 0.0,
                "last_submitted_at": attempt.submitted_at
            })
            entry["attempts"] += 1
            entry["best_score"] = max(entry["best_score"], attempt.score)
            entry["best_percentage"] = max(entry["best_percentage"], round(attempt.percentage, 2))
            entry["last_submitted_at"] = max(entry["last_submitted_at"], attempt.submitted_at)

        breakdown = list(per_quiz.values())
        breakdown.sort(key=lambda x: x["best_percentage"], reverse=True)

        return breakdown

    def _generate_recommendations(
        self,
        total_attempts: int,
        avg_percentage: float,
        breakdown: List[Dict[str, Any]]
    ) -> List[str]:
        """Generate personalized recommendations"""

        if total_attempts == 0:
            return ["Take your first quiz to start tracking your progress"]

        recommendations = []

        if avg_percentage < self.WEAK_PERCENTAGE:
            recommendations.append("Review the material before your next attempt")
        elif avg_percentage < self.STRONG_PERCENTAGE:
            recommendations.append("Good progress! Retake quizzes to push your average higher")
        else:
            recommendations.append("Excellent performance! Keep it up")

        weak_quizzes = [
            item["quiz_title"] for item in breakdown
            if item["best_percentage"] < self.WEAK_PERCENTAGE
        ]
        if weak_quizzes:
            recommendations.append(f"Retake: {', '.join(weak_quizzes[:3])}")

        return recommendations


# Global instance
analytics_service = AnalyticsService()
