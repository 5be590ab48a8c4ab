"""
Quiz renderer - Question, feedback and score display for lesson sessions.

Provides:
- Question header and prompt rendering
- Correct/incorrect feedback with explanation
- Level score summary
"""

import html

from adaptlearn.classroom.session import LessonSession
from adaptlearn.schemas import LevelProgress


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .quiz-container {
        background: #e3f2fd;
        border-radius: 12px;
        padding: 1.5em;
        margin: 1.5em 0;
        border-left: 4px solid #1976D2;
    }
    .quiz-title {
        font-weight: 600;
        color: #1565C0;
        font-size: 1.1em;
    }
    .quiz-meta {
        color: #666;
        font-size: 0.9em;
    }
    .quiz-question {
        font-size: 1.05em;
        color: #333;
        margin-top: 0.8em;
        line-height: 1.6;
    }
    .quiz-feedback {
        border-radius: 8px;
        padding: 1em;
        margin-top: 1em;
    }
    .quiz-feedback-correct {
        background: #e8f5e9;
        border: 1px solid #a5d6a7;
        color: #2e7d32;
    }
    .quiz-feedback-incorrect {
        background: #ffebee;
        border: 1px solid #ef9a9a;
        color: #c62828;
    }
    .quiz-explanation {
        font-size: 0.95em;
        margin-top: 0.5em;
    }
    .quiz-score-box {
        background: #e8f5e9;
        border-radius: 8px;
        padding: 1em;
        margin-top: 1.5em;
        text-align: center;
    }
    .quiz-score-value {
        font-size: 2em;
        font-weight: 700;
        color: #388E3C;
    }
    .quiz-score-label {
        color: #666;
        font-size: 0.9em;
    }
    </style>
    """


def render_question(session: LessonSession) -> str:
    """
    Render the current question header and prompt.

    Args:
        session: Active lesson session

    Returns:
        HTML string for the question
    """
    total = session.level.question_count
    number = session.question_index + 1

    parts = ['<div class="quiz-container">']
    parts.append(f'<div class="quiz-title">Question {number} of {total}</div>')
    parts.append(f'<div class="quiz-meta">Score: {session.score}/{total}</div>')
    parts.append(f'<div class="quiz-question">{html.escape(session.current_question.prompt)}</div>')
    parts.append('</div>')
    return ''.join(parts)


def render_feedback(session: LessonSession) -> str:
    """Render feedback after a submission; empty string otherwise."""
    feedback = session.feedback
    if not feedback:
        return ""

    css = "quiz-feedback-correct" if session.last_correct else "quiz-feedback-incorrect"
    parts = [f'<div class="quiz-feedback {css}">']
    parts.append(f'<div>{html.escape(feedback)}</div>')
    if session.explanation:
        parts.append(f'<div class="quiz-explanation">{html.escape(session.explanation)}</div>')
    parts.append('</div>')
    return ''.join(parts)


def calculate_level_score(score: int, total: int, attempts: int) -> dict:
    """
    Summarize a finished session.

    Args:
        score: Questions answered correctly
        total: Questions in the level
        attempts: Submissions made

    Returns:
        Dict with score info
    """
    if total == 0:
        return {"percent": 100, "correct": score, "total": 0, "attempts": attempts, "accuracy": 100}

    accuracy = round(score / attempts * 100) if attempts else 0
    return {
        "percent": round(score / total * 100),
        "correct": score,
        "total": total,
        "attempts": attempts,
        "accuracy": accuracy,
    }


def render_level_score(score_info: dict) -> str:
    """Render level score display."""
    return f"""
    <div class="quiz-score-box">
        <div class="quiz-score-value">{score_info['percent']}%</div>
        <div class="quiz-score-label">{score_info['correct']} of {score_info['total']} correct
        in {score_info['attempts']} attempts</div>
    </div>
    """


def describe_progress(record: LevelProgress, total: int) -> list[str]:
    """Lines summarizing a stored record for a level card."""
    lines = [
        f"Last score: {record.score}/{total}",
        f"Attempts: {record.attempts}",
    ]
    if record.completed_at:
        lines.append(f"Finished: {record.completed_at.date().isoformat()}")
    return lines
