"""
Quiz renderer - Question, feedback and session summary display.

Provides:
- Question card rendering
- Answer feedback rendering
- End-of-session score and result list
"""

import html
from typing import Iterable

from kanadrill.schemas import AnswerRecord, VocabularyEntry


def get_quiz_css() -> str:
    """Get CSS styles for quiz display."""
    return """
    <style>
    .quiz-card {
        background: #fff8e1;
        border-radius: 12px;
        padding: 1.5em;
        margin: 1.5em 0;
        text-align: center;
        border-left: 4px solid #c62828;
    }
    .quiz-progress {
        color: #666;
        font-size: 0.9em;
        margin-bottom: 0.5em;
    }
    .quiz-symbol {
        font-size: 5em;
        font-weight: 600;
        color: #b71c1c;
        line-height: 1.2;
    }
    .quiz-feedback {
        border-radius: 8px;
        padding: 0.8em 1em;
        margin-top: 1em;
        font-size: 1.1em;
    }
    .quiz-feedback.correct {
        background: #e8f5e9;
        color: #2e7d32;
    }
    .quiz-feedback.wrong {
        background: #ffebee;
        color: #c62828;
    }
    .quiz-results {
        list-style: none;
        padding: 0;
    }
    .quiz-results li {
        padding: 0.2em 0;
    }
    .quiz-results li.correct {
        color: #2e7d32;
    }
    .quiz-results li.wrong {
        color: #c62828;
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


def render_question(entry: VocabularyEntry, position: int, total: int) -> str:
    """
    Render the symbol being asked.

    Args:
        entry: Current vocabulary entry
        position: 0-based index of the question
        total: Number of questions in the session

    Returns:
        HTML string for the question card
    """
    parts = ['<div class="quiz-card">']
    parts.append(f'<div class="quiz-progress">Question {position + 1} of {total}</div>')
    parts.append(f'<div class="quiz-symbol">{html.escape(entry.symbol)}</div>')
    parts.append('</div>')
    return ''.join(parts)


def render_feedback(record: AnswerRecord) -> str:
    """Render the outcome of the last answer."""
    if record.correct:
        return '<div class="quiz-feedback correct">✅ Correct!</div>'
    return (
        '<div class="quiz-feedback wrong">'
        f'❌ Wrong. {html.escape(record.symbol)} is '
        f'<strong>{html.escape(record.expected)}</strong>'
        '</div>'
    )


def render_results(records: Iterable[AnswerRecord]) -> str:
    """
    Render the per-question result list.

    Blank answers are shown as "(blank)".
    """
    parts = ['<ul class="quiz-results">']
    for r in records:
        answer = html.escape(r.user_input) if r.user_input else "(blank)"
        symbol = html.escape(r.symbol)
        if r.correct:
            parts.append(f'<li class="correct">{symbol} → {answer} ✅</li>')
        else:
            parts.append(
                f'<li class="wrong">{symbol} → {answer} '
                f'❌ (Correct: {html.escape(r.expected)})</li>'
            )
    parts.append('</ul>')
    return ''.join(parts)


def calculate_quiz_score(correct_count: int, total: int) -> dict:
    """
    Calculate quiz score.

    Args:
        correct_count: Number answered correctly
        total: Number of questions answered

    Returns:
        Dict with score info
    """
    if total == 0:
        return {"score": 0.0, "percent": 0, "correct": 0, "total": 0}

    score = correct_count / total
    return {
        "score": round(score, 2),
        "percent": round(score * 100),
        "correct": correct_count,
        "total": total,
    }


def render_quiz_score(score_info: dict) -> str:
    """Render quiz score display."""
    return f"""
    <div class="quiz-score-box">
        <div class="quiz-score-value">{score_info['percent']}%</div>
        <div class="quiz-score-label">{score_info['correct']} of {score_info['total']} correct</div>
    </div>
    """
