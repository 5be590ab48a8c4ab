"""
LessonSession - Drive one learner through one level's questions.

States:
- ANSWERING: choosing an option for the current question
- SUBMITTED: the choice was evaluated (correct or not)
- COMPLETED: terminal; the outcome has been reported

Each transition returns True when it applied and False when the current
state does not allow it. A rejected transition changes nothing.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from adaptlearn.schemas import Level, Question


logger = logging.getLogger(__name__)

CORRECT_FEEDBACK = "Correct!"
INCORRECT_FEEDBACK = "Not quite, try again."


class SessionPhase(str, Enum):
    ANSWERING = "answering"
    SUBMITTED = "submitted"
    COMPLETED = "completed"


class SessionAction(str, Enum):
    """User actions a UI may offer."""
    SELECT = "select"
    SUBMIT = "submit"
    ADVANCE = "advance"
    RETRY = "retry"
    FINISH = "finish"


@dataclass(frozen=True)
class SessionOutcome:
    """Final result handed to the progress store."""
    level_id: int
    score: int
    attempts: int


CompletionCallback = Callable[[int, int, int], None]


class LessonSession:
    """
    In-memory state machine for a single run through a level.

    Score counts correct submissions, attempts counts all submissions.
    Both start at zero for every new session.
    """

    def __init__(self, level: Level, on_complete: Optional[CompletionCallback] = None):
        """
        Start a session on the first question.

        Args:
            level: Level to play
            on_complete: Called once with (level_id, score, attempts)
        """
        self.level = level
        self.on_complete = on_complete
        self.question_index = 0
        self.selected: Optional[int] = None
        self.last_correct: Optional[bool] = None
        self.score = 0
        self.attempts = 0
        self.phase = SessionPhase.ANSWERING
        self._outcome: Optional[SessionOutcome] = None

    # -------------------------------------------------------------------------
    # State inspection
    # -------------------------------------------------------------------------

    @property
    def current_question(self) -> Question:
        return self.level.questions[self.question_index]

    @property
    def is_last_question(self) -> bool:
        return self.question_index == len(self.level.questions) - 1

    @property
    def is_completed(self) -> bool:
        return self.phase == SessionPhase.COMPLETED

    @property
    def explanation(self) -> Optional[str]:
        """Explanation of the current question, only after a correct answer."""
        if self.phase == SessionPhase.SUBMITTED and self.last_correct:
            return self.current_question.explanation
        return None

    @property
    def feedback(self) -> str:
        if self.phase != SessionPhase.SUBMITTED:
            return ""
        return CORRECT_FEEDBACK if self.last_correct else INCORRECT_FEEDBACK

    @property
    def outcome(self) -> Optional[SessionOutcome]:
        """Final outcome once completed, else None."""
        return self._outcome

    def available_actions(self) -> set[SessionAction]:
        """Actions valid in the current state."""
        if self.phase == SessionPhase.COMPLETED:
            return set()
        if self.phase == SessionPhase.ANSWERING:
            actions = {SessionAction.SELECT, SessionAction.FINISH}
            if self.selected is not None:
                actions.add(SessionAction.SUBMIT)
            return actions
        if self.last_correct:
            return {SessionAction.ADVANCE, SessionAction.FINISH}
        return {SessionAction.RETRY, SessionAction.FINISH}

    def _reject(self, action: SessionAction) -> bool:
        logger.debug(
            f"Ignoring {action.value} on level {self.level.id} in phase "
            f"{self.phase.value} (question {self.question_index + 1})"
        )
        return False

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def select_option(self, option_index: int) -> bool:
        """Choose an option for the current question, replacing any earlier choice."""
        if self.phase != SessionPhase.ANSWERING:
            return self._reject(SessionAction.SELECT)
        if not 0 <= option_index < len(self.current_question.options):
            return self._reject(SessionAction.SELECT)

        self.selected = option_index
        return True

    def submit(self) -> bool:
        """Evaluate the selected option. Counts one attempt either way."""
        if self.phase != SessionPhase.ANSWERING or self.selected is None:
            return self._reject(SessionAction.SUBMIT)

        self.attempts += 1
        self.last_correct = self.current_question.is_correct(self.selected)
        if self.last_correct:
            self.score += 1
        self.phase = SessionPhase.SUBMITTED
        return True

    def retry(self) -> bool:
        """After a wrong answer, try the same question again."""
        if self.phase != SessionPhase.SUBMITTED or self.last_correct:
            return self._reject(SessionAction.RETRY)

        self._clear_answer()
        return True

    def advance(self) -> bool:
        """After a correct answer, go to the next question or complete the level."""
        if self.phase != SessionPhase.SUBMITTED or not self.last_correct:
            return self._reject(SessionAction.ADVANCE)

        if self.is_last_question:
            self._complete()
        else:
            self.question_index += 1
            self._clear_answer()
        return True

    def finish(self) -> bool:
        """End the session now with the score earned so far."""
        if self.phase == SessionPhase.COMPLETED:
            return self._reject(SessionAction.FINISH)

        self._complete()
        return True

    def _clear_answer(self):
        self.selected = None
        self.last_correct = None
        self.phase = SessionPhase.ANSWERING

    def _complete(self):
        self.phase = SessionPhase.COMPLETED
        self._outcome = SessionOutcome(
            level_id=self.level.id,
            score=self.score,
            attempts=self.attempts,
        )
        if self.on_complete is not None:
            self.on_complete(self.level.id, self.score, self.attempts)
