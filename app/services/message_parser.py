"""Extract the numbers the platform embeds in notification message text.

Scores and attempt numbers are not stored on assignments or quizzes; the
code that writes a notification phrases them into ``message``, e.g.
``"Attempt #2 submitted"`` or ``"Score: 8/10"``. Both patterns are fixed and
any change to that wording makes these helpers fall back to their defaults.
"""

import re

ATTEMPT_PATTERN = re.compile(r'Attempt #(\d+)')
SCORE_PATTERN = re.compile(r'Score: (\d+)/(\d+)')

DEFAULT_ATTEMPT = 1
ASSIGNMENT_DEFAULT_TOTAL = 100
QUIZ_DEFAULT_TOTAL = 10


def extract_attempt_number(message, default=DEFAULT_ATTEMPT):
    """Return the N in ``Attempt #N``, or ``default`` when absent."""
    if not isinstance(message, str):
        return default
    match = ATTEMPT_PATTERN.search(message)
    if not match:
        return default
    return int(match.group(1))


def extract_score(message, default_total):
    """Return ``(score, total)`` from ``Score: X/Y``.

    Falls back to ``(0, default_total)`` when the message has no score.
    """
    if not isinstance(message, str):
        return 0, default_total
    match = SCORE_PATTERN.search(message)
    if not match:
        return 0, default_total
    return int(match.group(1)), int(match.group(2))
