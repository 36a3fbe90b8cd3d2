"""Speed-weighted scoring for correct guesses."""

from __future__ import annotations

MIN_GUESS_POINTS = 100
SPEED_POINTS = 400
DRAWER_BONUS = 50


def guesser_points(remaining_seconds: int, draw_seconds: int) -> int:
    """Calculate points for a correct guess.

    Earlier guesses (more time remaining) score more: the result is
    ``floor(400 * remaining / draw_seconds) + 100``, which stays within
    [100, 500] for ``0 <= remaining <= draw_seconds``.

    Args:
        remaining_seconds: Seconds left on the turn countdown.
        draw_seconds: Full length of the turn countdown.

    Returns:
        Points to award the guesser.
    """
    if draw_seconds <= 0:
        return MIN_GUESS_POINTS
    remaining = max(0, min(remaining_seconds, draw_seconds))
    return (SPEED_POINTS * remaining) // draw_seconds + MIN_GUESS_POINTS


def drawer_points(bonus: int = DRAWER_BONUS) -> int:
    """Points the drawer earns for each correct guess in their turn."""
    return max(0, bonus)
