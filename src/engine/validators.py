"""
Farkle Engine - Input Validation Utilities

Guards for everything that enters the Farkle engine from outside: dice
counts, rolled faces, dice selections, scores and player names. Each guard
hands back the normalized value or raises ValueError naming the bad input.
"""

from typing import Sequence

MAX_FACE_VALUE = 6
MAX_DICE = 6


def validate_dice_count(count: int, max_count: int = MAX_DICE) -> int:
    """
    Validate how many dice a caller wants to roll.

    Args:
        count: Number of dice requested
        max_count: Largest legal roll

    Returns:
        Validated count

    Raises:
        ValueError: If count is not an integer in 1..max_count
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise ValueError(f"Dice count must be an integer, got {type(count).__name__}.")

    if not (1 <= count <= max_count):
        raise ValueError(f"Number of dice must be between 1 and {max_count}, got {count}.")

    return count


def validate_dice_values(
    values: Sequence[int],
    min_count: int = 1,
    max_count: int | None = MAX_DICE
) -> tuple[int, ...]:
    """
    Check a rolled array of D6 faces.

    Args:
        values: Faces as rolled, in roll order
        min_count: Fewest dice accepted
        max_count: Most dice accepted (None = unbounded)

    Returns:
        The faces as a tuple

    Raises:
        ValueError: On a wrong dice count, a non-int face or a face outside 1-6
    """
    values_tuple = tuple(values)
    count = len(values_tuple)

    if count < min_count:
        raise ValueError(f"At least {min_count} dice required, got {count}.")

    if max_count is not None and count > max_count:
        raise ValueError(f"At most {max_count} dice allowed, got {count}.")

    for i, value in enumerate(values_tuple):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Die value at index {i} must be an integer, got {type(value).__name__}.")
        if not (1 <= value <= MAX_FACE_VALUE):
            raise ValueError(
                f"Die value at index {i} is {value}, must be between 1 and {MAX_FACE_VALUE}."
            )

    return values_tuple


def validate_selected_indices(
    indices: Sequence[int] | frozenset[int] | set[int],
    dice_count: int
) -> frozenset[int]:
    """
    Validate indices of dice a player selected from a roll.

    Args:
        indices: Collection of selected dice indices
        dice_count: Total number of dice in the roll

    Returns:
        Validated indices as a frozenset

    Raises:
        ValueError: If any index is out of range
    """
    if not indices:
        return frozenset()

    indices_set = frozenset(indices)

    for idx in indices_set:
        if isinstance(idx, bool) or not isinstance(idx, int):
            raise ValueError(f"Selected index must be an integer, got {type(idx).__name__}.")
        if not (0 <= idx < dice_count):
            raise ValueError(
                f"Selected index {idx} is out of range. Must be between 0 and {dice_count - 1}."
            )

    return indices_set


def validate_score(score: int, allow_negative: bool = False) -> int:
    """
    Validate a score value.

    Args:
        score: Score to validate
        allow_negative: Whether negative scores are allowed

    Returns:
        Validated score

    Raises:
        ValueError: If score is invalid
    """
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValueError(f"Score must be an integer, got {type(score).__name__}.")

    if not allow_negative and score < 0:
        raise ValueError(f"Score cannot be negative, got {score}.")

    return score


def validate_player_name(name: str, max_length: int = 50) -> str:
    """
    Validate and normalize a player's display name.

    Raises:
        ValueError: If the name is empty or too long
    """
    if not isinstance(name, str):
        raise ValueError(f"Player name must be a string, got {type(name).__name__}.")

    cleaned = name.strip()
    if not cleaned:
        raise ValueError("Player name cannot be empty.")

    if len(cleaned) > max_length:
        raise ValueError(f"Player name must be at most {max_length} characters, got {len(cleaned)}.")

    return cleaned
