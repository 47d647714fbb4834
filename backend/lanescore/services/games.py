"""Game sheet checks run before a scored game is handed to storage."""

from __future__ import annotations

import logging
from typing import List, Sequence

from ..exceptions import GameIncomplete
from ..schemas import GameSummary
from ..scoring import bowling
from ..utils.sentry import track_validation_error

logger = logging.getLogger(__name__)

PERFECT_GAME = 300


def validate_all_frames(frames: Sequence[bowling.FrameLike]) -> List[str]:
    """Return one ``"Frame N: reason"`` entry per frame that fails validation."""

    errors: List[str] = []
    for frame in frames:
        result = bowling.validate_frame_record(frame)
        if not result.valid:
            number = bowling.raw_frame_fields(frame)[0]
            errors.append(f"Frame {number}: {result.error}")
    return errors


def summarize_game(frames: Sequence[bowling.FrameLike]) -> GameSummary:
    scored = bowling.score_frames(frames)
    errors = validate_all_frames(scored)
    total = scored[-1].cumulative_score
    complete = not errors
    return GameSummary(
        total_score=total,
        is_complete=complete,
        is_perfect=complete and total == PERFECT_GAME,
        errors=errors,
    )


def finalize_game(frames: Sequence[bowling.FrameLike]) -> GameSummary:
    """Score a finished game, refusing one that is not complete.

    Raises:
        GameIncomplete: If any frame is missing throws or holds an illegal one.
    """

    frames = list(frames)
    # raw records first; scoring would coerce or reject them before the check
    errors = validate_all_frames(frames)
    if errors:
        logger.warning(
            "Rejected incomplete game (%d invalid frames): %s",
            len(errors),
            "; ".join(errors),
        )
        track_validation_error(
            "; ".join(errors),
            action="validate_frames",
            metadata={"errorCount": len(errors)},
        )
        raise GameIncomplete(errors)

    summary = summarize_game(frames)
    logger.info(
        "Game complete: total=%d perfect=%s", summary.total_score, summary.is_perfect
    )
    return summary
