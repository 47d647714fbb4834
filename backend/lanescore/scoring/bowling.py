"""Ten-pin bowling scoring: frame scores, throw legality and a roll engine.

Frames are immutable ``schemas.Frame`` values. Every function here returns
new frames and leaves its input untouched, so a caller can rescore the whole
game after each entered throw.
"""
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic.alias_generators import to_camel

from ..schemas import FRAMES_PER_GAME, PINS, Frame, ValidationResult
from ..services.validation import ValidationError, fail, in_range, ok

FrameLike = Union[Frame, Mapping[str, Any]]

_THROW_FIELDS = ("first_throw", "second_throw", "third_throw")
_THROW_LABELS = ("First", "Second", "Third")
_UNSCORED = {
    "is_strike": False,
    "is_spare": False,
    "frame_score": 0,
    "cumulative_score": 0,
}
LAST_INDEX = FRAMES_PER_GAME - 1


def init_frames() -> List[Frame]:
    """Return the ten unset frames of a fresh game."""
    return [Frame(frame_number=n) for n in range(1, FRAMES_PER_GAME + 1)]


def is_strike(first_throw: Optional[int]) -> bool:
    return first_throw == PINS


def is_spare(first_throw: Optional[int], second_throw: Optional[int]) -> bool:
    if first_throw is None or second_throw is None:
        return False
    return first_throw + second_throw == PINS


def frame_base_score(frame: Frame) -> int:
    """Sum of the throws entered so far, without any bonus."""
    return sum(t for t in frame.throws if t is not None)


def coerce_frame(value: FrameLike) -> Frame:
    if isinstance(value, Frame):
        return value
    return Frame.model_validate(value)


def _coerce_frames(frames: Sequence[FrameLike]) -> List[Frame]:
    coerced = [coerce_frame(f) for f in frames]
    if len(coerced) != FRAMES_PER_GAME:
        raise ValueError(f"a game has exactly {FRAMES_PER_GAME} frames, got {len(coerced)}")
    numbers = [f.frame_number for f in coerced]
    if numbers != list(range(1, FRAMES_PER_GAME + 1)):
        raise ValueError("frames must be numbered 1 to 10 in order")
    return coerced


def _throw_value(frames: Sequence[Frame], frame_index: int, throw_index: int) -> int:
    if frame_index >= len(frames):
        return 0
    return frames[frame_index].throws[throw_index] or 0


def _strike_bonus(frames: Sequence[Frame], i: int) -> int:
    bonus1 = _throw_value(frames, i + 1, 0)
    if i + 1 == LAST_INDEX:
        # frame 10 holds both deliveries itself
        bonus2 = _throw_value(frames, i + 1, 1)
    elif bonus1 == PINS:
        bonus2 = _throw_value(frames, i + 2, 0)
    else:
        bonus2 = _throw_value(frames, i + 1, 1)
    return bonus1 + bonus2


def score_frames(frames: Sequence[FrameLike]) -> List[Frame]:
    """Recompute strike/spare flags, frame scores and running totals.

    Only the raw throws of ``frames`` are read; derived fields are ignored and
    rebuilt. Unentered throws count as zero, so a strike followed by nothing
    shows 10 until its bonus deliveries exist.
    """
    frames = _coerce_frames(frames)
    scored: List[Frame] = []
    cumulative = 0

    for i, frame in enumerate(frames):
        first, second = frame.first_throw, frame.second_throw
        if i == LAST_INDEX:
            strike = is_strike(first)
            spare = not strike and is_spare(first, second)
            frame_score = frame_base_score(frame)
        elif is_strike(first):
            strike, spare = True, False
            frame_score = PINS + _strike_bonus(frames, i)
        elif is_spare(first, second):
            strike, spare = False, True
            frame_score = PINS + _throw_value(frames, i + 1, 0)
        else:
            strike = spare = False
            frame_score = (first or 0) + (second or 0)

        cumulative += frame_score
        scored.append(
            frame.model_copy(
                update={
                    "is_strike": strike,
                    "is_spare": spare,
                    "frame_score": frame_score,
                    "cumulative_score": cumulative,
                }
            )
        )

    return scored


def total_score(frames: Sequence[FrameLike]) -> int:
    return score_frames(frames)[-1].cumulative_score


def is_valid_throw(value: Any, max_pins: int = PINS) -> bool:
    return in_range(value, 0, max_pins)


def _check_throw(value: Any, slot: int, max_pins: int = PINS) -> Optional[ValidationResult]:
    label = _THROW_LABELS[slot - 1]
    if value is None:
        return fail(f"{label} throw is required")
    if not is_valid_throw(value, max_pins):
        if max_pins == PINS:
            return fail(f"{label} throw must be an integer from 0 to {PINS}")
        return fail(f"{label} throw must be from 0 to {max_pins}")
    return None


def _validate_last_frame(first: Any, second: Any, third: Any) -> ValidationResult:
    if is_strike(first):
        failure = _check_throw(second, 2)
        if failure is not None:
            return failure
        third_max = PINS if second == PINS else PINS - second
        failure = _check_throw(third, 3, third_max)
        return ok() if failure is None else failure

    failure = _check_throw(second, 2, PINS - first)
    if failure is not None:
        return failure
    if first + second == PINS:
        failure = _check_throw(third, 3)
        return ok() if failure is None else failure
    if third is not None:
        return fail("Third throw is not allowed without a strike or spare")
    return ok()


def validate_frame(
    frame_number: int,
    first_throw: Optional[int],
    second_throw: Optional[int],
    third_throw: Optional[int],
) -> ValidationResult:
    """Check that the throws of one frame are legal and complete.

    Never raises; a failed result carries a reason suitable for showing next
    to the offending input.
    """
    if not in_range(frame_number, 1, FRAMES_PER_GAME):
        return fail(f"Frame number must be from 1 to {FRAMES_PER_GAME}")

    failure = _check_throw(first_throw, 1)
    if failure is not None:
        return failure

    if frame_number == FRAMES_PER_GAME:
        return _validate_last_frame(first_throw, second_throw, third_throw)

    if is_strike(first_throw):
        if second_throw is not None:
            return fail("Second throw is not allowed after a strike")
    else:
        failure = _check_throw(second_throw, 2, PINS - first_throw)
        if failure is not None:
            return failure

    if third_throw is not None:
        return fail(f"Third throw is only allowed in frame {FRAMES_PER_GAME}")
    return ok()


def raw_frame_fields(frame: FrameLike) -> Tuple[Any, Any, Any, Any]:
    """Frame number and the three throws of ``frame``, exactly as stored.

    Mappings may use snake_case or camelCase keys. Nothing is coerced, so a
    ``True`` or ``"3"`` reaches ``validate_frame`` unchanged.
    """
    if isinstance(frame, Frame):
        return (frame.frame_number, *frame.throws)
    return tuple(
        frame.get(name, frame.get(to_camel(name)))
        for name in ("frame_number", *_THROW_FIELDS)
    )


def validate_frame_record(frame: FrameLike) -> ValidationResult:
    return validate_frame(*raw_frame_fields(frame))


def is_game_complete(frames: Sequence[FrameLike]) -> bool:
    frames = list(frames)
    if len(frames) != FRAMES_PER_GAME:
        return False
    return all(validate_frame_record(f).valid for f in frames)


def _check_slot(which: int) -> None:
    if which not in (1, 2, 3):
        raise ValueError(f"throw slot must be 1, 2 or 3, got {which!r}")


def clear_following_throws(frame: Frame, which: int) -> Frame:
    """Unset every throw after slot ``which``."""
    _check_slot(which)
    cleared = {field: None for field in _THROW_FIELDS[which:]}
    if not cleared:
        return frame
    return frame.model_copy(update=cleared)


def apply_throw(
    frame: FrameLike, which: int, value: Optional[int], *, cascade: bool = True
) -> Frame:
    """Return a copy of ``frame`` with throw ``which`` set to ``value``.

    With ``cascade`` the later throws of the frame are cleared. Derived
    fields are reset; rescore the game with ``score_frames``.
    """
    _check_slot(which)
    frame = coerce_frame(frame)
    updated = frame.model_copy(update={_THROW_FIELDS[which - 1]: value, **_UNSCORED})
    if cascade:
        updated = clear_following_throws(updated, which)
    return updated


def enter_throw(
    frames: Sequence[FrameLike], frame_number: int, which: int, value: Optional[int]
) -> List[Frame]:
    """Set one throw of one frame and rescore the whole game."""
    frames = _coerce_frames(frames)
    if not 1 <= frame_number <= FRAMES_PER_GAME:
        raise ValueError(f"frame number must be from 1 to {FRAMES_PER_GAME}")
    frames[frame_number - 1] = apply_throw(frames[frame_number - 1], which, value)
    return score_frames(frames)


def max_pins(frame: FrameLike, which: int) -> int:
    """Upper bound a form should allow for throw slot ``which``."""
    _check_slot(which)
    frame = coerce_frame(frame)
    first, second = frame.first_throw, frame.second_throw

    if which == 1:
        return PINS
    if which == 2:
        if is_strike(first):
            return PINS if frame.is_last else 0
        return PINS - (first or 0)

    if not frame.is_last:
        return 0
    if is_strike(first):
        return PINS if second == PINS else PINS - (second or 0)
    if is_spare(first, second):
        return PINS
    return 0


def throw_allowed(frame: FrameLike, which: int) -> bool:
    """Whether throw slot ``which`` can be entered given the earlier throws."""
    _check_slot(which)
    frame = coerce_frame(frame)
    first, second = frame.first_throw, frame.second_throw

    if which == 1:
        return True
    if which == 2:
        return first is not None and (frame.is_last or not is_strike(first))
    if not frame.is_last or first is None or second is None:
        return False
    return is_strike(first) or is_spare(first, second)


def _mark(value: Optional[int]) -> str:
    if value is None:
        return "-"
    if value == PINS:
        return "X"
    return str(value)


def frame_marks(frame: FrameLike) -> Tuple[str, ...]:
    """Scoreboard characters for each throw slot of ``frame``.

    Frames 1-9 yield two marks, frame 10 yields three.
    """
    frame = coerce_frame(frame)
    first, second, third = frame.throws

    if not frame.is_last:
        if is_strike(first):
            return ("X", "-")
        if is_spare(first, second):
            return (_mark(first), "/")
        return (_mark(first), _mark(second))

    if second is None:
        mark2 = "-"
    elif not is_strike(first) and is_spare(first, second):
        mark2 = "/"
    else:
        mark2 = _mark(second)

    pins_reset = is_strike(first) and second is not None and second != PINS
    if third is not None and pins_reset and second + third == PINS:
        mark3 = "/"
    else:
        mark3 = _mark(third)
    return (_mark(first), mark2, mark3)


def _next_open_slot(frame: Frame) -> Optional[int]:
    for which in (1, 2, 3):
        if frame.throws[which - 1] is None and throw_allowed(frame, which):
            return which
    return None


def init_state(config: Dict) -> Dict:
    return {
        "config": config,
        "frames": init_frames(),
    }


def apply(event: Dict, state: Dict) -> Dict:
    if event.get("type") != "ROLL":
        raise ValidationError("invalid bowling event")
    try:
        pins = int(event.get("pins", 0))
    except (TypeError, ValueError):
        raise ValidationError("pins must be an integer")
    if not 0 <= pins <= PINS:
        raise ValidationError("pins out of range")

    frames = list(state["frames"])
    for i, frame in enumerate(frames):
        slot = _next_open_slot(frame)
        if slot is None:
            continue
        standing = max_pins(frame, slot)
        if pins > standing:
            raise ValidationError(
                f"only {standing} pins standing in frame {frame.frame_number}"
            )
        frames[i] = apply_throw(frame, slot, pins, cascade=False)
        break
    else:
        raise ValidationError("no rolls left in final frame")

    state["frames"] = score_frames(frames)
    return state


def summary(state: Dict) -> Dict:
    frames = score_frames(state["frames"])
    return {
        "frames": [[t for t in f.throws if t is not None] for f in frames],
        "marks": [frame_marks(f) for f in frames],
        "scores": [f.frame_score for f in frames],
        "cumulative": [f.cumulative_score for f in frames],
        "total": frames[-1].cumulative_score,
        "complete": is_game_complete(frames),
    }
