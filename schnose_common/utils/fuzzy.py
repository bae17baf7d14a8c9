"""
Subsequence fuzzy scoring in the style of skim / fzf "v2".

Every character of the pattern has to appear in the candidate, in order. Each
matched character is worth `SCORE_MATCH` plus a positional bonus (start of the
string, after a separator, at a letter->digit transition); runs of consecutive
matches keep at least `BONUS_CONSECUTIVE` per character, and skipped characters
between two matches cost an affine gap penalty. The best alignment is found with
a dynamic program over (pattern index, candidate index).

Matching is case-sensitive; callers lowercase both sides when they want
case-insensitive matching.
"""

from __future__ import annotations

SCORE_MATCH = 16
GAP_START = -3
GAP_EXTENSION = -1
BONUS_FIRST_CHAR_MULTIPLIER = 2
BONUS_HEAD = SCORE_MATCH // 2
BONUS_BREAK = SCORE_MATCH // 2 + GAP_EXTENSION
BONUS_CAMEL = SCORE_MATCH // 2 + 2 * GAP_EXTENSION
BONUS_CONSECUTIVE = -(GAP_START + GAP_EXTENSION)

_CHAR_LOWER = 0
_CHAR_UPPER = 1
_CHAR_NUMBER = 2
_CHAR_SEPARATOR = 3
_CHAR_OTHER = 4

_SEPARATORS = frozenset(" \t/\\_-.,:;|")


def _char_class(ch: str) -> int:
    if ch.isdigit():
        return _CHAR_NUMBER
    if ch.islower():
        return _CHAR_LOWER
    if ch.isupper():
        return _CHAR_UPPER
    if ch in _SEPARATORS:
        return _CHAR_SEPARATOR
    return _CHAR_OTHER


def _position_bonus(prev: int | None, cur: int) -> int:
    if prev is None:
        return BONUS_HEAD
    if cur in (_CHAR_SEPARATOR, _CHAR_OTHER):
        return 0
    if prev in (_CHAR_SEPARATOR, _CHAR_OTHER):
        return BONUS_BREAK
    if prev == _CHAR_LOWER and cur == _CHAR_UPPER:
        return BONUS_CAMEL
    if prev != _CHAR_NUMBER and cur == _CHAR_NUMBER:
        return BONUS_CAMEL
    return 0


def _bonuses(text: str) -> list[int]:
    out: list[int] = []
    prev: int | None = None
    for ch in text:
        cur = _char_class(ch)
        out.append(_position_bonus(prev, cur))
        prev = cur
    return out


def fuzzy_score(choice: str, pattern: str) -> int | None:
    """
    Score `pattern` against `choice`.

    Returns `None` when `pattern` is not a subsequence of `choice`. An empty
    pattern scores 0.
    """

    if not pattern:
        return 0
    if len(pattern) > len(choice):
        return None

    bonuses = _bonuses(choice)
    width = len(choice)
    prev_row: list[int | None] = []

    for i, p_ch in enumerate(pattern):
        row: list[int | None] = [None] * width
        # Best score of the previous row ending at least two positions back,
        # already charged for the gap up to the current position.
        carry: int | None = None
        for j, c_ch in enumerate(choice):
            if i > 0 and j >= 2:
                from_gap = prev_row[j - 2]
                candidates = []
                if carry is not None:
                    candidates.append(carry + GAP_EXTENSION)
                if from_gap is not None:
                    candidates.append(from_gap + GAP_START)
                carry = max(candidates) if candidates else None

            if c_ch != p_ch:
                continue

            bonus = bonuses[j]
            if i == 0:
                row[j] = SCORE_MATCH + bonus * BONUS_FIRST_CHAR_MULTIPLIER
                continue

            options = []
            if j >= 1 and prev_row[j - 1] is not None:
                options.append(prev_row[j - 1] + SCORE_MATCH + max(bonus, BONUS_CONSECUTIVE))
            if carry is not None:
                options.append(carry + SCORE_MATCH + bonus)
            if options:
                row[j] = max(options)

        if all(score is None for score in row):
            return None
        prev_row = row

    return max(score for score in prev_row if score is not None)
