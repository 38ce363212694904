"""PGN export and mainline import."""

from __future__ import annotations

import re

from gambit.core.enums import Color, GameResult
from gambit.core.notation.models import ParsedPgn

_HEADER_RE = re.compile(r'^\[(\w+)\s+"((?:[^"\\]|\\.)*)"\]\s*$')
_RESULT_TOKENS: dict[str, GameResult] = {
    "1-0": GameResult.WHITE_WINS,
    "0-1": GameResult.BLACK_WINS,
    "1/2-1/2": GameResult.DRAW,
    "*": GameResult.IN_PROGRESS,
}
# Comments, variations, NAGs and move numbers are skipped; everything else
# left over is a SAN token or a result token.
_MOVETEXT_TOKEN_RE = re.compile(
    r"\{[^}]*\}?|;[^\n]*|\(|\)|\$\d+|\d+\.(?:\.\.)?|[^\s{}();]+"
)
_MOVE_NUMBER_RE = re.compile(r"^\d+\.(?:\.\.)?$")

SEVEN_TAG_ROSTER: tuple[str, ...] = (
    "Event",
    "Site",
    "Date",
    "Round",
    "White",
    "Black",
    "Result",
)


def pgn_result_token(result: GameResult) -> str:
    """PGN result token for *result*."""
    for token, value in _RESULT_TOKENS.items():
        if value == result:
            return token
    return "*"


def game_result_from_pgn(token: str) -> GameResult:
    return _RESULT_TOKENS.get(token, GameResult.IN_PROGRESS)


def pgn_movetext(
    sans: list[str],
    result_token: str,
    *,
    first_move_number: int = 1,
    first_side: Color = Color.WHITE,
) -> str:
    """Numbered movetext, e.g. ``1. e4 e5 2. Nf3 *``.

    A game starting with Black to move opens with ``N...``.
    """
    parts: list[str] = []
    number = first_move_number
    side = first_side
    for idx, san in enumerate(sans):
        if side == Color.WHITE:
            parts.append(f"{number}.")
        elif idx == 0:
            parts.append(f"{number}...")
        parts.append(san)
        if side == Color.BLACK:
            number += 1
        side = side.opposite
    parts.append(result_token)
    return " ".join(parts)


def build_pgn(headers: dict[str, str], movetext: str) -> str:
    """Single-game PGN document: tag pairs, blank line, movetext."""
    ordered = [k for k in SEVEN_TAG_ROSTER if k in headers]
    ordered += [k for k in headers if k not in SEVEN_TAG_ROSTER]
    lines: list[str] = []
    for key in ordered:
        escaped = headers[key].replace("\\", "\\\\").replace('"', '\\"')
        lines.append(f'[{key} "{escaped}"]')
    lines.append("")
    lines.append(movetext)
    lines.append("")
    return "\n".join(lines)


def _parse_movetext(movetext: str) -> tuple[list[str], str]:
    sans: list[str] = []
    result_token = "*"
    depth = 0
    for token in _MOVETEXT_TOKEN_RE.findall(movetext):
        if token == "(":
            depth += 1
            continue
        if token == ")":
            depth = max(0, depth - 1)
            continue
        if depth or token[0] in "{;$" or _MOVE_NUMBER_RE.match(token):
            continue
        if token in _RESULT_TOKENS:
            result_token = token
            continue
        # "12.e4" style with no space after the number
        san = token.split(".")[-1]
        if san:
            sans.append(san)
    return sans, result_token


def parse_pgn_game(pgn_text: str) -> ParsedPgn:
    """Parse a single PGN game into headers, SAN mainline and result."""
    headers: dict[str, str] = {}
    move_lines: list[str] = []

    for raw_line in pgn_text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("%"):
            continue
        if line.startswith("[") and not move_lines:
            match = _HEADER_RE.match(line)
            if match is None:
                raise ValueError(f"Invalid PGN header line: {line}")
            key, raw_value = match.groups()
            headers[key] = raw_value.replace('\\"', '"').replace("\\\\", "\\")
            continue
        move_lines.append(line)

    sans, result_token = _parse_movetext("\n".join(move_lines))
    if result_token == "*" and headers.get("Result") in _RESULT_TOKENS:
        result_token = headers["Result"]
    return ParsedPgn(headers=headers, sans=sans, result_token=result_token)
