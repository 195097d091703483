# chess_annotator/context_builders.py
"""
Data transformation functions for the annotation pipeline.

This module contains pure, testable functions that turn games into the
per-ply inputs of the classifier and turn judgements back into the
structures the outer layers consume (display payloads, game summaries).
"""
from collections import Counter
from typing import Any, Dict, List, Optional

import chess
import chess.pgn

from chess_annotator.types import GameSummary, MoveJudgement, PlyRecord

# --- Ply Records ---

def build_ply_records(game: chess.pgn.Game) -> List[PlyRecord]:
    """
    Replays the mainline of `game` and records, for each ply, the position
    it was played from. Each record can be judged on its own board.
    """
    records: List[PlyRecord] = []
    board = game.board()

    for index, node in enumerate(game.mainline()):
        move = node.move
        records.append(PlyRecord(
            ply_index=index,
            fen_before=board.fen(),
            move=move,
            san=board.san(move),
            pgn_node=node,
        ))
        board.push(move)

    return records

# --- Display Payloads ---

def judgement_to_display(judgement: MoveJudgement) -> Dict[str, Any]:
    """
    Flattens a judgement into plain data for a move-list renderer: the
    suggestion as a from/to square pair and the lines as SAN lists.
    """
    suggested = None
    if judgement.suggested_move is not None:
        from_square, to_square = judgement.suggested_move.arrow
        suggested = {"from": from_square, "to": to_square, "san": judgement.suggested_move.san}

    lines = None
    if judgement.alternate_lines is not None:
        lines = [
            {"moves": list(line.moves), "evaluation": round(line.final_evaluation, 2)}
            for line in judgement.alternate_lines
        ]

    return {
        "ply": judgement.ply_index,
        "move": judgement.san,
        "color": "white" if judgement.mover == chess.WHITE else "black",
        "quality": judgement.quality.value,
        "scoreGap": round(judgement.score_gap, 2),
        "suggestedMove": suggested,
        "alternateLines": lines,
        "error": judgement.error,
    }

# --- Game Summary ---

def _average(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0

def build_game_summary(
    game: chess.pgn.Game,
    game_id: str,
    judgements: List[MoveJudgement],
) -> Optional[GameSummary]:
    """Builds a GameSummary with per-side tier counts, or None for a game without moves."""
    if not judgements:
        return None

    judged = [j for j in judgements if not j.is_degraded]
    white = [j for j in judged if j.mover == chess.WHITE]
    black = [j for j in judged if j.mover == chess.BLACK]

    return GameSummary(
        game_id=game_id,
        white_player=game.headers.get("White", "?"),
        black_player=game.headers.get("Black", "?"),
        total_plies=len(judgements),
        degraded_plies=len(judgements) - len(judged),
        white_counts=dict(Counter(j.quality.value for j in white)),
        black_counts=dict(Counter(j.quality.value for j in black)),
        white_average_gap=_average([j.score_gap for j in white]),
        black_average_gap=_average([j.score_gap for j in black]),
        pgn_headers=dict(game.headers),
    )
