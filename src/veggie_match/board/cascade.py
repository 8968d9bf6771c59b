from __future__ import annotations

from typing import Dict, List, Optional

from veggie_match.board.grid import Grid
from veggie_match.board.specials import SpecialPlan, determine_special, score_event_for
from veggie_match.components.cell import Cell, CellRecord, Position
from veggie_match.components.match import Match, ProcessResult


def process_matches(grid: Grid, matches: List[Match], swap_pos: Optional[Position] = None) -> ProcessResult:
    """Remove matched cells and place the specials the matches earn.

    Overlapping matches remove a shared cell once. A cell chosen to host a new
    special is never cleared; it is overwritten with the special instead. If
    two matches pick the same host, the first one keeps it.
    """
    result = ProcessResult()
    plans: Dict[Position, SpecialPlan] = {}
    for match in matches:
        plan = determine_special(match, swap_pos)
        result.score_events.append(score_event_for(match).value)
        if plan is not None and plan.position not in plans:
            plans[plan.position] = plan

    seen: set[Position] = set()
    for match in matches:
        for pos in match.cells:
            if pos in plans or pos in seen:
                continue
            seen.add(pos)
            cell = grid.get(*pos)
            if cell is None:
                continue
            result.removed.append(CellRecord(pos[0], pos[1], cell.type, cell.special))

    for record in result.removed:
        grid.set(record.row, record.col, None)

    for (row, col), plan in plans.items():
        grid.set(row, col, Cell(type=plan.type, special=plan.special))
        result.specials.append(CellRecord(row, col, plan.type, plan.special))
    return result
