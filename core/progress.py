# core/progress.py

from typing import Sequence, Tuple

from models.block import Block


def progress_counts(snapshot: Sequence[Block]) -> Tuple[int, int]:
    """(выполнено, всего) по рабочим блокам; перерывы не считаются"""
    work = [b for b in snapshot if b.is_work]
    done = sum(1 for b in work if b.done)
    return done, len(work)


def percent(done: int, total: int) -> int:
    """Целый процент с округлением половины вверх: 1/8 -> 13, 1/3 -> 33"""
    if total <= 0:
        return 0
    return (200 * done + total) // (2 * total)


def progress(snapshot: Sequence[Block]) -> int:
    """Процент выполненных рабочих блоков дня, 0..100"""
    done, total = progress_counts(snapshot)
    return percent(done, total)
