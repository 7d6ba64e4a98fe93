from datetime import datetime
from typing import Optional

from . import engine
from .base import MongoBase

__all__ = ['Contest']


class Contest(MongoBase, engine=engine.Contest):

    def __str__(self):
        return f'contest [{self.id if self else None}]'

    @classmethod
    def add(
        cls,
        name: str,
        start_at: Optional[datetime] = None,
        submitable: bool = True,
        point_visible: bool = True,
        result_announced: bool = False,
        slow_penalty_multiplier: int = 1,
    ) -> 'Contest':
        contest = cls.engine(
            name=name,
            start_at=start_at or datetime.now(),
            submitable=submitable,
            point_visible=point_visible,
            result_announced=result_announced,
            slow_penalty_multiplier=slow_penalty_multiplier,
        ).save()
        return cls(contest)
