from collections import defaultdict
from typing import Dict, Optional

from . import engine
from .base import MongoBase

__all__ = ['UserScore']


class UserScore(MongoBase, engine=engine.UserScore):
    '''
    Points a user received in one contest, keyed by problem.
    '''

    def __str__(self):
        return f'user score [{self.id if self else None}]'

    @classmethod
    def in_contest(cls, user, contest) -> Optional['UserScore']:
        if isinstance(user, MongoBase):
            user = user.obj
        if isinstance(contest, MongoBase):
            contest = contest.obj
        score = cls.engine.objects(user=user, contest=contest).first()
        if score is None:
            return None
        return cls(score)

    @classmethod
    def add_point(cls, user, contest, problem, point: int) -> 'UserScore':
        '''
        record `point` for `problem`, creating the score on first award

        awarding the same problem again overwrites its entry, so calling
        this twice never counts a problem twice
        '''
        if isinstance(user, MongoBase):
            user = user.obj
        if isinstance(contest, MongoBase):
            contest = contest.obj
        problem_id = str(problem.pk)
        cls.engine.objects(user=user, contest=contest).update_one(
            upsert=True,
            **{f'set__points__{problem_id}': point},
        )
        return cls.in_contest(user, contest)

    @classmethod
    def claim_point(cls, user, contest, problem, point: int) -> bool:
        '''
        record `point` for `problem` only if it has no entry yet, in one
        conditional update

        Returns:
            whether this call wrote the entry
        '''
        if isinstance(user, MongoBase):
            user = user.obj
        if isinstance(contest, MongoBase):
            contest = contest.obj
        problem_id = str(problem.pk)
        try:
            cls.engine.objects(user=user, contest=contest).update_one(
                upsert=True,
                set_on_insert__points={},
            )
        except engine.NotUniqueError:
            # another worker created it first
            pass
        modified = cls.engine.objects(
            user=user,
            contest=contest,
            **{f'points__{problem_id}__exists': False},
        ).update_one(**{f'set__points__{problem_id}': point})
        return modified > 0

    @property
    def point(self) -> int:
        return sum(self.points.values())

    @classmethod
    def total_scores(cls) -> Dict[str, int]:
        '''
        Returns:
            username -> points over all contests
        '''
        totals = defaultdict(int)
        for score in cls.engine.objects:
            totals[score.user.pk] += sum(score.points.values())
        return dict(totals)
