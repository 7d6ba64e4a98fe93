from . import engine
from .base import MongoBase

__all__ = ['User']


class User(MongoBase, engine=engine.User):

    def __str__(self):
        return f'user [{self.username if self else None}]'

    @classmethod
    def add(
        cls,
        username: str,
        email: str,
        is_reviewer: bool = False,
    ) -> 'User':
        user = cls.engine(
            username=username,
            email=email,
            is_reviewer=is_reviewer,
        ).save(force_insert=True)
        return cls(user)

    def solved(self, problem) -> bool:
        '''
        whether this user already has an accepted submission of `problem`
        '''
        if isinstance(problem, MongoBase):
            problem = problem.obj
        return engine.Submission.objects(
            user=self.obj,
            problem=problem,
            result_status='Accepted',
        ).count() > 0
