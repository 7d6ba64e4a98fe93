from typing import (
    Iterable,
    Tuple,
)
from .. import engine
from ..base import MongoBase
from ..contest import Contest

__all__ = ('Problem', )


class Problem(MongoBase, engine=engine.Problem):

    def __str__(self):
        return f'problem [{self.id if self else None}]'

    @classmethod
    def add(
        cls,
        name: str,
        contest: Contest,
        test_cases: Iterable[Tuple[str, str]] = (),
        limited_time: int = 1000,
        limited_memory: int = 262144,
        limited_source_size: int = 65536,
        point: int = 100,
        wrong_answer_decreased_point: int = 0,
        slowly_decreased_interval: int = 0,
    ) -> 'Problem':
        '''
        Args:
            test_cases: (input path, expected output path) pairs, in the
                order they are judged
        '''
        if not contest:
            raise engine.DoesNotExist(f'{contest} does not exist')
        problem = cls.engine(
            name=name,
            contest=contest.obj,
            test_cases=[
                engine.ProblemTestCase(input=str(i), output=str(o))
                for i, o in test_cases
            ],
            limited_time=limited_time,
            limited_memory=limited_memory,
            limited_source_size=limited_source_size,
            point=point,
            wrong_answer_decreased_point=wrong_answer_decreased_point,
            slowly_decreased_interval=slowly_decreased_interval,
        ).save()
        return cls(problem)

    @property
    def test_case_count(self) -> int:
        return len(self.test_cases)

    @property
    def time_budget(self) -> float:
        '''
        per test case limit in seconds
        '''
        return self.limited_time / 1000.0

    def expected_output(self, index: int) -> str:
        with open(self.test_cases[index].output, encoding='utf-8') as f:
            return f.read()

    def test_case_input(self, index: int) -> str:
        with open(self.test_cases[index].input, encoding='utf-8') as f:
            return f.read()
