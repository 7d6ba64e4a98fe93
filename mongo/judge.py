import enum
from typing import Optional

from . import scoring
from .config import JudgeConfig
from .harness import Harness, HarnessFault
from .problem import Problem
from .storage import source_path
from .user import User

__all__ = [
    'Verdict',
    'Judge',
    'normalize_output',
]


class Verdict(str, enum.Enum):
    ACCEPTED = 'Accepted'
    WRONG_ANSWER = 'Wrong Answer'
    RUNTIME_ERROR = 'Runtime Error'
    COMPILE_ERROR = 'Compile Error'
    MEMORY_LIMIT = 'Limited memory exceeded'
    TIME_LIMIT = 'Limited time exceeded'
    # the harness answered something we can not interpret
    JUDGE_ERROR = 'Judge Error'


def normalize_output(text: str) -> str:
    text = text.replace('\r\n', '\n')
    if text.endswith('\n'):
        text = text[:-1]
    return text


class Judge:
    '''
    Judge one submission against its problem's test cases, in order,
    stopping at the first failing one.
    '''

    def __init__(
        self,
        submission,
        config: JudgeConfig,
        harness: Optional[Harness] = None,
    ):
        self.submission = submission
        self.config = config
        self.harness = harness or Harness(config.runner)
        self.problem = Problem(submission.problem)
        self.used_time = 0
        self.used_memory = 0

    @property
    def logger(self):
        return self.submission.logger

    def source_path(self):
        sub = self.submission
        return source_path(
            self.config.submissions_dir,
            sub.user.pk,
            self.problem.id,
            sub.id,
            self.config.language(sub.language),
        )

    def evaluate(self) -> Verdict:
        '''
        run every test case and return the verdict, progress is saved
        after each passed test case
        '''
        sub = self.submission
        problem = self.problem
        src = self.source_path()
        runtime = self.config.language(sub.language).runtime
        for index, test_case in enumerate(problem.test_cases):
            result = self.harness.invoke(
                src,
                runtime,
                test_case.input,
                problem.time_budget,
            )
            if result.fault == HarnessFault.TIMEOUT:
                return Verdict.TIME_LIMIT
            if result.fault == HarnessFault.RUNTIME:
                return Verdict.RUNTIME_ERROR
            if result.fault == HarnessFault.COMPILE:
                return Verdict.COMPILE_ERROR
            if result.fault is not None:
                self.logger.error(
                    f'unrecognized harness output for {sub} '
                    f'[case={index}]: {result.raw!r}')
                return Verdict.JUDGE_ERROR
            self.used_time = max(self.used_time, result.time)
            self.used_memory = max(self.used_memory, result.memory)
            if self.used_memory > problem.limited_memory:
                return Verdict.MEMORY_LIMIT
            expected = normalize_output(problem.expected_output(index))
            if normalize_output(result.payload) != expected:
                sub.update(failed_test_case_result=result.payload)
                return Verdict.WRONG_ANSWER
            sub.update(last_passed_test_case=index + 1)
        return Verdict.ACCEPTED

    def record(self, verdict: Verdict):
        '''
        credit a first acceptance and save the resource maxima
        '''
        sub = self.submission
        if verdict == Verdict.ACCEPTED and not User(sub.user).solved(
                self.problem):
            point = scoring.award(sub.obj)
            self.logger.info(f'{sub} received {point} point(s)')
        sub.update(
            used_time=self.used_time,
            used_memory=self.used_memory,
        )

    def execute(self) -> Verdict:
        sub = self.submission
        self.logger.info(f'judging {sub}')
        try:
            verdict = self.evaluate()
        except Exception as e:
            self.logger.exception(f'failed to judge {sub}: {e}')
            verdict = Verdict.JUDGE_ERROR
        try:
            self.record(verdict)
        except Exception as e:
            self.logger.exception(f'failed to record result of {sub}: {e}')
            verdict = Verdict.JUDGE_ERROR
        sub.finish(verdict, self.config)
        self.logger.info(f'{sub} finished with {verdict.value}')
        return verdict
