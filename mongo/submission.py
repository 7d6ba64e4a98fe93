from __future__ import annotations
from typing import (
    Any,
    Dict,
    Optional,
)
from datetime import datetime

from . import engine
from . import notify
from .base import MongoBase
from .config import JudgeConfig
from .contest import Contest
from .harness import Harness
from .judge import Judge, Verdict
from .judge_queue import JudgeQueue
from .problem import Problem
from .storage import SourceTooLarge, store_source, read_source
from .user import User
from .user_score import UserScore

__all__ = [
    'Submission',
    'InvalidTransition',
    'ContestNotSubmitable',
    'UnknownLanguage',
    'MissingSourceCode',
]

State = engine.Submission.State


# Errors
class InvalidTransition(Exception):
    '''
    when a lifecycle event is fired from a state it does not leave from
    '''

    def __init__(self, submission_id, event: str, source: str):
        self.submission_id = submission_id
        self.event = event
        self.source = source

    def __str__(self):
        return (f'can not {self.event} submission [{self.submission_id}]: '
                f'it is not {self.source}')


class ContestNotSubmitable(engine.ValidationError):
    '''
    when the problem's contest does not accept submissions
    '''


class UnknownLanguage(engine.ValidationError):
    '''
    when the language tag is not in the judge config
    '''


class MissingSourceCode(engine.ValidationError):
    '''
    when no source was uploaded
    '''


class Submission(MongoBase, engine=engine.Submission):
    '''
    One grading attempt, moved through queued -> running -> finished.
    '''

    def __str__(self):
        return f'submission [{self.id if self else None}]'

    @property
    def username(self) -> str:
        return self.user.pk

    @property
    def queued(self) -> bool:
        return self.state == State.QUEUED

    @property
    def running(self) -> bool:
        return self.state == State.RUNNING

    @property
    def finished(self) -> bool:
        return self.state == State.FINISHED

    @property
    def accepted(self) -> bool:
        return self.result_status == Verdict.ACCEPTED.value

    @property
    def wrong_answer(self) -> bool:
        return self.result_status == Verdict.WRONG_ANSWER.value

    # --- lifecycle ---

    def _transition(
        self,
        event: str,
        source: str,
        target: str,
        **fields,
    ):
        '''
        move from `source` to `target` in one conditional update, so only
        one of concurrent callers can win
        '''
        modified = self.engine.objects(
            id=self.id,
            state=source,
        ).update_one(
            set__state=target,
            **{f'set__{k}': v
               for k, v in fields.items()},
        )
        if not modified:
            raise InvalidTransition(self.id, event, source)
        self.reload()

    def run(
        self,
        config: JudgeConfig,
        harness: Optional[Harness] = None,
    ) -> Verdict:
        '''
        queued -> running, then judge this submission

        Raises:
            InvalidTransition: the submission is running or finished
        '''
        self._transition('run', State.QUEUED, State.RUNNING)
        return Judge(self, config, harness).execute()

    def finish(self, verdict: Verdict, config: JudgeConfig):
        '''
        running -> finished, the verdict is stored together with the state
        '''
        self._transition(
            'finish',
            State.RUNNING,
            State.FINISHED,
            result_status=verdict.value,
        )
        notify.publish('finish', self.build_json_data(config))

    # --- presentation ---

    @property
    def css_class(self) -> str:
        if self.queued:
            return 'info'
        if self.accepted:
            return 'success'
        return 'error'

    def build_json_data(self, config: JudgeConfig) -> Dict[str, Any]:
        problem = self.problem
        contest = problem.contest
        try:
            lang = config.language(self.language).runtime
        except KeyError:
            lang = self.language
        score = UserScore.in_contest(self.user, contest)
        return {
            'id': str(self.id),
            'state': self.state,
            'result_status': self.result_status,
            'last_passed_test_case': self.last_passed_test_case,
            'used_time': self.used_time,
            'used_memory': self.used_memory,
            'received_point': self.received_point,
            'created_at': self.created_at.strftime('%Y/%m/%d %H:%M:%S'),
            'email': self.user.email,
            'lang': lang,
            'contest': str(contest.id),
            'problem': str(problem.id),
            'name': problem.name,
            'css_class': self.css_class,
            'user_score': score.point if score else None,
        }

    def result_announced(self, viewer: Optional[User]) -> bool:
        '''
        whether `viewer` can see the failed output and source
        '''
        if not viewer:
            return False
        if viewer.is_reviewer:
            return True
        return (self.problem.contest.result_announced
                and viewer.username == self.username)

    def source_code(self, config: JudgeConfig) -> str:
        return read_source(
            config.submissions_dir,
            self.username,
            self.problem.id,
            self.id,
            config.language(self.language),
        )

    def failed_test_case(self) -> Optional[Dict[str, str]]:
        '''
        input and expected output of the first test case not passed
        '''
        if not self.finished or self.accepted:
            return None
        problem = Problem(self.problem)
        index = self.last_passed_test_case
        if index >= problem.test_case_count:
            return None
        return {
            'input': problem.test_case_input(index),
            'output': problem.expected_output(index),
        }

    # --- creation ---

    @classmethod
    def add(
        cls,
        problem_id,
        username: str,
        language: str,
        code: Optional[bytes],
        config: JudgeConfig,
        timestamp: Optional[datetime] = None,
    ) -> 'Submission':
        '''
        validate, store the source, enqueue and announce a new submission

        Raises:
            ValidationError: the submission is rejected, nothing has been
                stored, queued or published
            DoesNotExist: the user or problem does not exist
        '''
        if not username:
            raise engine.ValidationError('user is required')
        if problem_id is None:
            raise engine.ValidationError('problem is required')
        if not language:
            raise engine.ValidationError('language is required')
        if not code:
            raise MissingSourceCode('source code is required')
        user = User(username)
        if not user:
            raise engine.DoesNotExist(f'user [{username}] does not exist')
        problem = Problem(problem_id)
        if not problem:
            raise engine.DoesNotExist(f'problem [{problem_id}] does not exist')
        if language not in config.languages:
            raise UnknownLanguage(f'{language} is not accepted')
        if not Contest(problem.contest).submitable:
            raise ContestNotSubmitable('Contest ended')
        if len(code) > problem.limited_source_size:
            raise SourceTooLarge(len(code), problem.limited_source_size)
        submission = cls.engine(
            user=user.obj,
            problem=problem.obj,
            language=language,
            created_at=timestamp or datetime.now(),
        )
        submission.save()
        try:
            store_source(
                config.submissions_dir,
                username,
                problem.id,
                submission.id,
                config.language(language),
                code,
                problem.limited_source_size,
            )
        except (OSError, engine.ValidationError):
            submission.delete()
            raise
        submission = cls(submission)
        JudgeQueue().push(submission.id)
        notify.publish('create', submission.build_json_data(config))
        submission.logger.debug(f'{submission} created by {user}')
        return submission
