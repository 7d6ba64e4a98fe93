import pytest
from datetime import datetime
from mongo import *
from mongo import engine
from tests import utils
from tests.utils.harness import FakeHarness, ok
import worker


@pytest.fixture
def user():
    return utils.user.create_user('Nico')


@pytest.fixture
def problem(case_dir):
    return utils.problem.create_problem(case_dir, limited_source_size=64)


def submission_files(judge_config):
    root = judge_config.submissions_dir
    if not root.exists():
        return []
    return list(root.rglob('*'))


class TestCreateSubmission:

    def test_add(self, user, problem, judge_config, events):
        submission = utils.submission.create_submission(
            user,
            problem,
            judge_config,
            code=b'print(1)',
            language='python3',
        )
        assert submission.queued
        assert submission.result_status is None
        assert submission.last_passed_test_case == 0
        assert submission.received_point is None
        # source stored at root/user/problem/submission
        path = judge_config.submissions_dir / 'Nico' / str(
            problem.id) / str(submission.id) / f'{submission.id}.py'
        assert path.read_bytes() == b'print(1)'
        assert submission.source_code(judge_config) == 'print(1)'
        # enqueued once
        queue = JudgeQueue()
        assert len(queue) == 1
        assert queue.pop(timeout=1) == str(submission.id)
        # announced
        assert len(events) == 1
        event, data = events[0]
        assert event == 'create'
        assert data['state'] == 'queued'
        assert data['css_class'] == 'info'
        assert data['lang'] == 'python3'
        assert data['name'] == problem.name
        assert data['user_score'] is None

    def test_add_with_entry_point(self, user, problem, judge_config, events):
        submission = utils.submission.create_submission(
            user,
            problem,
            judge_config,
            code=b'class Main {}',
            language='java',
        )
        path = source_path(
            judge_config.submissions_dir,
            user.username,
            problem.id,
            submission.id,
            judge_config.language('java'),
        )
        assert path.name == 'Main.java'
        assert path.read_bytes() == b'class Main {}'

    def test_created_at_format(self, user, problem, judge_config, events):
        submission = utils.submission.create_submission(
            user,
            problem,
            judge_config,
            timestamp=datetime(2024, 3, 5, 7, 8, 9),
        )
        data = submission.build_json_data(judge_config)
        assert data['created_at'] == '2024/03/05 07:08:09'

    @pytest.mark.parametrize(
        'ks, exc',
        [
            ({'code': b'x' * 65}, SourceTooLarge),
            ({'code': b''}, MissingSourceCode),
            ({'code': None}, MissingSourceCode),
            ({'language': 'brainfuck'}, UnknownLanguage),
            ({'language': None}, engine.ValidationError),
            ({'username': None}, engine.ValidationError),
            ({'problem_id': None}, engine.ValidationError),
        ],
    )
    def test_admission_fault(self, user, problem, judge_config, events, ks,
                             exc):
        params = {
            'problem_id': problem.id,
            'username': user.username,
            'language': 'ruby',
            'code': b'puts 1',
            'config': judge_config,
            **ks,
        }
        with pytest.raises(exc):
            Submission.add(**params)
        assert engine.Submission.objects.count() == 0
        assert submission_files(judge_config) == []
        assert len(JudgeQueue()) == 0
        assert events == []

    def test_contest_not_submitable(self, user, case_dir, judge_config,
                                    events):
        contest = utils.contest.create_contest(submitable=False)
        problem = utils.problem.create_problem(case_dir, contest=contest)
        with pytest.raises(ContestNotSubmitable):
            utils.submission.create_submission(user, problem, judge_config)
        assert engine.Submission.objects.count() == 0
        assert submission_files(judge_config) == []
        assert len(JudgeQueue()) == 0
        assert events == []

    def test_unknown_user_or_problem(self, user, problem, judge_config,
                                     events):
        with pytest.raises(engine.DoesNotExist):
            Submission.add(problem.id, 'nobody', 'ruby', b'1', judge_config)
        with pytest.raises(engine.DoesNotExist):
            Submission.add('0' * 24, user.username, 'ruby', b'1',
                           judge_config)
        with pytest.raises(engine.DoesNotExist):
            Submission.add('not-an-id', user.username, 'ruby', b'1',
                           judge_config)
        assert engine.Submission.objects.count() == 0

    def test_source_size_at_limit_is_accepted(self, user, problem,
                                              judge_config, events):
        submission = utils.submission.create_submission(
            user,
            problem,
            judge_config,
            code=b'x' * 64,
        )
        assert submission


class TestLifecycle:

    @pytest.fixture
    def submission(self, user, problem, judge_config, events):
        return utils.submission.create_submission(user, problem, judge_config)

    def test_run_finished_submission(self, submission, judge_config):
        submission.run(judge_config, FakeHarness([ok('3'), ok('7')]))
        harness = FakeHarness([ok('3'), ok('7')])
        with pytest.raises(InvalidTransition):
            submission.run(judge_config, harness)
        submission.reload()
        assert submission.finished
        assert harness.calls == []

    def test_run_running_submission(self, submission, judge_config):
        rejected = []

        def rerun(index):
            # a duplicate delivery arrives while the first run is judging
            try:
                Submission(submission.id).run(judge_config,
                                              FakeHarness([ok('3')]))
            except InvalidTransition:
                rejected.append(index)
            return ok(['3', '7'][index])

        harness = FakeHarness([rerun, rerun])
        verdict = submission.run(judge_config, harness)
        assert verdict == Verdict.ACCEPTED
        assert rejected == [0, 1]
        assert len(harness.calls) == 2

    def test_finish_only_from_running(self, submission, judge_config):
        with pytest.raises(InvalidTransition):
            submission.finish(Verdict.ACCEPTED, judge_config)
        submission.reload()
        assert submission.queued
        assert submission.result_status is None

    def test_verdict_set_iff_finished(self, submission, judge_config):
        assert submission.result_status is None
        submission.run(judge_config, FakeHarness([ok('3'), ok('0')]))
        submission.reload()
        assert submission.finished
        assert submission.result_status == 'Wrong Answer'

    def test_failed_test_case(self, submission, judge_config):
        assert submission.failed_test_case() is None
        submission.run(judge_config, FakeHarness([ok('3'), ok('0')]))
        submission.reload()
        failed = submission.failed_test_case()
        assert failed == {'input': 'input 1\n', 'output': '7\n'}

    def test_css_class(self, submission, judge_config, user, problem):
        assert submission.css_class == 'info'
        submission.run(judge_config, FakeHarness([ok('3'), ok('7')]))
        submission.reload()
        assert submission.css_class == 'success'
        other = utils.submission.create_submission(user, problem,
                                                   judge_config)
        other.run(judge_config, FakeHarness(['[ERROR][COMPILE]']))
        other.reload()
        assert other.css_class == 'error'


class TestResultAnnounced:

    def test_reviewer_can_view(self, user, problem, judge_config, events):
        reviewer = utils.user.create_user('reviewer', is_reviewer=True)
        submission = utils.submission.create_submission(
            user, problem, judge_config)
        assert submission.result_announced(reviewer)

    def test_owner_after_announcement(self, user, case_dir, judge_config,
                                      events):
        contest = utils.contest.create_contest()
        problem = utils.problem.create_problem(case_dir, contest=contest)
        submission = utils.submission.create_submission(
            user, problem, judge_config)
        other = utils.user.create_user('Ruby')
        assert not submission.result_announced(user)
        contest.update(result_announced=True)
        submission = Submission(submission.id)
        assert submission.result_announced(user)
        assert not submission.result_announced(other)
        assert not submission.result_announced(None)


class TestWorker:

    @pytest.fixture
    def submission(self, user, problem, judge_config, events):
        return utils.submission.create_submission(user, problem, judge_config)

    def test_duplicate_delivery(self, submission, judge_config):
        harness = FakeHarness([ok('3'), ok('7'), ok('3'), ok('7')])
        assert worker.handle(str(submission.id), judge_config, harness)
        assert not worker.handle(str(submission.id), judge_config, harness)
        assert len(harness.calls) == 2
        submission.reload()
        assert submission.accepted

    def test_unknown_submission(self, judge_config):
        harness = FakeHarness([])
        assert not worker.handle('0' * 24, judge_config, harness)
        assert harness.calls == []
