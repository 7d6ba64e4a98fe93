from flask import (
    Blueprint,
    request,
    current_app,
)
from mongo import *
from mongo import engine
from .utils import *

__all__ = ['submission_api']
submission_api = Blueprint('submission_api', __name__)

# identity is resolved by the gateway in front of this service
USER_HEADER = 'X-Username'


def judge_config() -> JudgeConfig:
    return current_app.config['JUDGE_CONFIG']


def current_user():
    username = request.headers.get(USER_HEADER)
    if not username:
        return None
    user = User(username)
    return user if user else None


@submission_api.route('/', methods=['POST'])
def create_submission():
    user = current_user()
    if user is None:
        return HTTPError('Login required.', 403)
    problem_id = request.form.get('problemId')
    language = request.form.get('language')
    code = request.files.get('code')
    if problem_id is None or language is None or code is None:
        return HTTPError(
            'post data missing!',
            400,
            data={
                'problemId': problem_id,
                'language': language,
                'code': code is not None,
            },
        )
    try:
        submission = Submission.add(
            problem_id=problem_id,
            username=user.username,
            language=language,
            code=code.read(),
            config=judge_config(),
        )
    except ContestNotSubmitable as e:
        return HTTPError(str(e), 403)
    except engine.ValidationError as e:
        return HTTPError(str(e), 400)
    except engine.DoesNotExist as e:
        return HTTPError(str(e), 404)
    except OSError as e:
        current_app.logger.error(f'can not store source of {user}: {e}')
        return HTTPError('can not store the source file', 500)
    return HTTPResponse(
        'submission received.',
        201,
        data=submission.build_json_data(judge_config()),
    )


@submission_api.route('/<submission_id>', methods=['GET'])
def get_submission(submission_id):
    submission = Submission(submission_id)
    if not submission:
        return HTTPError(f'submission [{submission_id}] not found', 404)
    config = judge_config()
    ret = submission.build_json_data(config)
    viewer = current_user()
    if not submission.problem.contest.point_visible:
        ret['received_point'] = None
        ret['user_score'] = None
    if submission.result_announced(viewer):
        try:
            ret['source'] = submission.source_code(config)
        except (OSError, KeyError) as e:
            current_app.logger.error(
                f'can not read source of {submission}: {e}')
            ret['source'] = None
        if submission.wrong_answer:
            ret['failed_output'] = submission.failed_test_case_result
        try:
            ret['failed_test_case'] = submission.failed_test_case()
        except OSError as e:
            current_app.logger.error(
                f'can not read test case of {submission}: {e}')
            ret['failed_test_case'] = None
    return HTTPResponse(data=ret)
