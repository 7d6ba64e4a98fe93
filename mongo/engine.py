from mongoengine import *
import mongoengine
import os
from datetime import datetime

__all__ = [*mongoengine.__all__]

MONGO_HOST = os.environ.get('MONGO_HOST', 'mongomock://localhost')

# FIXME: we should use config to check whether is in testing
if MONGO_HOST.startswith('mongomock'):
    import mongomock
    MONGO_HOST = MONGO_HOST.replace('mongomock', 'mongodb')
    connect(
        'contest-judge',
        host=MONGO_HOST,
        mongo_client_class=mongomock.MongoClient,
    )
else:
    connect('contest-judge', host=MONGO_HOST)


class User(Document):
    username = StringField(max_length=16, required=True, primary_key=True)
    email = EmailField(required=True, unique=True, max_length=128)
    is_reviewer = BooleanField(db_field='isReviewer', default=False)


class Contest(Document):
    name = StringField(max_length=64, required=True)
    start_at = DateTimeField(db_field='startAt', default=datetime.now)
    # whether the contest accepts new submissions
    submitable = BooleanField(default=True)
    point_visible = BooleanField(db_field='pointVisible', default=True)
    result_announced = BooleanField(db_field='resultAnnounced', default=False)
    # point deducted per slow-submission step
    slow_penalty_multiplier = IntField(
        db_field='slowPenaltyMultiplier',
        default=1,
        min_value=0,
    )


class ProblemTestCase(EmbeddedDocument):
    # paths of the input / expected output artifacts
    input = StringField(required=True, max_length=512)
    output = StringField(required=True, max_length=512)


class Problem(Document):
    name = StringField(max_length=64, required=True)
    contest = ReferenceField(Contest, required=True)
    test_cases = EmbeddedDocumentListField(
        ProblemTestCase,
        default=list,
        db_field='testCases',
    )
    limited_time = IntField(db_field='limitedTime', default=1000)  # in ms
    limited_memory = IntField(db_field='limitedMemory',
                              default=262144)  # in KB
    limited_source_size = IntField(
        db_field='limitedSourceSize',
        default=65536,
    )  # in bytes
    point = IntField(default=100, min_value=0)
    wrong_answer_decreased_point = IntField(
        db_field='wrongAnswerDecreasedPoint',
        default=0,
        min_value=0,
    )
    # in seconds, 0 disables the slow-submission decay
    slowly_decreased_interval = IntField(
        db_field='slowlyDecreasedInterval',
        default=0,
        min_value=0,
    )


class Submission(Document):
    meta = {
        'indexes': [
            'problem',
            'user',
            ('problem', 'user', '-created_at'),
        ]
    }

    class State:
        QUEUED = 'queued'
        RUNNING = 'running'
        FINISHED = 'finished'

    user = ReferenceField(User, required=True)
    problem = ReferenceField(Problem, required=True)
    language = StringField(required=True, max_length=32)
    state = StringField(
        default=State.QUEUED,
        choices=[State.QUEUED, State.RUNNING, State.FINISHED],
    )
    result_status = StringField(db_field='resultStatus', null=True)
    last_passed_test_case = IntField(
        db_field='lastPassedTestCase',
        default=0,
        min_value=0,
    )
    failed_test_case_result = StringField(
        db_field='failedTestCaseResult',
        null=True,
    )
    used_time = IntField(db_field='usedTime', default=0)  # in ms
    used_memory = IntField(db_field='usedMemory', default=0)  # in KB
    received_point = IntField(db_field='receivedPoint', null=True)
    created_at = DateTimeField(db_field='createdAt', default=datetime.now)


class UserScore(Document):
    meta = {
        'indexes': [
            {
                'fields': ['user', 'contest'],
                'unique': True,
            },
        ]
    }

    user = ReferenceField(User, required=True)
    contest = ReferenceField(Contest, required=True)
    # Dict[problem id, awarded point]
    points = DictField(default=dict)
