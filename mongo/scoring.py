'''
Contest points for accepted submissions.

A user is credited once per problem, on the first accepted submission:

    point = problem.point
            - wrong submissions before it * problem.wrong_answer_decreased_point
            - slow-submission steps * contest.slow_penalty_multiplier

where a slow-submission step is `problem.slowly_decreased_interval` seconds
elapsed since the contest started (rounded half up). The result never goes
below zero.
'''
import math
from typing import Optional

from . import engine
from .user_score import UserScore

__all__ = [
    'wrong_answer_decreased_point',
    'slowly_decreased_point',
    'compute_point',
    'award',
]

ACCEPTED = 'Accepted'


def wrong_answer_decreased_point(submission) -> int:
    count = engine.Submission.objects(
        user=submission.user,
        problem=submission.problem,
        state=engine.Submission.State.FINISHED,
        result_status__ne=ACCEPTED,
    ).count()
    return count * submission.problem.wrong_answer_decreased_point


def slowly_decreased_point(submission) -> int:
    problem = submission.problem
    contest = problem.contest
    interval = problem.slowly_decreased_interval
    if not interval:
        return 0
    elapsed = (submission.created_at - contest.start_at).total_seconds()
    if elapsed <= 0:
        return 0
    steps = math.floor(elapsed / interval + 0.5)
    return steps * contest.slow_penalty_multiplier


def compute_point(submission) -> int:
    point = submission.problem.point
    point -= wrong_answer_decreased_point(submission)
    point -= slowly_decreased_point(submission)
    return max(point, 0)


def award(submission) -> Optional[int]:
    '''
    credit an accepted submission

    the problem's entry in the user score is claimed atomically, so of
    concurrently judged acceptances only one receives the point

    Args:
        submission: the `engine.Submission` being finished as accepted, it
            must not be marked accepted in db yet

    Returns:
        the credited point, or None if the user has already been credited
        for this problem
    '''
    problem = submission.problem
    contest = problem.contest
    already_accepted = engine.Submission.objects(
        id__ne=submission.id,
        user=submission.user,
        problem=problem,
        result_status=ACCEPTED,
    ).count() > 0
    if already_accepted:
        return None
    point = compute_point(submission)
    if not UserScore.claim_point(submission.user, contest, problem, point):
        return None
    submission.update(received_point=point)
    return point
