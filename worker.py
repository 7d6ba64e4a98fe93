#!/usr/bin/env python3
"""
Judge worker: pop submission ids from the judge queue and run them.
Usage: python worker.py [--workers N]
"""
import os
import sys
import logging
import argparse
import threading
from logging.config import dictConfig
from typing import Optional

from config import LOGGING_CONFIG, LOG_DIR, JUDGE_WORKERS, JUDGE_QUEUE_POLL
from mongo import (
    InvalidTransition,
    JudgeConfig,
    JudgeQueue,
    Submission,
)
from mongo.harness import Harness

logger = logging.getLogger('judge.worker')


def handle(
    submission_id: str,
    config: JudgeConfig,
    harness: Optional[Harness] = None,
) -> bool:
    '''
    run one queued submission

    Returns:
        whether the submission was judged by this call
    '''
    submission = Submission(submission_id)
    if not submission:
        logger.warning(f'submission [{submission_id}] does not exist')
        return False
    try:
        verdict = submission.run(config, harness)
    except InvalidTransition as e:
        # duplicate delivery, someone else has run it
        logger.info(f'skip {submission}: {e}')
        return False
    logger.info(f'{submission} judged: {verdict.value}')
    return True


def work_loop(
    config: JudgeConfig,
    stop: threading.Event,
    queue: Optional[JudgeQueue] = None,
    poll: int = JUDGE_QUEUE_POLL,
):
    queue = queue or JudgeQueue()
    harness = Harness(config.runner)
    while not stop.is_set():
        submission_id = queue.pop(timeout=poll)
        if submission_id is None:
            continue
        try:
            handle(submission_id, config, harness)
        except Exception as e:
            logger.exception(f'worker failed on [{submission_id}]: {e}')


def serve(config: JudgeConfig, workers: int):
    stop = threading.Event()
    threads = [
        threading.Thread(
            target=work_loop,
            args=(config, stop),
            name=f'judge-worker-{i}',
            daemon=True,
        ) for i in range(workers)
    ]
    for t in threads:
        t.start()
    logger.info(f'{workers} judge worker(s) started')
    try:
        for t in threads:
            t.join()
    except KeyboardInterrupt:
        logger.info('stopping judge workers')
        stop.set()
        for t in threads:
            t.join()


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('--workers', type=int, default=JUDGE_WORKERS)
    args = parser.parse_args(argv)
    os.makedirs(LOG_DIR, exist_ok=True)
    dictConfig(LOGGING_CONFIG)
    serve(JudgeConfig.from_env(), args.workers)


if __name__ == '__main__':
    sys.exit(main())
