from typing import Optional

from .utils import RedisCache

__all__ = ['JudgeQueue']


class JudgeQueue:
    '''
    At-least-once queue of submission ids backed by a redis list.
    '''
    KEY = 'judge-queue'

    def __init__(self, key: Optional[str] = None):
        self.key = key or self.KEY

    @property
    def client(self):
        return RedisCache().client

    def push(self, submission_id) -> None:
        self.client.rpush(self.key, str(submission_id))

    def pop(self, timeout: int = 5) -> Optional[str]:
        '''
        block until an id is available

        Returns:
            the submission id, or None if nothing arrived within `timeout`
            seconds
        '''
        item = self.client.blpop([self.key], timeout=timeout)
        if item is None:
            return None
        _, submission_id = item
        return submission_id.decode()

    def __len__(self):
        return self.client.llen(self.key)

    def clear(self):
        self.client.delete(self.key)
