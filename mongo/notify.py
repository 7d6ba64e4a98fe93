import json
from typing import Any, Dict

from .utils import RedisCache

__all__ = ['publish', 'CHANNEL']

CHANNEL = 'submissions'


def publish(event: str, data: Dict[str, Any]) -> int:
    '''
    push a submission event to subscribers of the `submissions` channel

    Returns:
        the number of subscribers that received the message
    '''
    message = json.dumps({'event': event, 'data': data}, default=str)
    return RedisCache().client.publish(CHANNEL, message)
