from . import engine
from . import config
from . import user
from . import contest
from . import problem
from . import user_score
from . import storage
from . import harness
from . import judge
from . import judge_queue
from . import submission

from .engine import *
from .config import *
from .user import *
from .contest import *
from .problem import *
from .user_score import *
from .storage import *
from .harness import *
from .judge import *
from .judge_queue import *
from .submission import *

__all__ = [
    *engine.__all__,
    *config.__all__,
    *user.__all__,
    *contest.__all__,
    *problem.__all__,
    *user_score.__all__,
    *storage.__all__,
    *harness.__all__,
    *judge.__all__,
    *judge_queue.__all__,
    *submission.__all__,
]
