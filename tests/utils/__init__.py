from mongo import engine
from mongo.utils import RedisCache
from . import user
from . import contest
from . import problem
from . import submission
from . import harness


def drop_db():
    for doc in (
            engine.Submission,
            engine.UserScore,
            engine.Problem,
            engine.Contest,
            engine.User,
    ):
        doc.objects.delete()
    RedisCache().client.flushall()
