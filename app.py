import os
import logging
from logging.config import dictConfig
from typing import Optional
from flask import Flask
from model import *
from mongo import *
from config import LOGGING_CONFIG, LOG_DIR


def app(judge_config: Optional[JudgeConfig] = None):
    os.makedirs(LOG_DIR, exist_ok=True)
    dictConfig(LOGGING_CONFIG)

    app = Flask(__name__)
    app.url_map.strict_slashes = False
    # loaded once, shared by every request
    judge_config = judge_config or JudgeConfig.from_env()
    app.config['JUDGE_CONFIG'] = judge_config
    app.logger.info(
        f'accepting {", ".join(sorted(judge_config.languages))}, '
        f'sources under {judge_config.submissions_dir}')

    api2prefix = [
        (submission_api, '/submission'),
    ]
    for api, prefix in api2prefix:
        app.register_blueprint(api, url_prefix=prefix)

    if __name__ != '__main__':
        logger = logging.getLogger('gunicorn.error')
        app.logger.setLevel(logger.level)

    return app
