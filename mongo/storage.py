import pathlib
from typing import Union

from . import engine
from .config import Language

__all__ = [
    'SourceTooLarge',
    'source_filename',
    'source_dir',
    'source_path',
    'store_source',
    'read_source',
]

PathLike = Union[str, pathlib.Path]


class SourceTooLarge(engine.ValidationError):
    '''
    when the uploaded source exceeds the problem's limited source size
    '''

    def __init__(self, size: int, max_size: int):
        super().__init__(
            f'Limited source size exceeded ({size} > {max_size} bytes)')
        self.size = size
        self.max_size = max_size


def source_filename(submission_id, language: Language) -> str:
    base = language.entry_point or str(submission_id)
    return base + language.extension


def source_dir(root: PathLike, user_id, problem_id,
               submission_id) -> pathlib.Path:
    return pathlib.Path(root) / str(user_id) / str(problem_id) / str(
        submission_id)


def source_path(
    root: PathLike,
    user_id,
    problem_id,
    submission_id,
    language: Language,
) -> pathlib.Path:
    '''
    where the source of a submission lives, computed without touching the disk
    '''
    return source_dir(root, user_id, problem_id, submission_id) / \
        source_filename(submission_id, language)


def store_source(
    root: PathLike,
    user_id,
    problem_id,
    submission_id,
    language: Language,
    data: bytes,
    max_size: int,
) -> pathlib.Path:
    '''
    write the uploaded source to `root/user_id/problem_id/submission_id`

    Raises:
        SourceTooLarge: nothing is created on the disk in that case
    '''
    if len(data) > max_size:
        raise SourceTooLarge(len(data), max_size)
    directory = source_dir(root, user_id, problem_id, submission_id)
    # concurrent workers may create the same parents
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / source_filename(submission_id, language)
    path.write_bytes(data)
    return path


def read_source(
    root: PathLike,
    user_id,
    problem_id,
    submission_id,
    language: Language,
) -> str:
    path = source_path(root, user_id, problem_id, submission_id, language)
    return path.read_text(encoding='utf-8', errors='replace')
