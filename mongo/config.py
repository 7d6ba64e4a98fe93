import os
import json
import pathlib
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

__all__ = [
    'Language',
    'JudgeConfig',
    'DEFAULT_LANGUAGES',
]

SUBMISSIONS_DIR = os.getenv('SUBMISSIONS_DIR', 'data/submissions')
JUDGE_RUNNER = os.getenv('JUDGE_RUNNER', 'bin/run_code.sh')
# optional JSON file describing the accepted languages
JUDGE_LANGUAGES = os.getenv('JUDGE_LANGUAGES')


@dataclass(frozen=True)
class Language:
    '''
    How a language tag is stored and executed.

    Attributes:
        runtime: the name passed to the harness, also shown to users
        extension: source file extension, including the leading dot
        entry_point: fixed base name of the source file (e.g. `Main` for
            java), the submission id is used when it is None
    '''
    runtime: str
    extension: str
    entry_point: Optional[str] = None


DEFAULT_LANGUAGES = MappingProxyType({
    'c': Language('c', '.c'),
    'cpp': Language('c++', '.cpp'),
    'ruby': Language('ruby', '.rb'),
    'python3': Language('python3', '.py'),
    'java': Language('java', '.java', entry_point='Main'),
})


@dataclass(frozen=True)
class JudgeConfig:
    submissions_dir: pathlib.Path = pathlib.Path(SUBMISSIONS_DIR)
    runner: str = JUDGE_RUNNER
    languages: Mapping[str, Language] = field(
        default_factory=lambda: DEFAULT_LANGUAGES)

    def language(self, tag: str) -> Language:
        '''
        Raises:
            KeyError: the language tag is not accepted
        '''
        return self.languages[tag]

    @staticmethod
    def load_languages(path) -> Mapping[str, Language]:
        '''
        load a language table from a JSON file with schema
        {
            "<tag>": {
                "runtime": str,
                "extension": str,
                "entryPoint": str | null
            }
        }
        '''
        with open(path, encoding='utf-8') as f:
            raw = json.load(f)
        return MappingProxyType({
            tag: Language(
                runtime=v['runtime'],
                extension=v['extension'],
                entry_point=v.get('entryPoint'),
            )
            for tag, v in raw.items()
        })

    @classmethod
    def from_env(cls) -> 'JudgeConfig':
        languages = DEFAULT_LANGUAGES
        if JUDGE_LANGUAGES:
            languages = cls.load_languages(JUDGE_LANGUAGES)
        return cls(
            submissions_dir=pathlib.Path(SUBMISSIONS_DIR),
            runner=JUDGE_RUNNER,
            languages=languages,
        )
