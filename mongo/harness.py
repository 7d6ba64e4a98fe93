import os
import re
import enum
import logging
import signal
import subprocess
from dataclasses import dataclass
from typing import Optional

__all__ = [
    'HarnessFault',
    'HarnessResult',
    'Harness',
    'parse_output',
]

logger = logging.getLogger(__name__)

TIME_MARKER = '[TIME:'
USAGE_PATTERN = re.compile(
    r'\[TIME:(?P<time>\d+)ms\]\[MEMORY:(?P<memory>\d+)KB\]')
RUNTIME_ERROR_SENTINEL = '[ERROR][RUNTIME]'
COMPILE_ERROR_SENTINEL = '[ERROR][COMPILE]'


class HarnessFault(enum.Enum):
    RUNTIME = 'runtime'
    COMPILE = 'compile'
    TIMEOUT = 'timeout'
    # output matches neither the grammar nor a sentinel
    UNKNOWN = 'unknown'


@dataclass(frozen=True)
class HarnessResult:
    payload: Optional[str] = None
    time: int = 0  # in ms
    memory: int = 0  # in KB
    fault: Optional[HarnessFault] = None
    raw: str = ''

    @classmethod
    def from_fault(cls, fault: HarnessFault, raw: str = '') -> 'HarnessResult':
        return cls(fault=fault, raw=raw)


def parse_output(text: str) -> HarnessResult:
    '''
    parse the output of one harness run

    the grammar is `<payload>[TIME:<int>ms][MEMORY:<int>KB]`, where payload
    is everything before the first `[TIME:` marker, or one of the sentinels
    `[ERROR][RUNTIME]` / `[ERROR][COMPILE]`
    '''
    # strip the trailing newline only
    if text.endswith('\r\n'):
        text = text[:-2]
    elif text.endswith('\n'):
        text = text[:-1]
    if text == RUNTIME_ERROR_SENTINEL:
        return HarnessResult.from_fault(HarnessFault.RUNTIME, text)
    if text == COMPILE_ERROR_SENTINEL:
        return HarnessResult.from_fault(HarnessFault.COMPILE, text)
    payload, marker, rest = text.partition(TIME_MARKER)
    m = USAGE_PATTERN.fullmatch(marker + rest)
    if not marker or m is None:
        return HarnessResult.from_fault(HarnessFault.UNKNOWN, text)
    return HarnessResult(
        payload=payload,
        time=int(m['time']),
        memory=int(m['memory']),
        raw=text,
    )


class Harness:
    '''
    Run `<runner> <source> <runtime> <input>` once per test case.

    The runner is started in its own process group, so the program it
    spawns is killed along with it when the time budget runs out.
    '''

    def __init__(self, runner: str):
        self.runner = runner

    def invoke(
        self,
        source_path,
        runtime: str,
        input_path,
        time_budget: float,
    ) -> HarnessResult:
        '''
        Args:
            time_budget: seconds before the process group is killed

        Returns:
            the parsed result, or a `TIMEOUT` fault when the budget is exceeded
        '''
        cmd = [self.runner, str(source_path), runtime, str(input_path)]
        try:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=True,
            )
        except OSError as e:
            logger.error(f'can not spawn harness {cmd}: {e}')
            return HarnessResult.from_fault(HarnessFault.UNKNOWN)
        try:
            stdout, stderr = proc.communicate(timeout=time_budget)
        except subprocess.TimeoutExpired:
            self.kill(proc)
            return HarnessResult.from_fault(HarnessFault.TIMEOUT)
        if stderr:
            logger.debug(
                f'harness stderr: {stderr.decode("utf-8", "replace")}')
        return parse_output(stdout.decode('utf-8', errors='replace'))

    @staticmethod
    def kill(proc: subprocess.Popen):
        '''
        kill the runner and everything left in its process group
        '''
        try:
            os.killpg(proc.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
        # reap the runner and drain its pipes
        proc.communicate()
