"""klaw-match: Option and Result containers with structural pattern matching.

Flat imports (preferred):
    from klaw_match import option, result, match, _
    from klaw_match import present, absent, success, failure

Namespaced algebras:
    option.unwrap_or(option.present(1), 0)
    await result.map(result.success(2), lambda x: x * 2)

Matching:
    match(result.success(5), {'Ok': lambda v: v * 2, 'Err': lambda: -1})  # 10
    match(5, [(lambda v: v > 10, 'big'), (lambda v: v > 0, 'small')])  # 'small'
"""

from klaw_match import option, result

# Configuration & logging
from klaw_match._config import MatchConfig, get_config, init
from klaw_match._internal.variant import Variant
from klaw_match._logging import configure_logging, get_logger

# Decorators
from klaw_match.decorators import capture_option, capture_result

# Errors
from klaw_match.errors import CapturedError, KlawMatchError, NoMatchError, UnwrapError

# Matching
from klaw_match.matching import _, check_branch_match, match

# Option types
from klaw_match.option import AbsentType, Option, Present, absent, present

# Result types
from klaw_match.result import Failure, Result, Success, failure, success

__all__ = [
    'AbsentType',
    'CapturedError',
    'Failure',
    'KlawMatchError',
    'MatchConfig',
    'NoMatchError',
    'Option',
    'Present',
    'Result',
    'Success',
    'UnwrapError',
    'Variant',
    '_',
    'absent',
    'capture_option',
    'capture_result',
    'check_branch_match',
    'configure_logging',
    'failure',
    'get_config',
    'get_logger',
    'init',
    'match',
    'option',
    'present',
    'result',
    'success',
]
