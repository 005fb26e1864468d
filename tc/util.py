# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import functools
import logging
import re

logger = logging.getLogger(__name__)


class Failure(RuntimeError, ValueError):
    pass


def fail(msg=None):
    if msg:
        logger.error(msg)
    raise Failure(msg or 'failure')


def check_type(instance, type):
    if not isinstance(instance, type):
        fail('{i} is not an instance of {t}'.format(i=instance, t=type))
    return instance


def not_empty(value):
    if not value or len(value) == 0:
        fail('passed value must not be empty')
    return value


def not_none(value):
    if value is None:
        fail('passed value must not be None')
    return value


_snake_word = re.compile(r'_([a-z0-9])')


def camel_case(name: str) -> str:
    '''
    converts a snake_case identifier into lowerCamelCase (`agent_git_path` -> `agentGitPath`).
    Leading underscores are stripped.
    '''
    return _snake_word.sub(lambda m: m.group(1).upper(), name.lstrip('_'))


def merge_dicts(base: dict, *other: dict):
    '''
    merges copies of the given dict instances and returns the merge result.
    The arguments remain unmodified. However, it must be possible to copy them
    using `copy.deepcopy`.

    Merging is done using the `deepmerge` module. In case of merge conflicts, values from
    `other` overwrite values from `base`. Key order of `base` is retained; keys only present
    in `other` are appended.
    '''

    not_none(base)
    not_empty(other)

    from deepmerge import Merger

    strategy_cfg = [(dict, ['merge'])]
    merger = Merger(strategy_cfg, ['override'], ['override'])

    from copy import deepcopy

    return functools.reduce(
        lambda b, o: merger.merge(b, deepcopy(o)),
        [base, *other],
        {},
    )
