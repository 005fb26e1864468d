# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import dataclasses
import logging
import typing

import dacite

from vcs.base import (
    VcsRoot,
    VcsRootTypeNotFoundError,
)
from vcs.git import GitVcsRoot
import tc.util

dc = dataclasses.dataclass
empty_dict = dataclasses.field(default_factory=dict)

logger = logging.getLogger(__name__)

'''
VCS root model and creation.

VCS roots are typically instantiated directly (e.g. `vcs.git.GitVcsRoot(init)`). Users that
receive VCS root definitions as plain dicts (`{'type': ..., 'id': ..., 'name': ...,
'params': {...}}`) will want to create an instance of `VcsRootFactory` and use it to turn them
into typed VCS root instances.
'''


@dc(frozen=True)
class VcsRootDefinition:
    type: str
    id: typing.Optional[str] = None
    name: typing.Optional[str] = None
    params: dict[str, str] = empty_dict


class VcsRootFactory:
    '''Creates VCS root instances from raw definitions

    VCS root classes are registered by their discriminator (`TYPE`). `default_params` maps
    discriminators to params applied to every created root of that type; params from the
    definition take precedence.
    '''

    def __init__(
        self,
        types: typing.Iterable[type[VcsRoot]]=(GitVcsRoot,),
        default_params: dict[str, dict[str, str]]=None,
    ):
        self._types = {}
        for vcs_root_type in types:
            self.register(vcs_root_type)
        self._default_params = default_params or {}

    def register(self, vcs_root_type: type[VcsRoot]):
        if not (type_name := vcs_root_type.TYPE):
            raise ValueError(f'{vcs_root_type.__name__} does not declare a TYPE')
        self._types[type_name] = vcs_root_type
        return vcs_root_type

    def type_names(self):
        return self._types.keys()

    def vcs_root_type(self, type_name: str) -> type[VcsRoot]:
        tc.util.not_empty(type_name)
        if not (vcs_root_type := self._types.get(type_name)):
            raise VcsRootTypeNotFoundError(
                f'unknown VCS root type: {type_name}. known types: '
                f'{", ".join(self.type_names())}'
            )
        return vcs_root_type

    def definition(self, raw_dict: dict) -> VcsRootDefinition:
        return dacite.from_dict(
            data_class=VcsRootDefinition,
            data=tc.util.not_none(raw_dict),
            config=dacite.Config(strict=True),
        )

    def from_dict(self, raw_dict: dict, base: VcsRoot=None) -> VcsRoot:
        definition = self.definition(raw_dict)
        vcs_root_type = self.vcs_root_type(definition.type)

        params = dict(definition.params)
        if (defaults := self._default_params.get(definition.type)):
            params = tc.util.merge_dicts(defaults, params)

        logger.debug(f'creating {vcs_root_type.__name__} {definition.id=} {definition.name=}')

        vcs_root = vcs_root_type(
            base=base,
            id=definition.id,
            name=definition.name,
            params=params,
        )

        if (unknown := vcs_root.unknown_parameters()):
            logger.warning(
                f'{vcs_root!r}: the following parameters are not known to '
                f'{vcs_root_type.__name__}: {", ".join(unknown)}'
            )

        return vcs_root
