# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import abc
import collections
import enum
import logging
import typing

import tc.util

logger = logging.getLogger(__name__)

SECURE_PARAMETER_PREFIX = 'secure:'
REDACTED = '*****'


class UnknownParameterValueError(LookupError):
    '''
    raised upon reading an enum-typed parameter whose stored value does not match any
    member name of the declared enum
    '''
    def __init__(self, key: str, value: str, enum_type: type[enum.Enum]):
        self.key = key
        self.value = value
        self.enum_type = enum_type
        super().__init__(
            f'{value=} stored for {key=} is not a member of {enum_type.__name__} '
            f'(allowed: {", ".join(m.name for m in enum_type)})'
        )


class VcsRootTypeNotFoundError(ValueError):
    pass


class Parameter(abc.ABC):
    '''
    Descriptor exposing a single entry of the owning VcsRoot's `params` dict as a typed
    attribute.

    The store key defaults to the lowerCamelCase form of the attribute name. Reading an
    absent key yields `default`. Assigning `None` removes the key.

    Not intended to be instantiated; use `string_parameter`, `boolean_parameter` or
    `enum_parameter`.
    '''

    def __init__(self, key: str=None, default=None):
        self._key = key
        self.default = default
        self.attribute_name = None

    def __set_name__(self, owner, name):
        self.attribute_name = name
        if not self._key:
            self._key = tc.util.camel_case(name)

    @property
    def key(self) -> str:
        return self._key

    @abc.abstractmethod
    def decode(self, value: str):
        pass

    @abc.abstractmethod
    def encode(self, value) -> str | None:
        pass

    def __get__(self, instance, owner=None):
        if instance is None:
            return self

        if (value := instance.params.get(self.key)) is None:
            return self.default

        return self.decode(value)

    def __set__(self, instance, value):
        if value is None or (encoded := self.encode(value)) is None:
            instance.params.pop(self.key, None)
            return

        instance.params[self.key] = encoded

    def __delete__(self, instance):
        instance.params.pop(self.key, None)

    def __repr__(self):
        return f'{self.__class__.__name__}({self.attribute_name} -> {self.key})'


class StringParameter(Parameter):
    def decode(self, value: str) -> str:
        return value

    def encode(self, value: str) -> str | None:
        if not isinstance(value, str):
            raise TypeError(f'{self.attribute_name} expects a str, got {value!r}')
        if value == '':
            return None
        return value


class BooleanParameter(Parameter):
    def decode(self, value: str) -> bool:
        return value.lower() == 'true'

    def encode(self, value: bool) -> str:
        if not isinstance(value, bool):
            raise TypeError(f'{self.attribute_name} expects a bool, got {value!r}')
        return 'true' if value else 'false'


class EnumParameter(Parameter):
    def __init__(self, enum_type: type[enum.Enum], key: str=None, default=None):
        self.enum_type = enum_type
        super().__init__(key=key, default=default)

    def decode(self, value: str) -> enum.Enum:
        try:
            return self.enum_type[value]
        except KeyError:
            raise UnknownParameterValueError(
                key=self.key,
                value=value,
                enum_type=self.enum_type,
            ) from None

    def encode(self, value: enum.Enum) -> str:
        if not isinstance(value, self.enum_type):
            raise TypeError(
                f'{self.attribute_name} expects a {self.enum_type.__name__} member, '
                f'got {value!r}'
            )
        return value.name


def string_parameter(key: str=None, default: str=None) -> StringParameter:
    return StringParameter(key=key, default=default)


def boolean_parameter(key: str=None, default: bool=False) -> BooleanParameter:
    return BooleanParameter(key=key, default=default)


def enum_parameter(enum_type: type[enum.Enum], key: str=None, default=None) -> EnumParameter:
    return EnumParameter(enum_type=enum_type, key=key, default=default)


class VcsRoot:
    '''
    Base class for 'dict-based' VCS root definitions, i.e. named entities that expose the
    contents of a string-to-string dict (`params`) through typed attributes (see `Parameter`).

    Extenders set `TYPE` (the discriminator identifying the VCS kind to the CI server) and
    declare their fields as class attributes using `string_parameter`, `boolean_parameter`
    and `enum_parameter`.

    Construction order:
        - `base` must be of the same type (`TYPE`, or `type_name` for untyped roots)
        - `params` are copied from `base` (if given), so `base` is never altered afterwards
        - explicitly passed `params` are merged on top
        - keyword fields are assigned (in the order they were passed)
        - `init` is called with the new instance

    No attributes are required; judging completeness is left to the consumer.
    '''
    TYPE = None

    def __init__(
        self,
        init: typing.Callable[['VcsRoot'], None]=None,
        base: 'VcsRoot'=None,
        *,
        id: str=None,
        name: str=None,
        params: dict[str, str]=None,
        type_name: str=None,
        **fields,
    ):
        if self.TYPE and type_name and type_name != self.TYPE:
            raise ValueError(
                f'{self.__class__.__name__} is of type {self.TYPE}, got {type_name=}'
            )
        self._type = self.TYPE or type_name

        if base is not None:
            tc.util.check_type(base, VcsRoot)
            if base.type != self._type:
                raise ValueError(
                    f'{base=} is of type {base.type}, which does not match {self._type}'
                )
            raw = dict(base.params)
            if id is None:
                id = base.id
            if name is None:
                name = base.name
        else:
            raw = {}

        if params:
            raw = tc.util.merge_dicts(raw, params)

        self.params = raw
        self.id = id
        self.name = name

        declared = self.declared_parameters()
        for attr, value in fields.items():
            if attr not in declared:
                raise TypeError(
                    f'{self.__class__.__name__} got an unexpected keyword argument {attr!r}'
                )
            setattr(self, attr, value)

        if init:
            init(self)

    @property
    def type(self) -> str:
        return self._type

    @classmethod
    def declared_parameters(cls) -> collections.OrderedDict[str, Parameter]:
        declared = collections.OrderedDict()
        for klass in reversed(cls.__mro__):
            for attr, value in vars(klass).items():
                if isinstance(value, Parameter):
                    declared[attr] = value
        return declared

    def unknown_parameters(self) -> list[str]:
        known_keys = {p.key for p in self.declared_parameters().values()}
        return [k for k in self.params if k not in known_keys]

    def secure_parameters(self) -> list[str]:
        return [k for k in self.params if k.startswith(SECURE_PARAMETER_PREFIX)]

    def redacted_params(self) -> dict[str, str]:
        return {
            k: REDACTED if k.startswith(SECURE_PARAMETER_PREFIX) else v
            for k, v in self.params.items()
        }

    def copy(self, init: typing.Callable[['VcsRoot'], None]=None, **kwargs) -> 'VcsRoot':
        return self.__class__(init=init, base=self, type_name=self.type, **kwargs)

    def as_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'params': dict(self.params),
        }

    def __repr__(self):
        return f'{self.__class__.__qualname__}: {self.name or self.id}'

    def __str__(self):
        return '{n} ({t}): {d}'.format(
            n=self.name or self.id,
            t=self.type,
            d=self.redacted_params(),
        )
