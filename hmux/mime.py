"""
Media types
###########

.. autoclass:: Type
   :members:

.. autofunction:: parse_media_type

.. autoclass:: CaseFoldedDict

"""

import copy
import itertools

WILDCARD = "*"

def _normalize_token(token):
    token = token.strip().lower()
    if not token:
        raise ValueError("empty media type component")
    return token

def _split_parameters(parameter_strs, strict=True):
    parameters = {}
    for param in parameter_strs:
        if not param.strip():
            # tolerate "text/plain;" and "text/plain;;q=1"
            continue

        param_key, sep, param_value = param.partition("=")
        param_key = param_key.strip().lower()
        if not sep or not param_key:
            if not strict:
                continue
            raise ValueError("malformed parameter: {!r}".format(param))

        parameters[param_key] = param_value.strip()

    return parameters

class Type:
    """
    Immutable representation of the media type *type_*/*subtype*, optionally
    carrying *parameters*.

    *type_* and *subtype* are stripped and lower-cased; both must be non-empty
    and either of them may be the wildcard ``*``. Parameter keys are
    lower-cased, their values are kept as given. Parameters are carried along
    for informational purposes (such as the ``q`` value of an ``Accept``
    clause or the ``boundary`` of ``multipart/form-data``), but they never take
    part in routing decisions; use :attr:`essence` or
    :meth:`without_parameters` for that.

    :class:`Type` instances are hashable and compare equal if type, subtype
    and parameters match.
    """

    def __init__(self, type_, subtype, parameters={}):
        self.__type = _normalize_token(type_)
        self.__subtype = _normalize_token(subtype)
        self.__parameters = {
            key.strip().lower(): value
            for key, value in parameters.items()
        }
        self.__parameters_hash = hash(frozenset(self.__parameters.items()))

    @classmethod
    def parse(cls, s, strict=True):
        """
        Parse the header value *s* into a :class:`Type`.

        The value is split on ``;``. The first segment must consist of exactly
        two non-empty ``/``-delimited parts, otherwise :class:`ValueError` is
        raised. All further segments must be ``key=value`` pairs; if *strict*
        is false, segments which are not are skipped instead of raising.
        """
        if not isinstance(s, str):
            raise ValueError("not a media type: {!r}".format(s))

        value, *parameter_strs = s.split(";")
        parts = value.split("/")
        if len(parts) != 2:
            raise ValueError("not a valid media type: {!r}".format(s))

        supertype, subtype = parts
        parameters = _split_parameters(parameter_strs, strict=strict)
        return cls(supertype, subtype, parameters=parameters)

    def __copy__(self):
        return self

    def with_parameters(self, **parameters):
        new_parameters = copy.copy(self.__parameters)
        new_parameters.update(parameters)
        return Type(self.__type, self.__subtype, parameters=new_parameters)

    def without_parameters(self):
        if not self.__parameters:
            return self
        return Type(self.__type, self.__subtype)

    @property
    def type(self):
        return self.__type

    @property
    def subtype(self):
        return self.__subtype

    @property
    def parameters(self):
        return copy.copy(self.__parameters)

    @property
    def essence(self):
        """
        The ``type/subtype`` string, without parameters.
        """
        return "{}/{}".format(self.__type, self.__subtype)

    @property
    def is_wildcard_type(self):
        return self.__type == WILDCARD

    @property
    def is_wildcard_subtype(self):
        return self.__subtype == WILDCARD

    @property
    def wildcards(self):
        return int(self.is_wildcard_type) + int(self.is_wildcard_subtype)

    def __str__(self):
        base = self.essence
        if self.__parameters:
            base += "; " + "; ".join(
                "{!s}={!s}".format(k, v)
                for k, v in self.__parameters.items())
        return base

    def __repr__(self):
        return "{}({!r}, {!r}, parameters={!r})".format(
            type(self).__qualname__,
            self.__type,
            self.__subtype,
            self.__parameters)

    def __hash__(self):
        return hash((self.__type, self.__subtype)) ^ self.__parameters_hash

    def __eq__(self, other):
        if not isinstance(other, Type):
            return NotImplemented
        return (self.__type == other.__type and
                self.__subtype == other.__subtype and
                self.__parameters == other.__parameters)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

Type.text_plain = Type("text", "plain")
Type.any = Type(WILDCARD, WILDCARD)

def parse_media_type(s, strict=True):
    """
    Shorthand for :meth:`Type.parse`.
    """
    return Type.parse(s, strict=strict)

class CaseFoldedDict(dict):
    class __undefined:
        pass

    _transform_key = staticmethod(str.casefold)

    @classmethod
    def _transform_item(cls, item):
        return (cls._transform_key(item[0]), item[1])

    @classmethod
    def _transform_items_iterable(cls, iterable):
        return map(cls._transform_item, iterable)

    @classmethod
    def _items_iterable_from_mapping_or_iterable(
            cls, mapping_or_iterable):
        try:
            items_iterable = mapping_or_iterable.items()
        except AttributeError:
            items_iterable = mapping_or_iterable
        return cls._transform_items_iterable(items_iterable)

    def __init__(self, mapping_or_iterable=__undefined, **kwargs):
        if mapping_or_iterable is not self.__undefined:
            items_iterable = self._items_iterable_from_mapping_or_iterable(
                mapping_or_iterable)
        else:
            items_iterable = None

        if kwargs:
            if items_iterable is not None:
                items_iterable = itertools.chain(
                    items_iterable,
                    self._transform_items_iterable(kwargs.items()))
            else:
                items_iterable = self._transform_items_iterable(kwargs.items())

        if items_iterable is not None:
            super().__init__(items_iterable)
        else:
            super().__init__()

    def __contains__(self, key):
        return super().__contains__(self._transform_key(key))

    def __delitem__(self, key):
        return super().__delitem__(self._transform_key(key))

    def __getitem__(self, key):
        return super().__getitem__(self._transform_key(key))

    def __setitem__(self, key, value):
        return super().__setitem__(self._transform_key(key), value)

    def get(self, key, *args, **kwargs):
        return super().get(self._transform_key(key), *args, **kwargs)

    @classmethod
    def fromkeys(cls, sequence, *args, **kwargs):
        return super().fromkeys(
            map(cls._transform_key, sequence), *args, **kwargs)

    def pop(self, key, *args, **kwargs):
        return super().pop(self._transform_key(key), *args, **kwargs)

    def setdefault(self, key, *args):
        return super().setdefault(self._transform_key(key), *args)

    def update(self, other=(), **kwargs):
        super().update(
            self._items_iterable_from_mapping_or_iterable(other))
        if kwargs:
            super().update(self._transform_items_iterable(kwargs.items()))
