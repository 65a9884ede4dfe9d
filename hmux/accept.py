"""
Accept header management
########################

.. autoclass:: AcceptClause
   :members: parse, matches

.. autoclass:: AcceptClauseList
   :members: append_header, from_header, get_sorted_by_preference, best_match

.. autofunction:: preference_key

"""

import logging

from . import mime

logger = logging.getLogger(__name__)

class AcceptClause:
    """
    A single weighted media range from an ``Accept`` header: the client
    accepts *type_*/*subtype* with the quality *q*.

    Either part may be the wildcard ``*``. *q* must be a number in the closed
    interval ``[0, 1]``, otherwise :class:`ValueError` is raised.

    :class:`AcceptClause` objects are supposed to be immutable. They are
    hashable and compare equal if type, subtype and quality match.

    .. attribute:: q

       The quality value of the clause.

    .. attribute:: wildcards

       The number of wildcard components (zero, one or two).
    """

    def __init__(self, type_, subtype, q=1.0):
        super().__init__()
        q = float(q)
        if not 0.0 <= q <= 1.0:
            raise ValueError("q value out of range: {!r}".format(q))

        self.__media_type = mime.Type(type_, subtype)
        self.__q = q

    @classmethod
    def parse(cls, s):
        """
        Parse a single segment *s* of an ``Accept`` header. Parameters other
        than ``q`` are dropped.

        Raise :class:`ValueError` if the segment is not a valid media range or
        carries an unusable ``q`` value.
        """
        media_type = mime.Type.parse(s)
        parameters = media_type.parameters

        try:
            qstr = parameters.pop("q")
        except KeyError:
            q = 1.0
        else:
            try:
                q = float(qstr)
            except ValueError:
                raise ValueError("not a valid q value: {!r}".format(qstr)) \
                    from None

        return cls(media_type.type, media_type.subtype, q=q)

    @property
    def type(self):
        return self.__media_type.type

    @property
    def subtype(self):
        return self.__media_type.subtype

    @property
    def media_type(self):
        return self.__media_type

    @property
    def q(self):
        return self.__q

    @property
    def wildcards(self):
        return self.__media_type.wildcards

    def matches(self, media_type):
        """
        Return whether this clause accepts the producible *media_type* (a
        :class:`~hmux.mime.Type`). This is the case if

        * type and subtype are equal,
        * the types are equal and the clause has a wildcard subtype, or
        * the clause is ``*/*``.
        """
        mine = self.__media_type
        if mine.is_wildcard_type and mine.is_wildcard_subtype:
            return True

        if mine.type != media_type.type:
            return False

        return mine.is_wildcard_subtype or mine.subtype == media_type.subtype

    def __str__(self):
        return "{};q={}".format(self.__media_type.essence, self.__q)

    def __repr__(self):
        return "{}({!r}, {!r}, q={!r})".format(
            type(self).__name__,
            self.type,
            self.subtype,
            self.q)

    def __hash__(self):
        return hash((self.__media_type, self.__q))

    def __eq__(self, other):
        if not isinstance(other, AcceptClause):
            return NotImplemented
        return ((self.__media_type, self.__q) ==
                (other.__media_type, other.__q))

def preference_key(clause):
    """
    Sort key for the preference order of clauses: higher quality first, then
    concrete types before wildcard types, then concrete subtypes before
    wildcard subtypes.

    Used with the stable :func:`sorted`, clauses which are equal under this
    key keep their position from the header.
    """
    media_type = clause.media_type
    return (-clause.q,
            media_type.is_wildcard_type,
            media_type.is_wildcard_subtype)

class AcceptClauseList:
    """
    Holds a list of :class:`AcceptClause` objects in header order.
    """

    def __init__(self, items=[]):
        super().__init__()
        self._items = list(items)

    @classmethod
    def from_header(cls, header):
        """
        Create a new list from the ``Accept`` header value *header*, which
        may be :data:`None`.
        """
        result = cls()
        result.append_header(header)
        return result

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return "<{} {}>".format(
            type(self).__qualname__,
            ", ".join(map(str, self._items)))

    def append_header(self, header):
        """
        Append a comma separated list of clauses from *header* into the
        current list.

        If any element from *header* fails to parse, a message is logged as
        warning and the element is skipped.
        """
        if not header or not header.strip():
            return

        for section in header.split(","):
            if not section.strip():
                continue

            try:
                item = AcceptClause.parse(section)
            except ValueError as err:
                logger.warning("dropped malformed accept clause: %r (%s)",
                               section,
                               err)
                continue

            self._items.append(item)

    def get_sorted_by_preference(self):
        """
        Return a new list of the clauses, ordered by :func:`preference_key`.
        """
        return sorted(self._items, key=preference_key)

    def best_match(self, media_types):
        """
        Return the first element of *media_types* (an iterable of
        :class:`~hmux.mime.Type`) which is accepted by the most preferred
        clause that accepts any of them at all. Return :data:`None` if no
        clause accepts any of the *media_types*.
        """
        media_types = list(media_types)
        for clause in self.get_sorted_by_preference():
            for media_type in media_types:
                if clause.matches(media_type):
                    return media_type
        return None
