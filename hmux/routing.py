"""
Routing
#######

hmux dispatches a request to one of several competing handlers. Three
properties of the request can be used to pick one:

* the request method (:class:`Method`),
* the media type of the request entity, as given in the ``Content-Type``
  header (:class:`ContentType`), and
* the media types the client prefers for the response, as given in the
  ``Accept`` header (:class:`Accept`).

A *handler* is anything which can be called as ``handler(response,
request)``: a plain function, an instance of a :class:`Handler` subclass or a
router. Since routers are handlers themselves, they nest::

    items = hmux.Method({
        "GET": hmux.Accept({
            "application/xml": get_items_xml,
            "application/json": get_items_json,
        }),
        "POST": hmux.ContentType({
            "application/xml": add_items_xml,
            "application/json": add_items_json,
        }),
    })

A router which does not find a suitable handler does not raise. It writes the
corresponding status code (``405``, ``415`` or ``406``) into the response and
returns.

Route tables
============

The routes of a router are kept in a :class:`RouteTable`, which normalizes
its keys once, when the router is constructed. Route tables cannot be
modified afterwards, so a router can be shared by any number of threads
dispatching concurrently.

.. autoclass:: Handler
   :members:

.. autoclass:: RouteTable

.. autoclass:: MethodTable

.. autoclass:: ContentTypeTable

.. autoclass:: AcceptTable

Routers
=======

.. autoclass:: Router
   :members: routes

.. autoclass:: Method
   :members: allowed_methods_header

.. autoclass:: ContentType

.. autoclass:: Accept

"""

import abc
import collections.abc
import itertools
import logging

from . import accept
from . import mime
from .request import Method as Methods

__all__ = [
    "Handler",
    "RouteTable",
    "MethodTable",
    "ContentTypeTable",
    "AcceptTable",
    "Router",
    "Method",
    "ContentType",
    "Accept",
    ]

logger = logging.getLogger(__name__)

class Handler(metaclass=abc.ABCMeta):
    """
    Abstract base for objects which handle requests. Subclasses implement
    :meth:`handle`; calling the object calls :meth:`handle`.

    Deriving from this class is optional; any callable accepting
    ``(response, request)`` works as a handler.
    """

    @abc.abstractmethod
    def handle(self, response, request):
        """
        Handle the *request*, writing the results into *response*.
        """

    def __call__(self, response, request):
        return self.handle(response, request)

class RouteTable(collections.abc.Mapping):
    """
    Immutable mapping from route keys to handlers.

    The table is built from *mapping_or_iterable* (a mapping or an iterable of
    ``(key, handler)`` pairs) and *kwargs*. Each key is normalized by
    :meth:`_transform_key`; if two keys normalize to the same value, the later
    one wins. Values which are not callable raise :class:`TypeError`.

    Iteration follows the order in which the routes were given. Lookups
    normalize the key in the same way as construction does.
    """

    def __init__(self, mapping_or_iterable=(), **kwargs):
        super().__init__()
        try:
            items_iterable = mapping_or_iterable.items()
        except AttributeError:
            items_iterable = mapping_or_iterable

        routes = {}
        for key, handler in itertools.chain(items_iterable, kwargs.items()):
            if not callable(handler):
                raise TypeError(
                    "handler for {!r} is not callable: {!r}".format(
                        key, handler))
            routes[self._transform_key(key)] = handler

        self._routes = routes

    @classmethod
    @abc.abstractmethod
    def _transform_key(cls, key):
        """
        Return the normalized form of *key*. Raise :class:`ValueError` if the
        key is not acceptable for this kind of table.
        """

    def __getitem__(self, key):
        try:
            key = self._transform_key(key)
        except (TypeError, ValueError):
            raise KeyError(key) from None
        return self._routes[key]

    def __iter__(self):
        return iter(self._routes)

    def __len__(self):
        return len(self._routes)

    def __repr__(self):
        return "{}({!r})".format(type(self).__qualname__, self._routes)

class MethodTable(RouteTable):
    """
    Route table keyed by HTTP method names. Keys are upper-cased.
    """

    @classmethod
    def _transform_key(cls, key):
        if not isinstance(key, str):
            raise TypeError("method must be a str, got {!r}".format(key))
        return key.upper()

class ContentTypeTable(RouteTable):
    """
    Route table keyed by media ranges (``type/subtype``, ``type/*`` or
    ``*/*``). Keys are parsed into :class:`~hmux.mime.Type` objects without
    parameters.

    Keys which cannot be parsed as media type are kept as they are; they can
    only ever be selected by a ``Content-Type`` header with exactly the same
    value.
    """

    @classmethod
    def _transform_key(cls, key):
        if isinstance(key, mime.Type):
            return key.without_parameters()

        try:
            return mime.Type.parse(key, strict=False).without_parameters()
        except ValueError:
            if not isinstance(key, str):
                raise TypeError(
                    "media type must be a str, got {!r}".format(key)) \
                    from None
            return key

class AcceptTable(ContentTypeTable):
    """
    Route table keyed by the media types a handler produces. Like
    :class:`ContentTypeTable`, but keys which are no valid media type raise
    :class:`ValueError`.
    """

    @classmethod
    def _transform_key(cls, key):
        if isinstance(key, mime.Type):
            return key.without_parameters()
        return mime.Type.parse(key).without_parameters()

class Router(Handler):
    """
    Base class for the routers. *routes* and *kwargs* are passed to
    :attr:`table_class` to build the route table.
    """

    table_class = None

    def __init__(self, routes=(), **kwargs):
        super().__init__()
        self._routes = self.table_class(routes, **kwargs)

    @property
    def routes(self):
        """
        The :class:`RouteTable` of this router.
        """
        return self._routes

    def __repr__(self):
        return "<{} {}>".format(
            type(self).__qualname__,
            ", ".join(map(str, self._routes)))

class Method(Router):
    """
    Map HTTP methods to handlers. The request method is compared
    case-insensitively.

    If no handler is registered for the method of a request, the sorted,
    comma-separated list of registered methods plus ``OPTIONS`` is sent in the
    header named by :attr:`allowed_methods_header`. ``OPTIONS`` requests are
    then answered with the status left untouched (usually ``200``); any other
    method results in ``405 Method Not Allowed``. Registering an explicit
    ``OPTIONS`` handler replaces this behaviour.
    """

    table_class = MethodTable

    #: Name of the header which advertises the allowed methods. Defaults to
    #: ``Accept`` for compatibility; set it to ``Allow`` in a subclass to
    #: follow RFC 7231.
    allowed_methods_header = "Accept"

    def handle(self, response, request):
        method = (request.method or "").upper()

        handler = self._routes.get(method)
        if handler is not None:
            logger.debug("method %s routed to %r", method, handler)
            return handler(response, request)

        allowed = sorted(set(self._routes) | {Methods.OPTIONS})
        response.set_header(self.allowed_methods_header, ",".join(allowed))

        if method != Methods.OPTIONS:
            logger.debug("method %s not allowed (allowed: %s)",
                         method, allowed)
            response.set_status(405)

class ContentType(Router):
    """
    Map request media types to handlers, based on the ``Content-Type`` header
    of the request. Parameters (such as ``charset`` or ``boundary``) are
    ignored, and so are parameter segments which are not ``key=value`` pairs.

    The routes are searched in this order, first hit wins:

    1. the exact ``type/subtype`` of the request,
    2. ``type/*``,
    3. ``*/*``.

    If none of these is registered, ``415 Unsupported Media Type`` is sent.

    A ``Content-Type`` header which is missing or not a valid media type is
    only matched against a route with exactly the same key, then against
    ``*/*``.
    """

    table_class = ContentTypeTable

    def find_route(self, request):
        """
        Return the ``(key, handler)`` pair selected for the *request* or
        :data:`None`.
        """
        raw = request.content_type or ""

        try:
            media_type = mime.Type.parse(raw, strict=False)
            media_type = media_type.without_parameters()
        except ValueError as err:
            logger.debug("cannot parse Content-Type %r (%s)", raw, err)
            candidates = [raw]
        else:
            candidates = [media_type,
                          mime.Type(media_type.type, mime.WILDCARD)]

        candidates.append(mime.Type.any)

        for key in candidates:
            handler = self._routes.get(key)
            if handler is not None:
                return key, handler

        return None

    def handle(self, response, request):
        found = self.find_route(request)
        if found is None:
            logger.debug("no route for Content-Type %r",
                         request.content_type)
            response.set_status(415)
            return

        key, handler = found
        logger.debug("Content-Type %r routed via %s",
                     request.content_type, key)
        return handler(response, request)

class Accept(Router):
    """
    Map producible response media types to handlers, based on the ``Accept``
    header of the request.

    The clauses of the header are ordered by preference (see
    :func:`hmux.accept.preference_key`). For each clause in turn, the routes
    are checked in registration order, and the first route the clause accepts
    is taken (see :meth:`hmux.accept.AcceptClause.matches`). If no clause
    accepts any route, a ``*/*`` route is used as fallback. If there is none,
    ``406 Not Acceptable`` is sent.

    The key of the chosen route is stored in
    :attr:`~hmux.request.Request.accepted_content_type`.
    """

    table_class = AcceptTable

    def find_route(self, request):
        """
        Return the ``(media_type, handler)`` pair selected for the *request*
        or :data:`None`.
        """
        clauses = accept.AcceptClauseList.from_header(request.accept)

        media_type = clauses.best_match(self._routes)
        if media_type is None:
            media_type = mime.Type.any
            if media_type not in self._routes:
                return None

        return media_type, self._routes[media_type]

    def handle(self, response, request):
        found = self.find_route(request)
        if found is None:
            logger.debug("nothing acceptable for Accept %r", request.accept)
            response.set_status(406)
            return

        media_type, handler = found
        logger.debug("Accept %r routed to %s", request.accept, media_type)
        request.accepted_content_type = media_type
        return handler(response, request)
