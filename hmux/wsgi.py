"""
WSGI interface
##############

This module provides a class to run a routing tree under a WSGI compatible
server.

.. autoclass:: Application
   :members:

"""

import logging
import urllib.parse

from . import errors
from . import request as hrequest
from . import response as hresponse

logger = logging.getLogger(__name__)

class Application:
    """
    Instances of this class are suitable for passing them as WSGI application
    object.

    The *handler* is called as ``handler(response, request)`` for every
    request; usually it is a router such as :class:`~hmux.routing.Method`.

    If *force_slash_root* is set to :data:`True`, requests pointing to empty
    string (``""``) will be rewritten to ``"/"``.
    """

    request_class = hrequest.Request
    response_class = hresponse.Response

    def __init__(self,
                 handler,
                 force_slash_root=True):
        self._handler = handler
        self._force_slash_root = force_slash_root

    def decode_string(self, s):
        if isinstance(s, str):
            try:
                s = s.encode("latin1")
            except UnicodeEncodeError:
                # already a proper unicode string
                return s

        return s.decode("utf8")

    def decode_path(self, path):
        try:
            return self.decode_string(path)
        except UnicodeDecodeError:
            return self.handle_decoding_error(path)

    def decode_query_string(self, query):
        try:
            query = self.decode_string(query)
        except UnicodeDecodeError:
            query = self.handle_decoding_error(query)

        return urllib.parse.parse_qs(query)

    def handle_decoding_error(self, s):
        """
        Handler for a decoding error of any request argument *s*. By default, it
        logs the request argument and raises a ``400 Bad Request`` response.
        """
        logger.error("cannot decode %r as utf8", s)
        raise errors.make_response_error(
            400, "cannot decode {!r} as utf8".format(s))

    def handle_exception(self, exc):
        """
        Called with the exception *exc* if the handler raised something other
        than a :class:`~hmux.errors.ResponseError`. Return the response to
        send instead.
        """
        logger.exception("unhandled exception while dispatching: %s", exc)
        return errors.make_response_error(
            500, hresponse.lookup_response_message(500))

    def construct_request(self, environ):
        local_path = environ.get("PATH_INFO", "")
        if not local_path.startswith("/") and self._force_slash_root:
            local_path = "/"

        return self.request_class.construct_from_http(
            environ["REQUEST_METHOD"],
            self.decode_path(local_path),
            environ.get("wsgi.url_scheme", "http"),
            self.decode_query_string(environ.get("QUERY_STRING", "")),
            environ.get("wsgi.input"),
            environ.get("CONTENT_LENGTH"),
            environ.get("CONTENT_TYPE"),
            (
                (k[5:].replace("_", "-"), v)
                for k, v in environ.items()
                if k.startswith("HTTP_")
            ))

    def _start_response(self, start_response, response_obj):
        start_response(
            response_obj.status_line,
            list(response_obj.get_header_tuples())
        )

    def __call__(self, environ, start_response):
        """
        Implementation of the WSGI interface specified in PEP 3333.
        """
        try:
            try:
                request = self.construct_request(environ)
                response = self.response_class()
                self._handler(response, request)
            except errors.ResponseError:
                # forward to next layer of processing
                raise
            except Exception as err:
                response = self.handle_exception(err)
        except errors.ResponseError as err:
            response = err

        self._start_response(start_response, response)
        return response.chunks
