"""
Request objects
###############

.. autoclass:: Method

.. autoclass:: Request
   :members:

"""

import logging
import urllib.parse

from . import mime

logger = logging.getLogger(__name__)

class Method:
    __init__ = None

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"

class Request:
    """
    These objects give handlers read access to the original client request
    and carry information generated while dispatching it.

    *headers* may be a mapping or an iterable of ``(header, value)`` pairs; it
    is stored in a :class:`~hmux.mime.CaseFoldedDict`, so header lookup is
    case-insensitive.

    .. attribute:: accepted_content_type

       The value of this attribute is initially :data:`None`. When an
       :class:`~hmux.routing.Accept` router selects a route, it is set to the
       :class:`~hmux.mime.Type` the route was registered for.

    """

    @classmethod
    def construct_from_http(
            cls,
            request_method,
            path_info,
            url_scheme,
            query_data,
            input_stream,
            content_length,
            content_type,
            http_headers):
        """
        Construct a request object out of the information typically available
        from a CGI or WSGI environment.

        :param str request_method: WSGI ``REQUEST_METHOD`` equivalent
        :param str path_info: WSGI ``PATH_INFO`` equivalent
        :param str url_scheme: URL scheme used for the request
        :param query_data: WSGI ``QUERY_STRING`` equivalent
        :type query_data: either a ``str`` or a dict mapping the keys to lists
                          of values
        :param input_stream: file-like object giving access to the body
        :param content_length: the length of the request body, or :data:`None`
        :param content_type: WSGI ``CONTENT_TYPE`` equivalent, or :data:`None`
        :param iterable http_headers: an iterable yielding all other HTTP
                                      headers as tuples ``(header, value)``.

        Headers which occur more than once are joined with ``,``.
        """

        if not isinstance(query_data, dict):
            query_data = urllib.parse.parse_qs(query_data)

        headers = mime.CaseFoldedDict()
        for header, new_value in http_headers:
            try:
                value = headers[header]
            except KeyError:
                headers[header] = new_value
            else:
                headers[header] = value + "," + new_value

        if content_type:
            headers["Content-Type"] = content_type

        try:
            content_length = int(content_length or 0)
        except ValueError:
            logger.warning("ignoring malformed Content-Length: %r",
                           content_length)
            content_length = 0

        return cls(
            request_method,
            path_info,
            url_scheme,
            query_data,
            headers=headers,
            body_stream=input_stream,
            content_length=content_length)

    def __init__(self,
                 method=Method.GET,
                 local_path="/",
                 scheme="http",
                 query_data=None,
                 headers={},
                 body_stream=None,
                 content_length=0):
        self.method = method
        self._path = local_path
        self._scheme = scheme
        self._query_data = {} if query_data is None else query_data
        self._headers = mime.CaseFoldedDict(headers)
        self.body_stream = body_stream
        self.content_length = content_length
        self.accepted_content_type = None

    @property
    def headers(self):
        return self._headers

    @property
    def content_type(self):
        """
        The raw value of the ``Content-Type`` header or :data:`None`.
        """
        return self._headers.get("Content-Type")

    @property
    def accept(self):
        """
        The raw value of the ``Accept`` header or :data:`None`.
        """
        return self._headers.get("Accept")

    @property
    def path(self):
        return self._path

    @path.setter
    def path(self, value):
        self._path = value

    @property
    def query_data(self):
        return self._query_data

    @property
    def scheme(self):
        return self._scheme

    def __repr__(self):
        return "<{} {} {}>".format(
            type(self).__qualname__,
            self.method,
            self._path)
