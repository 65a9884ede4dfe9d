"""
Response objects
################

Handlers write their results into :class:`Response` instances: a status code,
headers and body chunks. A response is owned by exactly one handler at a
time; routers only touch it when they do not delegate to a handler.

.. autoclass:: Response
   :members:

.. autofunction:: lookup_response_message

.. automodule:: hmux.errors
"""

from . import mime

def lookup_response_message(response_code, default="Unknown Status"):
    """
    Look up the status code message as defined in RFC 2616 using the given
    *response_code*. If the *response_code* is unknown, the given *default* is
    used.
    """
    return {
        100: "Continue",
        101: "Switching Protocols",
        200: "OK",
        201: "Created",
        202: "Accepted",
        203: "Non-Authoritative Information",
        204: "No Content",
        205: "Reset Content",
        206: "Partial Content",
        300: "Multiple Choices",
        301: "Moved Permanently",
        302: "Found",
        303: "See Other",
        304: "Not Modified",
        305: "Use Proxy",
        307: "Temporary Redirect",
        400: "Bad Request",
        401: "Unauthorized",
        402: "Payment Required",
        403: "Forbidden",
        404: "Not Found",
        405: "Method Not Allowed",
        406: "Not Acceptable",
        407: "Proxy Authentication Required",
        408: "Request Timeout",
        409: "Conflict",
        410: "Gone",
        411: "Length Required",
        412: "Precondition Failed",
        413: "Request Entity Too Large",
        414: "Request-URI Too Long",
        415: "Unsupported Media Type",
        416: "Requested Range Not Satisfiable",
        417: "Expectation Failed",
        500: "Internal Server Error",
        501: "Not Implemented",
        502: "Bad Gateway",
        503: "Service Unavailable",
        504: "Gateway Timeout",
        505: "HTTP Version Not Supported",
    }.get(response_code, default)

class Response:
    """
    A response under construction.

    *response_code* and *response_message* correspond to the HTTP status code
    including its message. If *response_message* is :data:`None`, the default
    message for the given code is used, as per
    :func:`lookup_response_message`. The default status is ``200 OK``.

    Header names are matched case-insensitively, but the spelling used when
    the header was last set is preserved for output.
    """

    def __init__(self, response_code=200, response_message=None):
        super().__init__()
        self.set_status(response_code, response_message)
        self._headers = mime.CaseFoldedDict()
        self._header_names = mime.CaseFoldedDict()
        self._chunks = []

    def set_status(self, response_code, response_message=None):
        self.http_response_code = response_code
        self.http_response_message = response_message or \
                                     lookup_response_message(response_code)

    @property
    def status_line(self):
        return "{:03d} {}".format(self.http_response_code,
                                  self.http_response_message)

    def set_header(self, name, value):
        self._headers[name] = str(value)
        self._header_names[name] = name

    def get_header(self, name, default=None):
        return self._headers.get(name, default)

    def del_header(self, name):
        del self._headers[name]
        del self._header_names[name]

    def has_header(self, name):
        return name in self._headers

    def write(self, data):
        """
        Append *data* to the body. :class:`str` objects are encoded as UTF-8,
        everything else must support the buffer protocol.
        """
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._chunks.append(bytes(data))

    @property
    def chunks(self):
        return list(self._chunks)

    @property
    def body(self):
        return b"".join(self._chunks)

    def get_header_tuples(self):
        """
        Return an iterable of ``(name, value)`` tuples for the HTTP
        headers for this response.
        """
        for key, value in self._headers.items():
            yield (self._header_names[key], value)

    def __repr__(self):
        return "<{} {}>".format(type(self).__qualname__, self.status_line)
