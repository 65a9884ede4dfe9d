"""
Throwable error responses
#########################

.. autofunction:: make_response_error

.. autoclass:: ResponseError
   :members:

"""

from . import mime
from . import response

class ResponseError(response.Response, Exception):
    """
    This is a :class:`~hmux.response.Response` object which is mixed with a
    :class:`Exception` so that it can be thrown as an exception.

    *content_type* is the value of the ``Content-Type`` header sent along
    with *body* (if *body* is not :data:`None`). The message of the exception
    is the status line of the HTTP response.
    """

    def __init__(self, response_code, content_type, body,
                 response_message=None):
        super().__init__(response_code=response_code,
                         response_message=response_message)
        if body is not None:
            self.set_header("Content-Type", str(content_type))
            self.write(body)
        self.args = [self.status_line]


def make_response_error(response_code, plain_message, **kwargs):
    """
    Create a ``text/plain`` :class:`ResponseError` using the given
    *response_code* as status code and the given *plain_message* as plain text
    response.
    """
    content_type = mime.Type.text_plain.with_parameters(charset="utf-8")
    return ResponseError(response_code,
                         content_type,
                         plain_message,
                         **kwargs)
