"""
hmux
####

Dispatch HTTP requests among competing handlers by request method,
``Content-Type`` and ``Accept`` header.

.. automodule:: hmux.routing

.. automodule:: hmux.accept

.. automodule:: hmux.mime

.. automodule:: hmux.request

.. automodule:: hmux.response

.. automodule:: hmux.wsgi

"""

from .routing import (
    Handler,
    Router,
    Method,
    ContentType,
    Accept)

from .request import Request
from .response import Response
from .errors import ResponseError, make_response_error
from .wsgi import Application

__version__ = "0.1.0"
