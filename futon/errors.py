"""Exceptions raised by futon, and the classification of failed responses.

Every error raised by this package is a `FutonError`. Responses from the
server with a non-2xx status are converted by `relax_exception()` into a
`CouchException` subclass chosen from the status code.
"""

from tornado import httpclient, httputil
from tornado.escape import json_decode

from futon.response import ErrorResponse


DATABASE_NAME_DOCS = ('https://docs.couchdb.org/en/stable/api/database/'
                      'common.html#put--db')


class FutonError(Exception):
    """Base class for futon exceptions"""

    def is_not_found(self):
        return isinstance(self, NotFound)


class RequestError(FutonError, ValueError):
    """The request could not be constructed (bad URL, method, header, query
    string or JSON body)."""


class TransportError(FutonError):
    """The request could not be sent or no response was received."""

    def __init__(self, error):
        self.error = error
        FutonError.__init__(self, 'http transport error: {0}'.format(error))


class DecodeError(FutonError, ValueError):
    """A successful response body could not be decoded."""


class InvalidDatabaseName(FutonError, ValueError):
    """The database name does not follow the CouchDB naming rules."""

    def __init__(self, name):
        self.name = name
        FutonError.__init__(
            self, "invalid database name: '{0}'. See: {1}".format(
                name, DATABASE_NAME_DOCS))


class CouchException(FutonError, httpclient.HTTPClientError):
    """Base class for errors returned by the CouchDB server.

    The decoded error payload is available as `payload`, the status code as
    `code` and the full `FutonResponse` as `response`.
    """

    def __init__(self, payload, response=None):
        self.payload = payload
        code = payload.status if payload.status is not None else \
            getattr(response, 'code', 599)
        httpclient.HTTPClientError.__init__(self, code, str(payload),
                                            response)

    @property
    def error(self):
        return self.payload.error

    @property
    def reason(self):
        return self.payload.reason


class NotFound(CouchException):
    """HTTP Error 404 (Not Found)"""


class Unauthorized(CouchException):
    """HTTP Error 401 (Unauthorized)"""


class Conflict(CouchException):
    """HTTP Error 409 (Conflict)"""


class InvalidRevFormat(CouchException):
    """HTTP Error 400 (Bad Request) caused by a malformed revision"""


class UnknownBadRequest(CouchException):
    """HTTP Error 400 (Bad Request)"""


class UnknownError(CouchException):
    """Any other non-2xx response"""


def error_payload(response):
    """Decode the `ErrorResponse` of a failed response."""
    code = response.code
    content_type = response.headers.get('Content-Type')
    if content_type is None:
        return ErrorResponse('unknown error', 'unknown error', code)
    media_type = content_type.split(';')[0].strip().lower()
    if media_type != 'application/json':
        return ErrorResponse(
            'unsupported content type',
            "content type '{0}' is unsupported".format(content_type), code)
    try:
        return ErrorResponse.from_json(json_decode(response.body), code)
    except (ValueError, TypeError, KeyError):
        # a JSON body without the error shape, e.g. an empty HEAD body
        return ErrorResponse(
            httputil.responses.get(code, 'unknown error'),
            (response.body or b'').decode('utf8', 'replace'), code)


def relax_exception(response):
    """Convert a failed response to a Couch specific exception."""
    payload = error_payload(response)
    code = response.code
    if code == 404:
        cls = NotFound
    elif code == 401:
        cls = Unauthorized
    elif code == 409:
        cls = Conflict
    elif code == 400:
        if str(payload.reason).strip().lower() == 'invalid rev format':
            cls = InvalidRevFormat
        else:
            cls = UnknownBadRequest
    else:
        cls = UnknownError
    return cls(payload, response)


def error_for_status(response):
    """Returns `response` if its status is 2xx, else raises the classified
    `CouchException`."""
    if 200 <= response.code < 300:
        return response
    raise relax_exception(response)
