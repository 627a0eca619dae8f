"""The request/response pipeline shared by all operations."""

from tornado import gen

from futon.errors import DecodeError, NotFound, error_for_status
from futon.request import FutonRequest, JSON_CONTENT_TYPE


class Connection(object):
    """A transport together with the base URL and credentials of a server.

    Immutable once created, so it is shared freely between the database,
    document and meta operations.
    """

    def __init__(self, transport, url, credentials):
        self.transport = transport
        self.url = url
        self.credentials = credentials

    def request(self, method='GET'):
        """A new request to the server, with credentials and
        `Accept: application/json`."""
        return FutonRequest(self.url) \
            .with_method(method) \
            .with_credentials(self.credentials) \
            .with_header('Accept', JSON_CONTENT_TYPE)

    def database(self, db_name, method='GET'):
        return self.request(method).with_database(db_name)

    @gen.coroutine
    def send(self, request):
        """Send the request, returning the response whatever its status."""
        response = yield self.transport.send(request)
        return response

    @gen.coroutine
    def json_request(self, request):
        """Send the request and decode the JSON body of a successful
        response. Error responses are raised as `CouchException`."""
        response = yield self.send(request)
        error_for_status(response)
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError('json error: {0}'.format(e))

    @gen.coroutine
    def maybe_json_request(self, request):
        """Like `json_request()`, but returns None when the server responds
        404 (Not Found)."""
        try:
            obj = yield self.json_request(request)
        except NotFound:
            return None
        return obj
