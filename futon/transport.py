"""Sending requests to CouchDB.

A transport is any object with a coroutine `send(request)` that takes a
`FutonRequest` and returns a `FutonResponse` holding the complete response
body, whatever its status code. Failures to obtain a response are raised as
`TransportError`. A transport is shared by every operation of a client, so it
must allow concurrent calls.
"""

import logging

from tornado import gen, httpclient

from futon.errors import FutonError, TransportError
from futon.response import FutonResponse


log = logging.getLogger('futon.transport')


class TornadoTransport(object):
    """Transport using a `tornado.httpclient.AsyncHTTPClient`.

    Keyword arguments in `request_args` are applied to every request, for
    example `request_timeout`, `connect_timeout`, `use_gzip` or
    `validate_cert`. See `httpclient.HTTPRequest` for other possible
    arguments.

    The HTTP client is created on first use, on the IOLoop running the
    request.
    """

    def __init__(self, **request_args):
        self.request_args = request_args
        self._client = None
        self._closed = False

    @property
    def closed(self):
        return self._closed

    def close(self):
        """Closes the transport, freeing any resources used."""
        if not self._closed:
            if self._client is not None:
                self._client.close()
                self._client = None
            self._closed = True

    def _test_closed(self):
        if self._closed:
            raise FutonError('Database connection is closed.')

    @gen.coroutine
    def send(self, request):
        self._test_closed()
        if self._client is None:
            self._client = httpclient.AsyncHTTPClient(force_instance=True)
        req = request.to_http_request(**self.request_args)
        log.debug('sending request\n%s', request)
        try:
            resp = yield self._client.fetch(req, raise_error=False)
        except httpclient.HTTPClientError as e:
            if e.response is None:
                log.warning('%s %s failed: %s', request.method,
                            request.url, e)
                raise TransportError(e)
            resp = e.response
        except OSError as e:
            # connection refused, stream closed, ssl errors, ...
            log.warning('%s %s failed: %s', request.method, request.url, e)
            raise TransportError(e)
        if resp.code == 599:
            log.warning('%s %s failed: %s', request.method, request.url,
                        resp.error)
            raise TransportError(resp.error)
        response = FutonResponse(resp.code, resp.headers, resp.body,
                                 resp.reason)
        log.debug('%s %s completed: %s', request.method, request.url,
                  response.code)
        return response
