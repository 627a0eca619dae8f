import logging

from tornado import gen, httpclient, web
from tornado.simple_httpclient import HTTPTimeoutError
from tornado.testing import (
    AsyncHTTPTestCase, AsyncTestCase, ExpectLog, bind_unused_port, gen_test)

from futon import FutonError, FutonRequest, TornadoTransport, TransportError


class EchoHandler(web.RequestHandler):

    SUPPORTED_METHODS = web.RequestHandler.SUPPORTED_METHODS + ('COPY',)

    def get(self):
        self.set_header('Content-Type', 'application/json')
        self.write({'method': self.request.method,
                    'timeout': self.request.headers.get('X-Timeout')})

    def copy(self):
        self.write(self.request.headers.get('Destination', ''))


class MissingHandler(web.RequestHandler):

    def get(self):
        self.set_status(404)
        self.finish('{"error": "not_found", "reason": "missing"}')


class TornadoTransportTest(AsyncHTTPTestCase):

    def get_app(self):
        return web.Application([
            (r'/echo', EchoHandler),
            (r'/missing', MissingHandler),
        ])

    def setUp(self):
        super(TornadoTransportTest, self).setUp()
        self.transport = TornadoTransport(headers={'X-Timeout': '5'})

    def tearDown(self):
        self.transport.close()
        super(TornadoTransportTest, self).tearDown()

    def request(self, path, method='GET'):
        return FutonRequest(self.get_url(path)).with_method(method)

    @gen_test
    def test_send(self):
        response = yield self.transport.send(self.request('/echo'))
        self.assertEqual(response.code, 200)
        self.assertTrue(response.ok)
        self.assertTrue(response.headers['Content-Type'].startswith(
            'application/json'))
        self.assertEqual(response.json(),
                         {'method': 'GET', 'timeout': '5'})

    @gen_test
    def test_nonstandard_method(self):
        req = self.request('/echo', 'COPY').with_header('Destination', 'x')
        response = yield self.transport.send(req)
        self.assertEqual(response.text(), 'x')

    @gen_test
    def test_error_status_is_returned(self):
        response = yield self.transport.send(self.request('/missing'))
        self.assertEqual(response.code, 404)
        self.assertFalse(response.ok)
        self.assertEqual(response.reason, 'Not Found')
        self.assertEqual(response.json()['error'], 'not_found')

    @gen_test
    def test_closed(self):
        self.transport.close()
        self.assertTrue(self.transport.closed)
        with self.assertRaises(FutonError):
            yield self.transport.send(self.request('/echo'))


class ConnectionRefusedTest(AsyncTestCase):

    @gen_test
    def test_refused(self):
        sock, port = bind_unused_port()
        sock.close()
        transport = TornadoTransport()
        req = FutonRequest('http://127.0.0.1:{0}/'.format(port))
        try:
            with ExpectLog(logging.getLogger('futon.transport'), '.*failed'):
                with self.assertRaises(TransportError) as cm:
                    yield transport.send(req)
            self.assertIsNotNone(cm.exception.error)
            self.assertFalse(cm.exception.is_not_found())
        finally:
            transport.close()


class StubClient(object):
    """Stands in for the HTTP client of a transport, failing every fetch."""

    def __init__(self, error=None, response_code=None):
        self.error = error
        self.response_code = response_code

    @gen.coroutine
    def fetch(self, request, raise_error=True):
        if self.error is not None:
            raise self.error
        return httpclient.HTTPResponse(
            request, self.response_code,
            error=httpclient.HTTPClientError(599, 'Stream closed'))

    def close(self):
        pass


class TransportFailureTest(AsyncTestCase):

    def send(self, client):
        transport = TornadoTransport()
        transport._client = client
        return transport.send(FutonRequest('http://127.0.0.1:5984/_up'))

    @gen_test
    def test_timeout(self):
        client = StubClient(
            error=HTTPTimeoutError('Timeout while connecting'))
        with ExpectLog(logging.getLogger('futon.transport'), '.*failed'):
            with self.assertRaises(TransportError) as cm:
                yield self.send(client)
        self.assertIsInstance(cm.exception.error, HTTPTimeoutError)

    @gen_test
    def test_599_response(self):
        with ExpectLog(logging.getLogger('futon.transport'), '.*failed'):
            with self.assertRaises(TransportError) as cm:
                yield self.send(StubClient(response_code=599))
        self.assertEqual(cm.exception.error.code, 599)
