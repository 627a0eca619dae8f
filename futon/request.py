"""Construction of HTTP requests to CouchDB.

A `FutonRequest` is assembled with chained `with_*` calls and converted to a
`tornado.httpclient.HTTPRequest` by the transport::

    req = FutonRequest('http://127.0.0.1:5984/') \\
        .with_method('PUT') \\
        .with_credentials(Credentials.basic('admin', 'secret')) \\
        .with_database('mydb') \\
        .with_document('mydoc', rev='1-967a00dff5e02add41819138abb3284d') \\
        .with_json_body({'msg': 'hello'})

Invalid input raises `RequestError` as soon as it is given to the builder.
"""

import copy
import json
import re
from urllib.parse import parse_qsl, quote, urlencode, urlsplit

from tornado import httpclient, httputil
from tornado.escape import utf8

from futon.credentials import Credentials
from futon.errors import RequestError


JSON_CONTENT_TYPE = 'application/json'

# methods the tornado clients send without `allow_nonstandard_methods`
STANDARD_METHODS = ('GET', 'HEAD', 'POST', 'DELETE', 'PATCH', 'PUT',
                    'OPTIONS')

_token_re = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def json_encode(value):
    """JSON-encodes the given Python object."""
    return json.dumps(value, allow_nan=False).replace("</", "<\\/")


def quote_segment(segment):
    """Percent-encode a single path segment, including any '/'."""
    return quote(utf8(segment), safe='')


class FutonRequest(object):
    """An HTTP request to a CouchDB server under construction.

    The base URL may include a path prefix (for a server behind a proxy);
    database and document segments are appended to it.
    """

    def __init__(self, url):
        try:
            parts = urlsplit(url)
            port = parts.port
        except (TypeError, ValueError, AttributeError) as e:
            raise RequestError('failed to parse URL: {0}'.format(e))
        if parts.scheme not in ('http', 'https') or not parts.hostname:
            raise RequestError('failed to parse URL: {0!r}'.format(url))
        netloc = parts.hostname
        if ':' in netloc:
            netloc = '[{0}]'.format(netloc)
        if port is not None:
            netloc = '{0}:{1}'.format(netloc, port)
        self._scheme = parts.scheme
        self._netloc = netloc
        self._base_path = [s for s in parts.path.split('/') if s]
        self._path = []
        self._database = None
        self.query = parse_qsl(parts.query, keep_blank_values=True)
        self.method = 'GET'
        self.credentials = Credentials.none()
        self.headers = httputil.HTTPHeaders()
        self.body = None

    def with_method(self, method):
        method = str(method).upper()
        if not _token_re.match(method):
            raise RequestError('invalid method name: {0!r}'.format(method))
        self.method = method
        return self

    def with_credentials(self, credentials):
        self.credentials = credentials
        return self

    def with_header(self, name, value):
        """Append a header. Repeated names are kept in insertion order."""
        if not _token_re.match(str(name)):
            raise RequestError('invalid header name: {0!r}'.format(name))
        value = str(value)
        if '\r' in value or '\n' in value:
            raise RequestError('invalid header value: {0!r}'.format(value))
        self.headers.add(name, value)
        return self

    def with_query_param(self, key, value):
        self.query.append((str(key), str(value)))
        return self

    def with_query_params(self, params):
        """Append query parameters, given as a dict or a sequence of pairs."""
        if hasattr(params, 'items'):
            params = params.items()
        for key, value in params:
            self.with_query_param(key, value)
        return self

    def with_query_string(self, params):
        """Replace the query string with the serialization of a parameter
        object exposing `to_query()`, such as `ViewParams`."""
        try:
            query = params.to_query()
        except RequestError:
            raise
        except (AttributeError, TypeError, ValueError) as e:
            raise RequestError(
                'querystring serialization error: {0}'.format(e))
        self.query = [(str(k), str(v)) for k, v in query]
        return self

    def with_body(self, body, content_type=None):
        self.body = utf8(body) if body is not None else None
        if content_type is not None:
            self.headers['Content-Type'] = content_type
        return self

    def with_json_body(self, value):
        try:
            body = json_encode(value)
        except (TypeError, ValueError) as e:
            raise RequestError('json serialization error: {0}'.format(e))
        return self.with_body(body, JSON_CONTENT_TYPE)

    def with_path(self, *segments):
        """Set the path below the base URL to the given segments."""
        self._path = [str(s) for s in segments]
        self._database = None
        return self

    def with_database(self, db_name):
        self._path = [db_name]
        self._database = db_name
        return self

    def with_document(self, doc_id, rev=None):
        """Append a document id to the database path, and the revision as
        `?rev=` if one is given."""
        if self._database is None:
            raise RuntimeError(
                'cannot construct a document URL without a database prefix')
        if not isinstance(doc_id, str):
            raise RequestError(
                'document id must be a string, not {0!r}'.format(doc_id))
        if rev is not None and not isinstance(rev, str):
            raise RequestError(
                'revision must be a string, not {0!r}'.format(rev))
        self._path.append(doc_id)
        if rev is not None:
            self.with_query_param('rev', rev)
        return self

    def with_segments(self, *segments):
        """Append path segments below the database."""
        if self._database is None:
            raise RuntimeError(
                'cannot construct a document URL without a database prefix')
        self._path.extend(str(s) for s in segments)
        return self

    def with_partition(self, partition):
        """Scope the request to a partition: `/{db}/_partition/{partition}`
        followed by the rest of the path."""
        if self._database is None:
            raise RuntimeError(
                'cannot construct a partition URL without a database prefix')
        self._path[1:1] = ['_partition', partition]
        return self

    @property
    def path(self):
        segments = self._base_path + [quote_segment(s) for s in self._path]
        return '/' + '/'.join(segments)

    @property
    def url(self):
        url = '{0}://{1}{2}'.format(self._scheme, self._netloc, self.path)
        if self.query:
            url += '?' + urlencode(self.query)
        return url

    def all_headers(self):
        """The headers to send, with the Authorization header first."""
        headers = httputil.HTTPHeaders()
        auth = self.credentials.header()
        if auth is not None:
            headers.add(*auth)
        for name, value in self.headers.get_all():
            headers.add(name, value)
        return headers

    def to_http_request(self, **request_args):
        """Convert to a `tornado.httpclient.HTTPRequest`.

        Keyword arguments in `request_args` are applied to the request;
        headers given there are added unless set on this request.
        """
        req_args = copy.deepcopy(request_args)
        headers = self.all_headers()
        for name, value in (req_args.pop('headers', None) or {}).items():
            if name not in headers:
                headers[name] = value
        body = self.body
        if body is None and self.method in ('POST', 'PUT', 'PATCH'):
            body = b''
        return httpclient.HTTPRequest(
            self.url, method=self.method, headers=headers, body=body,
            allow_nonstandard_methods=self.method not in STANDARD_METHODS,
            **req_args)

    def __str__(self):
        lines = ['{0} {1}'.format(self.method, self.url)]
        auth = self.credentials.redacted_header()
        if auth is not None:
            lines.append('{0}: {1}'.format(auth[0].lower(), auth[1]))
        for name, value in self.headers.get_all():
            lines.append('{0}: {1}'.format(name.lower(), value))
        text = '\n'.join(lines)
        if self.body:
            text += '\n\n' + self.body.decode('utf8', 'replace')
        return text

    def __repr__(self):
        return '<FutonRequest {0} {1}>'.format(self.method, self.url)
