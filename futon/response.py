"""Responses received from CouchDB and the JSON shapes decoded from them."""

from tornado import httputil
from tornado.escape import json_decode, to_unicode


class FutonResponse(object):
    """A fully received HTTP response: status code, headers and body bytes.

    Read-only once received. The body is always materialized in memory.
    """

    def __init__(self, code, headers=None, body=b'', reason=None):
        self.code = code
        self.headers = headers if headers is not None \
            else httputil.HTTPHeaders()
        self.body = body or b''
        self.reason = reason or httputil.responses.get(code, 'Unknown')

    @property
    def ok(self):
        return 200 <= self.code < 300

    def text(self):
        return to_unicode(self.body)

    def json(self):
        """Decode the body as JSON."""
        return json_decode(self.body)

    def __repr__(self):
        return '<FutonResponse {0} {1}>'.format(self.code, self.reason)


class ErrorResponse(object):
    """The error payload of a failed request, `{"error": .., "reason": ..}`,
    with the status code of the response attached."""

    def __init__(self, error, reason, status=None):
        self.error = error
        self.reason = reason
        self.status = status

    @classmethod
    def from_json(cls, obj, status=None):
        return cls(obj['error'], obj['reason'], status)

    def to_json(self):
        return {'error': self.error, 'reason': self.reason}

    def __eq__(self, other):
        if not isinstance(other, ErrorResponse):
            return NotImplemented
        return (self.error, self.reason, self.status) == \
            (other.error, other.reason, other.status)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __str__(self):
        return '{0}: {1}'.format(self.error, self.reason)

    def __repr__(self):
        return 'ErrorResponse({0!r}, {1!r}, status={2!r})'.format(
            self.error, self.reason, self.status)


class DocumentOperation(object):
    """Acknowledgement of a document write: `id`, new `rev` and `ok`."""

    def __init__(self, id, rev, ok=True):
        self.id = id
        self.rev = rev
        self.ok = ok

    @classmethod
    def from_json(cls, obj):
        return cls(obj['id'], obj['rev'], obj.get('ok', True))

    def __repr__(self):
        return 'DocumentOperation(id={0!r}, rev={1!r}, ok={2!r})'.format(
            self.id, self.rev, self.ok)


class DatabaseInfo(object):
    """Metadata about a database, as returned by `GET /{db}`."""

    def __init__(self, obj):
        self.raw = obj
        self.db_name = obj['db_name']
        self.update_seq = obj.get('update_seq')
        self.purge_seq = obj.get('purge_seq')
        self.doc_count = obj.get('doc_count', 0)
        self.doc_del_count = obj.get('doc_del_count', 0)
        self.sizes = obj.get('sizes', {})
        self.cluster = obj.get('cluster', {})
        self.props = obj.get('props', {})
        self.compact_running = obj.get('compact_running', False)
        self.instance_start_time = obj.get('instance_start_time')

    @classmethod
    def from_json(cls, obj):
        return cls(obj)

    @property
    def partitioned(self):
        return bool(self.props.get('partitioned', False))

    def __repr__(self):
        return '<DatabaseInfo {0} docs={1}>'.format(
            self.db_name, self.doc_count)


class ServerInstanceInfoVendor(object):

    def __init__(self, name, version=None):
        self.name = name
        self.version = version


class ServerInstanceInfo(object):
    """Identity, version and features of the server, from `GET /`."""

    def __init__(self, obj):
        self.raw = obj
        self.couchdb = obj['couchdb']
        self.version = obj['version']
        self.uuid = obj.get('uuid')
        self.git_sha = obj.get('git_sha')
        vendor = obj.get('vendor', {})
        self.vendor = ServerInstanceInfoVendor(
            vendor.get('name'), vendor.get('version'))
        self.features = obj.get('features', [])

    @classmethod
    def from_json(cls, obj):
        return cls(obj)

    def __repr__(self):
        return '<ServerInstanceInfo {0} {1}>'.format(
            self.couchdb, self.version)


class ViewRow(object):
    """One row of a view result. `doc` is only set when the view was queried
    with `include_docs`."""

    def __init__(self, id, key, value, doc=None):
        self.id = id
        self.key = key
        self.value = value
        self.doc = doc

    def __repr__(self):
        return 'ViewRow(id={0!r}, key={1!r}, value={2!r})'.format(
            self.id, self.key, self.value)


class ViewResults(object):
    """The ordered rows of a view query plus paging metadata.

    Iterating yields the `ViewRow`s in the order the server returned them.
    """

    def __init__(self, rows, offset=0, total_rows=0, update_seq=None):
        self.rows = rows
        self.offset = offset
        self.total_rows = total_rows
        self.update_seq = update_seq

    @classmethod
    def from_json(cls, obj, doc_class=None):
        rows = []
        for row in obj.get('rows', []):
            doc = row.get('doc')
            if doc is not None and doc_class is not None:
                doc = doc_class.from_json(doc)
            rows.append(ViewRow(row.get('id'), row.get('key'),
                                row.get('value'), doc))
        return cls(rows, obj.get('offset', 0),
                   obj.get('total_rows', len(rows)), obj.get('update_seq'))

    def __iter__(self):
        return iter(self.rows)

    def __len__(self):
        return len(self.rows)

    def __getitem__(self, index):
        return self.rows[index]
