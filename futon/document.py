"""Document operations, built on the revision protocol of CouchDB.

A document is either a plain dict with the CouchDB keys `_id` and `_rev`, or
any object providing:

  `id`, `rev`
    Readable and writable attributes holding the document id and revision
    (None when the document has never been saved).

  `to_json()`
    The JSON object to store.

  `from_json(obj)`
    A classmethod building the document from a stored JSON object. Pass the
    class as `doc_class` to the fetch operations.

Revisions are opaque tokens. After every successful write the revision
returned by the server is written back onto the document, and that revision
is the only one to use for the next write.
"""

import logging

from tornado import gen

from futon.errors import RequestError
from futon.response import DocumentOperation


log = logging.getLogger('futon.document')


def doc_id(doc):
    if isinstance(doc, dict):
        return doc.get('_id')
    return doc.id


def doc_rev(doc):
    if isinstance(doc, dict):
        return doc.get('_rev')
    return doc.rev


def set_doc_id(doc, id):
    if isinstance(doc, dict):
        doc['_id'] = id
    else:
        doc.id = id
    return doc


def set_doc_rev(doc, rev):
    if isinstance(doc, dict):
        doc['_rev'] = rev
    else:
        doc.rev = rev
    return doc


def doc_to_json(doc):
    if isinstance(doc, dict):
        return doc
    return doc.to_json()


def doc_from_json(obj, doc_class=None):
    if obj is None or doc_class is None:
        return obj
    return doc_class.from_json(obj)


class Tombstone(object):
    """What remains of a deleted document, fetched at its deletion
    revision."""

    def __init__(self, id, rev=None, deleted=True):
        self.id = id
        self.rev = rev
        self.deleted = deleted

    @classmethod
    def from_json(cls, obj):
        return cls(obj['_id'], obj.get('_rev'), obj.get('_deleted', False))

    def to_json(self):
        obj = {'_id': self.id, '_deleted': self.deleted}
        if self.rev is not None:
            obj['_rev'] = self.rev
        return obj

    def __repr__(self):
        return 'Tombstone({0!r}, rev={1!r}, deleted={2!r})'.format(
            self.id, self.rev, self.deleted)


class Documents(object):
    """Operations on the documents of one database.

    Every method is a coroutine making a single request. Errors returned by
    the server are raised as `CouchException` subclasses, e.g. `Conflict`
    when the revision of a document is not the current one.
    """

    def __init__(self, connection, db_name):
        self.connection = connection
        self.db_name = db_name

    def _request(self, method):
        return self.connection.database(self.db_name, method)

    def _doc_request(self, method, doc_id, rev=None):
        if not doc_id:
            raise RequestError('doc must have an id')
        return self._request(method).with_document(doc_id, rev)

    @gen.coroutine
    def _write(self, request):
        obj = yield self.connection.json_request(request)
        return DocumentOperation.from_json(obj)

    @gen.coroutine
    def create(self, doc):
        """Create a new document, with the id of `doc` or, if it has none, an
        id chosen by the server. The document must not have a revision; use
        `create_or_update()` to write an existing document.

        Raises `Conflict` if a document with the id already exists.
        """
        if doc_rev(doc) is not None:
            raise RequestError(
                'doc should not have a rev set when creating. '
                'Use Documents.create_or_update() instead')
        req = self._request('POST').with_json_body(doc_to_json(doc))
        result = yield self._write(req)
        log.debug('created document %s at rev %s', result.id, result.rev)
        if doc_id(doc) is None:
            set_doc_id(doc, result.id)
        set_doc_rev(doc, result.rev)
        return doc

    @gen.coroutine
    def create_or_update(self, doc):
        """Write `doc` at its id. The document is created if absent, and
        updated if its revision is the current one.

        Raises `Conflict` if the revision is not the current revision. The
        conflict is never resolved here.
        """
        id = doc_id(doc)
        if not id:
            raise RequestError('doc must have an id to be created or updated')
        req = self._doc_request('PUT', id, doc_rev(doc)) \
            .with_json_body(doc_to_json(doc))
        result = yield self._write(req)
        log.debug('wrote document %s at rev %s', result.id, result.rev)
        set_doc_rev(doc, result.rev)
        return doc

    @gen.coroutine
    def get(self, doc_id, doc_class=None):
        """Get the current revision of the document, or None if there is no
        such document."""
        doc = yield self.find(doc_id, None, doc_class)
        return doc

    @gen.coroutine
    def get_rev(self, doc_id, rev, doc_class=None):
        """Get the document at the given revision, or None if not found."""
        doc = yield self.find(doc_id, rev, doc_class)
        return doc

    @gen.coroutine
    def find(self, doc_id, rev=None, doc_class=None):
        req = self._doc_request('GET', doc_id, rev)
        obj = yield self.connection.maybe_json_request(req)
        return doc_from_json(obj, doc_class)

    @gen.coroutine
    def exists(self, doc_id):
        """Check if document with the given `doc_id` exists.
        Returns True if document exists, returns False otherwise.
        """
        response = yield self.connection.send(
            self._doc_request('HEAD', doc_id))
        return response.code != 404

    @gen.coroutine
    def delete(self, doc):
        """Delete the document at its revision. The revision of the
        tombstone is written back onto `doc`."""
        rev = doc_rev(doc)
        if doc_id(doc) is None or rev is None:
            raise RequestError('Missing id or revision information in doc')
        req = self._doc_request('DELETE', doc_id(doc), rev)
        result = yield self._write(req)
        log.debug('deleted document %s at rev %s', result.id, result.rev)
        set_doc_rev(doc, result.rev)
        return doc

    @gen.coroutine
    def copy(self, doc, destination):
        """Copy the document to `destination`, a `CopyDestination` or a
        document id. The destination needs a revision when it is an existing
        document.

        On success the id and revision of `doc` are those of the written
        copy.
        """
        if hasattr(destination, 'header_value'):
            header = destination.header_value()
        else:
            header = str(destination)
        req = self._doc_request('COPY', doc_id(doc), doc_rev(doc)) \
            .with_header('Destination', header)
        result = yield self._write(req)
        log.debug('copied document %s to %s at rev %s', doc_id(doc),
                  result.id, result.rev)
        set_doc_id(doc, result.id)
        set_doc_rev(doc, result.rev)
        return doc
