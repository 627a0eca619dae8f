"""Design documents and view queries."""

from tornado import gen

from futon.document import Documents
from futon.params import ViewParams
from futon.response import ViewResults


DESIGN_PREFIX = '_design/'


class QueryServer(object):
    """The language of the functions of a design document."""

    JAVASCRIPT = 'javascript'
    ERLANG = 'erlang'

    def __init__(self, name=JAVASCRIPT):
        self.name = str(name).lower()

    @property
    def custom(self):
        return self.name not in (self.JAVASCRIPT, self.ERLANG)

    def __eq__(self, other):
        if isinstance(other, QueryServer):
            return self.name == other.name
        if isinstance(other, str):
            return self.name == other.lower()
        return NotImplemented

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return hash(self.name)

    def __str__(self):
        return self.name

    def __repr__(self):
        return 'QueryServer({0!r})'.format(self.name)


class DesignDocument(object):
    """A design document. The id is always `_design/{name}`."""

    def __init__(self, name, rev=None, language=None, views=None):
        if name.startswith(DESIGN_PREFIX):
            name = name[len(DESIGN_PREFIX):]
        self.id = DESIGN_PREFIX + name
        self.rev = rev
        self.language = language if isinstance(language, QueryServer) \
            else QueryServer(language or QueryServer.JAVASCRIPT)
        self.views = views or {}

    @property
    def name(self):
        return self.id[len(DESIGN_PREFIX):]

    @classmethod
    def from_json(cls, obj):
        return cls(obj['_id'], obj.get('_rev'), obj.get('language'),
                   obj.get('views'))

    def to_json(self):
        obj = {'_id': self.id, 'language': str(self.language)}
        if self.rev is not None:
            obj['_rev'] = self.rev
        if self.views:
            obj['views'] = self.views
        return obj

    def __repr__(self):
        return 'DesignDocument({0!r}, rev={1!r})'.format(self.name, self.rev)


class DesignDocuments(object):
    """Design documents and views of a database, optionally scoped to a
    partition of a partitioned database."""

    def __init__(self, connection, db_name, partition=None):
        self.connection = connection
        self.db_name = db_name
        self.partition = partition

    def _docs(self):
        return Documents(self.connection, self.db_name)

    @gen.coroutine
    def create(self, ddoc):
        ddoc = yield self._docs().create(ddoc)
        return ddoc

    @gen.coroutine
    def create_or_update(self, ddoc):
        ddoc = yield self._docs().create_or_update(ddoc)
        return ddoc

    @gen.coroutine
    def get(self, name):
        if not name.startswith(DESIGN_PREFIX):
            name = DESIGN_PREFIX + name
        ddoc = yield self._docs().get(name, DesignDocument)
        return ddoc

    @gen.coroutine
    def execute_view(self, ddoc, view, params=None, doc_class=None):
        """Query the view `view` of the design document `ddoc`.

        The options in `params` (a `ViewParams`) are sent as the JSON body of
        a POST. Rows having a `doc` are decoded with `doc_class` when given.
        """
        if ddoc.startswith(DESIGN_PREFIX):
            ddoc = ddoc[len(DESIGN_PREFIX):]
        results = yield self._query(('_design', ddoc, '_view', view),
                                    params, doc_class)
        return results

    @gen.coroutine
    def execute_builtin_view(self, view, params=None, doc_class=None):
        """Query a view of the server, such as `_all_docs`."""
        results = yield self._query((view,), params, doc_class)
        return results

    @gen.coroutine
    def _query(self, segments, params, doc_class):
        params = params if params is not None else ViewParams()
        req = self.connection.database(self.db_name, 'POST') \
            .with_segments(*segments) \
            .with_json_body(params.to_json())
        if self.partition is not None:
            req.with_partition(self.partition)
        obj = yield self.connection.json_request(req)
        return ViewResults.from_json(obj, doc_class)
