"""Parameter objects serialized into requests: database creation options,
view query options and COPY destinations."""

from futon.document import doc_id, doc_rev
from futon.errors import RequestError
from futon.request import json_encode


class DatabaseCreationParams(object):
    """Options for creating a database, sent as the query string of
    `PUT /{db}`.

    `q` is the number of shards and `n` the number of replicas; both are
    left to the server default when None.
    """

    def __init__(self, q=None, n=None, partitioned=False):
        self.q = q
        self.n = n
        self.partitioned = partitioned

    @classmethod
    def partitioned_db(cls):
        return cls(partitioned=True)

    def to_query(self):
        query = []
        if self.q is not None:
            query.append(('q', str(int(self.q))))
        if self.n is not None:
            query.append(('n', str(int(self.n))))
        query.append(('partitioned', 'true' if self.partitioned else 'false'))
        return query

    def __repr__(self):
        return 'DatabaseCreationParams(q={0!r}, n={1!r}, ' \
               'partitioned={2!r})'.format(self.q, self.n, self.partitioned)


class ViewParams(object):
    """Options of a view query.

    All options are keyword arguments named as the CouchDB query parameters:

      key, keys, start_key, start_key_doc_id, end_key, end_key_doc_id
        Limit the rows to a key, a list of keys, or a key range. Keys are
        JSON values; the `*_doc_id` options are document ids.

      inclusive_end=False
        Include rows whose key equals `end_key`.

      limit, skip=0
        Paging of the result rows.

      descending=False
        Reverse the output. The option is applied before key filtering, so
        swap `start_key` and `end_key` when setting it.

      group=False, group_level, reduce=False
        Reduction of the rows, for views having a reduce function.

      include_docs=False, conflicts=False, attachments=False,
      att_encoding_info=False
        Fetch the document which emitted each row, optionally with conflict
        and attachment information.

      sorted=True, stable=False, update="true", update_seq=False
        Consistency of the read. `update` is one of "true", "false" and
        "lazy".
    """

    _fields = (
        ('conflicts', False),
        ('descending', False),
        ('end_key', None),
        ('end_key_doc_id', None),
        ('group', False),
        ('group_level', None),
        ('include_docs', False),
        ('attachments', False),
        ('att_encoding_info', False),
        ('inclusive_end', False),
        ('key', None),
        ('keys', None),
        ('limit', None),
        ('reduce', False),
        ('skip', 0),
        ('sorted', True),
        ('stable', False),
        ('start_key', None),
        ('start_key_doc_id', None),
        ('update', 'true'),
        ('update_seq', False),
    )

    # values of these options are sent as raw strings in a query string
    _string_fields = ('start_key_doc_id', 'end_key_doc_id', 'update')

    _update_values = ('true', 'false', 'lazy')

    def __init__(self, **kwargs):
        for name, default in self._fields:
            setattr(self, name, kwargs.pop(name, default))
        if kwargs:
            raise TypeError('Unknown view parameter(s): {0}'.format(
                ', '.join(sorted(kwargs))))
        if isinstance(self.update, bool):
            self.update = 'true' if self.update else 'false'
        if self.update not in self._update_values:
            raise RequestError(
                "update must be one of 'true', 'false' or 'lazy', "
                "not {0!r}".format(self.update))

    def to_json(self):
        """The options as a JSON object for the body of a view request.
        Options without a value are left out."""
        obj = {}
        for name, _ in self._fields:
            value = getattr(self, name)
            if value is not None:
                obj[name] = value
        return obj

    def to_query(self):
        """The options as query string pairs. Key values are JSON encoded."""
        query = []
        for name, value in sorted(self.to_json().items()):
            if name in self._string_fields:
                query.append((name, str(value)))
            else:
                try:
                    query.append((name, json_encode(value)))
                except (TypeError, ValueError) as e:
                    raise RequestError(
                        'querystring serialization error: {0}'.format(e))
        return query

    def __eq__(self, other):
        if not isinstance(other, ViewParams):
            return NotImplemented
        return self.to_json() == other.to_json()

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __repr__(self):
        changed = ['{0}={1!r}'.format(name, getattr(self, name))
                   for name, default in self._fields
                   if getattr(self, name) != default]
        return 'ViewParams({0})'.format(', '.join(changed))


class CopyDestination(object):
    """Target of a COPY request. A `rev` must be given when overwriting an
    existing document."""

    def __init__(self, id, rev=None):
        self.id = id
        self.rev = rev

    @classmethod
    def from_doc(cls, doc):
        return cls(doc_id(doc), doc_rev(doc))

    def header_value(self):
        """Value of the `Destination` header."""
        if self.rev:
            return '{0}?rev={1}'.format(self.id, self.rev)
        return self.id

    def __repr__(self):
        return 'CopyDestination({0!r}, rev={1!r})'.format(self.id, self.rev)
