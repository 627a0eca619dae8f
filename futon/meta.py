"""Server-level operations."""

from tornado import gen

from futon.response import ServerInstanceInfo


class Meta(object):

    def __init__(self, connection):
        self.connection = connection

    @gen.coroutine
    def is_up(self):
        """True if the server reports itself up and ready to serve."""
        response = yield self.connection.send(
            self.connection.request('HEAD').with_path('_up'))
        return response.ok

    @gen.coroutine
    def server_info(self):
        obj = yield self.connection.json_request(
            self.connection.request().with_path())
        return ServerInstanceInfo.from_json(obj)

    @gen.coroutine
    def all_dbs(self):
        """List names of databases."""
        dbs = yield self.connection.json_request(
            self.connection.request().with_path('_all_dbs'))
        return dbs

    @gen.coroutine
    def uuids(self, count=1):
        """Get one or more uuids."""
        obj = yield self.connection.json_request(
            self.connection.request().with_path('_uuids')
            .with_query_param('count', int(count)))
        return obj['uuids']
