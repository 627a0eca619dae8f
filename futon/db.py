"""Database operations."""

import logging
import re

from tornado import gen

from futon.ddoc import DesignDocuments
from futon.document import Documents
from futon.errors import InvalidDatabaseName, error_for_status
from futon.response import DatabaseInfo


log = logging.getLogger('futon.db')

NAME_REGEX = re.compile(r'^[a-z][a-z0-9_$()+/-]*$')


def validate_db_name(name):
    """Raises `InvalidDatabaseName` unless `name` is a valid CouchDB
    database name."""
    if not isinstance(name, str) or not NAME_REGEX.fullmatch(name):
        raise InvalidDatabaseName(name)
    return name


class Database(object):
    """A database of the server. The name is validated on creation, before
    any request is made."""

    def __init__(self, connection, name):
        self.connection = connection
        self.name = validate_db_name(name)

    @gen.coroutine
    def exists(self):
        response = yield self.connection.send(
            self.connection.database(self.name, 'HEAD'))
        return response.code != 404

    @gen.coroutine
    def info(self):
        """Get info about the database. Raises `NotFound` if the database
        does not exist."""
        obj = yield self.connection.json_request(
            self.connection.database(self.name))
        return DatabaseInfo.from_json(obj)

    @gen.coroutine
    def create(self, params=None):
        """Creates the database, with the options of a
        `DatabaseCreationParams`."""
        req = self.connection.database(self.name, 'PUT')
        if params is not None:
            req.with_query_string(params)
        log.debug('creating database\n%s', req)
        response = yield self.connection.send(req)
        error_for_status(response)

    @gen.coroutine
    def delete(self):
        """Deletes the database."""
        response = yield self.connection.send(
            self.connection.database(self.name, 'DELETE'))
        error_for_status(response)

    @gen.coroutine
    def all_docs(self, params=None, doc_class=None):
        """Query the _all_docs view. Set `include_docs` in `params` to get
        the documents, decoded with `doc_class` if given."""
        results = yield self.design_docs().execute_builtin_view(
            '_all_docs', params, doc_class)
        return results

    @gen.coroutine
    def all_docs_in_partition(self, partition, params=None, doc_class=None):
        results = yield self.design_docs(partition).execute_builtin_view(
            '_all_docs', params, doc_class)
        return results

    def documents(self):
        return Documents(self.connection, self.name)

    def design_docs(self, partition=None):
        return DesignDocuments(self.connection, self.name, partition)

    def __repr__(self):
        return '<Database {0}>'.format(self.name)
