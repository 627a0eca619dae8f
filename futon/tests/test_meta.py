from tornado.testing import gen_test

from futon import Credentials, Futon, Unauthorized
from futon.tests import fakecouch


class MetaTest(fakecouch.FakeCouchTestCase):

    @gen_test
    def test_is_up(self):
        up = yield self.client.meta().is_up()
        self.assertTrue(up)
        req = self.last_request()
        self.assertEqual(req.method, 'HEAD')
        self.assertEqual(req.path, '/_up')

    @gen_test
    def test_server_info(self):
        info = yield self.client.meta().server_info()
        self.assertEqual(info.couchdb, 'Welcome')
        self.assertEqual(info.version, '3.2.2')
        self.assertEqual(info.git_sha, 'd5b746b7c')
        self.assertEqual(info.vendor.name, 'The Apache Software Foundation')
        self.assertIsNone(info.vendor.version)
        self.assertIn('partitioned', info.features)
        self.assertEqual(self.last_request().path, '/')

    @gen_test
    def test_all_dbs(self):
        dbs = yield self.client.meta().all_dbs()
        self.assertEqual(dbs, [])
        yield self.client.db('b').create()
        yield self.client.db('a').create()
        dbs = yield self.client.meta().all_dbs()
        self.assertEqual(dbs, ['a', 'b'])

    @gen_test
    def test_uuids(self):
        uuids = yield self.client.meta().uuids(3)
        self.assertEqual(len(uuids), 3)
        self.assertEqual(len(set(uuids)), 3)
        self.assertEqual(self.last_request().arguments['count'], [b'3'])


class AuthenticationTest(fakecouch.FakeCouchTestCase):

    credentials = ('futon', 'futon')

    @gen_test
    def test_credentials_are_sent(self):
        up = yield self.client.meta().is_up()
        self.assertTrue(up)
        self.assertEqual(self.last_request().headers['Authorization'],
                         'Basic ZnV0b246ZnV0b24=')

    @gen_test
    def test_credentials_in_url(self):
        url = self.get_url('/').replace('://', '://futon:futon@')
        client = Futon(url)
        try:
            self.assertEqual(client.credentials,
                             Credentials.basic('futon', 'futon'))
            self.assertNotIn('futon@', client.couch_url)
            info = yield client.meta().server_info()
            self.assertEqual(info.version, '3.2.2')
        finally:
            client.close()

    @gen_test
    def test_wrong_credentials(self):
        client = Futon(self.get_url('/'),
                       credentials=Credentials.basic('futon', 'wrong'))
        try:
            with self.assertRaises(Unauthorized) as cm:
                yield client.meta().server_info()
            self.assertEqual(cm.exception.code, 401)
            self.assertEqual(cm.exception.error, 'unauthorized')
            self.assertFalse((yield client.meta().is_up()))
        finally:
            client.close()

    @gen_test
    def test_no_credentials(self):
        client = Futon(self.get_url('/'))
        try:
            with self.assertRaises(Unauthorized):
                yield client.db('testdb').create()
            self.assertNotIn('Authorization', self.last_request().headers)
        finally:
            client.close()
