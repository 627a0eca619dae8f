import unittest

from futon import Credentials
from futon.credentials import REDACTED


class CredentialsTest(unittest.TestCase):

    def test_basic_header(self):
        creds = Credentials.basic('hello', 'world')
        self.assertEqual(creds.header(),
                         ('Authorization', 'Basic aGVsbG86d29ybGQ='))
        self.assertEqual(creds.scheme, Credentials.BASIC)
        self.assertEqual(creds.username, 'hello')
        self.assertTrue(creds)

    def test_non_ascii(self):
        creds = Credentials.basic('hé', 'w')
        self.assertEqual(creds.header()[1], 'Basic aMOpOnc=')

    def test_none(self):
        creds = Credentials.none()
        self.assertIsNone(creds.header())
        self.assertIsNone(creds.redacted_header())
        self.assertFalse(creds)
        self.assertEqual(creds, Credentials())

    def test_redacted(self):
        creds = Credentials.basic('hello', 'world')
        self.assertEqual(creds.redacted_header(),
                         ('Authorization', 'Basic ' + REDACTED))
        self.assertNotIn('world', repr(creds))
        self.assertIn(REDACTED, repr(creds))

    def test_immutable(self):
        creds = Credentials.basic('hello', 'world')
        with self.assertRaises(AttributeError):
            creds.username = 'other'
        with self.assertRaises(AttributeError):
            creds._password = 'other'

    def test_equality(self):
        self.assertEqual(Credentials.basic('a', 'b'),
                         Credentials.basic('a', 'b'))
        self.assertNotEqual(Credentials.basic('a', 'b'),
                            Credentials.basic('a', 'c'))
        self.assertNotEqual(Credentials.basic('a', 'b'), Credentials.none())
        self.assertEqual(len({Credentials.none(), Credentials.none()}), 1)

    def test_unknown_scheme(self):
        with self.assertRaises(ValueError):
            Credentials('digest')
