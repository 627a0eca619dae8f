"""Authentication credentials for requests to a CouchDB server."""

import base64


REDACTED = '[REDACTED]'


class Credentials(object):
    """Zero or one authentication scheme, rendered as a request header.

    Use the `basic()` and `none()` constructors. A `Credentials` value is
    immutable, and the secret is never part of its `repr()`.
    """

    NONE = 'none'
    BASIC = 'basic'

    __slots__ = ('_scheme', '_username', '_password')

    def __init__(self, scheme=NONE, username=None, password=None):
        if scheme not in (self.NONE, self.BASIC):
            raise ValueError('Unknown authentication scheme: {0}'.format(
                scheme))
        object.__setattr__(self, '_scheme', scheme)
        object.__setattr__(self, '_username', username)
        object.__setattr__(self, '_password', password)

    @classmethod
    def basic(cls, username, password):
        return cls(cls.BASIC, str(username), str(password))

    @classmethod
    def none(cls):
        return cls(cls.NONE)

    def __setattr__(self, name, value):
        raise AttributeError('Credentials are immutable')

    @property
    def scheme(self):
        return self._scheme

    @property
    def username(self):
        return self._username

    def header(self):
        """Returns the `(name, value)` of the Authorization header, or None
        when no authentication is configured."""
        if self._scheme == self.BASIC:
            userpass = '{0}:{1}'.format(self._username, self._password)
            value = base64.b64encode(userpass.encode('utf8')).decode('ascii')
            return 'Authorization', 'Basic ' + value
        return None

    def redacted_header(self):
        """Same as `header()`, with the credentials replaced by a fixed
        marker. For diagnostics only."""
        if self._scheme == self.BASIC:
            return 'Authorization', 'Basic ' + REDACTED
        return None

    def __bool__(self):
        return self._scheme != self.NONE

    def __eq__(self, other):
        if not isinstance(other, Credentials):
            return NotImplemented
        return (self._scheme, self._username, self._password) == \
            (other._scheme, other._username, other._password)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self):
        return hash((self._scheme, self._username, self._password))

    def __repr__(self):
        if self._scheme == self.BASIC:
            return 'Credentials.basic({0!r}, {1!r})'.format(
                self._username, REDACTED)
        return 'Credentials.none()'
