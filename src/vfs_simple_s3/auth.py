from vfs_simple_s3.interfaces import IUserAuthenticator
from zope.interface import implementer


DOMAIN = "domain"
USERNAME = "username"
PASSWORD = "password"


@implementer(IUserAuthenticator)
class StaticUserAuthenticator:
    """Fixed credentials: username is the access key id, password the secret."""

    def __init__(self, domain=None, username=None, password=None):
        self.domain = domain
        self.username = username
        self.password = password

    def request_authentication(self, types):
        values = {DOMAIN: self.domain, USERNAME: self.username, PASSWORD: self.password}
        return {t: values.get(t) for t in types}

    def __repr__(self):
        # The secret is never rendered.
        return f"<StaticUserAuthenticator username={self.username!r}>"
