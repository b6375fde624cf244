class IPAError(RuntimeError):
    pass


class ValidationError(IPAError, ValueError):
    '''
    Missing, empty or malformed argument; raised before any network I/O
    '''


class StateError(IPAError):
    '''
    Client used out of order:  hostname, version and login must come first
    '''


class AuthenticationError(IPAError):

    def __init__(self, status, username):
        self.status = status
        self.username = username
        super(AuthenticationError, self).__init__(
            'login rc=%s for %s' % (status, username))


class RpcError(IPAError):

    def __init__(self, method, status, name=None, code=None, message=None):
        self.method = method
        self.status = status
        self.name = name
        self.code = code
        self.message = message
        super(RpcError, self).__init__(str(self))

    def __str__(self):
        if self.name is None and self.code is None:
            return '%s: rc=%s: %s' % (self.method, self.status, self.message)
        return '%s: %s (%s): %s' % (
            self.method, self.name, self.code, self.message)
