import collections.abc
import os

import yaml
from ansible.module_utils.parsing.convert_bool import boolean

from .dnsrecord import DNSRecordIPAClient


class Config(object):
    '''
    Client settings from an optional YAML file, then the environment

        ipa_host: ipa.example.com
        ipa_user: admin
        api_version: '2.156'
        validate_certs: true
        timeout: 30
    '''

    # Defaults
    ipa_host = None
    ipa_user = None
    api_version = '2.156'
    validate_certs = True
    timeout = 30

    env_vars = dict(
        ipa_host = 'IPA_HOST',
        ipa_user = 'IPA_USER',
        api_version = 'IPA_API_VERSION',
        validate_certs = 'IPA_VALIDATE_CERTS',
        timeout = 'IPA_TIMEOUT',
        )

    def __init__(self, configfile=None, environ=None):
        self._configfile = None
        if configfile is not None:
            self._configfile = os.path.abspath(configfile)
            self.update_config(self._configfile)
        self.update_env(os.environ if environ is None else environ)

    @property
    def sanitized_config(self):
        config = dict((k, getattr(self, k)) for k in self.env_vars)
        for key, val in self.__dict__.items():
            if key.startswith('_'):  continue
            config[key] = val
        return config

    def update_config(self, fname):
        def update(d, u):
            for k, v in u.items():
                if isinstance(v, collections.abc.Mapping):
                    d[k] = update(d.get(k, {}), v)
                else:
                    d[k] = u[k]
            return d

        with open(fname, 'r') as f:
            update(self.__dict__, yaml.safe_load(f) or {})

    def update_env(self, environ):
        for key, var in self.env_vars.items():
            if var in environ:
                setattr(self, key, environ[var])

    def client(self, cls=DNSRecordIPAClient, password=None, **kwargs):
        '''
        Build a client for `ipa_host` at `api_version`

        With a `password`, the client is also logged in as `ipa_user`.
        '''
        kwargs.setdefault('validate_certs', boolean(self.validate_certs))
        kwargs.setdefault('timeout', int(self.timeout))
        client = cls(**kwargs)
        if self.ipa_host:
            client.hostname(self.ipa_host)
        client.version(self.api_version)
        if password is not None:
            client.login(self.ipa_user, password)
        return client
