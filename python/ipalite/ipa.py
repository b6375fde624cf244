# -*- coding: utf-8 -*-
# This code is part of Ansible, but is an independent component.
# This particular file snippet, and this file snippet only, is BSD licensed.
# Modules you write using this snippet, which is embedded dynamically by Ansible
# still belong to the author of the module, and may assign their own license
# to the complete work.
#
# Copyright (c) 2016 Thomas Krahn (@Nosmoht)
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without modification,
# are permitted provided that the following conditions are met:
#
#    * Redistributions of source code must retain the above copyright
#      notice, this list of conditions and the following disclaimer.
#    * Redistributions in binary form must reproduce the above copyright notice,
#      this list of conditions and the following disclaimer in the documentation
#      and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS
# "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT
# LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS
# FOR A PARTICULAR PURPOSE ARE DISCLAIMED.  IN NO EVENT SHALL THE
# COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING,
# BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES;
# LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT
# LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN
# ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

import itertools
import json
import logging
import re
from http.cookiejar import CookieJar
from urllib.error import HTTPError
from urllib.parse import quote

from ansible.module_utils.common.text.converters import to_bytes, to_text
from ansible.module_utils.urls import Request

from .errors import AuthenticationError, RpcError, StateError, ValidationError

log = logging.getLogger(__name__)


class IPAClient(object):
    '''
    Session-authenticated client for the FreeIPA JSON-RPC API

        client = IPAClient()
        client.hostname('ipa.example.com')
        client.version('2.156')
        client.login('admin', 'secret')
        client.call('dnszone_find', {'all': True})

    The session is a cookie handed out by `login()`; every later
    `call()` carries it, plus the referer FreeIPA checks on JSON
    requests.  A client is a single session and is not thread safe.
    '''

    # Object name:  subclasses set this to fill in `methods` patterns
    name = None

    # Map method names in base object:  may be overridden
    # - Pattern will be filled with class `name` attribute
    methods = dict()

    login_path = '/ipa/session/login_password'
    json_path = '/ipa/session/json'

    version_re = re.compile(r'^[.0-9]+\Z')
    method_re = re.compile(r'^\w+\Z')
    referer_re = re.compile(r'^https?://')

    #######################################################
    # init

    def __init__(self, transport=None, validate_certs=True, timeout=30,
                 id_generator=None):
        self.init_methods()

        self.host = None
        self.base_url = None
        self.referer = None
        self.api_version = None
        self.authenticated = False
        self.validate_certs = validate_certs

        if transport is None:
            transport = self.init_transport(validate_certs, timeout)
        self.transport = transport

        # Request ids are per-session, counting from 0
        self._ids = id_generator if id_generator is not None \
                    else itertools.count()

        self._response_code = None
        self._response_content = None

    def init_methods(self):
        if self.name is None:
            self._methods = {}
            return
        self._methods = dict(map(
            lambda x: (x[0], x[1].format(self.name)),
            self.__class__.methods.items()))

    def init_transport(self, validate_certs, timeout):
        if not validate_certs:
            log.warning('TLS certificate validation is disabled')
        return Request(
            cookies=CookieJar(),
            validate_certs=validate_certs,
            timeout=timeout,
            http_agent='ipalite')

    #######################################################
    # session setup

    def hostname(self, hostname):
        if hostname is None:
            raise ValidationError('no hostname')
        if not isinstance(hostname, str):
            raise ValidationError("bad hostname '%s'" % (hostname,))
        if not len(hostname):
            raise ValidationError('empty hostname')

        if self.host is not None:
            if hostname != self.host:
                raise StateError(
                    'hostname already set to %s, refusing %s' %
                    (self.host, hostname))
            return True

        self.host = hostname
        self.base_url = 'https://%s' % hostname
        self.referer = self.base_url
        return True

    def version(self, version):
        if version is None:
            raise ValidationError('no version')
        version = str(version)
        if not self.version_re.match(version):
            raise ValidationError("bad version '%s'" % version)

        self.api_version = version
        return True

    def get_base_url(self):
        return '%s/ipa' % self.base_url

    def login(self, username, password):
        if username is None:
            raise ValidationError('no username')
        if password is None:
            raise ValidationError('no password')
        if not len(username):
            raise ValidationError('empty username')
        if not len(password):
            raise ValidationError('empty password')
        if self.base_url is None:
            raise StateError('hostname must be set before login')

        data = 'user=%s&password=%s' % \
               (quote(username, safe=''), quote(password, safe=''))
        headers = {'Accept': 'text/plain',
                   'Referer': self.referer,
                   'Content-Type': 'application/x-www-form-urlencoded'}

        status, _ = self._post(self.login_path, data, headers=headers)
        if status != 200:
            raise AuthenticationError(status, username)

        # JSON requests must come from the /ipa origin
        self.referer = self.get_base_url()
        self.transport.headers = {'Accept': 'application/json',
                                  'Content-Type': 'application/json',
                                  'Referer': self.referer}
        self.authenticated = True
        log.info('Logged in to %s as %s', self.host, username)
        return status

    #######################################################
    # last response

    @property
    def response_code(self):
        return self._response_code

    @property
    def response_content(self):
        return self._response_content

    #######################################################
    # post API request

    def _post(self, path, data, headers=None):
        url = '%s%s' % (self.base_url, path)
        try:
            resp = self.transport.open(
                'POST', url, data=to_bytes(data), headers=headers)
        except HTTPError as e:
            # Non-2xx replies still carry a body worth decoding
            resp = e

        charset = 'utf-8'
        if resp.headers is not None:
            charset = resp.headers.get_content_charset('utf-8')
        content = to_text(resp.read(), encoding=charset)

        self._response_code = resp.status
        self._response_content = content
        return resp.status, content

    def check_ready(self):
        if self.referer is None:
            raise StateError('hostname must be set before any API call')
        if not self.referer_re.match(self.referer):
            raise StateError("bad referer '%s'" % self.referer)
        if not self.authenticated:
            raise StateError('login must succeed before any API call')
        if self.api_version is None:
            raise StateError('version must be set before any API call')

    def call(self, method, params=None):
        if not isinstance(method, str) or not self.method_re.match(method):
            raise ValidationError("bad method '%s'" % (method,))
        self.check_ready()

        item = dict(params or {})
        item['version'] = self.api_version
        data = {'id': next(self._ids),
                'method': method,
                'params': [[], item]}
        request = json.dumps(data, sort_keys=True)
        log.debug('post %s: %s', method, request)

        status, content = self._post(self.json_path, request)
        try:
            resp = json.loads(content)
        except ValueError:
            raise RpcError(method, status, message=content)
        if not isinstance(resp, dict):
            raise RpcError(method, status, message=content)

        err = resp.get('error')
        if status != 200 or err is not None:
            err = err or {}
            raise RpcError(method, status,
                           name=err.get('name'),
                           code=err.get('code'),
                           message=err.get('message', content))

        return resp.get('result')
