import io
import json
from email.message import Message
from urllib.error import HTTPError

import pytest

from ipalite import DNSRecordIPAClient


def make_headers(content_type='application/json; charset=utf-8'):
    headers = Message()
    headers['Content-Type'] = content_type
    return headers


class FakeResponse(object):

    def __init__(self, status=200, body=b'', content_type=None):
        self.status = status
        self.headers = make_headers(content_type) if content_type \
                       else make_headers()
        self._body = body

    def read(self):
        return self._body


class FakeTransport(object):
    '''
    Stands in for `ansible.module_utils.urls.Request`: records each
    `open()` call with merged headers and replays queued replies
    '''

    def __init__(self):
        self.headers = {}
        self.calls = []
        self.replies = []

    def reply(self, status=200, body=None, text=None, raise_error=None):
        if text is None:
            text = json.dumps(body) if body is not None else ''
        self.replies.append((status, text.encode('utf-8'), raise_error))

    def reply_login(self, status=200):
        self.reply(status, text='', raise_error=status >= 400)

    def reply_json(self, result=None, error=None, status=200):
        self.reply(status, body={'result': result, 'error': error, 'id': 0,
                                 'principal': 'admin@EXAMPLE.COM',
                                 'version': '4.6.8'},
                   raise_error=status >= 400)

    def open(self, method, url, data=None, headers=None):
        self.calls.append(dict(
            method=method, url=url, data=data,
            headers=dict(self.headers, **(headers or {}))))
        status, body, raise_error = self.replies.pop(0)
        if raise_error:
            raise HTTPError(url, status, 'error', make_headers(),
                            io.BytesIO(body))
        return FakeResponse(status, body)

    def sent_json(self, index=-1):
        return json.loads(self.calls[index]['data'].decode('utf-8'))


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(transport):
    client = DNSRecordIPAClient(transport=transport)
    client.hostname('ipa.example.com')
    client.version('2.156')
    return client


@pytest.fixture
def session(client, transport):
    transport.reply_login(200)
    client.login('admin', 'secret')
    return client
