from .config import Config
from .dnsrecord import DNSRecordIPAClient, summarize_add
from .errors import (AuthenticationError, IPAError, RpcError, StateError,
                     ValidationError)
from .ipa import IPAClient

__version__ = '0.2.0'

__all__ = ['Config', 'IPAClient', 'DNSRecordIPAClient', 'summarize_add',
           'IPAError', 'ValidationError', 'StateError',
           'AuthenticationError', 'RpcError']
