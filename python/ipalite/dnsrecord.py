# -*- coding: utf-8 -*-
# This file is part of Ansible
#
# Ansible is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# Ansible is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with Ansible.  If not, see <http://www.gnu.org/licenses/>.

import logging

from .errors import ValidationError
from .ipa import IPAClient

log = logging.getLogger(__name__)


def summarize_add(result):
    '''
    One-line summary of a `dnsrecord_add` result

    Only the add reply is known to carry `idnsname`, so this is not
    meant for other methods.
    '''
    if not isinstance(result, dict):
        return 'Added record'
    summary = result.get('summary')
    if summary:
        return summary
    try:
        return 'Added record %s' % \
            result['result']['idnsname'][0]['__dns_name__']
    except (KeyError, IndexError, TypeError):
        return 'Added record'


class DNSRecordIPAClient(IPAClient):
    name = 'dnsrecord'

    methods = dict(
        add = '{}_add',
        rem = '{}_del',
        show = '{}_show',
        )

    # Parameters used as request keys
    param_keys = ('dnszoneidnsname', 'idnsname')

    # An A record is named by either of these
    arecord_keys = ('arecord', 'a_part_ip_address')

    def clean(self, fields, arecord=True):
        item = {}
        for key, val in fields.items():
            # Ignore empty values
            if val is None:  continue
            # Record lists may be given as a single string
            if key == 'arecord' and not isinstance(val, (list, tuple)):
                val = [val]
            item[key] = val

        for key in self.param_keys:
            if not item.get(key):
                raise ValidationError('missing %s' % key)

        if arecord and not any(item.get(k) for k in self.arecord_keys):
            raise ValidationError(
                'missing %s' % ' or '.join(self.arecord_keys))
        return item

    def dnsrecord_add(self, **fields):
        item = self.clean(fields)
        result = self.call(self._methods['add'], item)
        log.info(summarize_add(result))
        return True

    def dnsrecord_del(self, **fields):
        item = self.clean(fields)
        self.call(self._methods['rem'], item)
        log.info('Deleted A record %s from %s',
                 item['idnsname'], item['dnszoneidnsname'])
        return True

    def dnsrecord_show(self, **fields):
        item = self.clean(fields, arecord=False)
        # Ask for every attribute, not just the defaults
        item.setdefault('all', True)
        result = self.call(self._methods['show'], item)
        return result.get('result')
