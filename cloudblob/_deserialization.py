#-------------------------------------------------------------------------
# Copyright (c) Microsoft.  All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#--------------------------------------------------------------------------
from xml.etree import ElementTree as ETree

from dateutil import parser

from ._common_conversion import (
    _int_or_none,
    _str_or_none,
)
from .models import (
    AccessPolicy,
    _dict,
)


def _bool(value):
    return value.lower() == 'true'


GET_PROPERTIES_ATTRIBUTE_MAP = {
    'last-modified': (None, 'last_modified', parser.parse),
    'etag': (None, 'etag', _str_or_none),
    'x-ms-blob-type': (None, 'blob_type', _str_or_none),
    'content-length': (None, 'content_length', _int_or_none),
    'content-range': (None, 'content_range', _str_or_none),
    'x-ms-blob-sequence-number': (None, 'page_blob_sequence_number', _int_or_none),
    'x-ms-blob-committed-block-count': (None, 'append_blob_committed_block_count', _int_or_none),
    'x-ms-blob-public-access': (None, 'public_access', _str_or_none),
    'x-ms-server-encrypted': (None, 'server_encrypted', _bool),
    'content-type': ('content_settings', 'content_type', _str_or_none),
    'cache-control': ('content_settings', 'cache_control', _str_or_none),
    'content-encoding': ('content_settings', 'content_encoding', _str_or_none),
    'content-disposition': ('content_settings', 'content_disposition', _str_or_none),
    'content-language': ('content_settings', 'content_language', _str_or_none),
    'content-md5': ('content_settings', 'content_md5', _str_or_none),
    'x-ms-lease-status': ('lease', 'status', _str_or_none),
    'x-ms-lease-state': ('lease', 'state', _str_or_none),
    'x-ms-lease-duration': ('lease', 'duration', _str_or_none),
    'x-ms-copy-id': ('copy', 'id', _str_or_none),
    'x-ms-copy-source': ('copy', 'source', _str_or_none),
    'x-ms-copy-status': ('copy', 'status', _str_or_none),
    'x-ms-copy-progress': ('copy', 'progress', _str_or_none),
    'x-ms-copy-completion-time': ('copy', 'completion_time', parser.parse),
    'x-ms-copy-status-description': ('copy', 'status_description', _str_or_none),
}


def _parse_properties(response, properties_class):
    '''
    Extracts out resource properties from the response headers. Headers the
    properties class has no place for are ignored.
    '''
    if response is None or response.headers is None:
        return None

    props = properties_class()
    for key, value in response.headers.items():
        info = GET_PROPERTIES_ATTRIBUTE_MAP.get(key)
        if info:
            if info[0] is None:
                if hasattr(props, info[1]):
                    setattr(props, info[1], info[2](value))
            else:
                attr = getattr(props, info[0], None)
                if attr is not None:
                    setattr(attr, info[1], info[2](value))

    return props


def _parse_metadata(response):
    '''
    Extracts out resource metadata information.
    '''
    if response is None or response.headers is None:
        return None

    metadata = _dict()
    for key, value in response.headers.items():
        if key.startswith('x-ms-meta-'):
            metadata[key[10:]] = _str_or_none(value)

    return metadata


def _parse_response_for_dict(response):
    ''' Extracts name-values from response header. Filter out the standard
    http headers.'''
    if response is None:
        return None

    http_headers = ['server', 'date', 'location', 'host',
                    'via', 'proxy-connection', 'connection']
    return_dict = _dict()
    if response.headers:
        for name, value in response.headers.items():
            if not name.lower() in http_headers:
                return_dict[name] = value

    return return_dict


def _convert_xml_to_signed_identifiers(xml):
    '''
    <?xml version="1.0" encoding="utf-8"?>
    <SignedIdentifiers>
      <SignedIdentifier>
        <Id>unique-value</Id>
        <AccessPolicy>
          <Start>start-time</Start>
          <Expiry>expiry-time</Expiry>
          <Permission>abbreviated-permission-list</Permission>
        </AccessPolicy>
      </SignedIdentifier>
    </SignedIdentifiers>
    '''
    signed_identifiers = _dict()
    if not xml:
        return signed_identifiers

    list_element = ETree.fromstring(xml)
    for signed_identifier_element in list_element.findall('SignedIdentifier'):
        # Id element
        id = signed_identifier_element.find('Id').text

        # Access policy element
        access_policy = AccessPolicy()
        access_policy_element = signed_identifier_element.find('AccessPolicy')
        if access_policy_element is not None:
            start_element = access_policy_element.find('Start')
            if start_element is not None and start_element.text:
                access_policy.start = parser.parse(start_element.text)

            expiry_element = access_policy_element.find('Expiry')
            if expiry_element is not None and expiry_element.text:
                access_policy.expiry = parser.parse(expiry_element.text)

            access_policy.permission = access_policy_element.findtext('Permission')

        signed_identifiers[id] = access_policy

    return signed_identifiers
