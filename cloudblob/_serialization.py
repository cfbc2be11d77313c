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
import uuid
from datetime import date
from io import BytesIO
from time import time
from urllib.parse import quote as url_quote
from wsgiref.handlers import format_date_time
from xml.etree import ElementTree as ETree

from ._common_conversion import _to_utc_datetime
from ._constants import (
    X_MS_VERSION,
    _USER_AGENT_STRING,
)
from ._error import (
    _validate_access_policies,
    _ERROR_VALUE_SHOULD_BE_BYTES,
)


def _update_request(request):
    '''
    Drops unset query parameters and headers, expands metadata into
    x-ms-meta-* headers and adds the headers common to every storage request.
    '''
    request.query = [(name, value) for name, value in request.query if value is not None]

    headers = []
    for name, value in request.headers:
        if name == 'x-ms-meta-name-values':
            if value:
                for meta_name, meta_value in value.items():
                    headers.append(('x-ms-meta-' + meta_name.strip(), _str_metadata(meta_value)))
        elif value is not None:
            headers.append((name, value))
    request.headers = headers

    # Content-Length is signed, so it is computed here rather than by requests
    if request.body:
        if not isinstance(request.body, bytes):
            raise TypeError(_ERROR_VALUE_SHOULD_BE_BYTES.format('request.body'))

    if request.method in ['PUT', 'POST', 'MERGE', 'DELETE']:
        request.headers.append(('Content-Length', str(len(request.body or b''))))

    request.headers.append(('x-ms-version', X_MS_VERSION))
    request.headers.append(('User-Agent', _USER_AGENT_STRING))
    request.headers.append(('x-ms-client-request-id', str(uuid.uuid1())))

    return request


def _str_metadata(value):
    return '' if value is None else str(value).strip()


def _add_date_header(request):
    current_time = format_date_time(time())
    request.headers = [(name, value) for name, value in request.headers if name != 'x-ms-date']
    request.headers.append(('x-ms-date', current_time))


def _get_request_body(request_body):
    '''Converts an object into a request body.  If it's None
    we'll return an empty string, if it's one of our objects it'll
    convert it to XML and return it.  Otherwise we just use the object
    directly'''
    if request_body is None:
        return b''

    if isinstance(request_body, bytes):
        return request_body

    if isinstance(request_body, str):
        return request_body.encode('utf-8')

    request_body = str(request_body)
    return request_body.encode('utf-8')


def _convert_signed_identifiers_to_xml(signed_identifiers):
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
    if signed_identifiers is None:
        return ''

    _validate_access_policies(signed_identifiers)

    sis = ETree.Element('SignedIdentifiers')
    for id, access_policy in signed_identifiers.items():
        # Root signed identifers element
        si = ETree.SubElement(sis, 'SignedIdentifier')

        # Id element
        ETree.SubElement(si, 'Id').text = id

        # Access policy element
        policy = ETree.SubElement(si, 'AccessPolicy')

        if access_policy.start:
            start = access_policy.start
            if isinstance(access_policy.start, date):
                start = _to_utc_datetime(start)
            ETree.SubElement(policy, 'Start').text = start

        if access_policy.expiry:
            expiry = access_policy.expiry
            if isinstance(access_policy.expiry, date):
                expiry = _to_utc_datetime(expiry)
            ETree.SubElement(policy, 'Expiry').text = expiry

        if access_policy.permission:
            ETree.SubElement(policy, 'Permission').text = str(access_policy.permission)

    # Add xml declaration and serialize
    with BytesIO() as stream:
        ETree.ElementTree(sis).write(stream, xml_declaration=True, encoding='utf-8', method='xml')
        output = stream.getvalue()

    return output


def _quote_path_segment(value):
    return url_quote(value, safe='/()$=\',~')
