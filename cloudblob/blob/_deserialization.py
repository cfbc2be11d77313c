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

from .._common_conversion import (
    _int_or_none,
    _str_or_none,
)
from .._deserialization import (
    _bool,
    _convert_xml_to_signed_identifiers,
    _parse_metadata,
    _parse_properties,
    _parse_response_for_dict,
)
from ..models import _list
from .models import (
    AppendBlockProperties,
    Blob,
    BlobPrefix,
    BlobProperties,
    Container,
    ContainerAcl,
    ContainerPermissions,
    ContainerProperties,
)


def _parse_base_properties(response):
    '''
    Extracts basic response headers.
    '''
    raw_headers = _parse_response_for_dict(response)

    resource_properties = BlobProperties()
    resource_properties.last_modified = parser.parse(raw_headers.get('last-modified'))
    resource_properties.etag = raw_headers.get('etag')

    return resource_properties


def _parse_container_base_properties(response):
    raw_headers = _parse_response_for_dict(response)

    properties = ContainerProperties()
    properties.last_modified = parser.parse(raw_headers.get('last-modified'))
    properties.etag = raw_headers.get('etag')

    return properties


def _parse_append_block(response):
    '''
    Extracts append block response headers.
    '''
    raw_headers = _parse_response_for_dict(response)

    append_block = AppendBlockProperties()
    append_block.last_modified = parser.parse(raw_headers.get('last-modified'))
    append_block.etag = raw_headers.get('etag')
    append_block.append_offset = _int_or_none(raw_headers.get('x-ms-blob-append-offset'))
    append_block.committed_block_count = _int_or_none(raw_headers.get('x-ms-blob-committed-block-count'))

    return append_block


def _parse_snapshot_blob(response, name):
    '''
    Extracts snapshot return header.
    '''
    raw_headers = _parse_response_for_dict(response)
    snapshot = raw_headers.get('x-ms-snapshot')

    return _parse_blob(response, name, snapshot)


def _parse_lease(response):
    '''
    Extracts lease time and ID return headers.
    '''
    raw_headers = _parse_response_for_dict(response)
    lease = {'time': raw_headers.get('x-ms-lease-time')}
    if lease['time']:
        lease['time'] = _int_or_none(lease['time'])

    lease['id'] = raw_headers.get('x-ms-lease-id')
    return lease


def _parse_blob(response, name, snapshot):
    if response is None:
        return None

    metadata = _parse_metadata(response)
    props = _parse_properties(response, BlobProperties)
    return Blob(name, snapshot, response.body, props, metadata)


def _parse_container(response, name):
    if response is None:
        return None

    metadata = _parse_metadata(response)
    props = _parse_properties(response, ContainerProperties)
    return Container(name, props, metadata)


def _convert_xml_to_container_acl(response):
    acl = ContainerAcl()
    acl.access_policies = _convert_xml_to_signed_identifiers(response.body)
    for access_policy in acl.access_policies.values():
        if access_policy.permission is not None:
            access_policy.permission = ContainerPermissions(_str=access_policy.permission)
    acl.public_access = response.headers.get('x-ms-blob-public-access')

    return acl


def _convert_xml_to_containers(response):
    '''
    <?xml version="1.0" encoding="utf-8"?>
    <EnumerationResults ServiceEndpoint="https://myaccount.blob.core.windows.net">
      <Prefix>string-value</Prefix>
      <Marker>string-value</Marker>
      <MaxResults>int-value</MaxResults>
      <Containers>
        <Container>
          <Name>container-name</Name>
          <Properties>
            <Last-Modified>date/time-value</Last-Modified>
            <Etag>etag</Etag>
            <LeaseStatus>locked | unlocked</LeaseStatus>
            <LeaseState>available | leased | expired | breaking | broken</LeaseState>
            <LeaseDuration>infinite | fixed</LeaseDuration>
            <PublicAccess>blob | container</PublicAccess>
          </Properties>
          <Metadata>
            <metadata-name>value</metadata-name>
          </Metadata>
        </Container>
      </Containers>
      <NextMarker>marker-value</NextMarker>
    </EnumerationResults>
    '''
    if response is None or response.body is None:
        return None

    containers = _list()
    list_element = ETree.fromstring(response.body)

    # Set next marker
    setattr(containers, 'next_marker', list_element.findtext('NextMarker') or None)

    containers_element = list_element.find('Containers')

    for container_element in containers_element.findall('Container'):
        # Name element
        container = Container()
        container.name = container_element.findtext('Name')

        # Metadata
        metadata_root_element = container_element.find('Metadata')
        if metadata_root_element is not None:
            container.metadata = dict()
            for metadata_element in metadata_root_element:
                container.metadata[metadata_element.tag] = metadata_element.text or ''

        # Properties
        properties_element = container_element.find('Properties')
        container.properties.etag = properties_element.findtext('Etag')
        container.properties.last_modified = parser.parse(properties_element.findtext('Last-Modified'))
        container.properties.lease.status = properties_element.findtext('LeaseStatus')
        container.properties.lease.state = properties_element.findtext('LeaseState')
        container.properties.lease.duration = properties_element.findtext('LeaseDuration')
        container.properties.public_access = properties_element.findtext('PublicAccess')

        # Add container to list
        containers.append(container)

    return containers


LIST_BLOBS_ATTRIBUTE_MAP = {
    'Last-Modified': (None, 'last_modified', parser.parse),
    'Etag': (None, 'etag', _str_or_none),
    'x-ms-blob-sequence-number': (None, 'page_blob_sequence_number', _int_or_none),
    'BlobType': (None, 'blob_type', _str_or_none),
    'Content-Length': (None, 'content_length', _int_or_none),
    'ServerEncrypted': (None, 'server_encrypted', _bool),
    'Content-Type': ('content_settings', 'content_type', _str_or_none),
    'Content-Encoding': ('content_settings', 'content_encoding', _str_or_none),
    'Content-Disposition': ('content_settings', 'content_disposition', _str_or_none),
    'Content-Language': ('content_settings', 'content_language', _str_or_none),
    'Content-MD5': ('content_settings', 'content_md5', _str_or_none),
    'Cache-Control': ('content_settings', 'cache_control', _str_or_none),
    'LeaseStatus': ('lease', 'status', _str_or_none),
    'LeaseState': ('lease', 'state', _str_or_none),
    'LeaseDuration': ('lease', 'duration', _str_or_none),
    'CopyId': ('copy', 'id', _str_or_none),
    'CopySource': ('copy', 'source', _str_or_none),
    'CopyStatus': ('copy', 'status', _str_or_none),
    'CopyProgress': ('copy', 'progress', _str_or_none),
    'CopyCompletionTime': ('copy', 'completion_time', parser.parse),
    'CopyStatusDescription': ('copy', 'status_description', _str_or_none),
}


def _convert_xml_to_blob_list(response):
    '''
    <?xml version="1.0" encoding="utf-8"?>
    <EnumerationResults ServiceEndpoint="http://myaccount.blob.core.windows.net/" ContainerName="mycontainer">
      <Prefix>string-value</Prefix>
      <Marker>string-value</Marker>
      <MaxResults>int-value</MaxResults>
      <Delimiter>string-value</Delimiter>
      <Blobs>
        <Blob>
          <Name>blob-name</name>
          <Snapshot>date-time-value</Snapshot>
          <Properties>
            <Last-Modified>date-time-value</Last-Modified>
            <Etag>etag</Etag>
            <Content-Length>size-in-bytes</Content-Length>
            <Content-Type>blob-content-type</Content-Type>
            <Content-Encoding />
            <Content-Language />
            <Content-MD5 />
            <Cache-Control />
            <x-ms-blob-sequence-number>sequence-number</x-ms-blob-sequence-number>
            <BlobType>BlockBlob|PageBlob|AppendBlob</BlobType>
            <LeaseStatus>locked|unlocked</LeaseStatus>
            <LeaseState>available | leased | expired | breaking | broken</LeaseState>
            <LeaseDuration>infinite | fixed</LeaseDuration>
            <CopyId>id</CopyId>
            <CopyStatus>pending | success | aborted | failed </CopyStatus>
            <CopySource>source url</CopySource>
            <CopyProgress>bytes copied/bytes total</CopyProgress>
            <CopyCompletionTime>datetime</CopyCompletionTime>
            <CopyStatusDescription>error string</CopyStatusDescription>
            <ServerEncrypted>true | false</ServerEncrypted>
          </Properties>
          <Metadata>
            <Name>value</Name>
          </Metadata>
        </Blob>
        <BlobPrefix>
          <Name>blob-prefix</Name>
        </BlobPrefix>
      </Blobs>
      <NextMarker />
    </EnumerationResults>
    '''
    if response is None or response.body is None:
        return None

    blob_list = _list()
    list_element = ETree.fromstring(response.body)

    setattr(blob_list, 'next_marker', list_element.findtext('NextMarker') or None)

    blobs_element = list_element.find('Blobs')
    for blob_prefix_element in blobs_element.findall('BlobPrefix'):
        blob_list.append(BlobPrefix(blob_prefix_element.findtext('Name')))

    for blob_element in blobs_element.findall('Blob'):
        blob = Blob()
        blob.name = blob_element.findtext('Name')
        blob.snapshot = blob_element.findtext('Snapshot')

        # Properties
        properties_element = blob_element.find('Properties')
        if properties_element is not None:
            for property_element in properties_element:
                info = LIST_BLOBS_ATTRIBUTE_MAP.get(property_element.tag)
                if info is None or not property_element.text:
                    continue

                if info[0] is None:
                    setattr(blob.properties, info[1], info[2](property_element.text))
                else:
                    attr = getattr(blob.properties, info[0])
                    setattr(attr, info[1], info[2](property_element.text))

        # Metadata
        metadata_root_element = blob_element.find('Metadata')
        if metadata_root_element is not None:
            blob.metadata = dict()
            for metadata_element in metadata_root_element:
                blob.metadata[metadata_element.tag] = metadata_element.text or ''

        # Add blob to list
        blob_list.append(blob)

    return blob_list
