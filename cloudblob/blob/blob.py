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
import copy

from azure.common import (
    AzureHttpError,
    AzureMissingResourceHttpError,
)

from .._async import _async_variants
from .._error import (
    _dont_fail_not_exist,
    _ERROR_BLOB_TYPE_MISMATCH,
    _ERROR_SNAPSHOT_READ_ONLY,
    _ERROR_UNKNOWN_BLOB_TYPE,
)
from .models import (
    BlobProperties,
    BlobType,
)


class _BaseBlob(object):

    '''
    A handle on a blob of a container. Creating a handle sends no request;
    :attr:`properties` and :attr:`metadata` hold what the handle last
    received from (or will send to) the service.

    :ivar ~cloudblob.blob.container.BlobContainer container:
        The container of the blob.
    :ivar str name:
        The name of the blob.
    :ivar str snapshot:
        The snapshot identifier, or None for the base blob. Snapshot handles
        are read-only.
    :ivar ~cloudblob.blob.models.BlobProperties properties:
        The blob's system properties. properties.content_settings is sent by
        :meth:`set_properties` and by the create operations.
    :ivar metadata:
        The blob's metadata, sent by :meth:`set_metadata` and by the create
        operations.
    :vartype metadata: dict(str, str)
    '''

    blob_type = None

    def __init__(self, container, name, snapshot=None):
        self.container = container
        self.name = name
        self.snapshot = snapshot
        self.properties = BlobProperties()
        self.properties.blob_type = self.blob_type
        self.metadata = {}

    def __repr__(self):
        return '{}({!r}, {!r}, snapshot={!r})'.format(
            type(self).__name__, self.container.name, self.name, self.snapshot)

    @property
    def service(self):
        return self.container.service

    @property
    def url(self):
        '''The URI of the blob, including the snapshot query when set.'''
        return self.make_url()

    def make_url(self, sas_token=None, protocol=None):
        return self.service.make_blob_url(self.container.name, self.name,
                                          protocol=protocol,
                                          sas_token=sas_token,
                                          snapshot=self.snapshot)

    def _get_executor(self):
        return self.service._get_executor()

    def _check_writable(self):
        if self.snapshot is not None:
            raise ValueError(_ERROR_SNAPSHOT_READ_ONLY)

    def _update_from_blob(self, blob):
        if blob.properties.blob_type and blob.properties.blob_type != self.blob_type:
            raise ValueError(_ERROR_BLOB_TYPE_MISMATCH.format(self.blob_type, blob.properties.blob_type))

        self.properties = blob.properties
        self.metadata = blob.metadata if blob.metadata is not None else {}

    def _update_etag(self, resource_properties):
        self.properties.etag = resource_properties.etag
        self.properties.last_modified = resource_properties.last_modified

    def fetch_attributes(self, access_condition=None, timeout=None):
        '''
        Populates the blob's properties and metadata.

        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        '''
        blob = self.service.get_blob_properties(self.container.name, self.name,
                                                snapshot=self.snapshot,
                                                access_condition=access_condition,
                                                timeout=timeout)
        self._update_from_blob(blob)

    def exists(self, timeout=None):
        '''
        Returns whether the blob (or snapshot) exists. When it does, its
        properties and metadata are refreshed.

        :rtype: bool
        '''
        try:
            self.fetch_attributes(timeout=timeout)
            return True
        except AzureMissingResourceHttpError as ex:
            _dont_fail_not_exist(ex)
            return False

    def set_properties(self, access_condition=None, timeout=None):
        '''
        Writes properties.content_settings to the service. All content
        settings are replaced, so unset values are cleared.

        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        '''
        self._check_writable()
        props = self.service.set_blob_properties(self.container.name, self.name,
                                                 content_settings=self.properties.content_settings,
                                                 access_condition=access_condition,
                                                 timeout=timeout)
        self._update_etag(props)

    def set_metadata(self, access_condition=None, timeout=None):
        '''
        Replaces the blob's metadata with :attr:`metadata`. An empty dict
        clears it.
        '''
        self._check_writable()
        props = self.service.set_blob_metadata(self.container.name, self.name,
                                               metadata=self.metadata,
                                               access_condition=access_condition,
                                               timeout=timeout)
        self._update_etag(props)

    def create_snapshot(self, metadata=None, access_condition=None, timeout=None):
        '''
        Creates a read-only snapshot of the blob.

        :param metadata:
            Metadata for the snapshot. When None the snapshot keeps the blob's
            metadata.
        :type metadata: dict(str, str)
        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: A handle of the same type addressing the snapshot.
        '''
        self._check_writable()
        blob = self.service.snapshot_blob(self.container.name, self.name,
                                          metadata=metadata,
                                          access_condition=access_condition,
                                          timeout=timeout)

        snapshot = type(self)(self.container, self.name, blob.snapshot)
        snapshot.properties = copy.deepcopy(self.properties)
        snapshot.properties.etag = blob.properties.etag
        snapshot.properties.last_modified = blob.properties.last_modified
        snapshot.metadata = dict(metadata if metadata is not None else self.metadata)
        return snapshot

    def delete(self, delete_snapshots=None, access_condition=None, timeout=None):
        '''
        Deletes the blob, or the snapshot when the handle addresses one.

        :param str delete_snapshots:
            Required if the blob has snapshots: 'include' deletes the blob and
            its snapshots, 'only' deletes just the snapshots.
        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        '''
        self.service.delete_blob(self.container.name, self.name,
                                 snapshot=self.snapshot,
                                 delete_snapshots=delete_snapshots,
                                 access_condition=access_condition,
                                 timeout=timeout)

    def delete_if_exists(self, delete_snapshots=None, access_condition=None, timeout=None):
        '''
        :return: True if the blob was deleted, False if it did not exist.
        :rtype: bool
        '''
        try:
            self.delete(delete_snapshots, access_condition, timeout)
            return True
        except AzureHttpError as ex:
            _dont_fail_not_exist(ex)
            return False

    def get_shared_access_signature(self, permission=None, expiry=None, start=None,
                                    id=None, ip=None, protocol=None,
                                    cache_control=None, content_disposition=None,
                                    content_encoding=None, content_language=None,
                                    content_type=None):
        '''
        Generates a shared access signature for the blob. See
        :meth:`~cloudblob.blob.blobservice.BlobService.generate_blob_shared_access_signature`.

        :return: A Shared Access Signature (sas) token.
        :rtype: str
        '''
        return self.service.generate_blob_shared_access_signature(
            self.container.name,
            self.name,
            permission=permission,
            expiry=expiry,
            start=start,
            id=id,
            ip=ip,
            protocol=protocol,
            cache_control=cache_control,
            content_disposition=content_disposition,
            content_encoding=content_encoding,
            content_language=content_language,
            content_type=content_type,
        )

    begin_fetch_attributes, fetch_attributes_async = _async_variants(fetch_attributes)
    begin_exists, exists_async = _async_variants(exists)
    begin_set_properties, set_properties_async = _async_variants(set_properties)
    begin_set_metadata, set_metadata_async = _async_variants(set_metadata)
    begin_create_snapshot, create_snapshot_async = _async_variants(create_snapshot)
    begin_delete, delete_async = _async_variants(delete)
    begin_delete_if_exists, delete_if_exists_async = _async_variants(delete_if_exists)


class BlockBlob(_BaseBlob):

    '''
    A block blob, made of blocks which are uploaded and then committed with
    a block list.
    '''

    blob_type = BlobType.BlockBlob

    def upload_from_bytes(self, data, access_condition=None, timeout=None):
        '''
        Creates or replaces the blob with data in a single request, sending
        the handle's content settings and metadata.

        :param bytes data:
            The content of the blob.
        '''
        self._check_writable()
        props = self.service.create_blob_from_bytes(self.container.name, self.name, data,
                                                    content_settings=self.properties.content_settings,
                                                    metadata=self.metadata,
                                                    access_condition=access_condition,
                                                    timeout=timeout)
        self._update_etag(props)
        self.properties.content_length = len(data)

    def put_block(self, block_id, data, lease_id=None, timeout=None):
        '''
        Uploads an uncommitted block.

        :param str block_id:
            The block id. All ids of a blob must have the same length.
        :param bytes data:
            The content of the block.
        '''
        self._check_writable()
        self.service.put_block(self.container.name, self.name, data, block_id,
                               lease_id=lease_id, timeout=timeout)

    def put_block_list(self, block_list, access_condition=None, timeout=None):
        '''
        Commits the blob from a list of block ids or
        :class:`~cloudblob.blob.models.BlobBlock` items. An empty list commits
        an empty blob.
        '''
        self._check_writable()
        props = self.service.put_block_list(self.container.name, self.name, block_list,
                                            content_settings=self.properties.content_settings,
                                            metadata=self.metadata,
                                            access_condition=access_condition,
                                            timeout=timeout)
        self._update_etag(props)

    begin_upload_from_bytes, upload_from_bytes_async = _async_variants(upload_from_bytes)
    begin_put_block, put_block_async = _async_variants(put_block)
    begin_put_block_list, put_block_list_async = _async_variants(put_block_list)


class PageBlob(_BaseBlob):

    '''
    A page blob: a fixed size blob of 512-byte pages.
    '''

    blob_type = BlobType.PageBlob

    def create(self, size, sequence_number=None, access_condition=None, timeout=None):
        '''
        Creates the page blob, or replaces an existing blob, with zeroed pages.

        :param int size:
            The size of the blob in bytes. Must be a multiple of 512.
        :param int sequence_number:
            The initial sequence number.
        '''
        self._check_writable()
        props = self.service.create_page_blob(self.container.name, self.name, size,
                                              content_settings=self.properties.content_settings,
                                              sequence_number=sequence_number,
                                              metadata=self.metadata,
                                              access_condition=access_condition,
                                              timeout=timeout)
        self._update_etag(props)
        self.properties.content_length = size
        self.properties.page_blob_sequence_number = sequence_number or 0

    begin_create, create_async = _async_variants(create)


class AppendBlob(_BaseBlob):

    '''
    An append blob, to which blocks can only be added at the end.
    '''

    blob_type = BlobType.AppendBlob

    def create(self, access_condition=None, timeout=None):
        '''
        Creates an empty append blob, replacing any existing blob. Pass an
        access condition with if_none_match='*' to fail instead.
        '''
        self._check_writable()
        props = self.service.create_append_blob(self.container.name, self.name,
                                                content_settings=self.properties.content_settings,
                                                metadata=self.metadata,
                                                access_condition=access_condition,
                                                timeout=timeout)
        self._update_etag(props)
        self.properties.content_length = 0
        self.properties.append_blob_committed_block_count = 0

    def append_block(self, data, access_condition=None, timeout=None):
        '''
        Appends data to the end of the blob.

        :param bytes data:
            The content of the block.
        :return: The offset at which the block was written.
        :rtype: int
        '''
        self._check_writable()
        result = self.service.append_block(self.container.name, self.name, data,
                                           access_condition=access_condition,
                                           timeout=timeout)
        self._update_etag(result)
        self.properties.append_blob_committed_block_count = result.committed_block_count
        return result.append_offset

    begin_create, create_async = _async_variants(create)
    begin_append_block, append_block_async = _async_variants(append_block)


_BLOB_TYPES = {
    BlobType.BlockBlob: BlockBlob,
    BlobType.PageBlob: PageBlob,
    BlobType.AppendBlob: AppendBlob,
}


def _blob_from_service(container, blob):
    '''
    Builds the typed handle for a Blob model returned by the service.
    '''
    blob_class = _BLOB_TYPES.get(blob.properties.blob_type)
    if blob_class is None:
        raise ValueError(_ERROR_UNKNOWN_BLOB_TYPE.format(blob.properties.blob_type))

    handle = blob_class(container, blob.name, blob.snapshot)
    handle._update_from_blob(blob)
    return handle
