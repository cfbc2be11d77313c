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
import logging

from azure.common import (
    AzureHttpError,
    AzureMissingResourceHttpError,
)

from .._async import _async_variants
from .._error import (
    _dont_fail_not_exist,
    _dont_fail_on_exist,
)
from .blob import (
    AppendBlob,
    BlockBlob,
    PageBlob,
    _blob_from_service,
)
from .models import (
    BlobPrefix,
    BlobResultSegment,
    ContainerProperties,
)

logger = logging.getLogger(__name__)


class BlobContainer(object):

    '''
    A handle on a container of a :class:`~cloudblob.blob.blobservice.BlobService`.
    Creating a handle sends no request.

    :ivar ~cloudblob.blob.blobservice.BlobService service:
        The service the container belongs to.
    :ivar str name:
        The name of the container.
    :ivar metadata:
        The container's metadata. It is sent by :meth:`create` and
        :meth:`set_metadata` and replaced by :meth:`fetch_attributes`.
    :vartype metadata: dict(str, str)
    :ivar ~cloudblob.blob.models.ContainerProperties properties:
        The container's system properties, as last received from the service.
    '''

    def __init__(self, service, name, metadata=None):
        self.service = service
        self.name = name
        self.metadata = metadata if metadata is not None else {}
        self.properties = ContainerProperties()

    def __repr__(self):
        return 'BlobContainer({!r})'.format(self.name)

    @property
    def url(self):
        return self.service.make_container_url(self.name)

    def _get_executor(self):
        return self.service._get_executor()

    def _update_etag(self, resource_properties):
        self.properties.etag = resource_properties.etag
        self.properties.last_modified = resource_properties.last_modified

    def create(self, public_access=None, timeout=None):
        '''
        Creates the container with the handle's metadata.

        :param ~cloudblob.blob.models.PublicAccess public_access:
            The public access level. None keeps the container private.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :raises ~azure.common.AzureConflictHttpError:
            The container already exists.
        '''
        props = self.service._create_container(self.name, self.metadata, public_access, timeout)
        self.properties = props
        self.properties.public_access = public_access

    def create_if_not_exists(self, public_access=None, timeout=None):
        '''
        :return: True if the container was created, False if it already existed.
        :rtype: bool
        '''
        try:
            self.create(public_access, timeout)
            return True
        except AzureHttpError as ex:
            _dont_fail_on_exist(ex)
            logger.debug('Container %s already exists.', self.name)
            return False

    def delete(self, access_condition=None, timeout=None):
        '''
        Marks the container for deletion.

        :param ~cloudblob.models.AccessCondition access_condition:
            Only if_modified_since, if_unmodified_since and lease_id apply.
        :raises ~azure.common.AzureMissingResourceHttpError:
            The container does not exist.
        '''
        self.service.delete_container(self.name, fail_not_exist=True,
                                      access_condition=access_condition,
                                      timeout=timeout)

    def delete_if_exists(self, access_condition=None, timeout=None):
        '''
        :return: True if the container was deleted, False if it did not exist.
        :rtype: bool
        '''
        return self.service.delete_container(self.name, fail_not_exist=False,
                                             access_condition=access_condition,
                                             timeout=timeout)

    def exists(self, timeout=None):
        '''
        Returns whether the container exists. When it does, its properties and
        metadata are refreshed.

        :rtype: bool
        '''
        try:
            self.fetch_attributes(timeout=timeout)
            return True
        except AzureMissingResourceHttpError as ex:
            _dont_fail_not_exist(ex)
            return False

    def fetch_attributes(self, access_condition=None, timeout=None):
        '''
        Replaces :attr:`properties` and :attr:`metadata` with the values held
        by the service.

        :param ~cloudblob.models.AccessCondition access_condition:
            Only lease_id applies.
        '''
        lease_id = access_condition.lease_id if access_condition is not None else None
        container = self.service.get_container_properties(self.name, lease_id=lease_id, timeout=timeout)
        self.properties = container.properties
        self.metadata = container.metadata if container.metadata is not None else {}

    def set_metadata(self, access_condition=None, timeout=None):
        '''
        Replaces the container's metadata with :attr:`metadata`. An empty
        dict clears it.

        :param ~cloudblob.models.AccessCondition access_condition:
            Only if_modified_since and lease_id apply.
        '''
        props = self.service.set_container_metadata(self.name, self.metadata,
                                                    access_condition=access_condition,
                                                    timeout=timeout)
        self._update_etag(props)

    def get_permissions(self, access_condition=None, timeout=None):
        '''
        :return: The public access level and stored access policies.
        :rtype: ~cloudblob.blob.models.ContainerAcl
        '''
        lease_id = access_condition.lease_id if access_condition is not None else None
        acl = self.service.get_container_acl(self.name, lease_id=lease_id, timeout=timeout)
        self.properties.public_access = acl.public_access
        return acl

    def set_permissions(self, acl, access_condition=None, timeout=None):
        '''
        Replaces the public access level and the stored access policies.

        :param ~cloudblob.blob.models.ContainerAcl acl:
            The permissions to set. At most 5 access policies.
        '''
        props = self.service.set_container_acl(self.name, acl,
                                               access_condition=access_condition,
                                               timeout=timeout)
        self._update_etag(props)
        self.properties.public_access = acl.public_access

    def _to_item(self, item):
        if isinstance(item, BlobPrefix):
            return item
        return _blob_from_service(self, item)

    def list_blobs(self, prefix=None, delimiter=None, include=None, timeout=None):
        '''
        Lazily enumerates the blobs of the container, following continuation
        tokens. Yields :class:`~cloudblob.blob.blob.BlockBlob`,
        :class:`~cloudblob.blob.blob.PageBlob` and
        :class:`~cloudblob.blob.blob.AppendBlob` handles, and
        :class:`~cloudblob.blob.models.BlobPrefix` items when a delimiter is
        given.

        :param str prefix:
            Only blobs whose name begins with prefix are listed.
        :param str delimiter:
            Groups the blobs whose names share a prefix up to the delimiter
            into a BlobPrefix.
        :param ~cloudblob.blob.models.Include include:
            Additional datasets to include.
        '''
        for item in self.service.list_blobs(self.name, prefix=prefix, include=include,
                                            delimiter=delimiter, timeout=timeout):
            yield self._to_item(item)

    def list_blobs_segmented(self, prefix=None, delimiter=None, include=None,
                             max_results=None, marker=None, timeout=None):
        '''
        Returns one page of the blob listing. Pass the segment's next_marker
        as marker to get the following page; the listing is complete when it
        is None.

        :param int max_results:
            The maximum number of items in the page, between 1 and 5000.
        :param str marker:
            The continuation token of the previous page.
        :rtype: ~cloudblob.blob.models.BlobResultSegment
        '''
        page = self.service._list_blobs(self.name, prefix=prefix, marker=marker,
                                        max_results=max_results, include=include,
                                        delimiter=delimiter, timeout=timeout)
        return BlobResultSegment([self._to_item(item) for item in page], page.next_marker)

    def get_block_blob_reference(self, blob_name, snapshot=None):
        return BlockBlob(self, blob_name, snapshot)

    def get_page_blob_reference(self, blob_name, snapshot=None):
        return PageBlob(self, blob_name, snapshot)

    def get_append_blob_reference(self, blob_name, snapshot=None):
        return AppendBlob(self, blob_name, snapshot)

    def get_blob_reference_from_server(self, blob_name, snapshot=None,
                                       access_condition=None, timeout=None):
        '''
        Reads the blob's properties and returns a handle of the blob's type,
        populated with its properties and metadata.

        :raises ~azure.common.AzureMissingResourceHttpError:
            The blob does not exist.
        '''
        blob = self.service.get_blob_properties(self.name, blob_name,
                                                snapshot=snapshot,
                                                access_condition=access_condition,
                                                timeout=timeout)
        return _blob_from_service(self, blob)

    def acquire_lease(self, lease_duration=-1, proposed_lease_id=None,
                      access_condition=None, timeout=None):
        '''
        :return: The lease ID.
        :rtype: str
        '''
        return self.service.acquire_container_lease(self.name, lease_duration, proposed_lease_id,
                                                    access_condition, timeout)

    def renew_lease(self, lease_id, access_condition=None, timeout=None):
        return self.service.renew_container_lease(self.name, lease_id, access_condition, timeout)

    def release_lease(self, lease_id, access_condition=None, timeout=None):
        self.service.release_container_lease(self.name, lease_id, access_condition, timeout)

    def break_lease(self, lease_break_period=None, access_condition=None, timeout=None):
        '''
        :return: The seconds remaining before the lease is broken.
        :rtype: int
        '''
        return self.service.break_container_lease(self.name, lease_break_period,
                                                  access_condition, timeout)

    def change_lease(self, lease_id, proposed_lease_id, access_condition=None, timeout=None):
        return self.service.change_container_lease(self.name, lease_id, proposed_lease_id,
                                                   access_condition, timeout)

    def get_shared_access_signature(self, permission=None, expiry=None, start=None,
                                    id=None, ip=None, protocol=None):
        '''
        Generates a shared access signature for the container. See
        :meth:`~cloudblob.blob.blobservice.BlobService.generate_container_shared_access_signature`.

        :return: A Shared Access Signature (sas) token.
        :rtype: str
        '''
        return self.service.generate_container_shared_access_signature(
            self.name,
            permission=permission,
            expiry=expiry,
            start=start,
            id=id,
            ip=ip,
            protocol=protocol,
        )

    begin_create, create_async = _async_variants(create)
    begin_create_if_not_exists, create_if_not_exists_async = _async_variants(create_if_not_exists)
    begin_delete, delete_async = _async_variants(delete)
    begin_delete_if_exists, delete_if_exists_async = _async_variants(delete_if_exists)
    begin_exists, exists_async = _async_variants(exists)
    begin_fetch_attributes, fetch_attributes_async = _async_variants(fetch_attributes)
    begin_set_metadata, set_metadata_async = _async_variants(set_metadata)
    begin_get_permissions, get_permissions_async = _async_variants(get_permissions)
    begin_set_permissions, set_permissions_async = _async_variants(set_permissions)
    begin_list_blobs_segmented, list_blobs_segmented_async = _async_variants(list_blobs_segmented)
    begin_get_blob_reference_from_server, get_blob_reference_from_server_async = \
        _async_variants(get_blob_reference_from_server)
    begin_acquire_lease, acquire_lease_async = _async_variants(acquire_lease)
    begin_renew_lease, renew_lease_async = _async_variants(renew_lease)
    begin_release_lease, release_lease_async = _async_variants(release_lease)
    begin_break_lease, break_lease_async = _async_variants(break_lease)
    begin_change_lease, change_lease_async = _async_variants(change_lease)
