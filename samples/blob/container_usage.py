# -------------------------------------------------------------------------
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
# --------------------------------------------------------------------------
import asyncio
import datetime
import uuid

from azure.common import (
    AzureConflictHttpError,
    AzureHttpError,
)

from cloudblob import (
    AccessCondition,
    AccessPolicy,
)
from cloudblob.blob import (
    ContainerAcl,
    ContainerPermissions,
    Include,
    PublicAccess,
)


class ContainerSamples():
    def __init__(self, service):
        self.service = service

    def run_all_samples(self):
        self.create_container()
        self.delete_container()
        self.container_metadata()
        self.container_exists()
        self.container_permissions()
        self.conditional_access()
        self.lease_container()
        self.list_blobs()
        self.blob_from_uri()
        self.asynchronous_calls()

    def _get_container_reference(self, prefix='container'):
        return self.service.get_container_reference(
            '{}{}'.format(prefix, str(uuid.uuid4()).replace('-', '')))

    def _create_container(self, prefix='container'):
        container = self._get_container_reference(prefix)
        container.create()
        return container

    def create_container(self):
        # Basic
        container1 = self._get_container_reference()
        container1.create()

        # Metadata is sent from the handle
        container2 = self._get_container_reference()
        container2.metadata = {'val1': 'foo', 'val2': 'blah'}
        container2.create()

        # Fail on exist
        container3 = self._create_container()
        created = container3.create_if_not_exists()  # False
        try:
            container3.create()
        except AzureConflictHttpError:
            pass

        container1.delete()
        container2.delete()
        container3.delete()

    def delete_container(self):
        # Basic
        container = self._create_container()
        container.delete()

        # Fail not exist
        deleted = container.delete_if_exists()  # False

    def container_metadata(self):
        container = self._create_container()

        # Basic
        container.metadata = {'val1': 'foo', 'val2': 'blah'}
        container.set_metadata()

        other = self.service.get_container_reference(container.name)
        other.fetch_attributes()  # other.metadata={'val1': 'foo', 'val2': 'blah'}

        # Replaces values, does not merge
        container.metadata = {'new': 'val'}
        container.set_metadata()

        # Clearing
        container.metadata = {}
        container.set_metadata()

        container.delete()

    def container_exists(self):
        container = self._get_container_reference()

        exists = container.exists()  # False
        container.create()
        exists = container.exists()  # True, properties are refreshed

        container.delete()

    def container_permissions(self):
        container = self._create_container()

        # Public read access for blobs plus one stored access policy
        acl = ContainerAcl(public_access=PublicAccess.Blob)
        acl.access_policies['readonly'] = AccessPolicy(
            permission=ContainerPermissions.READ + ContainerPermissions.LIST,
            expiry=datetime.datetime.utcnow() + datetime.timedelta(hours=1))
        container.set_permissions(acl)

        acl = container.get_permissions()  # acl.public_access='blob', str(acl.access_policies['readonly'].permission)='rl'

        # A SAS bound to the stored access policy
        token = container.get_shared_access_signature(id='readonly')

        container.delete()

    def conditional_access(self):
        container = self._create_container()
        container.fetch_attributes()

        # Succeeds: the container changed after this time
        earlier = container.properties.last_modified - datetime.timedelta(minutes=15)
        container.set_metadata(AccessCondition.generate_if_modified_since_condition(earlier))

        # Fails with 412 ConditionNotMet
        container.fetch_attributes()
        try:
            container.set_metadata(
                AccessCondition.generate_if_modified_since_condition(container.properties.last_modified))
        except AzureHttpError as ex:
            ex.error_code  # 'ConditionNotMet'

        container.delete()

    def lease_container(self):
        container1 = self._create_container()
        container2 = self._create_container()

        # Acquire
        # Defaults to infinite lease
        infinite_lease_id = container1.acquire_lease()

        # Acquire
        # Set lease time, may be between 15 and 60 seconds
        proposed_lease_id_1 = '55e97f64-73e8-4390-838d-d9e84a374321'
        fixed_lease_id = container2.acquire_lease(lease_duration=30, proposed_lease_id=proposed_lease_id_1)

        # Renew, then change the lease ID of an active lease
        container2.renew_lease(fixed_lease_id)
        proposed_lease_id_2 = '55e97f64-73e8-4390-838d-d9e84a374322'
        container2.change_lease(fixed_lease_id, proposed_lease_id_2)

        # A leased container must be deleted with its lease
        container2.delete(AccessCondition.generate_lease_condition(proposed_lease_id_2))

        # Break
        # An infinite lease breaks immediately
        container1.break_lease()  # 0
        container1.delete()

    def list_blobs(self):
        container = self._create_container()

        for name in ('blob1', 'blob2', 'dir1/blob1'):
            container.get_block_blob_reference(name).upload_from_bytes(b'')
        page = container.get_page_blob_reference('pageblob')
        page.create(1024)

        # Basic
        # Items are typed handles: BlockBlob, PageBlob or AppendBlob
        print('Basic List:')
        for blob in container.list_blobs():
            print(blob.name, type(blob).__name__)  # blob1, blob2, dir1/blob1, pageblob

        # Prefix
        print('Prefix List:')
        for blob in container.list_blobs(prefix='blob'):
            print(blob.name)  # blob1, blob2

        # Virtual 'directories' w/ delimiter
        print('Delimiter List:')
        for item in container.list_blobs(delimiter='/'):
            print(item.name)  # dir1/, blob1, blob2, pageblob

        # Segments
        # next_marker is None once the listing is complete
        segment = container.list_blobs_segmented(max_results=2)
        while True:
            for blob in segment:
                print(blob.name)
            if segment.next_marker is None:
                break
            segment = container.list_blobs_segmented(max_results=2, marker=segment.next_marker)

        # Snapshots and metadata
        blob1 = container.get_block_blob_reference('blob1')
        blob1.metadata = {'val1': 'foo'}
        blob1.set_metadata()
        snapshot = blob1.create_snapshot()
        print('Snapshot List:')
        for blob in container.list_blobs(include=Include.SNAPSHOTS | Include.METADATA):
            print(blob.name, blob.snapshot, blob.metadata)

        container.delete()

    def blob_from_uri(self):
        container = self._create_container()
        container.get_append_blob_reference('log').create()

        # The handle type follows the blob type held by the service
        blob = self.service.get_blob_reference_from_server(container.get_append_blob_reference('log').url)
        type(blob).__name__  # AppendBlob

        container.delete()

    def asynchronous_calls(self):
        container = self._get_container_reference()

        # Callback style
        future = container.begin_create(callback=lambda f: print('created', f.exception() is None))
        future.result()

        # Coroutine style
        async def check():
            return await container.exists_async()

        exists = asyncio.run(check())  # True

        container.delete()
