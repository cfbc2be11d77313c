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
import unittest

from azure.common import (
    AzureHttpError,
    AzureMissingResourceHttpError,
)

from cloudblob.blob import (
    AppendBlob,
    BlobBlock,
    BlobBlockState,
    BlockBlob,
    ContentSettings,
    PageBlob,
)
from tests.testcase import (
    StorageTestCase,
    error_response,
    response,
)

SNAPSHOT = '2017-07-14T21:48:37.1234567Z'


def _blob_headers(blob_type, length=11, **extra):
    headers = {
        'x-ms-blob-type': blob_type,
        'Content-Length': str(length),
        'Content-Type': 'text/plain',
        'x-ms-lease-status': 'unlocked',
        'x-ms-lease-state': 'available',
        'x-ms-server-encrypted': 'true',
    }
    headers.update(extra)
    return headers


class BlobHandleTest(StorageTestCase):

    def setUp(self):
        super(BlobHandleTest, self).setUp()
        self.service, self.session = self._create_offline_service()
        self.container = self.service.get_container_reference('mycontainer')

    #--References -------------------------------------------------------------
    def test_get_references_send_no_request(self):
        # Act
        block = self.container.get_block_blob_reference('block')
        page = self.container.get_page_blob_reference('page')
        append = self.container.get_append_blob_reference('append', snapshot=SNAPSHOT)

        # Assert
        self.assertEqual(self.session.requests, [])
        self.assertEqual(block.properties.blob_type, 'BlockBlob')
        self.assertEqual(page.properties.blob_type, 'PageBlob')
        self.assertEqual(append.snapshot, SNAPSHOT)
        self.assertEqual(block.url, 'https://storagename.blob.core.windows.net/mycontainer/block')
        self.assertEqual(append.url, 'https://storagename.blob.core.windows.net/mycontainer/append'
                                     '?snapshot=' + SNAPSHOT)

    def test_get_blob_reference_from_server(self):
        # Arrange
        self.session.queue(response(200, _blob_headers('PageBlob', 1024, **{
            'x-ms-blob-sequence-number': '3',
            'x-ms-meta-color': 'red',
        })))

        # Act
        blob = self.container.get_blob_reference_from_server('page')

        # Assert
        request = self.session.last_request
        self.assertEqual(request.method, 'HEAD')
        self.assertEqual(request.path, '/mycontainer/page')
        self.assertIsInstance(blob, PageBlob)
        self.assertIs(blob.container, self.container)
        self.assertEqual(blob.properties.content_length, 1024)
        self.assertEqual(blob.properties.page_blob_sequence_number, 3)
        self.assertEqual(blob.properties.content_settings.content_type, 'text/plain')
        self.assertTrue(blob.properties.server_encrypted)
        self.assertEqual(blob.metadata, {'color': 'red'})

    def test_get_blob_reference_from_server_each_type(self):
        # Arrange
        self.session.queue(response(200, _blob_headers('BlockBlob')),
                           response(200, _blob_headers('AppendBlob', 0, **{
                               'x-ms-blob-committed-block-count': '2'})))

        # Act
        block = self.container.get_blob_reference_from_server('block')
        append = self.container.get_blob_reference_from_server('append')

        # Assert
        self.assertIsInstance(block, BlockBlob)
        self.assertIsInstance(append, AppendBlob)
        self.assertEqual(append.properties.append_blob_committed_block_count, 2)

    def test_get_blob_reference_from_server_missing_blob(self):
        # Arrange
        self.session.queue(error_response(404, 'BlobNotFound'))

        # Act
        with self.assertRaises(AzureMissingResourceHttpError) as e:
            self.container.get_blob_reference_from_server('missing')

        # Assert
        self.assertEqual(e.exception.error_code, 'BlobNotFound')

    def test_get_blob_reference_from_server_unknown_type(self):
        # Arrange
        self.session.queue(response(200, _blob_headers('FancyBlob')))

        # Act
        with self.assertRaises(ValueError):
            self.container.get_blob_reference_from_server('fancy')

    def test_service_get_blob_reference_from_uri_with_snapshot(self):
        # Arrange
        self.session.queue(response(200, _blob_headers('BlockBlob')))
        uri = ('https://storagename.blob.core.windows.net/mycontainer/dir/my%20blob'
               '?snapshot=2017-07-14T21%3A48%3A37.1234567Z')

        # Act
        blob = self.service.get_blob_reference_from_server(uri)

        # Assert
        request = self.session.last_request
        self.assertEqual(request.path, '/mycontainer/dir/my%20blob')
        self.assertEqual(request.query, {'snapshot': SNAPSHOT})
        self.assertIsInstance(blob, BlockBlob)
        self.assertEqual(blob.container.name, 'mycontainer')
        self.assertEqual(blob.name, 'dir/my blob')
        self.assertEqual(blob.snapshot, SNAPSHOT)

    def test_service_get_blob_reference_from_uri_with_sas(self):
        # Arrange
        self.session.queue(response(200, _blob_headers('BlockBlob')),
                           response(200, _blob_headers('BlockBlob')))
        uri = ('https://storagename.blob.core.windows.net/mycontainer/blob1'
               '?sv=2017-07-29&sr=b&sp=r&sig=c2lnbmF0dXJl%3D')

        # Act
        blob = self.service.get_blob_reference_from_server(uri)
        blob.fetch_attributes()

        # Assert
        for request in self.session.requests:
            self.assertNotIn('Authorization', request.headers)
            self.assertEqual(request.query['sig'], 'c2lnbmF0dXJl=')
            self.assertEqual(request.query['sr'], 'b')
        self.assertEqual(blob.service.sas_token, 'sv=2017-07-29&sr=b&sp=r&sig=c2lnbmF0dXJl%3D')
        self.assertIsNot(blob.service, self.service)
        self.assertIsNone(self.service.sas_token)
        self.assertIs(blob._get_executor(), self.service._get_executor())

    def test_service_get_blob_reference_from_emulator_uri(self):
        # Arrange
        service, session = self._create_offline_service(response(200, _blob_headers('AppendBlob', 0)),
                                                        is_emulated=True)

        # Act
        blob = service.get_blob_reference_from_server('http://127.0.0.1:10000/devstoreaccount1/mycontainer/blob1')

        # Assert
        request = session.last_request
        self.assertEqual(request.uri.split('?')[0], 'http://127.0.0.1:10000/devstoreaccount1/mycontainer/blob1')
        self.assertTrue(request.headers['Authorization'].startswith('SharedKey devstoreaccount1:'))
        self.assertIsInstance(blob, AppendBlob)
        self.assertEqual(blob.container.name, 'mycontainer')
        self.assertEqual(blob.name, 'blob1')

    def test_service_get_blob_reference_from_uri_without_blob(self):
        with self.assertRaises(ValueError):
            self.service.get_blob_reference_from_server('https://storagename.blob.core.windows.net/mycontainer')
        self.assertEqual(self.session.requests, [])

    def test_service_get_blob_reference_from_uri_of_other_account(self):
        with self.assertRaises(ValueError):
            self.service.get_blob_reference_from_server('https://someotheraccount.blob.core.windows.net/c/b')
        with self.assertRaises(ValueError):
            self.service.get_blob_reference_from_server('https://www.mydomain.com/c/b')
        self.assertEqual(self.session.requests, [])

    def test_service_get_blob_reference_from_emulator_uri_of_other_account(self):
        # Arrange
        service, session = self._create_offline_service(is_emulated=True)

        # Act
        with self.assertRaises(ValueError):
            service.get_blob_reference_from_server('http://127.0.0.1:10000/otheraccount/mycontainer/blob1')
        with self.assertRaises(ValueError):
            service.get_blob_reference_from_server('http://127.0.0.1:10001/devstoreaccount1/mycontainer/blob1')

        # Assert
        self.assertEqual(session.requests, [])

    def test_service_get_blob_reference_from_custom_domain_uri(self):
        # Arrange
        service, session = self._create_offline_service(response(200, _blob_headers('PageBlob', 512)),
                                                        custom_domain='https://www.mydomain.com')

        # Act
        blob = service.get_blob_reference_from_server('https://WWW.mydomain.com/mycontainer/blob1')

        # Assert
        self.assertEqual(session.last_request.host, 'www.mydomain.com')
        self.assertIsInstance(blob, PageBlob)
        self.assertEqual(blob.name, 'blob1')

    #--Common blob operations -------------------------------------------------
    def test_fetch_attributes(self):
        # Arrange
        self.session.queue(response(200, _blob_headers('BlockBlob', **{'x-ms-meta-hello': 'world'})))
        blob = self.container.get_block_blob_reference('blob1')

        # Act
        blob.fetch_attributes()

        # Assert
        self.assertEqual(blob.properties.etag, '"0x8D4F2D4E5A3B1C0"')
        self.assertEqual(blob.properties.content_length, 11)
        self.assertEqual(blob.metadata, {'hello': 'world'})

    def test_fetch_attributes_blob_type_mismatch(self):
        # Arrange
        self.session.queue(response(200, _blob_headers('PageBlob', 512)))
        blob = self.container.get_block_blob_reference('blob1')

        # Act
        with self.assertRaises(ValueError):
            blob.fetch_attributes()

    def test_exists(self):
        # Arrange
        self.session.queue(response(200, _blob_headers('BlockBlob')), error_response(404, 'BlobNotFound'))
        blob = self.container.get_block_blob_reference('blob1')

        # Act
        exists = blob.exists()
        exists_after = blob.exists()

        # Assert
        self.assertTrue(exists)
        self.assertFalse(exists_after)

    def test_set_properties(self):
        # Arrange
        self.session.queue(response(200, {'ETag': '"0x2"'}))
        blob = self.container.get_block_blob_reference('blob1')
        blob.properties.content_settings = ContentSettings(content_type='application/json',
                                                           cache_control='no-cache')

        # Act
        blob.set_properties()

        # Assert
        request = self.session.last_request
        self.assertEqual(request.method, 'PUT')
        self.assertEqual(request.query, {'comp': 'properties'})
        self.assertEqual(request.headers['x-ms-blob-content-type'], 'application/json')
        self.assertEqual(request.headers['x-ms-blob-cache-control'], 'no-cache')
        self.assertEqual(blob.properties.etag, '"0x2"')

    def test_set_metadata(self):
        # Arrange
        self.session.queue(response(200))
        blob = self.container.get_block_blob_reference('blob1')
        blob.metadata = {'hello': 'world'}

        # Act
        blob.set_metadata()

        # Assert
        request = self.session.last_request
        self.assertEqual(request.query, {'comp': 'metadata'})
        self.assertEqual(request.headers['x-ms-meta-hello'], 'world')

    def test_create_snapshot_returns_same_type(self):
        # Arrange
        self.session.queue(response(201, {'x-ms-snapshot': SNAPSHOT, 'ETag': '"0x5"'}))
        blob = self.container.get_page_blob_reference('page')
        blob.properties.content_length = 1024
        blob.metadata = {'hello': 'world'}

        # Act
        snapshot = blob.create_snapshot()

        # Assert
        self.assertEqual(self.session.last_request.query, {'comp': 'snapshot'})
        self.assertIsInstance(snapshot, PageBlob)
        self.assertEqual(snapshot.name, 'page')
        self.assertEqual(snapshot.snapshot, SNAPSHOT)
        self.assertEqual(snapshot.properties.etag, '"0x5"')
        self.assertEqual(snapshot.properties.content_length, 1024)
        self.assertEqual(snapshot.metadata, {'hello': 'world'})
        self.assertIsNone(blob.snapshot)
        self.assertTrue(snapshot.url.endswith('/mycontainer/page?snapshot=' + SNAPSHOT))

    def test_snapshot_is_read_only(self):
        # Arrange
        blob = self.container.get_block_blob_reference('blob1', snapshot=SNAPSHOT)

        # Act
        with self.assertRaises(ValueError):
            blob.set_metadata()
        with self.assertRaises(ValueError):
            blob.upload_from_bytes(b'data')
        with self.assertRaises(ValueError):
            blob.create_snapshot()

        # Assert
        self.assertEqual(self.session.requests, [])

    def test_delete_snapshot(self):
        # Arrange
        self.session.queue(response(202))
        blob = self.container.get_block_blob_reference('blob1', snapshot=SNAPSHOT)

        # Act
        blob.delete()

        # Assert
        request = self.session.last_request
        self.assertEqual(request.method, 'DELETE')
        self.assertEqual(request.query, {'snapshot': SNAPSHOT})

    def test_delete_with_snapshots(self):
        # Arrange
        self.session.queue(response(202))
        blob = self.container.get_block_blob_reference('blob1')

        # Act
        blob.delete(delete_snapshots='include')

        # Assert
        self.assertEqual(self.session.last_request.headers['x-ms-delete-snapshots'], 'include')

    def test_delete_if_exists(self):
        # Arrange
        self.session.queue(response(202), error_response(404, 'BlobNotFound'), error_response(409, 'LeaseIdMissing'))
        blob = self.container.get_block_blob_reference('blob1')

        # Act
        deleted = blob.delete_if_exists()
        deleted_again = blob.delete_if_exists()

        # Assert
        self.assertTrue(deleted)
        self.assertFalse(deleted_again)
        with self.assertRaises(AzureHttpError):
            blob.delete_if_exists()

    def test_get_shared_access_signature(self):
        # Arrange
        blob = self.container.get_block_blob_reference('blob1')

        # Act
        token = blob.get_shared_access_signature('r', '2030-01-01T00:00:00Z', content_type='text/plain')

        # Assert
        parts = dict(part.split('=', 1) for part in token.split('&'))
        self.assertEqual(parts['sr'], 'b')
        self.assertEqual(parts['rsct'], 'text%2Fplain')
        self.assertTrue(blob.make_url(token).startswith(blob.url + '?'))

    #--Block blobs ------------------------------------------------------------
    def test_upload_from_bytes(self):
        # Arrange
        self.session.queue(response(201, {'ETag': '"0x6"'}))
        blob = self.container.get_block_blob_reference('blob1')
        blob.properties.content_settings.content_type = 'text/plain'
        blob.metadata = {'hello': 'world'}

        # Act
        blob.upload_from_bytes(b'hello world')

        # Assert
        request = self.session.last_request
        self.assertEqual(request.method, 'PUT')
        self.assertEqual(request.path, '/mycontainer/blob1')
        self.assertEqual(request.query, {})
        self.assertEqual(request.headers['x-ms-blob-type'], 'BlockBlob')
        self.assertEqual(request.headers['x-ms-blob-content-type'], 'text/plain')
        self.assertEqual(request.headers['x-ms-meta-hello'], 'world')
        self.assertEqual(request.headers['Content-Length'], '11')
        self.assertEqual(request.body, b'hello world')
        self.assertEqual(blob.properties.etag, '"0x6"')
        self.assertEqual(blob.properties.content_length, 11)

    def test_upload_text_is_rejected(self):
        blob = self.container.get_block_blob_reference('blob1')
        with self.assertRaises(TypeError):
            blob.upload_from_bytes(u'hello world')

    def test_put_block_and_block_list(self):
        # Arrange
        self.session.queue(response(201), response(201, {'ETag': '"0x7"'}))
        blob = self.container.get_block_blob_reference('blob1')

        # Act
        blob.put_block('block1', b'hello')
        blob.put_block_list(['block1', BlobBlock('block0', BlobBlockState.Committed)])

        # Assert
        put_block, put_list = self.session.requests
        self.assertEqual(put_block.query, {'comp': 'block', 'blockid': 'YmxvY2sx'})
        self.assertEqual(put_block.body, b'hello')
        self.assertEqual(put_list.query, {'comp': 'blocklist'})
        self.assertIn(b'<Latest>YmxvY2sx</Latest>', put_list.body)
        self.assertIn(b'<Committed>YmxvY2sw</Committed>', put_list.body)
        self.assertEqual(blob.properties.etag, '"0x7"')

    def test_put_empty_block_list(self):
        # Arrange
        self.session.queue(response(201))
        blob = self.container.get_block_blob_reference('blob1')

        # Act
        blob.put_block_list([])

        # Assert
        self.assertIn(b'<BlockList />', self.session.last_request.body)

    #--Page and append blobs --------------------------------------------------
    def test_create_page_blob(self):
        # Arrange
        self.session.queue(response(201))
        blob = self.container.get_page_blob_reference('page')

        # Act
        blob.create(1024, sequence_number=5)

        # Assert
        request = self.session.last_request
        self.assertEqual(request.headers['x-ms-blob-type'], 'PageBlob')
        self.assertEqual(request.headers['x-ms-blob-content-length'], '1024')
        self.assertEqual(request.headers['x-ms-blob-sequence-number'], '5')
        self.assertEqual(request.headers['Content-Length'], '0')
        self.assertEqual(blob.properties.content_length, 1024)
        self.assertEqual(blob.properties.page_blob_sequence_number, 5)

    def test_create_page_blob_unaligned_size(self):
        blob = self.container.get_page_blob_reference('page')
        with self.assertRaises(ValueError):
            blob.create(1000)
        self.assertEqual(self.session.requests, [])

    def test_create_and_append_to_append_blob(self):
        # Arrange
        self.session.queue(response(201), response(201, {
            'x-ms-blob-append-offset': '0',
            'x-ms-blob-committed-block-count': '1',
        }))
        blob = self.container.get_append_blob_reference('append')

        # Act
        blob.create()
        offset = blob.append_block(b'hello')

        # Assert
        create, append = self.session.requests
        self.assertEqual(create.headers['x-ms-blob-type'], 'AppendBlob')
        self.assertEqual(append.query, {'comp': 'appendblock'})
        self.assertEqual(append.body, b'hello')
        self.assertEqual(offset, 0)
        self.assertEqual(blob.properties.append_blob_committed_block_count, 1)


#------------------------------------------------------------------------------
if __name__ == '__main__':
    unittest.main()
