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
import base64
import hashlib
import hmac
import unittest

from cloudblob._auth import (
    _StorageNoAuthentication,
    _StorageSASAuthentication,
    _StorageSharedKeyAuthentication,
)
from cloudblob._constants import (
    DEV_ACCOUNT_KEY,
    DEV_ACCOUNT_NAME,
    X_MS_VERSION,
)
from cloudblob._http import HTTPRequest
from cloudblob.blob import BlobService
from cloudblob.retry import LinearRetry
from tests.testcase import (
    StorageTestCase,
    error_response,
    response,
)

SERVICES = {
    BlobService: 'blob',
}

_CONNECTION_ENDPOINTS = {'blob': 'BlobEndpoint'}


def _expected_signature(key, string_to_sign):
    digest = hmac.new(base64.b64decode(key), string_to_sign.encode('utf-8'), hashlib.sha256).digest()
    return base64.b64encode(digest).decode('utf-8')


class StorageClientTest(StorageTestCase):

    def setUp(self):
        super(StorageClientTest, self).setUp()
        self.account_name = self.settings.STORAGE_ACCOUNT_NAME
        self.account_key = self.settings.STORAGE_ACCOUNT_KEY
        self.sas_token = 'sv=2017-07-29&sr=c&sp=r&sig=c2lnbmF0dXJl'

    # --Helpers-----------------------------------------------------------------
    def validate_standard_account_endpoints(self, service, service_type, protocol='https'):
        self.assertIsNotNone(service)
        self.assertEqual(service.account_name, self.account_name)
        self.assertEqual(service.account_key, self.account_key)
        self.assertEqual(service.primary_endpoint,
                         '{}.{}.core.windows.net'.format(self.account_name, service_type))
        self.assertEqual(service.protocol, protocol)

    # --Direct Parameters Test Cases --------------------------------------------
    def test_create_service_with_key(self):
        for service_type in SERVICES.items():
            # Act
            service = service_type[0](self.account_name, self.account_key)

            # Assert
            self.validate_standard_account_endpoints(service, service_type[1])
            self.assertIsInstance(service.authentication, _StorageSharedKeyAuthentication)

    def test_create_service_with_key_strips_whitespace(self):
        # Act
        service = BlobService(self.account_name, ' ' + self.account_key + '\n')

        # Assert
        self.assertEqual(service.account_key, self.account_key)

    def test_create_service_with_sas(self):
        for service_type in SERVICES:
            # Act
            service = service_type(self.account_name, sas_token=self.sas_token)

            # Assert
            self.assertIsNone(service.account_key)
            self.assertEqual(service.sas_token, self.sas_token)
            self.assertIsInstance(service.authentication, _StorageSASAuthentication)

    def test_create_service_prefers_key_over_sas(self):
        # Act
        service = BlobService(self.account_name, self.account_key, sas_token=self.sas_token)

        # Assert
        self.assertIsInstance(service.authentication, _StorageSharedKeyAuthentication)

    def test_create_service_anonymous(self):
        # Act
        service = BlobService(self.account_name)

        # Assert
        self.assertIsNone(service.account_key)
        self.assertIsNone(service.sas_token)
        self.assertIsInstance(service.authentication, _StorageNoAuthentication)

    def test_create_service_with_protocol(self):
        # Act
        service = BlobService(self.account_name, self.account_key, protocol='http')

        # Assert
        self.validate_standard_account_endpoints(service, 'blob', protocol='http')

    def test_create_service_with_endpoint_suffix(self):
        # Act
        service = BlobService(self.account_name, self.account_key, endpoint_suffix='core.chinacloudapi.cn')

        # Assert
        self.assertEqual(service.primary_endpoint, self.account_name + '.blob.core.chinacloudapi.cn')

    def test_create_service_emulated(self):
        # Act
        service = BlobService(is_emulated=True)

        # Assert
        self.assertTrue(service.is_emulated)
        self.assertEqual(service.account_name, DEV_ACCOUNT_NAME)
        self.assertEqual(service.account_key, DEV_ACCOUNT_KEY)
        self.assertEqual(service.primary_endpoint, '127.0.0.1:10000/devstoreaccount1')
        self.assertEqual(service.protocol, 'http')

    def test_create_service_with_custom_domain(self):
        # Act
        service = BlobService(custom_domain='https://www.mydomain.com/')

        # Assert
        self.assertEqual(service.primary_endpoint, 'www.mydomain.com')
        self.assertEqual(service.protocol, 'https')
        self.assertIsInstance(service.authentication, _StorageNoAuthentication)
        self.assertEqual(service.make_container_url('mycontainer'), 'https://www.mydomain.com/mycontainer')

    def test_create_service_missing_arguments(self):
        for service_type in SERVICES:
            # Act
            with self.assertRaises(ValueError):
                service_type()

    def test_create_service_with_socket_timeout(self):
        # Act
        default_service = BlobService(self.account_name, self.account_key)
        service = BlobService(self.account_name, self.account_key, socket_timeout=22)

        # Assert
        self.assertEqual(default_service.socket_timeout, 20)
        self.assertEqual(service.socket_timeout, 22)

    # --Connection String Test Cases --------------------------------------------
    def test_create_service_with_connection_string_key(self):
        # Arrange
        conn_string = 'AccountName={};AccountKey={};'.format(self.account_name, self.account_key)

        for service_type in SERVICES.items():
            # Act
            service = service_type[0](connection_string=conn_string)

            # Assert
            self.validate_standard_account_endpoints(service, service_type[1])

    def test_create_service_with_connection_string_sas(self):
        # Arrange
        conn_string = 'AccountName={};SharedAccessSignature={};'.format(self.account_name, self.sas_token)

        # Act
        service = BlobService(connection_string=conn_string)

        # Assert
        self.assertEqual(service.sas_token, self.sas_token)
        self.assertIsNone(service.account_key)
        self.assertIsInstance(service.authentication, _StorageSASAuthentication)

    def test_create_service_with_connection_string_protocol_and_suffix(self):
        # Arrange
        conn_string = 'DefaultEndpointsProtocol=http;AccountName={};AccountKey={};' \
                      'EndpointSuffix=core.chinacloudapi.cn'.format(self.account_name, self.account_key)

        # Act
        service = BlobService(connection_string=conn_string)

        # Assert
        self.assertEqual(service.primary_endpoint, self.account_name + '.blob.core.chinacloudapi.cn')
        self.assertEqual(service.protocol, 'http')

    def test_create_service_with_connection_string_emulated(self):
        # Act
        service = BlobService(connection_string='UseDevelopmentStorage=true;')

        # Assert
        self.assertTrue(service.is_emulated)
        self.assertEqual(service.primary_endpoint, '127.0.0.1:10000/devstoreaccount1')

    def test_create_service_with_connection_string_endpoint(self):
        for service_type in SERVICES.items():
            # Arrange
            conn_string = 'AccountName={};AccountKey={};{}=www.mydomain.com;'.format(
                self.account_name, self.account_key, _CONNECTION_ENDPOINTS[service_type[1]])

            # Act
            service = service_type[0](connection_string=conn_string)

            # Assert
            self.assertEqual(service.account_name, self.account_name)
            self.assertEqual(service.primary_endpoint, 'www.mydomain.com')
            self.assertEqual(service.protocol, 'https')

    def test_create_service_with_connection_string_endpoint_protocol(self):
        # Arrange
        conn_string = 'BlobEndpoint=http://www.mydomain.com/path/;SharedAccessSignature={}'.format(self.sas_token)

        # Act
        service = BlobService(connection_string=conn_string)

        # Assert
        self.assertEqual(service.primary_endpoint, 'www.mydomain.com/path')
        self.assertEqual(service.protocol, 'http')
        self.assertEqual(service.make_blob_url('c', 'b'), 'http://www.mydomain.com/path/c/b')

    def test_create_service_with_connection_string_overrides_arguments(self):
        # Arrange
        conn_string = 'AccountName={};AccountKey={};'.format(self.account_name, self.account_key)

        # Act
        service = BlobService('other', 'b3RoZXI=', connection_string=conn_string)

        # Assert
        self.validate_standard_account_endpoints(service, 'blob')

    def test_create_service_with_invalid_connection_string(self):
        for conn_string in ('garbage', 'AccountKey=a2V5;Foo=bar', ';;'):
            with self.assertRaises(ValueError):
                BlobService(connection_string=conn_string)

    # --Urls--------------------------------------------------------------------
    def test_make_blob_url(self):
        # Arrange
        service = BlobService(self.account_name, self.account_key)

        # Act
        plain = service.make_blob_url('mycontainer', 'dir/my blob')
        with_snapshot = service.make_blob_url('mycontainer', 'blob', snapshot='2017-07-14T21:48:37.1234567Z')
        with_sas = service.make_blob_url('mycontainer', 'blob', sas_token='sv=1&sig=abc')
        with_both = service.make_blob_url('mycontainer', 'blob', protocol='http', sas_token='sv=1&sig=abc',
                                          snapshot='snap')

        # Assert
        self.assertEqual(plain, 'https://storagename.blob.core.windows.net/mycontainer/dir/my%20blob')
        self.assertEqual(with_snapshot, 'https://storagename.blob.core.windows.net/mycontainer/blob'
                                        '?snapshot=2017-07-14T21:48:37.1234567Z')
        self.assertEqual(with_sas, 'https://storagename.blob.core.windows.net/mycontainer/blob?sv=1&sig=abc')
        self.assertEqual(with_both, 'http://storagename.blob.core.windows.net/mycontainer/blob?snapshot=snap&sv=1&sig=abc')

    def test_make_emulated_urls(self):
        # Arrange
        service = BlobService(is_emulated=True)

        # Act
        url = service.make_container_url('mycontainer')

        # Assert
        self.assertEqual(url, 'http://127.0.0.1:10000/devstoreaccount1/mycontainer')

    # --Authentication------------------------------------------------------------
    def test_shared_key_signature(self):
        # Arrange
        request = HTTPRequest()
        request.method = 'GET'
        request.host = 'storagename.blob.core.windows.net'
        request.path = '/mycontainer'
        request.query = [('restype', 'container'), ('comp', 'list')]
        request.headers = [
            ('x-ms-version', X_MS_VERSION),
            ('x-ms-date', 'Fri, 14 Jul 2017 21:48:37 GMT'),
        ]
        string_to_sign = 'GET\n' + '\n' * 11 + \
            'x-ms-date:Fri, 14 Jul 2017 21:48:37 GMT\n' + \
            'x-ms-version:' + X_MS_VERSION + '\n' + \
            '/storagename/mycontainer' + \
            '\ncomp:list\nrestype:container'

        # Act
        _StorageSharedKeyAuthentication(self.account_name, self.account_key).sign_request(request)

        # Assert
        self.assertEqual(dict(request.headers)['Authorization'],
                         'SharedKey storagename:' + _expected_signature(self.account_key, string_to_sign))

    def test_shared_key_signature_signs_content_headers(self):
        # Arrange
        request = HTTPRequest()
        request.method = 'PUT'
        request.host = 'storagename.blob.core.windows.net'
        request.path = '/mycontainer/blob'
        request.headers = [
            ('Content-Length', '5'),
            ('Content-Type', 'text/plain'),
            ('If-Match', '"0x1"'),
            ('x-ms-blob-type', 'BlockBlob'),
        ]
        string_to_sign = 'PUT\n' + '\n\n5\n\ntext/plain\n\n\n"0x1"\n\n\n\n' + \
            'x-ms-blob-type:BlockBlob\n' + \
            '/storagename/mycontainer/blob'

        # Act
        _StorageSharedKeyAuthentication(self.account_name, self.account_key).sign_request(request)

        # Assert
        self.assertEqual(dict(request.headers)['Authorization'],
                         'SharedKey storagename:' + _expected_signature(self.account_key, string_to_sign))

    def test_shared_key_signature_on_emulator(self):
        # Arrange
        request = HTTPRequest()
        request.method = 'HEAD'
        request.host = '127.0.0.1:10000/devstoreaccount1'
        request.path = '/mycontainer/blob'
        string_to_sign = 'HEAD\n' + '\n' * 11 + '/devstoreaccount1/devstoreaccount1/mycontainer/blob'

        # Act
        _StorageSharedKeyAuthentication(DEV_ACCOUNT_NAME, DEV_ACCOUNT_KEY).sign_request(request)

        # Assert
        self.assertEqual(dict(request.headers)['Authorization'],
                         'SharedKey devstoreaccount1:' + _expected_signature(DEV_ACCOUNT_KEY, string_to_sign))

    def test_sas_authentication_appends_token(self):
        # Arrange
        auth = _StorageSASAuthentication('?' + self.sas_token)
        request = HTTPRequest()
        request.path = '/mycontainer/blob'
        snapshot_request = HTTPRequest()
        snapshot_request.path = '/mycontainer/blob?snapshot=snap'

        # Act
        auth.sign_request(request)
        auth.sign_request(snapshot_request)

        # Assert
        self.assertEqual(request.path, '/mycontainer/blob?' + self.sas_token)
        self.assertEqual(snapshot_request.path, '/mycontainer/blob?snapshot=snap&' + self.sas_token)

    def test_sas_authentication_blob_name_containing_sig(self):
        # Arrange
        auth = _StorageSASAuthentication(self.sas_token)
        request = HTTPRequest()
        request.path = '/mycontainer/dir/mysig=2'

        # Act
        auth.sign_request(request)

        # Assert
        self.assertEqual(request.path, '/mycontainer/dir/mysig=2?' + self.sas_token)

    def test_request_with_sas_token_for_blob_named_sig(self):
        # Arrange
        service, session = self._create_offline_service(sas_token=self.sas_token)
        session.queue(response(200, {'x-ms-blob-type': 'BlockBlob', 'Content-Length': '0'}))
        blob = service.get_container_reference('mycontainer').get_block_blob_reference('sig=1')

        # Act
        blob.fetch_attributes()

        # Assert
        sent = session.last_request
        self.assertEqual(sent.path, '/mycontainer/sig=1')
        self.assertEqual(sent.query['sv'], '2017-07-29')
        self.assertEqual(sent.query['sr'], 'c')
        self.assertEqual(sent.query['sig'], 'c2lnbmF0dXJl')

    def test_request_with_sas_token_signed_once_per_attempt(self):
        # Arrange
        service, session = self._create_offline_service(
            sas_token=self.sas_token, retry=LinearRetry(backoff=0, random_jitter_range=0).retry)
        session.queue(error_response(500, 'InternalError'), response(200))

        # Act
        service.get_container_properties('mycontainer')

        # Assert
        self.assertEqual(len(session.requests), 2)
        for sent in session.requests:
            self.assertEqual(sent.uri.count('sig='), 1)
            self.assertEqual(sent.query['sig'], 'c2lnbmF0dXJl')

    def test_request_with_sas_token(self):
        # Arrange
        service, session = self._create_offline_service(sas_token=self.sas_token)
        session.queue(response(200))

        # Act
        service.get_container_properties('mycontainer')

        # Assert
        sent = session.last_request
        self.assertNotIn('Authorization', sent.headers)
        self.assertEqual(sent.query['sig'], 'c2lnbmF0dXJl')
        self.assertEqual(sent.query['restype'], 'container')

    def test_request_common_headers(self):
        # Arrange
        service, session = self._create_offline_service()
        session.queue(response(200))

        # Act
        service.get_container_properties('mycontainer')

        # Assert
        headers = session.last_request.headers
        self.assertEqual(headers['x-ms-version'], X_MS_VERSION)
        self.assertTrue(headers['User-Agent'].startswith('cloudblob/'))
        self.assertIn('x-ms-date', headers)
        self.assertIn('x-ms-client-request-id', headers)
        self.assertNotIn('Content-Length', headers)

    def test_request_callback_adds_header(self):
        # Arrange
        service, session = self._create_offline_service()
        session.queue(response(200))

        def callback(request):
            request.headers.append(('x-ms-meta-added', 'yes'))

        service.request_callback = callback

        # Act
        service.get_container_properties('mycontainer')

        # Assert
        self.assertEqual(session.last_request.headers['x-ms-meta-added'], 'yes')

    def test_context_manager_closes_executor(self):
        # Arrange
        service, session = self._create_offline_service()
        session.queue(response(200))

        # Act
        with service:
            service.begin_exists('mycontainer').result(timeout=10)

        # Assert
        self.assertIsNone(service._executor)


# ------------------------------------------------------------------------------
if __name__ == '__main__':
    unittest.main()
