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
import unittest

import requests
from azure.common import (
    AzureHttpError,
    AzureException,
    AzureMissingResourceHttpError,
)

from cloudblob.models import RetryContext
from cloudblob._http import HTTPResponse
from cloudblob.retry import (
    LinearRetry,
    ExponentialRetry,
    no_retry,
)
from tests.testcase import (
    StorageTestCase,
    error_response,
    response,
)


# --Helper Classes---------------------------------------------------------------
class ResponseCallback(object):
    def __init__(self, status=None, new_status=None):
        self.status = status
        self.new_status = new_status
        self.first = True

    def override_first_status(self, response):
        if self.first and response.status == self.status:
            response.status = self.new_status
            self.first = False

    def override_status(self, response):
        if response.status == self.status:
            response.status = self.new_status


def _context(status=None, count=0):
    context = RetryContext()
    context.count = count
    if status is not None:
        context.response = HTTPResponse(status, 'message', {}, b'')
    return context


def _immediate_exponential(max_attempts=3):
    return ExponentialRetry(initial_backoff=0, increment_power=0,
                            max_attempts=max_attempts, random_jitter_range=0).retry


# --Test Class -----------------------------------------------------------------
class StorageRetryTest(StorageTestCase):

    # --Test Cases --------------------------------------------
    def test_retry_on_server_error(self):
        # Arrange
        service, session = self._create_offline_service(retry=_immediate_exponential())
        session.queue(error_response(500, 'InternalError'), response(201))

        # Act
        created = service.create_container('mycontainer')

        # Assert
        self.assertTrue(created)
        self.assertEqual(len(session.requests), 2)

    def test_retry_on_timeout(self):
        # Arrange
        service, session = self._create_offline_service(retry=_immediate_exponential())
        session.queue(response(201), response(201))

        # Force the create call to 'timeout' with a 408
        service.response_callback = ResponseCallback(status=201, new_status=408).override_first_status

        # Act
        created = service.create_container('mycontainer')

        # Assert
        self.assertTrue(created)
        self.assertEqual(len(session.requests), 2)

    def test_retry_on_socket_error(self):
        # Arrange
        retry = LinearRetry(backoff=0, random_jitter_range=0).retry
        service, session = self._create_offline_service(retry=retry)
        session.queue(requests.ConnectionError('connection reset'), response(201))

        # Act
        created = service.create_container('mycontainer')

        # Assert
        self.assertTrue(created)
        self.assertEqual(len(session.requests), 2)

    def test_no_retry_on_client_error(self):
        # Arrange
        service, session = self._create_offline_service(retry=_immediate_exponential())
        session.queue(error_response(404, 'ContainerNotFound'))

        # Act
        with self.assertRaises(AzureMissingResourceHttpError):
            service.get_container_properties('mycontainer')

        # Assert
        self.assertEqual(len(session.requests), 1)

    def test_no_retry_on_not_implemented(self):
        # Arrange
        service, session = self._create_offline_service(retry=_immediate_exponential())
        session.queue(error_response(501, 'NotImplemented'))

        # Act
        with self.assertRaises(AzureHttpError) as e:
            service.get_container_properties('mycontainer')

        # Assert
        self.assertEqual(e.exception.status_code, 501)
        self.assertEqual(len(session.requests), 1)

    def test_retry_until_max_attempts(self):
        # Arrange
        service, session = self._create_offline_service(retry=_immediate_exponential(max_attempts=2))
        session.queue(*[error_response(503, 'ServerBusy') for _ in range(3)])

        # Act
        with self.assertRaises(AzureHttpError) as e:
            service.create_container('mycontainer')

        # Assert
        self.assertEqual(e.exception.status_code, 503)
        self.assertEqual(e.exception.error_code, 'ServerBusy')
        self.assertEqual(len(session.requests), 3)

    def test_retried_request_is_signed_once(self):
        # Arrange
        service, session = self._create_offline_service(retry=_immediate_exponential())
        session.queue(error_response(500, 'InternalError'), error_response(500, 'InternalError'), response(201))

        # Act
        service.create_container('mycontainer', metadata={'hello': 'world'})

        # Assert
        self.assertEqual(len(session.requests), 3)
        for sent in session.requests:
            self.assertTrue(sent.headers['Authorization'].startswith('SharedKey storagename:'))
            self.assertNotIn(',', sent.headers['Authorization'])
            self.assertEqual(sent.headers['x-ms-meta-hello'], 'world')
        request_ids = set(sent.headers['x-ms-client-request-id'] for sent in session.requests)
        self.assertEqual(len(request_ids), 1)

    def test_no_retry(self):
        # Arrange
        service, session = self._create_offline_service(retry=no_retry)
        session.queue(error_response(500, 'InternalError'))

        # Act
        with self.assertRaises(AzureHttpError) as e:
            service.create_container('mycontainer')

        # Assert
        self.assertEqual(e.exception.status_code, 500)
        self.assertEqual(len(session.requests), 1)

    def test_transport_error_is_wrapped(self):
        # Arrange
        service, session = self._create_offline_service(retry=no_retry)
        error = requests.ConnectionError('connection refused')
        session.queue(error)

        # Act
        with self.assertRaises(AzureException) as e:
            service.create_container('mycontainer')

        # Assert
        self.assertNotIsInstance(e.exception, AzureHttpError)
        self.assertIs(e.exception.__cause__, error)
        self.assertIn('connection refused', str(e.exception))

    def test_request_logging_omits_authorization(self):
        # Arrange
        service, session = self._create_offline_service()
        session.queue(response(201))

        # Act
        with self.assertLogs('cloudblob.storageclient', 'INFO') as logs:
            service.create_container('mycontainer')

        # Assert
        output = '\n'.join(logs.output)
        self.assertIn('Outgoing request: Method=PUT', output)
        self.assertIn('Status=201', output)
        self.assertNotIn('SharedKey', output)

    # --Policy decisions --------------------------------------
    def test_exponential_retry_backoff(self):
        # Arrange
        retry = ExponentialRetry(random_jitter_range=0)
        context = _context(500)

        # Act
        backoffs = [retry.retry(context) for _ in range(4)]

        # Assert
        self.assertEqual(backoffs, [15, 18, 24, None])
        self.assertEqual(context.count, 3)

    def test_exponential_retry_jitter_range(self):
        # Arrange
        retry = ExponentialRetry(initial_backoff=10, random_jitter_range=3)

        # Act
        backoffs = [retry.retry(_context(500)) for _ in range(20)]

        # Assert
        for backoff in backoffs:
            self.assertGreaterEqual(backoff, 7)
            self.assertLessEqual(backoff, 13)

    def test_linear_retry_backoff(self):
        # Arrange
        retry = LinearRetry(backoff=5, max_attempts=2, random_jitter_range=0)
        context = _context(503)

        # Act
        backoffs = [retry.retry(context) for _ in range(3)]

        # Assert
        self.assertEqual(backoffs, [5, 5, None])

    def test_linear_retry_jitter_not_negative(self):
        # Arrange
        retry = LinearRetry(backoff=1, random_jitter_range=3)

        # Act
        backoffs = [retry.retry(_context(500)) for _ in range(20)]

        # Assert
        for backoff in backoffs:
            self.assertGreaterEqual(backoff, 0)
            self.assertLessEqual(backoff, 4)

    def test_retry_decision_by_status(self):
        retry = ExponentialRetry(random_jitter_range=0)

        self.assertIsNotNone(retry.retry(_context()))
        self.assertIsNotNone(retry.retry(_context(408)))
        self.assertIsNotNone(retry.retry(_context(500)))
        self.assertIsNotNone(retry.retry(_context(503)))
        self.assertIsNone(retry.retry(_context(200)))
        self.assertIsNone(retry.retry(_context(304)))
        self.assertIsNone(retry.retry(_context(404)))
        self.assertIsNone(retry.retry(_context(409)))
        self.assertIsNone(retry.retry(_context(412)))
        self.assertIsNone(retry.retry(_context(501)))
        self.assertIsNone(retry.retry(_context(505)))

    def test_no_retry_policy(self):
        self.assertIsNone(no_retry(_context(500)))
        self.assertIsNone(no_retry(_context()))


# ------------------------------------------------------------------------------
if __name__ == '__main__':
    unittest.main()
