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
import logging
import threading
from abc import ABCMeta
from concurrent.futures import ThreadPoolExecutor
from time import sleep

import requests
from azure.common import AzureException

from ._constants import (
    DEFAULT_SOCKET_TIMEOUT,
    DEFAULT_MAX_CONNECTIONS,
)
from ._error import (
    _http_error_handler,
    _wrap_exception,
)
from ._http import HTTPError
from ._http.httpclient import _HTTPClient
from ._serialization import (
    _update_request,
    _add_date_header,
)
from .models import RetryContext
from .retry import ExponentialRetry

logger = logging.getLogger(__name__)


class StorageClient(metaclass=ABCMeta):

    '''
    This is the base class for service objects. Service objects are used to do
    all requests to Storage. This class cannot be instantiated directly.

    :ivar str account_name:
        The storage account name. This is used to authenticate requests
        signed with an account key and to construct the storage endpoint. It
        is required unless a connection string is given, or if a custom
        domain is used with anonymous authentication.
    :ivar str account_key:
        The storage account key. This is used for shared key authentication.
        If neither account key or sas token is specified, anonymous access
        will be used.
    :ivar str sas_token:
        A shared access signature token to use to authenticate requests
        instead of the account key. If account key and sas token are both
        specified, account key will be used to sign. If neither are
        specified, anonymous access will be used.
    :ivar str primary_endpoint:
        The endpoint to send storage requests to.
    :ivar function(context) retry:
        A function which determines whether to retry. Takes as a parameter a
        :class:`~cloudblob.models.RetryContext` object. Returns the number
        of seconds to wait before retrying the request, or None to indicate not
        to retry.
    :ivar function(request) request_callback:
        A function called immediately before each request is sent. This function
        takes as a parameter the request object and returns nothing. It may be
        used to added custom headers or log request data.
    :ivar function(response) response_callback:
        A function called immediately after each response is received. This
        function takes as a parameter the response object and returns nothing.
        It may be used to log response data.
    :ivar int max_connections:
        The number of worker threads used by the begin_* and *_async forms
        of the service operations.
    '''

    def __init__(self, connection_params, request_session=None,
                 socket_timeout=None, max_connections=DEFAULT_MAX_CONNECTIONS):
        '''
        :param obj connection_params: The parameters to use to construct the client.
        :param requests.Session request_session:
            The session object to use for http requests.
        :param int socket_timeout:
            The socket timeout, in seconds, for each http request.
        :param int max_connections:
            The size of the thread pool backing the asynchronous operations.
        '''
        self.account_name = connection_params.account_name
        self.account_key = connection_params.account_key
        self.sas_token = connection_params.sas_token
        self.is_emulated = connection_params.is_emulated

        self.primary_endpoint = connection_params.primary_endpoint

        self._httpclient = _HTTPClient(
            protocol=connection_params.protocol,
            session=request_session or requests.Session(),
            timeout=socket_timeout or DEFAULT_SOCKET_TIMEOUT,
        )

        self.retry = ExponentialRetry().retry
        self.request_callback = None
        self.response_callback = None

        self.max_connections = max_connections
        self._executor = None
        self._executor_lock = threading.Lock()

    @property
    def socket_timeout(self):
        return self._httpclient.timeout

    @socket_timeout.setter
    def socket_timeout(self, value):
        self._httpclient.timeout = value

    @property
    def protocol(self):
        return self._httpclient.protocol

    @protocol.setter
    def protocol(self, value):
        self._httpclient.protocol = value

    @property
    def request_session(self):
        return self._httpclient.session

    @request_session.setter
    def request_session(self, value):
        self._httpclient.session = value

    def set_proxy(self, host, port, user=None, password=None):
        '''
        Sets the proxy server host and port for the HTTP CONNECT Tunnelling.

        :param str host: Address of the proxy. Ex: '192.168.0.100'
        :param int port: Port of the proxy. Ex: 6000
        :param str user: User for proxy authorization.
        :param str password: Password for proxy authorization.
        '''
        self._httpclient.set_proxy(host, port, user, password)

    def _get_host(self):
        return self.primary_endpoint

    def _get_executor(self):
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=self.max_connections)
            return self._executor

    def close(self):
        '''
        Waits for pending begin_* and *_async operations and releases the
        worker threads. The service can still be used afterwards; a new pool
        is created on demand.
        '''
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def _perform_request_worker(self, request):
        if self.request_callback:
            self.request_callback(request)

        # Add date and auth after the callback so date doesn't get too old and
        # authentication is still correct if signed headers are added in the request
        # callback
        _add_date_header(request)
        self.authentication.sign_request(request)

        if logger.isEnabledFor(logging.INFO):
            logger.info('Outgoing request: Method=%s, Path=%s, Query=%s, Headers=%s.',
                        request.method,
                        request.path.split('?')[0],
                        dict(request.query),
                        dict((name, value) for name, value in request.headers if name != 'Authorization'))

        return self._httpclient.perform_request(request)

    def _perform_request(self, request, parser=None, parser_args=None):
        '''
        Sends the request and return response. Failed attempts are handed to
        the retry policy; once it declines, HTTP errors are raised as
        AzureHttpError and transport errors as AzureException.
        '''
        _update_request(request)
        client_request_id = dict(request.headers).get('x-ms-client-request-id')

        retry_context = RetryContext()
        while True:
            # Each attempt is signed from a clean copy of the request
            attempt = copy.deepcopy(request)
            retry_context.request = attempt
            retry_context.response = None
            retry_context.exception = None

            try:
                response = self._perform_request_worker(attempt)
            except Exception as ex:
                logger.warning('%s Transport error on %s %s: %s',
                               client_request_id, request.method, request.path, ex)
                retry_context.exception = ex
                if not self._should_retry(retry_context):
                    raise _wrap_exception(ex, AzureException) from ex
                continue

            if self.response_callback:
                self.response_callback(response)

            logger.info('%s Receiving Response: Status=%s, Message=%s.',
                        client_request_id, response.status, response.message)

            if response.status >= 300:
                retry_context.response = response
                if self._should_retry(retry_context):
                    continue

                logger.error('%s Request failed with status %s: %s',
                             client_request_id, response.status, response.message)
                # Parse and wrap HTTP errors in AzureHttpError which inherits from AzureException
                _http_error_handler(HTTPError(response.status, response.message, response.headers, response.body))

            if parser is None:
                return response

            args = [response]
            if parser_args is not None:
                args += parser_args
            return parser(*args)

    def _should_retry(self, retry_context):
        backoff = self.retry(retry_context)
        if backoff is None:
            return False

        logger.info('Retry policy is allowing a retry: Retry count=%s, Sleep time=%s.',
                    retry_context.count, backoff)
        sleep(backoff)
        return True
