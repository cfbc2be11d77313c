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
from urllib.parse import (
    unquote as url_unquote,
    urlparse,
)

from azure.common import (
    AzureHttpError,
    AzureMissingResourceHttpError,
)

from .._async import _async_variants
from .._auth import (
    _StorageSASAuthentication,
    _StorageSharedKeyAuthentication,
    _StorageNoAuthentication,
)
from .._common_conversion import (
    _encode_base64,
    _str_or_none,
)
from .._connection import _ServiceParameters
from .._constants import (
    SERVICE_HOST_BASE,
    DEFAULT_PROTOCOL,
    DEFAULT_MAX_CONNECTIONS,
    _MAX_LIST_RESULTS,
)
from .._deserialization import _parse_metadata
from .._error import (
    _dont_fail_not_exist,
    _dont_fail_on_exist,
    _validate_not_none,
    _validate_type_bytes,
    _ERROR_BLOB_URI_ENDPOINT,
    _ERROR_INVALID_BLOB_URI,
    _ERROR_LEASE_BREAK_PERIOD,
    _ERROR_LEASE_DURATION,
    _ERROR_MAX_RESULTS,
    _ERROR_PAGE_BLOB_SIZE_ALIGNMENT,
)
from .._http import HTTPRequest
from .._serialization import (
    _convert_signed_identifiers_to_xml,
    _get_request_body,
)
from ..models import (
    ListGenerator,
    _access_condition_headers,
)
from ..sharedaccesssignature import BlobSharedAccessSignature
from ..storageclient import StorageClient
from ._deserialization import (
    _convert_xml_to_blob_list,
    _convert_xml_to_container_acl,
    _convert_xml_to_containers,
    _parse_append_block,
    _parse_base_properties,
    _parse_blob,
    _parse_container,
    _parse_container_base_properties,
    _parse_lease,
    _parse_snapshot_blob,
)
from .container import BlobContainer
from ._serialization import (
    _convert_block_list_to_xml,
    _get_path,
)
from .models import (
    BlobType,
    ContainerAcl,
    LeaseActions,
)

logger = logging.getLogger(__name__)


class BlobService(StorageClient):

    '''
    The service handle for the Blob service. Each operation maps to one REST
    request: the parameters are serialised into an HTTP request, the request
    is sent through the retry and authentication pipeline, and the response
    is parsed into the models of :mod:`cloudblob.blob.models`.

    Every operation which sends a request can also be called as
    ``begin_<operation>(..., callback=None)``, returning a
    :class:`concurrent.futures.Future`, or awaited as
    ``<operation>_async(...)``. Both run the operation on the service's thread
    pool, sized by max_connections.

    :ivar int MAX_SINGLE_PUT_SIZE:
        The largest size upload supported in a single put call.
    '''

    MAX_SINGLE_PUT_SIZE = 64 * 1024 * 1024

    def __init__(self, account_name=None, account_key=None, sas_token=None,
                 is_emulated=False, protocol=DEFAULT_PROTOCOL, endpoint_suffix=SERVICE_HOST_BASE,
                 custom_domain=None, request_session=None, connection_string=None,
                 socket_timeout=None, max_connections=DEFAULT_MAX_CONNECTIONS):
        '''
        :param str account_name:
            The storage account name. This is used to authenticate requests
            signed with an account key and to construct the storage endpoint. It
            is required unless a connection string is given, or if a custom
            domain is used with anonymous authentication.
        :param str account_key:
            The storage account key. This is used for shared key authentication.
            If neither account key or sas token is specified, anonymous access
            will be used.
        :param str sas_token:
             A shared access signature token to use to authenticate requests
             instead of the account key. If account key and sas token are both
             specified, account key will be used to sign. If neither are
             specified, anonymous access will be used.
        :param bool is_emulated:
            Whether to use the emulator. Defaults to False. If specified, will
            override all other parameters besides connection string and request
            session.
        :param str protocol:
            The protocol to use for requests. Defaults to https.
        :param str endpoint_suffix:
            The host base component of the url, minus the account name. Defaults
            to Azure (core.windows.net). Override this to use the China cloud
            (core.chinacloudapi.cn).
        :param str custom_domain:
            The custom domain to use. This can be set in the Azure Portal. For
            example, 'www.mydomain.com'.
        :param requests.Session request_session:
            The session object to use for http requests.
        :param str connection_string:
            If specified, this will override all other parameters besides
            request session. See
            http://azure.microsoft.com/en-us/documentation/articles/storage-configure-connection-string/
            for the connection string format.
        :param int socket_timeout:
            If specified, this will override the default socket timeout. The timeout specified is in seconds.
        :param int max_connections:
            Maximum number of worker threads for the begin_* and *_async operations.
        '''
        service_params = _ServiceParameters.get_service_parameters(
            'blob',
            account_name=account_name,
            account_key=account_key,
            sas_token=sas_token,
            is_emulated=is_emulated,
            protocol=protocol,
            endpoint_suffix=endpoint_suffix,
            custom_domain=custom_domain,
            connection_string=connection_string)

        super(BlobService, self).__init__(service_params, request_session=request_session,
                                          socket_timeout=socket_timeout,
                                          max_connections=max_connections)

        if self.account_key:
            self.authentication = _StorageSharedKeyAuthentication(
                self.account_name,
                self.account_key,
            )
        elif self.sas_token:
            self.authentication = _StorageSASAuthentication(self.sas_token)
        else:
            self.authentication = _StorageNoAuthentication()

    def make_container_url(self, container_name, protocol=None, sas_token=None):
        '''
        Creates the url to access a container.

        :param str container_name:
            Name of container.
        :param str protocol:
            Protocol to use: 'http' or 'https'. If not specified, uses the
            protocol specified when BlobService was initialized.
        :param str sas_token:
            Shared access signature token created with
            generate_container_shared_access_signature.
        :return: container access URL.
        :rtype: str
        '''
        url = '{}://{}{}'.format(
            protocol or self.protocol,
            self.primary_endpoint,
            _get_path(container_name),
        )

        if sas_token:
            url += '?' + sas_token

        return url

    def make_blob_url(self, container_name, blob_name, protocol=None, sas_token=None, snapshot=None):
        '''
        Creates the url to access a blob.

        :param str container_name:
            Name of container.
        :param str blob_name:
            Name of blob.
        :param str protocol:
            Protocol to use: 'http' or 'https'. If not specified, uses the
            protocol specified when BlobService was initialized.
        :param str sas_token:
            Shared access signature token created with
            generate_shared_access_signature.
        :param str snapshot:
            An string value that uniquely identifies the snapshot. The value of
            this query parameter indicates the snapshot version.
        :return: blob access URL.
        :rtype: str
        '''
        url = '{}://{}{}'.format(
            protocol or self.protocol,
            self.primary_endpoint,
            _get_path(container_name, blob_name),
        )

        if snapshot and sas_token:
            url = '{}?snapshot={}&{}'.format(url, snapshot, sas_token)
        elif snapshot:
            url = '{}?snapshot={}'.format(url, snapshot)
        elif sas_token:
            url = '{}?{}'.format(url, sas_token)

        return url

    def generate_container_shared_access_signature(self, container_name,
                                                   permission=None, expiry=None,
                                                   start=None, id=None, ip=None, protocol=None,
                                                   cache_control=None, content_disposition=None,
                                                   content_encoding=None, content_language=None,
                                                   content_type=None):
        '''
        Generates a shared access signature for the container.
        Use the returned signature with the sas_token parameter of any BlobService.

        :param str container_name:
            Name of container.
        :param ContainerPermissions permission:
            The permissions associated with the shared access signature. The
            user is restricted to operations allowed by the permissions.
            Permissions must be ordered read, write, delete, list.
            Required unless an id is given referencing a stored access policy
            which contains this field. This field must be omitted if it has been
            specified in an associated stored access policy.
        :param expiry:
            The time at which the shared access signature becomes invalid.
            Required unless an id is given referencing a stored access policy
            which contains this field. Azure will always convert values to UTC.
            If a date is passed in without timezone info, it is assumed to be UTC.
        :type expiry: datetime or str
        :param start:
            The time at which the shared access signature becomes valid. If
            omitted, start time for this call is assumed to be the time when the
            storage service receives the request.
        :type start: datetime or str
        :param str id:
            A unique value up to 64 characters in length that correlates to a
            stored access policy. To create a stored access policy, use
            set_container_acl.
        :param str ip:
            Specifies an IP address or a range of IP addresses from which to accept requests.
        :param str protocol:
            Specifies the protocol permitted for a request made. The default value
            is https,http.
        :param str cache_control:
            Response header value for Cache-Control when resource is accessed
            using this shared access signature.
        :param str content_disposition:
            Response header value for Content-Disposition when resource is accessed
            using this shared access signature.
        :param str content_encoding:
            Response header value for Content-Encoding when resource is accessed
            using this shared access signature.
        :param str content_language:
            Response header value for Content-Language when resource is accessed
            using this shared access signature.
        :param str content_type:
            Response header value for Content-Type when resource is accessed
            using this shared access signature.
        :return: A Shared Access Signature (sas) token.
        :rtype: str
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('self.account_name', self.account_name)
        _validate_not_none('self.account_key', self.account_key)

        sas = BlobSharedAccessSignature(self.account_name, self.account_key)
        return sas.generate_container(
            container_name,
            permission,
            expiry,
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

    def generate_blob_shared_access_signature(
            self, container_name, blob_name, permission=None,
            expiry=None, start=None, id=None, ip=None, protocol=None,
            cache_control=None, content_disposition=None,
            content_encoding=None, content_language=None,
            content_type=None):
        '''
        Generates a shared access signature for the blob.
        Use the returned signature with the sas_token parameter of any BlobService.

        Takes the same parameters as
        :meth:`generate_container_shared_access_signature`, with a
        :class:`~cloudblob.blob.models.BlobPermissions` permission.

        :param str container_name:
            Name of container.
        :param str blob_name:
            Name of blob.
        :return: A Shared Access Signature (sas) token.
        :rtype: str
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('blob_name', blob_name)
        _validate_not_none('self.account_name', self.account_name)
        _validate_not_none('self.account_key', self.account_key)

        sas = BlobSharedAccessSignature(self.account_name, self.account_key)
        return sas.generate_blob(
            container_name,
            blob_name,
            permission,
            expiry,
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

    #----------------------------------------------------------------------
    # Handles

    def get_container_reference(self, container_name):
        '''
        Returns a :class:`~cloudblob.blob.container.BlobContainer` handle. No
        request is sent.
        '''
        return BlobContainer(self, container_name)

    def get_blob_reference_from_server(self, blob_uri, access_condition=None, timeout=None):
        '''
        Resolves an absolute blob URI to a typed blob handle, populated with
        the blob's properties and metadata.

        The URI may address the account host
        (``https://account.blob.core.windows.net/container/blob``) or use the
        emulator's path style (``http://127.0.0.1:10000/devstoreaccount1/container/blob``).
        A ``snapshot`` query parameter addresses a snapshot. Any other query
        parameters are taken as a shared access signature, which then
        authenticates both this request and the returned handle.
        The URI must address this service's endpoint; a URI for another host
        or account raises ValueError.

        :param str blob_uri:
            The absolute URI of the blob.
        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: A :class:`~cloudblob.blob.blob.BlockBlob`, :class:`~cloudblob.blob.blob.PageBlob`
            or :class:`~cloudblob.blob.blob.AppendBlob`.
        '''
        _validate_not_none('blob_uri', blob_uri)
        parsed_uri = urlparse(blob_uri)

        snapshot = None
        sas_parameters = []
        for parameter in parsed_uri.query.split('&'):
            if not parameter:
                continue
            if parameter.startswith('snapshot='):
                snapshot = url_unquote(parameter[len('snapshot='):])
            else:
                sas_parameters.append(parameter)

        path = url_unquote(parsed_uri.path).lstrip('/')
        endpoint_host, _, endpoint_path = self.primary_endpoint.partition('/')
        if parsed_uri.netloc.lower() != endpoint_host.lower():
            raise ValueError(_ERROR_BLOB_URI_ENDPOINT.format(blob_uri, self.primary_endpoint))
        if endpoint_path:
            if not path.startswith(endpoint_path + '/'):
                raise ValueError(_ERROR_BLOB_URI_ENDPOINT.format(blob_uri, self.primary_endpoint))
            path = path[len(endpoint_path) + 1:]

        container_name, _, blob_name = path.partition('/')
        if not container_name or not blob_name:
            raise ValueError(_ERROR_INVALID_BLOB_URI.format(blob_uri))

        service = self
        if sas_parameters:
            service = copy.copy(self)
            service.sas_token = '&'.join(sas_parameters)
            service.authentication = _StorageSASAuthentication(service.sas_token)
            # asynchronous calls on the returned handle run on this service's pool
            service._get_executor = self._get_executor

        logger.debug('Resolving blob %s/%s (snapshot=%s) from %s.',
                     container_name, blob_name, snapshot, blob_uri.split('?')[0])

        container = service.get_container_reference(container_name)
        return container.get_blob_reference_from_server(blob_name, snapshot=snapshot,
                                                        access_condition=access_condition,
                                                        timeout=timeout)

    #----------------------------------------------------------------------
    # Containers

    def list_containers(self, prefix=None, num_results=None, include_metadata=False,
                        marker=None, timeout=None):
        '''
        Returns a generator to list the containers under the specified account.
        The generator will lazily follow the continuation tokens returned by
        the service and stop when all containers have been returned or num_results is reached.

        If num_results is specified and the account has more than that number of
        containers, the generator will have a populated next_marker field once it
        finishes. This marker can be used to create a new generator if more
        results are desired.

        :param str prefix:
            Filters the results to return only containers whose names
            begin with the specified prefix.
        :param int num_results:
            Specifies the maximum number of containers to return. A single list
            request may return up to 1000 contianers and potentially a continuation
            token which should be followed to get additional resutls.
        :param bool include_metadata:
            Specifies that container metadata be returned in the response.
        :param str marker:
            An opaque continuation token. This value can be retrieved from the
            next_marker field of a previous generator object if num_results was
            specified and that generator has finished enumerating results. If
            specified, this generator will begin returning results from the point
            where the previous generator stopped.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        '''
        include = 'metadata' if include_metadata else None
        kwargs = {'prefix': prefix, 'marker': marker, 'max_results': num_results,
                  'include': include, 'timeout': timeout}
        resp = self.list_containers_segmented(**kwargs)

        return ListGenerator(resp, self.list_containers_segmented, (), kwargs)

    def list_containers_segmented(self, prefix=None, marker=None, max_results=None,
                                  include=None, timeout=None):
        '''
        Returns one page of the List Containers operation.

        :param str prefix:
            Filters the results to return only containers whose names
            begin with the specified prefix.
        :param str marker:
            A string value that identifies the portion of the list
            to be returned with the next list operation. The operation returns
            a next_marker value within the response body if the list returned was
            not complete. The marker value may then be used in a subsequent
            call to request the next set of list items. The marker value is
            opaque to the client.
        :param int max_results:
            Specifies the maximum number of containers to return. A single list
            request may return up to 1000 contianers and potentially a continuation
            token which should be followed to get additional resutls.
        :param str include:
            Include this parameter to specify that the container's
            metadata be returned as part of the response body. set this
            parameter to string 'metadata' to get container's metadata.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: A list of :class:`~cloudblob.blob.models.Container` with a
            ``next_marker`` attribute, None when the listing is complete.
        '''
        _validate_max_results(max_results)
        request = HTTPRequest()
        request.method = 'GET'
        request.host = self._get_host()
        request.path = _get_path()
        request.query = [
            ('comp', 'list'),
            ('prefix', _str_or_none(prefix)),
            ('marker', _str_or_none(marker)),
            ('maxresults', _str_or_none(max_results)),
            ('include', _str_or_none(include)),
            ('timeout', _str_or_none(timeout)),
        ]

        return self._perform_request(request, _convert_xml_to_containers)

    def create_container(self, container_name, metadata=None,
                         public_access=None, fail_on_exist=False, timeout=None):
        '''
        Creates a new container under the specified account. If the container
        with the same name already exists, the operation fails if
        fail_on_exist is True.

        :param str container_name:
            Name of container to create.
        :param metadata:
            A dict with name_value pairs to associate with the
            container as metadata. Example:{'Category':'test'}
        :type metadata: dict(str, str)
        :param ~cloudblob.blob.models.PublicAccess public_access:
            Possible values include: container, blob.
        :param bool fail_on_exist:
            Specify whether to throw an exception when the container exists.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: True if container is created, False if container already exists.
        :rtype: bool
        '''
        if not fail_on_exist:
            try:
                self._create_container(container_name, metadata, public_access, timeout)
                return True
            except AzureHttpError as ex:
                _dont_fail_on_exist(ex)
                return False
        else:
            self._create_container(container_name, metadata, public_access, timeout)
            return True

    def _create_container(self, container_name, metadata=None, public_access=None, timeout=None):
        _validate_not_none('container_name', container_name)
        request = HTTPRequest()
        request.method = 'PUT'
        request.host = self._get_host()
        request.path = _get_path(container_name)
        request.query = [
            ('restype', 'container'),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = [
            ('x-ms-meta-name-values', metadata),
            ('x-ms-blob-public-access', _str_or_none(public_access)),
        ]

        return self._perform_request(request, _parse_container_base_properties)

    def get_container_properties(self, container_name, lease_id=None, timeout=None):
        '''
        Returns all user-defined metadata and system properties for the specified
        container. The data returned does not include the container's list of blobs.

        :param str container_name:
            Name of existing container.
        :param str lease_id:
            If specified, get_container_properties only succeeds if the
            container's lease is active and matches this ID.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: properties for the specified container within a container object.
        :rtype: :class:`~cloudblob.blob.models.Container`
        '''
        _validate_not_none('container_name', container_name)
        request = HTTPRequest()
        request.method = 'GET'
        request.host = self._get_host()
        request.path = _get_path(container_name)
        request.query = [
            ('restype', 'container'),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = [('x-ms-lease-id', _str_or_none(lease_id))]

        return self._perform_request(request, _parse_container, [container_name])

    def get_container_metadata(self, container_name, lease_id=None, timeout=None):
        '''
        Returns all user-defined metadata for the specified container.

        :param str container_name:
            Name of existing container.
        :param str lease_id:
            If specified, get_container_metadata only succeeds if the
            container's lease is active and matches this ID.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return:
            A dictionary representing the container metadata name, value pairs.
        :rtype: dict(str, str)
        '''
        _validate_not_none('container_name', container_name)
        request = HTTPRequest()
        request.method = 'GET'
        request.host = self._get_host()
        request.path = _get_path(container_name)
        request.query = [
            ('restype', 'container'),
            ('comp', 'metadata'),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = [('x-ms-lease-id', _str_or_none(lease_id))]

        return self._perform_request(request, _parse_metadata)

    def set_container_metadata(self, container_name, metadata=None,
                               access_condition=None, timeout=None):
        '''
        Sets one or more user-defined name-value pairs for the specified
        container. Each call to this operation replaces all existing metadata
        attached to the container. To remove all metadata from the container,
        call this operation with no metadata dict.

        :param str container_name:
            Name of existing container.
        :param metadata:
            A dict containing name-value pairs to associate with the container as
            metadata. Example: {'category':'test'}
        :type metadata: dict(str, str)
        :param ~cloudblob.models.AccessCondition access_condition:
            Only if_modified_since and lease_id apply to this operation.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: ETag and last modified properties for the updated Container
        :rtype: :class:`~cloudblob.blob.models.ContainerProperties`
        '''
        _validate_not_none('container_name', container_name)
        request = HTTPRequest()
        request.method = 'PUT'
        request.host = self._get_host()
        request.path = _get_path(container_name)
        request.query = [
            ('restype', 'container'),
            ('comp', 'metadata'),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = [('x-ms-meta-name-values', metadata)]
        request.headers += _access_condition_headers(access_condition, etag_conditions=False)

        return self._perform_request(request, _parse_container_base_properties)

    def get_container_acl(self, container_name, lease_id=None, timeout=None):
        '''
        Gets the permissions for the specified container.
        The permissions indicate whether container data may be accessed publicly.

        :param str container_name:
            Name of existing container.
        :param lease_id:
            If specified, get_container_acl only succeeds if the
            container's lease is active and matches this ID.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: The public access level and the stored access policies of the container.
            Policy permissions are parsed to :class:`~cloudblob.blob.models.ContainerPermissions`.
        :rtype: :class:`~cloudblob.blob.models.ContainerAcl`
        '''
        _validate_not_none('container_name', container_name)
        request = HTTPRequest()
        request.method = 'GET'
        request.host = self._get_host()
        request.path = _get_path(container_name)
        request.query = [
            ('restype', 'container'),
            ('comp', 'acl'),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = [('x-ms-lease-id', _str_or_none(lease_id))]

        return self._perform_request(request, _convert_xml_to_container_acl)

    def set_container_acl(self, container_name, signed_identifiers=None,
                          public_access=None, access_condition=None, timeout=None):
        '''
        Sets the permissions for the specified container or stored access
        policies that may be used with Shared Access Signatures. The permissions
        indicate whether blobs in a container may be accessed publicly.

        :param str container_name:
            Name of existing container.
        :param signed_identifiers:
            A dictionary of access policies to associate with the container. The
            dictionary may contain up to 5 elements. An empty dictionary
            will clear the access policies set on the service. A
            :class:`~cloudblob.blob.models.ContainerAcl` may be given instead,
            in which case its public access level is used as well.
        :type signed_identifiers: dict(str, :class:`~cloudblob.models.AccessPolicy`)
        :param ~cloudblob.blob.models.PublicAccess public_access:
            Possible values include: container, blob.
        :param ~cloudblob.models.AccessCondition access_condition:
            Only if_modified_since, if_unmodified_since and lease_id apply to this operation.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: ETag and last modified properties for the updated Container
        :rtype: :class:`~cloudblob.blob.models.ContainerProperties`
        '''
        _validate_not_none('container_name', container_name)
        if isinstance(signed_identifiers, ContainerAcl):
            public_access = signed_identifiers.public_access
            signed_identifiers = signed_identifiers.access_policies

        request = HTTPRequest()
        request.method = 'PUT'
        request.host = self._get_host()
        request.path = _get_path(container_name)
        request.query = [
            ('restype', 'container'),
            ('comp', 'acl'),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = [('x-ms-blob-public-access', _str_or_none(public_access))]
        request.headers += _access_condition_headers(access_condition, etag_conditions=False)
        request.body = _get_request_body(
            _convert_signed_identifiers_to_xml(signed_identifiers))

        return self._perform_request(request, _parse_container_base_properties)

    def delete_container(self, container_name, fail_not_exist=False,
                         access_condition=None, timeout=None):
        '''
        Marks the specified container for deletion. The container and any blobs
        contained within it are later deleted during garbage collection.
        If the container does not exist, the operation fails if
        fail_not_exist is True.

        :param str container_name:
            Name of container to delete.
        :param bool fail_not_exist:
            Specify whether to throw an exception when the container doesn't
            exist.
        :param ~cloudblob.models.AccessCondition access_condition:
            Only if_modified_since, if_unmodified_since and lease_id apply to this operation.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: True if container is deleted, False container doesn't exist.
        :rtype: bool
        '''
        _validate_not_none('container_name', container_name)
        request = HTTPRequest()
        request.method = 'DELETE'
        request.host = self._get_host()
        request.path = _get_path(container_name)
        request.query = [
            ('restype', 'container'),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = _access_condition_headers(access_condition, etag_conditions=False)

        if not fail_not_exist:
            try:
                self._perform_request(request)
                return True
            except AzureHttpError as ex:
                _dont_fail_not_exist(ex)
                return False
        else:
            self._perform_request(request)
            return True

    def _lease_container_impl(
            self, container_name, lease_action, lease_id, lease_duration,
            lease_break_period, proposed_lease_id, access_condition, timeout):
        '''
        Establishes and manages a lease on a container.
        The lease duration can be 15 to 60 seconds, or can be infinite.
        The lease_id of the access condition is ignored; the lease
        operations carry their own lease_id.
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('lease_action', lease_action)
        request = HTTPRequest()
        request.method = 'PUT'
        request.host = self._get_host()
        request.path = _get_path(container_name)
        request.query = [
            ('restype', 'container'),
            ('comp', 'lease'),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = [
            (name, value) for name, value
            in _access_condition_headers(access_condition, etag_conditions=False)
            if name != 'x-ms-lease-id'
        ]
        request.headers += [
            ('x-ms-lease-id', _str_or_none(lease_id)),
            ('x-ms-lease-action', _str_or_none(lease_action)),
            ('x-ms-lease-duration', _str_or_none(lease_duration)),
            ('x-ms-lease-break-period', _str_or_none(lease_break_period)),
            ('x-ms-proposed-lease-id', _str_or_none(proposed_lease_id)),
        ]

        return self._perform_request(request, _parse_lease)

    def acquire_container_lease(
            self, container_name, lease_duration=-1, proposed_lease_id=None,
            access_condition=None, timeout=None):
        '''
        Requests a new lease. If the container does not have an active lease,
        the Blob service creates a lease on the container and returns a new
        lease ID.

        :param str container_name:
            Name of existing container.
        :param int lease_duration:
            Specifies the duration of the lease, in seconds, or negative one
            (-1) for a lease that never expires. A non-infinite lease can be
            between 15 and 60 seconds. A lease duration cannot be changed
            using renew or change. Default is -1 (infinite lease).
        :param str proposed_lease_id:
            Proposed lease ID, in a GUID string format. The Blob service returns
            400 (Invalid request) if the proposed lease ID is not in the correct format.
        :param ~cloudblob.models.AccessCondition access_condition:
            Only if_modified_since and if_unmodified_since apply to this operation.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: the lease ID of the newly created lease.
        :rtype: str
        '''
        _validate_not_none('lease_duration', lease_duration)
        if lease_duration != -1 and \
                (lease_duration < 15 or lease_duration > 60):
            raise ValueError(_ERROR_LEASE_DURATION)

        lease = self._lease_container_impl(container_name,
                                           LeaseActions.Acquire,
                                           None,  # lease_id
                                           lease_duration,
                                           None,  # lease_break_period
                                           proposed_lease_id,
                                           access_condition,
                                           timeout)
        return lease['id']

    def renew_container_lease(self, container_name, lease_id,
                              access_condition=None, timeout=None):
        '''
        Renews the lease. The lease can be renewed if the lease ID specified
        matches that associated with the container. Note that
        the lease may be renewed even if it has expired as long as the container
        has not been leased again since the expiration of that lease. When you
        renew a lease, the lease duration clock resets.

        :param str container_name:
            Name of existing container.
        :param str lease_id:
            Lease ID for active lease.
        :param ~cloudblob.models.AccessCondition access_condition:
            Only if_modified_since and if_unmodified_since apply to this operation.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: the lease ID of the renewed lease.
        :rtype: str
        '''
        _validate_not_none('lease_id', lease_id)

        lease = self._lease_container_impl(container_name,
                                           LeaseActions.Renew,
                                           lease_id,
                                           None,  # lease_duration
                                           None,  # lease_break_period
                                           None,  # proposed_lease_id
                                           access_condition,
                                           timeout)
        return lease['id']

    def release_container_lease(self, container_name, lease_id,
                                access_condition=None, timeout=None):
        '''
        Release the lease. The lease may be released if the lease_id specified matches
        that associated with the container. Releasing the lease allows another client
        to immediately acquire the lease for the container as soon as the release is complete.

        :param str container_name:
            Name of existing container.
        :param str lease_id:
            Lease ID for active lease.
        :param ~cloudblob.models.AccessCondition access_condition:
            Only if_modified_since and if_unmodified_since apply to this operation.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        '''
        _validate_not_none('lease_id', lease_id)

        self._lease_container_impl(container_name,
                                   LeaseActions.Release,
                                   lease_id,
                                   None,  # lease_duration
                                   None,  # lease_break_period
                                   None,  # proposed_lease_id
                                   access_condition,
                                   timeout)

    def break_container_lease(self, container_name, lease_break_period=None,
                              access_condition=None, timeout=None):
        '''
        Break the lease, if the container has an active lease. Once a lease is
        broken, it cannot be renewed. Any authorized request can break the lease;
        the request is not required to specify a matching lease ID. When a lease
        is broken, the lease break period is allowed to elapse, during which time
        no lease operation except break and release can be performed on the container.
        When a lease is successfully broken, the response indicates the interval
        in seconds until a new lease can be acquired.

        :param str container_name:
            Name of existing container.
        :param int lease_break_period:
            This is the proposed duration of seconds that the lease
            should continue before it is broken, between 0 and 60 seconds. This
            break period is only used if it is shorter than the time remaining
            on the lease. If longer, the time remaining on the lease is used.
            A new lease will not be available before the break period has
            expired, but the lease may be held for longer than the break
            period. If this header does not appear with a break
            operation, a fixed-duration lease breaks after the remaining lease
            period elapses, and an infinite lease breaks immediately.
        :param ~cloudblob.models.AccessCondition access_condition:
            Only if_modified_since and if_unmodified_since apply to this operation.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: Approximate time remaining in the lease period, in seconds.
        :rtype: int
        '''
        if (lease_break_period is not None) and (lease_break_period < 0 or lease_break_period > 60):
            raise ValueError(_ERROR_LEASE_BREAK_PERIOD)

        lease = self._lease_container_impl(container_name,
                                           LeaseActions.Break,
                                           None,  # lease_id
                                           None,  # lease_duration
                                           lease_break_period,
                                           None,  # proposed_lease_id
                                           access_condition,
                                           timeout)
        return lease['time']

    def change_container_lease(self, container_name, lease_id, proposed_lease_id,
                               access_condition=None, timeout=None):
        '''
        Change the lease ID of an active lease. A change must include the current
        lease ID and a new lease ID.

        :param str container_name:
            Name of existing container.
        :param str lease_id:
            Lease ID for active lease.
        :param str proposed_lease_id:
            Proposed lease ID, in a GUID string format.
        :param ~cloudblob.models.AccessCondition access_condition:
            Only if_modified_since and if_unmodified_since apply to this operation.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: the new lease ID.
        :rtype: str
        '''
        _validate_not_none('lease_id', lease_id)
        _validate_not_none('proposed_lease_id', proposed_lease_id)

        lease = self._lease_container_impl(container_name,
                                           LeaseActions.Change,
                                           lease_id,
                                           None,  # lease_duration
                                           None,  # lease_break_period
                                           proposed_lease_id,
                                           access_condition,
                                           timeout)
        return lease['id']

    def exists(self, container_name, blob_name=None, snapshot=None, timeout=None):
        '''
        Returns a boolean indicating whether the container exists (if blob_name
        is None), or otherwise a boolean indicating whether the blob exists.

        :param str container_name:
            Name of a container.
        :param str blob_name:
            Name of a blob. If None, the container will be checked for existence.
        :param str snapshot:
            The snapshot parameter is an opaque DateTime value that,
            when present, specifies the snapshot.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: A boolean indicating whether the resource exists.
        :rtype: bool
        '''
        _validate_not_none('container_name', container_name)
        try:
            if blob_name is None:
                self.get_container_properties(container_name, timeout=timeout)
            else:
                self.get_blob_properties(container_name, blob_name, snapshot=snapshot, timeout=timeout)
            return True
        except AzureMissingResourceHttpError as ex:
            _dont_fail_not_exist(ex)
            return False

    #----------------------------------------------------------------------
    # Blob listing

    def list_blobs(self, container_name, prefix=None, num_results=None, include=None,
                   delimiter=None, marker=None, timeout=None):
        '''
        Returns a generator to list the blobs under the specified container.
        The generator will lazily follow the continuation tokens returned by
        the service and stop when all blobs have been returned or num_results is reached.

        If num_results is specified and the account has more than that number of
        blobs, the generator will have a populated next_marker field once it
        finishes. This marker can be used to create a new generator if more
        results are desired.

        :param str container_name:
            Name of existing container.
        :param str prefix:
            Filters the results to return only blobs whose names
            begin with the specified prefix.
        :param int num_results:
            Specifies the maximum number of blobs to return,
            including all :class:`~cloudblob.blob.models.BlobPrefix` elements.
        :param ~cloudblob.blob.models.Include include:
            Specifies one or more additional datasets to include in the response.
        :param str delimiter:
            When the request includes this parameter, the operation
            returns a :class:`~cloudblob.blob.models.BlobPrefix` element in the
            result list that acts as a placeholder for all blobs whose names begin
            with the same substring up to the appearance of the delimiter character.
            The delimiter may be a single character or a string.
        :param str marker:
            An opaque continuation token. This value can be retrieved from the
            next_marker field of a previous generator object if num_results was
            specified and that generator has finished enumerating results. If
            specified, this generator will begin returning results from the point
            where the previous generator stopped.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        '''
        args = (container_name,)
        kwargs = {'prefix': prefix, 'marker': marker, 'max_results': num_results,
                  'include': include, 'delimiter': delimiter, 'timeout': timeout}
        resp = self._list_blobs(*args, **kwargs)

        return ListGenerator(resp, self._list_blobs, args, kwargs)

    def _list_blobs(self, container_name, prefix=None, marker=None,
                    max_results=None, include=None, delimiter=None, timeout=None):
        '''
        Returns one page of the blobs under the specified container, with a
        ``next_marker`` attribute which is None once the listing is complete.
        The page holds :class:`~cloudblob.blob.models.Blob` items, preceded
        by :class:`~cloudblob.blob.models.BlobPrefix` items when a delimiter is given.
        '''
        _validate_not_none('container_name', container_name)
        _validate_max_results(max_results)
        request = HTTPRequest()
        request.method = 'GET'
        request.host = self._get_host()
        request.path = _get_path(container_name)
        request.query = [
            ('restype', 'container'),
            ('comp', 'list'),
            ('prefix', _str_or_none(prefix)),
            ('delimiter', _str_or_none(delimiter)),
            ('marker', _str_or_none(marker)),
            ('maxresults', _str_or_none(max_results)),
            ('include', _str_or_none(include) or None),
            ('timeout', _str_or_none(timeout)),
        ]

        return self._perform_request(request, _convert_xml_to_blob_list)

    #----------------------------------------------------------------------
    # Blobs

    def get_blob_properties(self, container_name, blob_name, snapshot=None,
                            access_condition=None, timeout=None):
        '''
        Returns all user-defined metadata, standard HTTP properties, and
        system properties for the blob. It does not return the content of the blob.
        Returns :class:`~cloudblob.blob.models.Blob`
        with :class:`~cloudblob.blob.models.BlobProperties` and a metadata dict.

        :param str container_name:
            Name of existing container.
        :param str blob_name:
            Name of existing blob.
        :param str snapshot:
            The snapshot parameter is an opaque DateTime value that,
            when present, specifies the blob snapshot to retrieve.
        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: a blob object including properties and metadata.
        :rtype: :class:`~cloudblob.blob.models.Blob`
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('blob_name', blob_name)
        request = HTTPRequest()
        request.method = 'HEAD'
        request.host = self._get_host()
        request.path = _get_path(container_name, blob_name)
        request.query = [
            ('snapshot', _str_or_none(snapshot)),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = _access_condition_headers(access_condition)

        return self._perform_request(request, _parse_blob, [blob_name, snapshot])

    def set_blob_properties(self, container_name, blob_name, content_settings=None,
                            access_condition=None, timeout=None):
        '''
        Sets system properties on the blob. If one property is set for the
        content_settings, all properties will be overriden.

        :param str container_name:
            Name of existing container.
        :param str blob_name:
            Name of existing blob.
        :param ~cloudblob.blob.models.ContentSettings content_settings:
            ContentSettings object used to set blob properties.
        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: ETag and last modified properties for the updated Blob
        :rtype: :class:`~cloudblob.blob.models.BlobProperties`
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('blob_name', blob_name)
        request = HTTPRequest()
        request.method = 'PUT'
        request.host = self._get_host()
        request.path = _get_path(container_name, blob_name)
        request.query = [
            ('comp', 'properties'),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = _access_condition_headers(access_condition)
        if content_settings is not None:
            request.headers += content_settings.to_headers()

        return self._perform_request(request, _parse_base_properties)

    def get_blob_metadata(self, container_name, blob_name, snapshot=None,
                          access_condition=None, timeout=None):
        '''
        Returns all user-defined metadata for the specified blob or snapshot.

        :param str container_name:
            Name of existing container.
        :param str blob_name:
            Name of existing blob.
        :param str snapshot:
            The snapshot parameter is an opaque value that,
            when present, specifies the blob snapshot to retrieve.
        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return:
            A dictionary representing the blob metadata name, value pairs.
        :rtype: dict(str, str)
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('blob_name', blob_name)
        request = HTTPRequest()
        request.method = 'GET'
        request.host = self._get_host()
        request.path = _get_path(container_name, blob_name)
        request.query = [
            ('snapshot', _str_or_none(snapshot)),
            ('comp', 'metadata'),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = _access_condition_headers(access_condition)

        return self._perform_request(request, _parse_metadata)

    def set_blob_metadata(self, container_name, blob_name,
                          metadata=None, access_condition=None, timeout=None):
        '''
        Sets user-defined metadata for the specified blob as one or more
        name-value pairs.

        :param str container_name:
            Name of existing container.
        :param str blob_name:
            Name of existing blob.
        :param metadata:
            Dict containing name and value pairs. Each call to this operation
            replaces all existing metadata attached to the blob. To remove all
            metadata from the blob, call this operation with no metadata headers.
        :type metadata: dict(str, str)
        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: ETag and last modified properties for the updated Blob
        :rtype: :class:`~cloudblob.blob.models.BlobProperties`
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('blob_name', blob_name)
        request = HTTPRequest()
        request.method = 'PUT'
        request.host = self._get_host()
        request.path = _get_path(container_name, blob_name)
        request.query = [
            ('comp', 'metadata'),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = [('x-ms-meta-name-values', metadata)]
        request.headers += _access_condition_headers(access_condition)

        return self._perform_request(request, _parse_base_properties)

    def snapshot_blob(self, container_name, blob_name,
                      metadata=None, access_condition=None, timeout=None):
        '''
        Creates a read-only snapshot of a blob.

        :param str container_name:
            Name of existing container.
        :param str blob_name:
            Name of existing blob.
        :param metadata:
            Specifies a user-defined name-value pair associated with the blob.
            If no name-value pairs are specified, the operation will copy the
            base blob metadata to the snapshot. If one or more name-value pairs
            are specified, the snapshot is created with the specified metadata,
            and metadata is not copied from the base blob.
        :type metadata: dict(str, str)
        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: snapshot properties
        :rtype: :class:`~cloudblob.blob.models.Blob`
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('blob_name', blob_name)
        request = HTTPRequest()
        request.method = 'PUT'
        request.host = self._get_host()
        request.path = _get_path(container_name, blob_name)
        request.query = [
            ('comp', 'snapshot'),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = [('x-ms-meta-name-values', metadata)]
        request.headers += _access_condition_headers(access_condition)

        return self._perform_request(request, _parse_snapshot_blob, [blob_name])

    def delete_blob(self, container_name, blob_name, snapshot=None,
                    delete_snapshots=None, access_condition=None, timeout=None):
        '''
        Marks the specified blob or snapshot for deletion.
        The blob is later deleted during garbage collection.

        Note that in order to delete a blob, you must delete all of its
        snapshots. You can delete both at the same time with the Delete
        Blob operation.

        :param str container_name:
            Name of existing container.
        :param str blob_name:
            Name of existing blob.
        :param str snapshot:
            The snapshot parameter is an opaque DateTime value that,
            when present, specifies the blob snapshot to delete.
        :param str delete_snapshots:
            Required if the blob has associated snapshots. Possible values
            are 'include' and 'only'.
        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('blob_name', blob_name)
        request = HTTPRequest()
        request.method = 'DELETE'
        request.host = self._get_host()
        request.path = _get_path(container_name, blob_name)
        request.headers = [('x-ms-delete-snapshots', _str_or_none(delete_snapshots))]
        request.headers += _access_condition_headers(access_condition)
        request.query = [
            ('snapshot', _str_or_none(snapshot)),
            ('timeout', _str_or_none(timeout)),
        ]

        self._perform_request(request)

    def create_blob_from_bytes(self, container_name, blob_name, blob,
                               content_settings=None, metadata=None,
                               access_condition=None, timeout=None):
        '''
        Creates a new block blob from an array of bytes with a single Put Blob
        request, or updates the content of an existing block blob.

        :param str container_name:
            Name of existing container.
        :param str blob_name:
            Name of blob to create or update.
        :param bytes blob:
            Content of blob as an array of bytes.
        :param ~cloudblob.blob.models.ContentSettings content_settings:
            ContentSettings object used to set blob properties.
        :param metadata:
            Name-value pairs associated with the blob as metadata.
        :type metadata: dict(str, str)
        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: ETag and last modified properties for the Block Blob
        :rtype: :class:`~cloudblob.blob.models.BlobProperties`
        '''
        _validate_not_none('blob', blob)
        _validate_type_bytes('blob', blob)
        if len(blob) > self.MAX_SINGLE_PUT_SIZE:
            raise ValueError('blob should be at most {0} bytes.'.format(self.MAX_SINGLE_PUT_SIZE))

        return self._put_blob(container_name, blob_name, BlobType.BlockBlob,
                              blob=blob,
                              content_settings=content_settings,
                              metadata=metadata,
                              access_condition=access_condition,
                              timeout=timeout)

    def create_page_blob(self, container_name, blob_name, content_length,
                         content_settings=None, sequence_number=None, metadata=None,
                         access_condition=None, timeout=None):
        '''
        Creates a new Page Blob. The pages are initialised to zero.

        :param str container_name:
            Name of existing container.
        :param str blob_name:
            Name of blob to create or update.
        :param int content_length:
            Required. This header specifies the maximum size
            for the page blob, up to 1 TB. The page blob size must be aligned
            to a 512-byte boundary.
        :param ~cloudblob.blob.models.ContentSettings content_settings:
            ContentSettings object used to set properties on the blob.
        :param int sequence_number:
            The sequence number is a user-controlled value that you can use to
            track requests. The value of the sequence number must be between 0
            and 2^63 - 1.The default value is 0.
        :param metadata:
            Name-value pairs associated with the blob as metadata.
        :type metadata: dict(str, str)
        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: ETag and last modified properties for the new Page Blob
        :rtype: :class:`~cloudblob.blob.models.BlobProperties`
        '''
        _validate_not_none('content_length', content_length)
        if content_length % 512 != 0:
            raise ValueError(_ERROR_PAGE_BLOB_SIZE_ALIGNMENT.format(content_length))

        return self._put_blob(container_name, blob_name, BlobType.PageBlob,
                              content_settings=content_settings,
                              metadata=metadata,
                              access_condition=access_condition,
                              timeout=timeout,
                              extra_headers=[
                                  ('x-ms-blob-content-length', _str_or_none(content_length)),
                                  ('x-ms-blob-sequence-number', _str_or_none(sequence_number)),
                              ])

    def create_append_blob(self, container_name, blob_name, content_settings=None,
                           metadata=None, access_condition=None, timeout=None):
        '''
        Creates a blob or overrides an existing blob. Use access_condition
        if_none_match='*' to avoid overriding.

        :param str container_name:
            Name of existing container.
        :param str blob_name:
            Name of blob to create or update.
        :param ~cloudblob.blob.models.ContentSettings content_settings:
            ContentSettings object used to set blob properties.
        :param metadata:
            Name-value pairs associated with the blob as metadata.
        :type metadata: dict(str, str)
        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: ETag and last modified properties for the updated Append Blob
        :rtype: :class:`~cloudblob.blob.models.BlobProperties`
        '''
        return self._put_blob(container_name, blob_name, BlobType.AppendBlob,
                              content_settings=content_settings,
                              metadata=metadata,
                              access_condition=access_condition,
                              timeout=timeout)

    def _put_blob(self, container_name, blob_name, blob_type, blob=None,
                  content_settings=None, metadata=None, access_condition=None,
                  timeout=None, extra_headers=None):
        _validate_not_none('container_name', container_name)
        _validate_not_none('blob_name', blob_name)
        request = HTTPRequest()
        request.method = 'PUT'
        request.host = self._get_host()
        request.path = _get_path(container_name, blob_name)
        request.query = [('timeout', _str_or_none(timeout))]
        request.headers = [
            ('x-ms-blob-type', _str_or_none(blob_type)),
            ('x-ms-meta-name-values', metadata),
        ]
        request.headers += _access_condition_headers(access_condition)
        if content_settings is not None:
            request.headers += content_settings.to_headers()
        if extra_headers:
            request.headers += extra_headers
        request.body = _get_request_body(blob)

        return self._perform_request(request, _parse_base_properties)

    def put_block(self, container_name, blob_name, block, block_id,
                  lease_id=None, timeout=None):
        '''
        Creates a new block to be committed as part of a blob.

        :param str container_name:
            Name of existing container.
        :param str blob_name:
            Name of blob.
        :param bytes block:
            Content of the block.
        :param str block_id:
            A valid Base64 string value that identifies the block. Prior to
            encoding, the string must be less than or equal to 64 bytes in size.
            For a given blob, the length of the value specified for the blockid
            parameter must be the same size for each block. Note that the Base64
            string must be URL-encoded.
        :param str lease_id:
            Required if the blob has an active lease.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('blob_name', blob_name)
        _validate_not_none('block', block)
        _validate_not_none('block_id', block_id)
        _validate_type_bytes('block', block)
        request = HTTPRequest()
        request.method = 'PUT'
        request.host = self._get_host()
        request.path = _get_path(container_name, blob_name)
        request.query = [
            ('comp', 'block'),
            ('blockid', _encode_base64(_str_or_none(block_id))),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = [('x-ms-lease-id', _str_or_none(lease_id))]
        request.body = _get_request_body(block)

        self._perform_request(request)

    def put_block_list(self, container_name, blob_name, block_list,
                       content_settings=None, metadata=None,
                       access_condition=None, timeout=None):
        '''
        Writes a blob by specifying the list of block IDs that make up the blob.
        In order to be written as part of a blob, a block must have been
        successfully written to the server in a prior Put Block operation.

        An empty block list creates (or truncates to) an empty block blob.

        :param str container_name:
            Name of existing container.
        :param str blob_name:
            Name of existing blob.
        :param block_list:
            A list of :class:`~cloudblob.blob.models.BlobBlock` or of
            block id strings, which are committed from the latest blocks.
        :type block_list: list(:class:`~cloudblob.blob.models.BlobBlock`)
        :param ~cloudblob.blob.models.ContentSettings content_settings:
            ContentSettings object used to set properties on the blob.
        :param metadata:
            Dict containing name and value pairs.
        :type metadata: dict(str, str)
        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return: ETag and last modified properties for the updated Block Blob
        :rtype: :class:`~cloudblob.blob.models.BlobProperties`
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('blob_name', blob_name)
        _validate_not_none('block_list', block_list)
        request = HTTPRequest()
        request.method = 'PUT'
        request.host = self._get_host()
        request.path = _get_path(container_name, blob_name)
        request.query = [
            ('comp', 'blocklist'),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = [('x-ms-meta-name-values', metadata)]
        request.headers += _access_condition_headers(access_condition)
        if content_settings is not None:
            request.headers += content_settings.to_headers()
        request.body = _get_request_body(
            _convert_block_list_to_xml(block_list))

        return self._perform_request(request, _parse_base_properties)

    def append_block(self, container_name, blob_name, block,
                     access_condition=None, timeout=None):
        '''
        Commits a new block of data to the end of an existing append blob.

        :param str container_name:
            Name of existing container.
        :param str blob_name:
            Name of existing blob.
        :param bytes block:
            Content of the block in bytes.
        :param ~cloudblob.models.AccessCondition access_condition:
            Conditions the blob must meet.
        :param int timeout:
            The timeout parameter is expressed in seconds.
        :return:
            ETag, last modified, append offset, and committed block count
            properties for the updated Append Blob
        :rtype: :class:`~cloudblob.blob.models.AppendBlockProperties`
        '''
        _validate_not_none('container_name', container_name)
        _validate_not_none('blob_name', blob_name)
        _validate_not_none('block', block)
        _validate_type_bytes('block', block)
        request = HTTPRequest()
        request.method = 'PUT'
        request.host = self._get_host()
        request.path = _get_path(container_name, blob_name)
        request.query = [
            ('comp', 'appendblock'),
            ('timeout', _str_or_none(timeout)),
        ]
        request.headers = _access_condition_headers(access_condition)
        request.body = _get_request_body(block)

        return self._perform_request(request, _parse_append_block)

    # Asynchronous forms
    begin_list_containers_segmented, list_containers_segmented_async = _async_variants(list_containers_segmented)
    begin_create_container, create_container_async = _async_variants(create_container)
    begin_get_container_properties, get_container_properties_async = _async_variants(get_container_properties)
    begin_get_container_metadata, get_container_metadata_async = _async_variants(get_container_metadata)
    begin_set_container_metadata, set_container_metadata_async = _async_variants(set_container_metadata)
    begin_get_container_acl, get_container_acl_async = _async_variants(get_container_acl)
    begin_set_container_acl, set_container_acl_async = _async_variants(set_container_acl)
    begin_delete_container, delete_container_async = _async_variants(delete_container)
    begin_acquire_container_lease, acquire_container_lease_async = _async_variants(acquire_container_lease)
    begin_renew_container_lease, renew_container_lease_async = _async_variants(renew_container_lease)
    begin_release_container_lease, release_container_lease_async = _async_variants(release_container_lease)
    begin_break_container_lease, break_container_lease_async = _async_variants(break_container_lease)
    begin_change_container_lease, change_container_lease_async = _async_variants(change_container_lease)
    begin_exists, exists_async = _async_variants(exists)
    begin_get_blob_reference_from_server, get_blob_reference_from_server_async = \
        _async_variants(get_blob_reference_from_server)
    begin_get_blob_properties, get_blob_properties_async = _async_variants(get_blob_properties)
    begin_set_blob_properties, set_blob_properties_async = _async_variants(set_blob_properties)
    begin_get_blob_metadata, get_blob_metadata_async = _async_variants(get_blob_metadata)
    begin_set_blob_metadata, set_blob_metadata_async = _async_variants(set_blob_metadata)
    begin_snapshot_blob, snapshot_blob_async = _async_variants(snapshot_blob)
    begin_delete_blob, delete_blob_async = _async_variants(delete_blob)
    begin_create_blob_from_bytes, create_blob_from_bytes_async = _async_variants(create_blob_from_bytes)
    begin_create_page_blob, create_page_blob_async = _async_variants(create_page_blob)
    begin_create_append_blob, create_append_blob_async = _async_variants(create_append_blob)
    begin_put_block, put_block_async = _async_variants(put_block)
    begin_put_block_list, put_block_list_async = _async_variants(put_block_list)
    begin_append_block, append_block_async = _async_variants(append_block)


def _validate_max_results(max_results):
    if max_results is not None and (max_results < 1 or max_results > _MAX_LIST_RESULTS):
        raise ValueError(_ERROR_MAX_RESULTS)
