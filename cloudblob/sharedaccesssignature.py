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
from datetime import date
from urllib.parse import quote as url_quote

from ._common_conversion import (
    _sign_string,
    _to_utc_datetime,
)
from ._constants import X_MS_VERSION


class ResourceType(object):
    RESOURCE_BLOB = 'b'
    RESOURCE_CONTAINER = 'c'


class QueryStringConstants(object):
    SIGNED_SIGNATURE = 'sig'
    SIGNED_PERMISSION = 'sp'
    SIGNED_START = 'st'
    SIGNED_EXPIRY = 'se'
    SIGNED_RESOURCE = 'sr'
    SIGNED_IDENTIFIER = 'si'
    SIGNED_IP = 'sip'
    SIGNED_PROTOCOL = 'spr'
    SIGNED_VERSION = 'sv'
    SIGNED_CACHE_CONTROL = 'rscc'
    SIGNED_CONTENT_DISPOSITION = 'rscd'
    SIGNED_CONTENT_ENCODING = 'rsce'
    SIGNED_CONTENT_LANGUAGE = 'rscl'
    SIGNED_CONTENT_TYPE = 'rsct'


class BlobSharedAccessSignature(object):

    '''
    Provides a factory for creating blob and container access
    signature tokens with an account name and account key. Users can either
    use the factory or can construct the appropriate service and use the
    generate_*_shared_access_signature method directly.
    '''

    def __init__(self, account_name, account_key):
        '''
        :param str account_name:
            The storage account name used to generate the shared access signatures.
        :param str account_key:
            The access key to generate the shares access signatures.
        '''
        self.account_name = account_name
        self.account_key = account_key

    def generate_blob(self, container_name, blob_name, permission=None,
                      expiry=None, start=None, id=None, ip=None, protocol=None,
                      cache_control=None, content_disposition=None,
                      content_encoding=None, content_language=None,
                      content_type=None):
        '''
        Generates a shared access signature for the blob.
        Use the returned signature with the sas_token parameter of any BlobService.

        :param str container_name:
            Name of container.
        :param str blob_name:
            Name of blob.
        :param BlobPermissions permission:
            The permissions associated with the shared access signature. The
            user is restricted to operations allowed by the permissions.
            Permissions must be ordered read, add, create, write, delete.
            Required unless an id is given referencing a stored access policy
            which contains this field. This field must be omitted if it has been
            specified in an associated stored access policy.
        :param expiry:
            The time at which the shared access signature becomes invalid.
            Required unless an id is given referencing a stored access policy
            which contains this field. This field must be omitted if it has
            been specified in an associated stored access policy. Azure will always
            convert values to UTC. If a date is passed in without timezone info, it
            is assumed to be UTC.
        :type expiry: datetime or str
        :param start:
            The time at which the shared access signature becomes valid. If
            omitted, start time for this call is assumed to be the time when the
            storage service receives the request. Azure will always convert values
            to UTC. If a date is passed in without timezone info, it is assumed to
            be UTC.
        :type start: datetime or str
        :param str id:
            A unique value up to 64 characters in length that correlates to a
            stored access policy. To create a stored access policy, use
            set_container_acl.
        :param str ip:
            Specifies an IP address or a range of IP addresses from which to accept requests.
        :param str protocol:
            Specifies the protocol permitted for a request made. Possible values are
            both HTTPS and HTTP (https,http) or HTTPS only (https).
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
        resource_path = container_name + '/' + blob_name
        return self._generate(resource_path, ResourceType.RESOURCE_BLOB, permission,
                              expiry, start, id, ip, protocol, cache_control,
                              content_disposition, content_encoding,
                              content_language, content_type)

    def generate_container(self, container_name, permission=None, expiry=None,
                           start=None, id=None, ip=None, protocol=None,
                           cache_control=None, content_disposition=None,
                           content_encoding=None, content_language=None,
                           content_type=None):
        '''
        Generates a shared access signature for the container.
        Use the returned signature with the sas_token parameter of any BlobService.

        Takes the same parameters as :meth:`generate_blob`, with a
        :class:`~cloudblob.blob.models.ContainerPermissions` permission
        (read, write, delete, list).

        :return: A Shared Access Signature (sas) token.
        :rtype: str
        '''
        return self._generate(container_name, ResourceType.RESOURCE_CONTAINER, permission,
                              expiry, start, id, ip, protocol, cache_control,
                              content_disposition, content_encoding,
                              content_language, content_type)

    def _generate(self, path, resource_type, permission, expiry, start, id, ip,
                  protocol, cache_control, content_disposition,
                  content_encoding, content_language, content_type):
        query_dict = {}

        def add_query(name, val):
            if val:
                query_dict[name] = str(val)

        if isinstance(start, date):
            start = _to_utc_datetime(start)

        if isinstance(expiry, date):
            expiry = _to_utc_datetime(expiry)

        if permission is not None:
            permission = str(permission)

        add_query(QueryStringConstants.SIGNED_START, start)
        add_query(QueryStringConstants.SIGNED_EXPIRY, expiry)
        add_query(QueryStringConstants.SIGNED_PERMISSION, permission)
        add_query(QueryStringConstants.SIGNED_IDENTIFIER, id)
        add_query(QueryStringConstants.SIGNED_IP, ip)
        add_query(QueryStringConstants.SIGNED_PROTOCOL, protocol)
        add_query(QueryStringConstants.SIGNED_VERSION, X_MS_VERSION)
        add_query(QueryStringConstants.SIGNED_RESOURCE, resource_type)
        add_query(QueryStringConstants.SIGNED_CACHE_CONTROL, cache_control)
        add_query(QueryStringConstants.SIGNED_CONTENT_DISPOSITION, content_disposition)
        add_query(QueryStringConstants.SIGNED_CONTENT_ENCODING, content_encoding)
        add_query(QueryStringConstants.SIGNED_CONTENT_LANGUAGE, content_language)
        add_query(QueryStringConstants.SIGNED_CONTENT_TYPE, content_type)

        query_dict[QueryStringConstants.SIGNED_SIGNATURE] = self._generate_signature(
            path, permission, expiry, start, id, ip, protocol, cache_control,
            content_disposition, content_encoding, content_language, content_type)

        return '&'.join(['{0}={1}'.format(n, url_quote(v, safe=''))
                         for n, v in query_dict.items() if v is not None])

    def _generate_signature(self, path, permission, expiry, start, id, ip, protocol,
                            cache_control, content_disposition, content_encoding,
                            content_language, content_type):
        ''' Generates signature for a given path and shared access policy. '''

        def get_value_to_append(value):
            return_value = value or ''
            return return_value + '\n'

        if path[0] != '/':
            path = '/' + path

        canonicalized_resource = '/blob/' + self.account_name + path

        # The order of values is important.
        string_to_sign = \
            (get_value_to_append(permission) +
             get_value_to_append(start) +
             get_value_to_append(expiry) +
             get_value_to_append(canonicalized_resource) +
             get_value_to_append(id) +
             get_value_to_append(ip) +
             get_value_to_append(protocol) +
             get_value_to_append(X_MS_VERSION) +
             get_value_to_append(cache_control) +
             get_value_to_append(content_disposition) +
             get_value_to_append(content_encoding) +
             get_value_to_append(content_language) +
             get_value_to_append(content_type))

        if string_to_sign[-1] == '\n':
            string_to_sign = string_to_sign[:-1]

        return _sign_string(self.account_key, string_to_sign)
