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

from azure.common import (
    AzureHttpError,
    AzureConflictHttpError,
    AzureMissingResourceHttpError,
    AzureException,
)
from ._constants import (
    _MAX_SIGNED_IDENTIFIERS,
    _MAX_LIST_RESULTS,
)

_ERROR_STORAGE_MISSING_INFO = \
    'You need to provide an account name and either an account_key or sas_token when creating a storage service.'
_ERROR_CONNECTION_STRING_INVALID = \
    'Connection string is either blank or malformed.'
_ERROR_VALUE_NONE = '{0} should not be None.'
_ERROR_VALUE_SHOULD_BE_BYTES = '{0} should be of type bytes.'
_ERROR_TOO_MANY_ACCESS_POLICIES = \
    'Too many access policies provided. The server does not support setting more than ' \
    + str(_MAX_SIGNED_IDENTIFIERS) + ' access policies on a single resource.'
_ERROR_INVALID_BLOB_URI = \
    'The uri {0} does not address a blob; expected a path of the form /<container>/<blob>.'
_ERROR_BLOB_URI_ENDPOINT = \
    'The uri {0} does not address this service; expected a blob under {1}.'
_ERROR_UNKNOWN_BLOB_TYPE = 'The service returned an unsupported blob type: {0}.'
_ERROR_BLOB_TYPE_MISMATCH = \
    'The blob reference is a {0} but the service returned a {1}.'
_ERROR_LEASE_DURATION = 'lease_duration param needs to be between 15 and 60 or -1.'
_ERROR_LEASE_BREAK_PERIOD = 'lease_break_period param needs to be between 0 and 60.'
_ERROR_PAGE_BLOB_SIZE_ALIGNMENT = 'Invalid page blob size: {0}. The size must be aligned to a 512-byte boundary.'
_ERROR_MAX_RESULTS = 'max_results should be between 1 and {0}.'.format(_MAX_LIST_RESULTS)
_ERROR_SNAPSHOT_READ_ONLY = 'Cannot perform this operation on a blob snapshot.'


def _dont_fail_on_exist(error):
    ''' don't throw exception if the resource exists.
    This is called by create_* APIs with fail_on_exist=False'''
    if isinstance(error, AzureConflictHttpError):
        return False
    else:
        raise error


def _dont_fail_not_exist(error):
    ''' don't throw exception if the resource doesn't exist.
    This is called by create_* APIs with fail_on_exist=False'''
    if isinstance(error, AzureMissingResourceHttpError):
        return False
    else:
        raise error


def _parse_error_code(http_error):
    '''
    Storage puts the error code in the x-ms-error-code header and, for most
    requests other than HEAD, in the <Code> element of the error body.
    '''
    error_code = http_error.respheader.get('x-ms-error-code')
    if error_code or not http_error.respbody:
        return error_code

    try:
        return ETree.fromstring(http_error.respbody).findtext('Code')
    except ETree.ParseError:
        return None


def _http_error_handler(http_error):
    ''' Simple error handler for azure.'''
    message = str(http_error)
    if http_error.respbody is not None:
        message += '\n' + http_error.respbody.decode('utf-8-sig', 'replace')

    ex = AzureHttpError(message, http_error.status)
    ex.error_code = _parse_error_code(http_error)
    raise ex


def _wrap_exception(ex, desired_type):
    msg = ''
    if len(ex.args) > 0:
        msg = ex.args[0]
    return desired_type('{}: {}'.format(ex.__class__.__name__, msg))


def _validate_not_none(param_name, param):
    if param is None:
        raise ValueError(_ERROR_VALUE_NONE.format(param_name))


def _validate_type_bytes(param_name, param):
    if not isinstance(param, bytes):
        raise TypeError(_ERROR_VALUE_SHOULD_BE_BYTES.format(param_name))


def _validate_access_policies(identifiers):
    if identifiers and len(identifiers) > _MAX_SIGNED_IDENTIFIERS:
        raise AzureException(_ERROR_TOO_MANY_ACCESS_POLICIES)
