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
from ._common_conversion import (
    _datetime_to_utc_string,
    _str_or_none,
)


class _list(list):
    '''Used so that a continuation token can be set on the return object'''
    pass


class _dict(dict):
    '''Used so that additional properties can be set on the return dictionary'''
    pass


class ListGenerator(object):
    '''
    A generator object used to list storage resources. The generator will lazily
    follow the continuation tokens returned by the service and stop when all
    resources have been returned or max_results is reached.

    If max_results is specified and the account has more than that number of
    resources, the generator will have a populated next_marker field once it
    finishes. This marker can be used to create a new generator if more
    results are desired.
    '''

    def __init__(self, resources, list_method, list_args, list_kwargs):
        self.items = resources
        self.next_marker = resources.next_marker

        self._list_method = list_method
        self._list_args = list_args
        self._list_kwargs = list_kwargs

    def __iter__(self):
        # return results
        for i in self.items:
            yield i

        while True:
            # if no more results on the service, return
            if not self.next_marker:
                break

            # update the marker args
            self._list_kwargs['marker'] = self.next_marker

            # handle max results, if present
            max_results = self._list_kwargs.get('max_results')
            if max_results is not None:
                max_results = max_results - len(self.items)

                # if we've reached max_results, return
                # else, update the max_results arg
                if max_results <= 0:
                    break
                else:
                    self._list_kwargs['max_results'] = max_results

            # get the next segment
            resources = self._list_method(*self._list_args, **self._list_kwargs)
            self.items = resources
            self.next_marker = resources.next_marker

            # return results
            for i in self.items:
                yield i


class AccessPolicy(object):

    '''
    Access Policy class used by the set and get acl methods of the container.

    A stored access policy can specify the start time, expiry time, and
    permissions for the Shared Access Signatures with which it's associated.
    Depending on how you want to control access to your resource, you can
    specify all of these parameters within the stored access policy, and omit
    them from the URL for the Shared Access Signature. Doing so permits you to
    modify the associated signature's behavior at any time, as well as to revoke
    it. Or you can specify one or more of the access policy parameters within
    the stored access policy, and the others on the URL. Finally, you can
    specify all of the parameters on the URL. In this case, you can use the
    stored access policy to revoke the signature, but not to modify its behavior.

    Together the Shared Access Signature and the stored access policy must
    include all fields required to authenticate the signature. If any required
    fields are missing, the request will fail. Likewise, if a field is specified
    both in the Shared Access Signature URL and in the stored access policy, the
    request will fail with status code 400 (Bad Request).

    :param str permission:
        The permissions associated with the shared access signature. The
        user is restricted to operations allowed by the permissions.
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
    '''

    def __init__(self, permission=None, expiry=None, start=None):
        self.start = start
        self.expiry = expiry
        self.permission = permission


class AccessCondition(object):

    '''
    Preconditions evaluated by the service before it applies a request. A
    request whose conditions are not met fails with status 412 (or 304 for
    reads) and the error code ConditionNotMet.

    :param str if_match:
        An ETag value, or the wildcard character (*). The operation only
        proceeds if the resource's ETag matches the value specified.
    :param str if_none_match:
        An ETag value, or the wildcard character (*). The operation only
        proceeds if the resource's ETag does not match the value specified.
    :param datetime if_modified_since:
        The operation only proceeds if the resource has been modified since
        the specified time. A datetime without timezone info is taken as UTC.
    :param datetime if_unmodified_since:
        The operation only proceeds if the resource has not been modified
        since the specified time.
    :param str lease_id:
        The operation only proceeds if the resource's lease is active and
        matches this ID.
    '''

    def __init__(self, if_match=None, if_none_match=None, if_modified_since=None,
                 if_unmodified_since=None, lease_id=None):
        self.if_match = if_match
        self.if_none_match = if_none_match
        self.if_modified_since = if_modified_since
        self.if_unmodified_since = if_unmodified_since
        self.lease_id = lease_id

    @staticmethod
    def generate_if_match_condition(etag):
        return AccessCondition(if_match=etag)

    @staticmethod
    def generate_if_none_match_condition(etag):
        return AccessCondition(if_none_match=etag)

    @staticmethod
    def generate_if_modified_since_condition(modified_time):
        return AccessCondition(if_modified_since=modified_time)

    @staticmethod
    def generate_if_not_modified_since_condition(modified_time):
        return AccessCondition(if_unmodified_since=modified_time)

    @staticmethod
    def generate_lease_condition(lease_id):
        return AccessCondition(lease_id=lease_id)

    def to_headers(self):
        return [
            ('If-Match', _str_or_none(self.if_match)),
            ('If-None-Match', _str_or_none(self.if_none_match)),
            ('If-Modified-Since', _datetime_to_utc_string(self.if_modified_since)),
            ('If-Unmodified-Since', _datetime_to_utc_string(self.if_unmodified_since)),
            ('x-ms-lease-id', _str_or_none(self.lease_id)),
        ]


def _access_condition_headers(access_condition, etag_conditions=True):
    '''
    Returns the headers for an optional AccessCondition. Container requests
    do not accept the ETag conditions, so those are rejected up front.
    '''
    if access_condition is None:
        return []

    if not etag_conditions and (access_condition.if_match or access_condition.if_none_match):
        raise ValueError('ETag conditions are not supported on this operation.')

    return access_condition.to_headers()


class RetryContext(object):
    '''
    Passed to the retry policy after a failed attempt. The policy inspects
    the response (or the exception when no response was received) and the
    number of retries performed so far.

    :ivar HTTPRequest request:
        The request of the attempt that failed.
    :ivar HTTPResponse response:
        The response received, or None when the request failed in transport.
    :ivar Exception exception:
        The transport error, if any.
    :ivar int count:
        The number of retries already performed.
    '''

    def __init__(self):
        self.request = None
        self.response = None
        self.exception = None
        self.count = 0
