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
import random
from abc import ABCMeta


class _Retry(metaclass=ABCMeta):
    '''
    The base class for Exponential and Linear retries containing shared code.
    '''

    def __init__(self, max_attempts):
        '''
        Constructs a base retry object.

        :param int max_attempts:
            The maximum number of retry attempts.
        '''
        self.max_attempts = max_attempts

    def _should_retry(self, context):
        '''
        A function which determines whether or not to retry.

        :param ~cloudblob.models.RetryContext context:
            The retry context. This contains the request, response, and other data
            which can be used to determine whether or not to retry.
        :return:
            A boolean indicating whether or not to retry the request.
        :rtype: bool
        '''
        # If max attempts are reached, do not retry.
        if context.count >= self.max_attempts:
            return False

        status = None
        if context.response and context.response.status:
            status = context.response.status

        if status is None:
            '''
            If status is None, retry as this request triggered an exception. For
            example, network issues would trigger this.
            '''
            return True
        elif 200 <= status < 300:
            return False
        elif 300 <= status < 500:
            # Retry on request timeout only; other 3xx/4xx mean the request
            # itself is wrong or a precondition failed.
            return status == 408
        elif status >= 500:
            '''
            Response codes above 500 with the exception of 501 Not Implemented and
            505 Version Not Supported indicate a server issue and should be retried.
            '''
            if status == 501 or status == 505:
                return False
            return True
        else:
            # If something else happened, it's unexpected. Retry.
            return True

    def _retry(self, context, backoff):
        '''
        A function which determines whether and how to retry.

        :param ~cloudblob.models.RetryContext context:
            The retry context.
        :param int backoff:
            The number of seconds to wait before retrying.
        :return:
            An integer indicating how long to wait before retrying the request,
            or None to indicate no retry should be performed.
        :rtype: int or None
        '''
        if not self._should_retry(context):
            return None

        context.count += 1
        return backoff


class ExponentialRetry(_Retry):
    '''
    Exponential retry.
    '''

    def __init__(self, initial_backoff=15, increment_power=3, max_attempts=3, random_jitter_range=3):
        '''
        Constructs an Exponential retry object. The initial_backoff is used for
        the first retry. Subsequent retries are retried after initial_backoff +
        increment_power^retry_count seconds. For example, by default the first retry
        occurs after 15 seconds, the second after (15+3^1) = 18 seconds, and the
        third after (15+3^2) = 24 seconds.

        :param int initial_backoff:
            The initial backoff interval, in seconds, for the first retry.
        :param int increment_power:
            The base, in seconds, to increment the initial_backoff by after the
            first retry.
        :param int max_attempts:
            The maximum number of retry attempts.
        :param int random_jitter_range:
            A number in seconds which indicates a range to jitter/randomize for the back-off interval.
            For example, a random_jitter_range of 3 results in the back-off interval x to vary between x+3 and x-3.
        '''
        self.initial_backoff = initial_backoff
        self.increment_power = increment_power
        self.random_jitter_range = random_jitter_range
        super(ExponentialRetry, self).__init__(max_attempts)

    def retry(self, context):
        '''
        :param ~cloudblob.models.RetryContext context:
            The retry context.
        :return:
            An integer indicating how long to wait before retrying the request,
            or None to indicate no retry should be performed.
        :rtype: int or None
        '''
        return self._retry(context, self._backoff(context))

    def _backoff(self, context):
        # the first retry uses the initial backoff; later ones add increment_power^count
        backoff = self.initial_backoff + (0 if context.count == 0 else pow(self.increment_power, context.count))

        # jitter is kept at or above zero
        random_range_start = backoff - self.random_jitter_range if backoff > self.random_jitter_range else 0
        random_range_end = backoff + self.random_jitter_range
        return random.uniform(random_range_start, random_range_end)


class LinearRetry(_Retry):
    '''
    Linear retry.
    '''

    def __init__(self, backoff=15, max_attempts=3, random_jitter_range=3):
        '''
        Constructs a Linear retry object.

        :param int backoff:
            The backoff interval, in seconds, between retries.
        :param int max_attempts:
            The maximum number of retry attempts.
        :param int random_jitter_range:
            A number in seconds which indicates a range to jitter/randomize for the back-off interval.
        '''
        self.backoff = backoff
        self.random_jitter_range = random_jitter_range
        super(LinearRetry, self).__init__(max_attempts)

    def retry(self, context):
        '''
        :param ~cloudblob.models.RetryContext context:
            The retry context.
        :return:
            An integer indicating how long to wait before retrying the request,
            or None to indicate no retry should be performed.
        :rtype: int or None
        '''
        return self._retry(context, self._backoff(context))

    def _backoff(self, context):
        random_range_start = self.backoff - self.random_jitter_range \
            if self.backoff > self.random_jitter_range else 0
        random_range_end = self.backoff + self.random_jitter_range
        return random.uniform(random_range_start, random_range_end)


def no_retry(context):
    '''
    Specifies never to retry.

    :param ~cloudblob.models.RetryContext context:
        The retry context.
    :return:
        Always returns None to indicate never to retry.
    :rtype: None
    '''
    return None
