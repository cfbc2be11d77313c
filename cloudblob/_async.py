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
import asyncio
import functools


def _async_variants(operation):
    '''
    Builds the two asynchronous forms of a synchronous operation:

    * ``begin_<op>(..., callback=None)`` submits the operation to the owner's
      thread pool and returns a :class:`concurrent.futures.Future`. The
      callback, if given, is called with the future once it completes.
      ``future.result()`` returns the operation's result or raises the
      exception the operation raised.
    * ``<op>_async(...)`` is a coroutine running the same submission on the
      owner's thread pool.

    The owner is the first positional argument and must provide
    ``_get_executor()``. Usage, in a class body::

        begin_create, create_async = _async_variants(create)
    '''
    name = operation.__name__

    def begin(self, *args, callback=None, **kwargs):
        future = self._get_executor().submit(operation, self, *args, **kwargs)
        if callback is not None:
            future.add_done_callback(callback)
        return future

    async def run_async(self, *args, **kwargs):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._get_executor(),
            functools.partial(operation, self, *args, **kwargs))

    begin.__name__ = 'begin_' + name
    begin.__qualname__ = operation.__qualname__.rsplit('.', 1)[0] + '.' + begin.__name__
    begin.__doc__ = 'Begins :meth:`{0}` and returns a concurrent.futures.Future ' \
                    'for its result. Accepts an optional callback(future).'.format(name)

    run_async.__name__ = name + '_async'
    run_async.__qualname__ = operation.__qualname__.rsplit('.', 1)[0] + '.' + run_async.__name__
    run_async.__doc__ = 'Awaitable form of :meth:`{0}`.'.format(name)

    return begin, run_async
