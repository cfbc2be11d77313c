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
import platform

__author__ = 'Microsoft Corp. <ptvshelp@microsoft.com>'
__version__ = '0.1.0'

# x-ms-version for storage service.
X_MS_VERSION = '2017-07-29'

# UserAgent string sample: 'cloudblob/0.1.0 (Python CPython 3.11.4; Linux 6.1)'
_USER_AGENT_STRING = 'cloudblob/{} (Python {} {}; {} {})'.format(
    __version__,
    platform.python_implementation(),
    platform.python_version(),
    platform.system(),
    platform.release(),
)

# Default values for the storage endpoints
DEFAULT_PROTOCOL = 'https'
SERVICE_HOST_BASE = 'core.windows.net'

# Development storage (emulator) settings
DEV_ACCOUNT_NAME = 'devstoreaccount1'
DEV_ACCOUNT_KEY = 'Eby8vdM02xNOcqFlqUwJPLlmEtlCDXJ1OUzFT50uSRZ6IFsuFq2UVErCz4I6tq/K1SZFPTOtr/KBHBeksoGMGw=='
DEV_BLOB_HOST = '127.0.0.1:10000'

# Socket timeout in seconds
DEFAULT_SOCKET_TIMEOUT = 20

# Threads used by the begin_* and *_async operations of a service
DEFAULT_MAX_CONNECTIONS = 4

# Service limits the client checks before sending
_MAX_SIGNED_IDENTIFIERS = 5
_MAX_LIST_RESULTS = 5000
