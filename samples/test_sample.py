# -------------------------------------------------------------------------
# Copyright (c) Microsoft Corporation. All rights reserved.
# Licensed under the MIT License. See License.txt in the project root for
# license information.
# --------------------------------------------------------------------------
import unittest

from cloudblob.blob import BlobService
from samples.blob import ContainerSamples


@unittest.skip('Skip sample tests.')
class SampleTest(unittest.TestCase):
    def setUp(self):
        super(SampleTest, self).setUp()

        try:
            import samples.config as config
        except ImportError:
            raise ValueError('Please specify configuration settings in config.py.')

        if config.IS_EMULATED:
            self.service = BlobService(is_emulated=True)
        else:
            # Note that account key and sas should not both be included
            self.service = BlobService(account_name=config.STORAGE_ACCOUNT_NAME,
                                       account_key=config.STORAGE_ACCOUNT_KEY,
                                       sas_token=config.SAS)
        self.addCleanup(self.service.close)

    def test_container_samples(self):
        container = ContainerSamples(self.service)
        container.run_all_samples()


# ------------------------------------------------------------------------------
if __name__ == '__main__':
    unittest.main()
