#    Licensed under the Apache License, Version 2.0 (the "License"); you may
#    not use this file except in compliance with the License. You may obtain
#    a copy of the License at
#
#         http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
#    WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
#    License for the specific language governing permissions and limitations
#    under the License.

from switchboard import exception
from switchboard.tests import base


class SwitchboardExceptionTestCase(base.TestCase):
    def test_default_error_msg(self):
        class FakeException(exception.SwitchboardException):
            message = "default message"

        exc = FakeException()
        self.assertEqual('default message', str(exc))

    def test_error_msg(self):
        self.assertEqual('test',
                         str(exception.SwitchboardException('test')))

    def test_default_error_msg_with_kwargs(self):
        class FakeException(exception.SwitchboardException):
            message = "default message: %(code)s"

        exc = FakeException(code=500)
        self.assertEqual('default message: 500', str(exc))

    def test_error_msg_exception_with_kwargs(self):
        class FakeException(exception.SwitchboardException):
            message = "default message: %(misspelled_code)s"

        exc = FakeException(code=500)
        self.assertEqual('default message: %(misspelled_code)s', str(exc))

    def test_block_device_not_found(self):
        exc = exception.BlockDeviceNotFound(target='iqn.test:disk1')
        self.assertEqual('Unable to find lsscsi output for: iqn.test:disk1',
                         str(exc))
        self.assertIsInstance(exc, exception.NotFound)
        self.assertEqual(404, exc.kwargs['code'])

    def test_invalid_connector_protocol(self):
        self.assertTrue(issubclass(exception.InvalidConnectorProtocol,
                                   ValueError))
