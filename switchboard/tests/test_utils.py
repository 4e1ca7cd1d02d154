# (c) Copyright 2015 Hewlett-Packard Development Company, L.P.
#
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

from unittest import mock

import ddt

from switchboard.tests import base
from switchboard import utils


@ddt.ddt
class PollUntilTrueTestCase(base.TestCase):

    @ddt.data(0, -3)
    def test_no_attempts(self, attempts):
        func = mock.Mock(return_value=True)
        self.assertFalse(utils.poll_until_true(func, attempts, 2))
        func.assert_not_called()

    def test_first_attempt(self):
        func = mock.Mock(return_value=True)
        self.assertTrue(utils.poll_until_true(func, 3, 2))
        func.assert_called_once_with()
        self.mock_sleep.assert_not_called()

    def test_exhausted(self):
        func = mock.Mock(return_value=False)
        self.assertFalse(utils.poll_until_true(func, 4, 2))
        self.assertEqual(4, func.call_count)
        self.mock_sleep.assert_has_calls([mock.call(2)] * 3)
        self.assertEqual(3, self.mock_sleep.call_count)

    def test_injected_log(self):
        log = mock.Mock()
        func = mock.Mock(side_effect=(False, True))
        self.assertTrue(utils.poll_until_true(func, 2, 1, log=log))
        log.log.assert_called_once()


class TraceTestCase(base.TestCase):

    def test_trace_uses_component_log(self):
        class Component(object):
            def __init__(self):
                self._log = mock.Mock()

            @utils.trace
            def work(self, password):
                return 'done'

        component = Component()
        self.assertEqual('done', component.work('secret'))
        self.assertEqual(2, component._log.debug.call_count)
        for call in component._log.debug.mock_calls:
            self.assertNotIn('secret', str(call))

    def test_trace_exception(self):
        class Component(object):
            def __init__(self):
                self._log = mock.Mock()

            @utils.trace
            def work(self):
                raise ValueError()

        component = Component()
        self.assertRaises(ValueError, component.work)
        self.assertIn('exception',
                      component._log.debug.call_args_list[-1][0][0])

    def test_trace_debug_disabled(self):
        class Component(object):
            def __init__(self):
                self._log = mock.Mock()
                self._log.isEnabledFor.return_value = False

            @utils.trace
            def work(self):
                return 1

        component = Component()
        self.assertEqual(1, component.work())
        component._log.debug.assert_not_called()


@ddt.ddt
class MatchesTestCase(base.TestCase):

    @ddt.data(('x86_64', 'ALL', True), ('s390x', 'S390X', True),
              ('x86_64', 's390x', False))
    @ddt.unpack
    def test_platform_matches(self, current, connector, expected):
        self.assertEqual(expected,
                         utils.platform_matches(current, connector))

    @ddt.data(('linux', 'ALL', True), ('linux2', 'LINUX', True),
              ('win32', 'LINUX', False))
    @ddt.unpack
    def test_os_matches(self, current, connector, expected):
        self.assertEqual(expected, utils.os_matches(current, connector))

    def test_merge_dict(self):
        self.assertEqual({'a': 1, 'b': 3},
                         utils.merge_dict({'a': 1, 'b': 2}, {'b': 3}))

    def test_merge_dict_not_dict(self):
        self.assertRaises(Exception, utils.merge_dict, [], {})
