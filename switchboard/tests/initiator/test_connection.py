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

import dataclasses

import ddt

from switchboard import exception
from switchboard import initiator
from switchboard.initiator import connection
from switchboard.tests import base


@ddt.ddt
class ConnectionTestCase(base.TestCase):

    def test_iscsi_request_protocol(self):
        request = connection.ISCSIConnectRequest(target_portal='ip:port',
                                                 target_iqn='iqn')
        self.assertEqual(initiator.ISCSI, request.protocol)
        self.assertIsInstance(request, connection.ConnectRequest)
        self.assertEqual(0, request.target_lun)
        self.assertFalse(request.use_chap)

    def test_iscsi_request_frozen(self):
        request = connection.ISCSIConnectRequest(target_portal='ip:port',
                                                 target_iqn='iqn')
        self.assertRaises(dataclasses.FrozenInstanceError,
                          setattr, request, 'target_lun', 1)

    def test_iscsi_request_repr_hides_password(self):
        request = connection.ISCSIConnectRequest(target_portal='ip:port',
                                                 target_iqn='iqn',
                                                 auth_method='CHAP',
                                                 auth_username='user',
                                                 auth_password='secret')
        self.assertNotIn('secret', repr(request))
        self.assertIn('user', repr(request))

    def test_from_properties(self):
        props = {'volume_id': 'vol_id',
                 'target_portal': '10.0.2.15:3260',
                 'target_iqn': 'iqn.2010-10.org.openstack:volume-1',
                 'target_lun': '3',
                 'auth_method': 'CHAP',
                 'auth_username': 'user',
                 'auth_password': 'secret'}
        request = connection.ISCSIConnectRequest.from_properties(props)
        self.assertEqual(
            connection.ISCSIConnectRequest(
                target_portal='10.0.2.15:3260',
                target_iqn='iqn.2010-10.org.openstack:volume-1',
                target_lun=3,
                auth_method='CHAP',
                auth_username='user',
                auth_password='secret'),
            request)
        self.assertTrue(request.use_chap)

    def test_from_properties_defaults(self):
        request = connection.ISCSIConnectRequest.from_properties(
            {'target_portal': 'ip:port', 'target_iqn': 'iqn'})
        self.assertEqual(0, request.target_lun)
        self.assertIsNone(request.auth_method)
        self.assertIsNone(request.auth_password)

    @ddt.data({'target_iqn': 'iqn'},
              {'target_portal': 'ip:port'},
              {'target_portal': '', 'target_iqn': 'iqn'})
    def test_from_properties_missing(self, props):
        self.assertRaises(exception.InvalidParameterValue,
                          connection.ISCSIConnectRequest.from_properties,
                          props)

    def test_from_properties_bad_lun(self):
        self.assertRaises(exception.InvalidParameterValue,
                          connection.ISCSIConnectRequest.from_properties,
                          {'target_portal': 'ip:port', 'target_iqn': 'iqn',
                           'target_lun': 'first'})

    def test_response_to_dict(self):
        response = connection.ConnectResponse(
            path='/dev/disk/by-path/ip-ip:port-iscsi-iqnlun-0',
            data=connection.ISCSIConnectResponse())
        self.assertEqual(
            {'type': 'block',
             'path': '/dev/disk/by-path/ip-ip:port-iscsi-iqnlun-0'},
            response.to_dict())

        response.multipath_device = '/dev/mapper/mpatha'
        response.block_device = '/dev/sdb'
        self.assertEqual(
            {'type': 'block',
             'path': '/dev/disk/by-path/ip-ip:port-iscsi-iqnlun-0',
             'multipath_device': '/dev/mapper/mpatha',
             'block_device': '/dev/sdb'},
            response.to_dict())
