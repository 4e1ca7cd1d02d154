# All Rights Reserved.
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


import abc

from switchboard import executor
from switchboard import initiator


class InitiatorConnector(executor.Executor, metaclass=abc.ABCMeta):

    # This object can be used on any platform
    platform = initiator.PLATFORM_ALL

    # This object can be used on any os type
    os_type = initiator.OS_TYPE_ALL

    # Transport handled by the connector, one of initiator.PROTOCOLS
    protocol: str

    def __init__(self, root_helper, execute=None,
                 device_scan_attempts=initiator.DEVICE_SCAN_ATTEMPTS_DEFAULT,
                 *args, **kwargs):
        super(InitiatorConnector, self).__init__(root_helper, execute=execute,
                                                 *args, **kwargs)
        self.device_scan_attempts = device_scan_attempts

    @staticmethod
    @abc.abstractmethod
    def get_connector_properties(root_helper, *args, **kwargs):
        """The generic connector properties."""
        pass

    @abc.abstractmethod
    def connect_volume(self, request):
        """Connect to a volume.

        The request describes the information needed by the specific
        protocol to make the connection, it is an instance of the
        ConnectRequest subclass for the connector's protocol.

        An example for iSCSI:

        ISCSIConnectRequest(target_portal='10.52.1.11:3260',
                            target_iqn='iqn.2000-05.com.3pardata:2081',
                            target_lun=0,
                            auth_method='CHAP',
                            auth_username='user',
                            auth_password='secret')

        :param request: The request that describes the target volume.
        :type request: switchboard.initiator.connection.ConnectRequest
        :returns: switchboard.initiator.connection.ConnectResponse
        """
        pass

    @abc.abstractmethod
    def get_volume_paths(self, request):
        """Return the list of existing paths for a volume.

        The job of this method is to find out what paths in
        the system are associated with a volume as described
        by the request.

        :param request: The request that describes the target volume.
        :type request: switchboard.initiator.connection.ConnectRequest
        """
        pass

    @abc.abstractmethod
    def get_search_path(self):
        """Return the directory where a Connector looks for volumes."""
        pass
