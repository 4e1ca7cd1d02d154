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


from oslo_log import log as logging

from switchboard import initiator
from switchboard.initiator import initiator_connector
from switchboard.initiator import linuxscsi

LOG = logging.getLogger(__name__)


class BaseLinuxConnector(initiator_connector.InitiatorConnector):
    os_type = initiator.OS_TYPE_LINUX

    def __init__(self, root_helper: str, execute=None, log=None,
                 *args, **kwargs):
        self._log = log or LOG
        self._linuxscsi = linuxscsi.LinuxSCSI(root_helper, execute=execute,
                                              log=log)

        super(BaseLinuxConnector, self).__init__(root_helper, execute=execute,
                                                 *args, **kwargs)

    def set_execute(self, execute):
        super(BaseLinuxConnector, self).set_execute(execute)
        self._linuxscsi.set_execute(execute)

    def wait_for_path_to_exist(self, path: str, max_retries: int) -> bool:
        return self._linuxscsi.wait_for_path_to_exist(path, max_retries)

    def get_blk_device(self, target: str) -> str:
        """Find the block device, or multipath device, of a SCSI target."""
        return self._linuxscsi.get_blk_device(target)
