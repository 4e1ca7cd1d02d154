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


from typing import List, Optional  # noqa: H301

from oslo_concurrency import processutils as putils
from oslo_config import cfg
from oslo_log import log as logging

from switchboard import exception
from switchboard import executor
from switchboard import initiator
from switchboard.initiator import connection
from switchboard.initiator.connectors import base
from switchboard.initiator import linuxiscsi
from switchboard import opts  # noqa: F401
from switchboard import utils

LOG = logging.getLogger(__name__)
CONF = cfg.CONF

INITIATOR_FILE = '/etc/iscsi/initiatorname.iscsi'
INITIATOR_KEY = 'InitiatorName='


def parse_initiator_names(contents: str) -> List[str]:
    """Get the initiator IQNs from an initiatorname.iscsi file.

    Only ``InitiatorName=<iqn>`` lines count, duplicates are dropped and the
    file order is kept.  No such line gives an empty list.
    """
    iqns: List[str] = []
    for line in (contents or '').split('\n'):
        line = line.strip()
        if line.startswith(INITIATOR_KEY):
            iqn = line[line.index('=') + 1:].strip()
            if iqn and iqn not in iqns:
                iqns.append(iqn)
    return iqns


class InitiatorFile(executor.Executor):
    """Reads the host's initiator names, nothing else is probed."""

    def __init__(self, root_helper, execute=None, log=None,
                 path=INITIATOR_FILE, *args, **kwargs):
        super(InitiatorFile, self).__init__(root_helper, execute=execute,
                                            *args, **kwargs)
        self._log = log or LOG
        self.path = path

    def read(self) -> List[str]:
        """Secure helper to read the initiator names file as root."""
        try:
            contents, _err = self._root_execute('cat', self.path)
        except putils.ProcessExecutionError:
            self._log.warning("Could not find the iSCSI Initiator File %s",
                              self.path)
            return []
        return parse_initiator_names(contents)


class ISCSIConnector(base.BaseLinuxConnector):
    """Connector class to attach iSCSI volumes.

    The connector doesn't serialize connect_volume calls.  Calls for
    different targets don't share anything, but calls for the same target
    race on iscsiadm's node record, so callers must serialize those.
    """

    protocol = initiator.ISCSI

    def __init__(
            self, root_helper: str, execute=None,
            device_scan_attempts: int = initiator.DEVICE_SCAN_ATTEMPTS_DEFAULT,
            iface: Optional[str] = None, log=None, *args, **kwargs):
        log = log or LOG
        self._initiator_file = InitiatorFile(root_helper, execute=execute,
                                             log=log)
        self._linuxiscsi = linuxiscsi.LinuxISCSI(root_helper,
                                                 execute=execute, log=log)
        super(ISCSIConnector, self).__init__(
            root_helper, execute=execute, log=log,
            device_scan_attempts=device_scan_attempts,
            *args, **kwargs)  # type: ignore
        iface = iface or CONF.switchboard.iscsi_iface

        initiator_iqns = self.get_initiators()
        host_name = self.get_host_name()
        self._check_iface(iface)

        self.config = connection.ISCSIConnectorConfig(
            initiator_iqns=tuple(initiator_iqns),
            iface=iface,
            host_name=host_name)

    @staticmethod
    def get_connector_properties(root_helper: str, *args, **kwargs) -> dict:
        """The iSCSI connector properties."""
        props = {}
        initiators = InitiatorFile(root_helper,
                                   execute=kwargs.get('execute')).read()
        if initiators:
            props['initiator'] = initiators[0]
            props['initiators'] = initiators

        return props

    def set_execute(self, execute):
        super(ISCSIConnector, self).set_execute(execute)
        self._initiator_file.set_execute(execute)
        self._linuxiscsi.set_execute(execute)

    def get_search_path(self) -> str:
        """Where do we look for iSCSI based volumes."""
        return '/dev/disk/by-path'

    def get_initiators(self) -> List[str]:
        return self._initiator_file.read()

    def get_host_name(self) -> str:
        out, _err = self._execute('hostname')
        return (out or '').strip()

    def _check_iface(self, iface: str) -> None:
        try:
            out, _err = self._linuxiscsi.show_iface(iface)
        except putils.ProcessExecutionError as exc:
            reason = exc.stdout or exc.stderr or exc.description
            self._log.error('iscsi unable to read from interface %(iface)s, '
                            'error: %(reason)s',
                            {'iface': iface, 'reason': reason})
            raise exception.ISCSIInterfaceNotAvailable(
                iface=iface, reason=reason) from exc
        self._log.debug("iscsiadm %(iface)s configuration: stdout=%(out)s.",
                        {'iface': iface, 'out': out})

    def get_device_path(self,
                        request: connection.ISCSIConnectRequest) -> str:
        return ('%(search)s/ip-%(portal)s-iscsi-%(iqn)slun-%(lun)s' %
                {'search': self.get_search_path(),
                 'portal': request.target_portal,
                 'iqn': request.target_iqn,
                 'lun': request.target_lun})

    def get_volume_paths(self,
                         request: connection.ISCSIConnectRequest) -> list:
        """Get the list of existing paths for a volume.

        Only reports what already exists, no session is created.
        """
        path = self.get_device_path(request)
        if self.wait_for_path_to_exist(path, 1):
            return [path]
        return []

    @utils.trace
    def connect_volume(self, request: connection.ISCSIConnectRequest
                       ) -> connection.ConnectResponse:
        """Attach the volume described by the request to this host.

        The already attached check polls the device path with zero retries,
        which never probes, so the login always runs: a node record is
        created for the target on the connector's interface, CHAP
        credentials are stored when the auth method is CHAP, and we log in.

        :param request: The iSCSI volume to connect.
        :type request: switchboard.initiator.connection.ISCSIConnectRequest
        :raises ISCSILoginFailed: if any step of the login fails.
        :raises VolumeDeviceNotFound: if device_scan_attempts is positive and
                                      the device doesn't show up in time.
        :returns: switchboard.initiator.connection.ConnectResponse
        """
        response = connection.ConnectResponse(
            path=self.get_device_path(request),
            data=connection.ISCSIConnectResponse())

        # Make sure we're not already attached
        if self.wait_for_path_to_exist(response.path, 0):
            self._log.debug('%s is already attached', response.path)
            return response

        self._linuxiscsi.connect_to_target(request.target_iqn,
                                           request.target_portal,
                                           self.config.iface,
                                           username=request.auth_username,
                                           password=request.auth_password,
                                           use_chap=request.use_chap)

        if (self.device_scan_attempts > 0 and
                not self.wait_for_path_to_exist(response.path,
                                                self.device_scan_attempts)):
            raise exception.VolumeDeviceNotFound(device=response.path)

        return response
