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
"""Connection requests, responses and connector configuration.

Requests are a closed family: every transport has its own request class,
tagged with the transport name in its ``protocol`` class attribute, so a
connector receives fields it knows about instead of an opaque payload.
"""

import dataclasses
from typing import ClassVar, Optional, Tuple, Union  # noqa: H301

from switchboard import exception
from switchboard.i18n import _
from switchboard import initiator


@dataclasses.dataclass(frozen=True)
class ISCSIConnectorConfig:
    """Host side identity of an iSCSI connector, read once at build time."""
    initiator_iqns: Tuple[str, ...] = ()
    iface: str = 'default'
    host_name: str = ''


@dataclasses.dataclass(frozen=True)
class ConnectRequest:
    protocol: ClassVar[str]


@dataclasses.dataclass(frozen=True)
class ISCSIConnectRequest(ConnectRequest):
    """Describes the iSCSI volume we wish to connect."""
    protocol: ClassVar[str] = initiator.ISCSI

    target_portal: str
    target_iqn: str
    target_lun: int = 0
    auth_method: Optional[str] = None
    auth_username: Optional[str] = None
    auth_password: Optional[str] = dataclasses.field(default=None,
                                                     repr=False)

    @property
    def use_chap(self) -> bool:
        return (self.auth_method or '').lower() == 'chap'

    @classmethod
    def from_properties(cls, connection_properties: dict):
        """Build a request from a connection properties dictionary.

        The dictionary uses the usual target_portal, target_iqn,
        target_lun, auth_method, auth_username and auth_password keys.
        """
        missing = [key for key in ('target_portal', 'target_iqn')
                   if not connection_properties.get(key)]
        if missing:
            msg = (_("Missing iSCSI connection properties: %s") %
                   ', '.join(missing))
            raise exception.InvalidParameterValue(err=msg)

        try:
            lun = int(connection_properties.get('target_lun') or 0)
        except (TypeError, ValueError):
            msg = (_("Invalid target_lun %s") %
                   connection_properties.get('target_lun'))
            raise exception.InvalidParameterValue(err=msg)

        return cls(target_portal=connection_properties['target_portal'],
                   target_iqn=connection_properties['target_iqn'],
                   target_lun=lun,
                   auth_method=connection_properties.get('auth_method'),
                   auth_username=connection_properties.get('auth_username'),
                   auth_password=connection_properties.get('auth_password'))


@dataclasses.dataclass(frozen=True)
class ISCSIConnectResponse:
    """iSCSI specific part of a connect response, nothing to add yet."""
    protocol: ClassVar[str] = initiator.ISCSI


DriverResponse = Union[ISCSIConnectResponse]


@dataclasses.dataclass
class ConnectResponse:
    path: str
    multipath_device: Optional[str] = None
    block_device: Optional[str] = None
    data: Optional[DriverResponse] = None

    def to_dict(self) -> dict:
        device_info = {'type': 'block', 'path': self.path}
        if self.multipath_device:
            device_info['multipath_device'] = self.multipath_device
        if self.block_device:
            device_info['block_device'] = self.block_device
        return device_info
