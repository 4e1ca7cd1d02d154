# Copyright 2013 OpenStack Foundation.
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
"""Switchboard Connector objects for each supported transport protocol.

.. module: connector

The connectors here are responsible for attaching volumes for each of the
supported transport protocols.
"""

import platform
import socket
import sys

from oslo_log import log as logging
from oslo_utils import importutils

from switchboard import exception
from switchboard.i18n import _
from switchboard import initiator
from switchboard.initiator import linuxscsi
from switchboard import utils

LOG = logging.getLogger(__name__)

# List of connectors to call when getting
# the connector properties for a host
connector_list = [
    'switchboard.initiator.connectors.iscsi.ISCSIConnector',
]

# Mappings used to determine who to construct in the factory.  Every
# protocol is listed, the ones without an implementation map to None.
_connector_mapping = {
    initiator.ISCSI:
        'switchboard.initiator.connectors.iscsi.ISCSIConnector',
    initiator.FIBRE_CHANNEL: None,
    initiator.NBD: None,
}


def get_connector_mapping():
    return _connector_mapping


@utils.trace
def get_connector_properties(root_helper, my_ip, host=None, execute=None):
    """Get the connection properties for all protocols.

    :param root_helper: The command prefix for executing as root.
    :type root_helper: str
    :param my_ip: The IP address of the local host.
    :type my_ip: str
    :param host: hostname.
    :param execute: execute helper.
    :returns: dict containing all of the collected initiator values.
    """
    props = {}
    props['platform'] = platform.machine()
    props['os_type'] = sys.platform
    props['ip'] = my_ip
    props['host'] = host if host else socket.gethostname()

    for item in connector_list:
        connector = importutils.import_class(item)

        if (utils.platform_matches(props['platform'], connector.platform) and
                utils.os_matches(props['os_type'], connector.os_type)):
            props = utils.merge_dict(props,
                                     connector.get_connector_properties(
                                         root_helper,
                                         host=host,
                                         execute=execute))

    return props


@utils.trace
def get_blk_device(target, root_helper=None, execute=None, log=None):
    """Find the block device of a SCSI target, including multipath.

    Doesn't need a connector, so nothing is probed besides the SCSI devices.
    """
    scsi = linuxscsi.LinuxSCSI(root_helper, execute=execute, log=log)
    return scsi.get_blk_device(target)


class InitiatorConnector(object):

    @staticmethod
    def factory(protocol, root_helper, execute=None,
                device_scan_attempts=initiator.DEVICE_SCAN_ATTEMPTS_DEFAULT,
                *args, **kwargs):
        """Build a Connector object based upon protocol."""

        LOG.debug("Factory for %(protocol)s", {'protocol': protocol})
        _mapping = get_connector_mapping()
        if isinstance(protocol, str):
            protocol = protocol.upper()

        if not isinstance(protocol, str) or protocol not in _mapping:
            msg = (_("Invalid InitiatorConnector protocol "
                     "specified %(protocol)s") %
                   dict(protocol=protocol))
            raise exception.InvalidConnectorProtocol(msg)

        connector = _mapping[protocol]
        if not connector:
            LOG.error("No connector implemented for protocol %s", protocol)
            raise exception.ProtocolNotSupported(protocol=protocol)

        kwargs.update(
            {'root_helper': root_helper,
             'execute': execute,
             'device_scan_attempts': device_scan_attempts,
             })

        conn_cls = importutils.import_class(connector)
        return conn_cls(*args, **kwargs)
