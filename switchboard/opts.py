# Copyright (c) 2022, Red Hat, Inc.
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
from oslo_config import cfg


_opts = [
    cfg.StrOpt('iscsi_iface',
               default='default',
               help='iSCSI interface used to create node records when a '
                    'connector is built without an explicit one. The '
                    'interface must be readable with ``iscsiadm -m iface '
                    '-I <iface> -o show``. Default value is "default".'),
    cfg.IntOpt('device_scan_interval',
               default=2,
               min=1,
               help='Seconds to wait between two checks for a device path '
                    'to show up on the host. The number of checks is given '
                    'by the caller. Default value is 2.'),
]

cfg.CONF.register_opts(_opts, group='switchboard')


def list_opts():
    """oslo.config.opts entrypoint for sample config generation."""
    return [('switchboard', _opts)]
