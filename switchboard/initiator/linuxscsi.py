# (c) Copyright 2013 Hewlett-Packard Development Company, L.P.
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

"""Generic linux scsi subsystem and Multipath utilities.

   Note, this is not iSCSI.
"""
from typing import Optional

from oslo_concurrency import processutils as putils
from oslo_config import cfg
from oslo_log import log as logging

from switchboard import exception
from switchboard import executor
from switchboard.i18n import _
from switchboard import opts  # noqa: F401
from switchboard import utils

LOG = logging.getLogger(__name__)
CONF = cfg.CONF

MULTIPATH_VALID_DEVICE = 'is a valid multipath device'
MAPPER_PATH = '/dev/mapper/'


class LinuxSCSI(executor.Executor):

    def __init__(self, root_helper, execute=None, log=None,
                 *args, **kwargs):
        super(LinuxSCSI, self).__init__(root_helper, execute=execute,
                                        *args, **kwargs)
        self._log = log or LOG

    def path_exists(self, path: str) -> bool:
        """Probe a path with stat, a zero exit code means it exists."""
        try:
            self._root_execute('stat', path)
        except putils.ProcessExecutionError:
            return False
        return True

    def wait_for_path_to_exist(self, path: str, max_retries: int,
                               interval: Optional[float] = None) -> bool:
        """Check up to max_retries times if a path exists.

        Waits a fixed interval, device_scan_interval seconds by default,
        between checks.  With max_retries of 0 the path is not checked at
        all and False is returned.

        :param path: The file system path to look for.
        :type path: str
        :param max_retries: Maximum number of checks.
        :type max_retries: int
        :returns: bool
        """
        if interval is None:
            interval = CONF.switchboard.device_scan_interval
        found = utils.poll_until_true(lambda: self.path_exists(path),
                                      max_retries, interval, log=self._log)
        if max_retries > 0 and not found:
            self._log.debug('%(path)s not found after %(tries)s checks.',
                            {'path': path, 'tries': max_retries})
        return found

    def is_multipath(self, device: str) -> bool:
        """Ask multipath if a device is part of a multipath map.

        A failure to run the check is not an error, the device is just
        treated as a single path one.
        """
        try:
            out, _err = self._root_execute('multipath', '-c', device)
        except putils.ProcessExecutionError as exc:
            self._log.error('multipath check failed for %(device)s, '
                            'multipath not running? %(err)s',
                            {'device': device, 'err': exc.stdout or exc})
            return False

        self._log.debug('multipath -c %(device)s: %(out)s',
                        {'device': device, 'out': out})
        return MULTIPATH_VALID_DEVICE in (out or '')

    def get_multipath_device_name(self, device: str) -> Optional[str]:
        """Get the device mapper name stacked on top of a raw device.

        lsblk lists the device itself on the first line and its holders
        after it, ie:
            sdb
            mpatha

        :returns: The mapper name or None if lsblk shows no holder.
        """
        out, _err = self._root_execute('lsblk', device, '-n', '-o', 'name',
                                       '-r')
        lines = (out or '').strip().split('\n')
        if len(lines) > 1:
            return lines[1].strip()
        self._log.error('Unable to parse lsblk output (%s)', lines)
        return None

    @utils.trace
    def get_blk_device(self, target: str) -> str:
        """Find the block device file of a SCSI target, including multipath.

        Uses lsscsi -t, where each line ends with the device name, ie:
            [3:0:0:1]  disk  iqn.2010-10.org.openstack:vol-1,t,0x1  /dev/sdb

        The last line mentioning the target wins.  If the device is part of
        a multipath map the mapper device is returned instead, falling back
        to the raw device when the map name can't be found.

        :param target: Target identifier to look for, ie: a target IQN.
        :type target: str
        :raises InvalidParameterValue: if target is empty.
        :raises BlockDeviceNotFound: if no lsscsi line mentions the target.
        :returns: str
        """
        if not target:
            raise exception.InvalidParameterValue(
                err=_('A SCSI target is required to find its block device'))

        out, _err = self._root_execute('lsscsi', '-t')

        blk_dev = ''
        for entry in out.split('\n'):
            fields = entry.split()
            if fields and target in entry:
                blk_dev = fields[-1]
        if not blk_dev:
            self._log.error('Unable to find block device for %s', target)
            raise exception.BlockDeviceNotFound(target=target)

        if self.is_multipath(blk_dev):
            self._log.info('Multipath detected for %s', blk_dev)
            mpath = self.get_multipath_device_name(blk_dev)
            if mpath:
                self._log.info('Parsed %(dev)s to extract mp device %(mp)s',
                               {'dev': blk_dev, 'mp': mpath})
                return MAPPER_PATH + mpath
        return blk_dev
