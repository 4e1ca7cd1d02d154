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

"""Command gateway hook shared by everything that runs host utilities.

Components take an ``execute`` callable, rootwrap's by default, that tests
and callers with their own privilege handling can replace.  Any replacement
follows the gateway contract: it returns ``(stdout, stderr)`` and raises
``ProcessExecutionError`` when the command fails.
"""

from typing import Tuple

from oslo_concurrency import processutils as putils
from oslo_utils import encodeutils

from switchboard.privileged import rootwrap as priv_rootwrap

# ProcessExecutionError attributes that may hold raw command output
ERROR_OUTPUT_FIELDS = ('stdout', 'stderr', 'cmd', 'description')


def decode_output(value) -> str:
    """Command output as text, None and undecodable bytes are dropped."""
    if not value:
        return ''
    return encodeutils.safe_decode(value, errors='ignore')


class Executor(object):
    def __init__(self, root_helper, execute=None,
                 *args, **kwargs):
        if execute is None:
            execute = priv_rootwrap.execute
        self.set_execute(execute)
        self.set_root_helper(root_helper)

    @staticmethod
    def _decode_error(exc):
        for field in ERROR_OUTPUT_FIELDS:
            value = getattr(exc, field, None)
            if value:
                setattr(exc, field, decode_output(value))

    def _execute(self, *cmd, **kwargs) -> Tuple[str, str]:
        """Run a command, always returning text stdout and stderr."""
        try:
            stdout, stderr = self.__execute(*cmd, **kwargs)
        except putils.ProcessExecutionError as exc:
            self._decode_error(exc)
            raise
        return decode_output(stdout), decode_output(stderr)

    def _root_execute(self, *cmd, **kwargs) -> Tuple[str, str]:
        """Run a command as root through this object's root helper."""
        return self._execute(*cmd, run_as_root=True,
                             root_helper=self._root_helper, **kwargs)

    def set_execute(self, execute):
        self.__execute = execute

    def set_root_helper(self, helper):
        self._root_helper = helper
