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

"""Process command gateway.

Every external utility switchboard depends on (iscsiadm, multipath, lsscsi,
lsblk, stat, hostname, cat) is run through `execute()`.  Commands that need
root are sent to the privsep daemon through `execute_root()`, everything else
runs in-process with oslo.concurrency.

Both paths return a ``(stdout, stderr)`` tuple and raise
``processutils.ProcessExecutionError`` on a non-zero exit code or when the
binary cannot be launched at all.
"""

from oslo_concurrency import processutils as putils
from oslo_utils import strutils

from switchboard import privileged


def custom_execute(*cmd, **kwargs):
    """Run a command with oslo's execute, without retries unless asked."""
    kwargs.setdefault('attempts', 1)
    kwargs.setdefault('delay_on_retry', False)
    return putils.execute(*cmd, **kwargs)


def execute(*cmd, **kwargs):
    """NB: Raises processutils.ProcessExecutionError on failure."""
    run_as_root = kwargs.pop('run_as_root', False)
    kwargs.pop('root_helper', None)
    try:
        if run_as_root:
            return execute_root(*cmd, **kwargs)
        else:
            return custom_execute(*cmd, **kwargs)
    except OSError as e:
        # Note:
        #  putils.execute('bogus', run_as_root=True)
        # raises ProcessExecutionError(exit_code=1) (because there's a
        # "sh -c bogus" involved in there somewhere, but:
        #  putils.execute('bogus', run_as_root=False)
        # raises OSError(not found).
        #
        # Callers only catch ProcessExecutionError, so a binary that can't be
        # launched is reported the same way as one that failed.
        sanitized_cmd = strutils.mask_password(' '.join(cmd))
        raise putils.ProcessExecutionError(
            cmd=sanitized_cmd, description=str(e))


# See comment on `execute`
@privileged.default.entrypoint
def execute_root(*cmd, **kwargs):
    """NB: Raises processutils.ProcessExecutionError/OSError on failure."""
    return custom_execute(*cmd, shell=False, run_as_root=False, **kwargs)
