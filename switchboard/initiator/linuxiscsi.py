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

"""Linux open-iscsi session management through iscsiadm.

A login walks through these states:

    UNAUTHENTICATED -> NODE_RECORD_CREATED -> AUTH_CONFIGURED -> LOGGED_IN

AUTH_CONFIGURED is skipped when the target doesn't use CHAP.  Nothing is kept
in memory, the node records iscsiadm persists are the only state.

A failed step stops the login and nothing done before it is undone: the node
record and any partial CHAP settings stay in iscsiadm's database, so calling
the login again resumes from them instead of starting with a clean record.
"""

import enum
from typing import Optional, Tuple  # noqa: H301

from oslo_concurrency import processutils as putils
from oslo_log import log as logging
from oslo_utils import excutils

from switchboard import exception
from switchboard import executor

LOG = logging.getLogger(__name__)

MASK = '***'


class SessionState(enum.Enum):
    UNAUTHENTICATED = 'unauthenticated'
    NODE_RECORD_CREATED = 'node record created'
    AUTH_CONFIGURED = 'auth configured'
    LOGGED_IN = 'logged in'


class LinuxISCSI(executor.Executor):

    def __init__(self, root_helper, execute=None, log=None,
                 *args, **kwargs):
        super(LinuxISCSI, self).__init__(root_helper, execute=execute,
                                         *args, **kwargs)
        self._log = log or LOG

    def _run_iscsiadm_bare(self, iscsi_command, secret=None,
                           **kwargs) -> Tuple[str, str]:
        try:
            (out, err) = self._root_execute('iscsiadm', *iscsi_command,
                                            **kwargs)
        except putils.ProcessExecutionError as exc:
            with excutils.save_and_reraise_exception():
                if secret and exc.cmd:
                    exc.cmd = exc.cmd.replace(secret, MASK)
                self._log.debug('iscsiadm %(iscsi_command)s failed: '
                                'exit_code=%(code)s stdout=%(out)s '
                                'stderr=%(err)s',
                                {'iscsi_command': self._mask(iscsi_command,
                                                             secret),
                                 'code': exc.exit_code,
                                 'out': exc.stdout, 'err': exc.stderr})

        self._log.debug("iscsiadm %(iscsi_command)s: stdout=%(out)s "
                        "stderr=%(err)s",
                        {'iscsi_command': self._mask(iscsi_command, secret),
                         'out': out, 'err': err})
        return (out, err)

    @staticmethod
    def _mask(iscsi_command, secret):
        if not secret:
            return tuple(iscsi_command)
        return tuple(arg.replace(secret, MASK) for arg in iscsi_command)

    def _run_iscsiadm(self, target_iqn, target_portal, iscsi_command,
                      **kwargs) -> Tuple[str, str]:
        return self._run_iscsiadm_bare(
            ('-m', 'node', '-T', target_iqn, '-p', target_portal) +
            tuple(iscsi_command), **kwargs)

    def _iscsiadm_update(self, target_iqn, target_portal, property_key,
                         property_value, secret=None):
        iscsi_command = ('--op=update', '--name', property_key,
                         '--value=' + property_value)
        return self._run_iscsiadm(target_iqn, target_portal, iscsi_command,
                                  secret=secret)

    def show_iface(self, iface: str) -> Tuple[str, str]:
        """Show an iSCSI interface, raises if iscsiadm can't read it."""
        return self._run_iscsiadm_bare(('-m', 'iface', '-I', iface,
                                        '-o', 'show'))

    def create_node(self, target_iqn: str, target_portal: str,
                    iface: str) -> None:
        self._run_iscsiadm(target_iqn, target_portal,
                           ('--interface', iface, '--op', 'new'))

    def set_chap_auth(self, target_iqn: str, target_portal: str,
                      username: str, password: str) -> None:
        """Store CHAP credentials in an existing node record.

        Method, username and password are three separate updates done in
        that order, the first failure stops the rest.
        """
        self._iscsiadm_update(target_iqn, target_portal,
                              'node.session.auth.authmethod', 'CHAP')
        self._iscsiadm_update(target_iqn, target_portal,
                              'node.session.auth.username', username or '')
        self._iscsiadm_update(target_iqn, target_portal,
                              'node.session.auth.password', password or '',
                              secret=password)

    def login(self, target_iqn: str, target_portal: str) -> None:
        self._run_iscsiadm(target_iqn, target_portal, ('--login',))

    def connect_to_target(self, target_iqn: str, target_portal: str,
                          iface: str, username: Optional[str] = None,
                          password: Optional[str] = None,
                          use_chap: bool = False) -> SessionState:
        """Create the node record, configure CHAP if needed and log in.

        :raises ISCSILoginFailed: when any iscsiadm call fails, chained to the
                                  ProcessExecutionError that holds its output.
        :returns: SessionState.LOGGED_IN
        """
        state = SessionState.UNAUTHENTICATED
        try:
            self.create_node(target_iqn, target_portal, iface)
            state = SessionState.NODE_RECORD_CREATED

            if use_chap:
                self.set_chap_auth(target_iqn, target_portal,
                                   username, password)
                state = SessionState.AUTH_CONFIGURED

            self._log.debug('Attempting login to %(iqn)s on %(portal)s',
                            {'iqn': target_iqn, 'portal': target_portal})
            self.login(target_iqn, target_portal)
            state = SessionState.LOGGED_IN
        except putils.ProcessExecutionError as exc:
            reason = exc.stderr or exc.stdout or exc.description
            if password:
                reason = (reason or '').replace(password, MASK)
            self._log.error('Login to iSCSI target %(iqn)s on portal '
                            '%(portal)s failed after reaching %(state)s '
                            '(exit code %(code)s): %(reason)s',
                            {'iqn': target_iqn, 'portal': target_portal,
                             'state': state.value, 'code': exc.exit_code,
                             'reason': reason})
            raise exception.ISCSILoginFailed(target_iqn=target_iqn,
                                             target_portal=target_portal,
                                             state=state.value,
                                             reason=reason) from exc

        self._log.info('Logged in to iSCSI target %(iqn)s on portal '
                       '%(portal)s', {'iqn': target_iqn,
                                      'portal': target_portal})
        return state
