# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import enum

from vcs.base import (
    VcsRoot,
    boolean_parameter,
    enum_parameter,
    string_parameter,
)


class AgentCleanPolicy(enum.StrEnum):
    NEVER = 'NEVER'
    ALWAYS = 'ALWAYS'
    ON_BRANCH_CHANGE = 'ON_BRANCH_CHANGE'


class AgentCleanFilesPolicy(enum.StrEnum):
    IGNORED_ONLY = 'IGNORED_ONLY'
    NON_IGNORED_ONLY = 'NON_IGNORED_ONLY'
    ALL_UNTRACKED = 'ALL_UNTRACKED'


class UserNameStyle(enum.StrEnum):
    NAME = 'NAME'
    USERID = 'USERID'
    EMAIL = 'EMAIL'
    FULL = 'FULL'


class CheckoutSubmodules(enum.StrEnum):
    SUBMODULES_CHECKOUT = 'SUBMODULES_CHECKOUT'
    IGNORE = 'IGNORE'


class AuthMethod(enum.StrEnum):
    ANONYMOUS = 'ANONYMOUS'
    PASSWORD = 'PASSWORD'
    TEAMCITY_SSH_KEY = 'TEAMCITY_SSH_KEY'
    PRIVATE_KEY_DEFAULT = 'PRIVATE_KEY_DEFAULT'
    PRIVATE_KEY_FILE = 'PRIVATE_KEY_FILE'


class GitVcsRoot(VcsRoot):
    '''
    VCS root fetching from a git repository.

    Example:
        def init(root):
            root.url = 'https://github.com/gardener/cc-utils'
            root.branch = 'refs/heads/master'
            root.auth_method = GitVcsRoot.AuthMethod.PASSWORD

        GitVcsRoot(init, id='CcUtils', name='cc-utils')

    `password` and `passphrase` are stored under `secure:`-prefixed keys; the server treats
    those as secrets.
    '''
    TYPE = 'jetbrains.git'

    AgentCleanPolicy = AgentCleanPolicy
    AgentCleanFilesPolicy = AgentCleanFilesPolicy
    UserNameStyle = UserNameStyle
    CheckoutSubmodules = CheckoutSubmodules
    AuthMethod = AuthMethod

    url = string_parameter()
    push_url = string_parameter('push_url')
    branch = string_parameter()
    branch_spec = string_parameter('teamcity:branchSpec')
    use_tags_as_branches = boolean_parameter('reportTagRevisions')
    user_name_style = enum_parameter(UserNameStyle, 'usernameStyle')
    checkout_submodules = enum_parameter(CheckoutSubmodules, 'submoduleCheckout')
    user_for_tags = string_parameter()
    server_side_auto_crlf = boolean_parameter('serverSideAutoCrlf')
    agent_git_path = string_parameter()
    agent_clean_policy = enum_parameter(AgentCleanPolicy)
    agent_clean_files_policy = enum_parameter(AgentCleanFilesPolicy)
    use_mirrors = boolean_parameter('useAlternates')
    auth_method = enum_parameter(AuthMethod)
    user_name = string_parameter('username')
    password = string_parameter('secure:password')
    uploaded_key = string_parameter('teamcitySshKey')
    custom_key_path = string_parameter('privateKeyPath')
    passphrase = string_parameter('secure:passphrase')
    ignore_known_hosts = boolean_parameter()

    def uses_private_key(self) -> bool:
        return self.auth_method in (
            AuthMethod.TEAMCITY_SSH_KEY,
            AuthMethod.PRIVATE_KEY_DEFAULT,
            AuthMethod.PRIVATE_KEY_FILE,
        )

    def effective_push_url(self) -> str | None:
        return self.push_url or self.url
