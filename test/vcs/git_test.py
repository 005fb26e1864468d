# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0


import pytest

import vcs.base
import vcs.git as examinee
from vcs.git import (
    AgentCleanFilesPolicy,
    AgentCleanPolicy,
    AuthMethod,
    CheckoutSubmodules,
    UserNameStyle,
)


@pytest.fixture
def fully_configured():
    def init(root):
        root.url = 'https://github.com/gardener/cc-utils'
        root.push_url = 'git@github.com:gardener/cc-utils.git'
        root.branch = 'refs/heads/master'
        root.branch_spec = '+:refs/heads/*'
        root.use_tags_as_branches = True
        root.user_name_style = UserNameStyle.EMAIL
        root.checkout_submodules = CheckoutSubmodules.IGNORE
        root.user_for_tags = 'ci <ci@example.org>'
        root.server_side_auto_crlf = True
        root.agent_git_path = '/usr/bin/git'
        root.agent_clean_policy = AgentCleanPolicy.ON_BRANCH_CHANGE
        root.agent_clean_files_policy = AgentCleanFilesPolicy.ALL_UNTRACKED
        root.use_mirrors = True
        root.auth_method = AuthMethod.PRIVATE_KEY_FILE
        root.user_name = 'git'
        root.password = 'pw'
        root.uploaded_key = 'deploy-key'
        root.custom_key_path = '/home/ci/.ssh/id_rsa'
        root.passphrase = 'phrase'
        root.ignore_known_hosts = True

    return examinee.GitVcsRoot(init, id='CcUtils', name='cc-utils')


def test_store_keys(fully_configured):
    assert fully_configured.params == {
        'url': 'https://github.com/gardener/cc-utils',
        'push_url': 'git@github.com:gardener/cc-utils.git',
        'branch': 'refs/heads/master',
        'teamcity:branchSpec': '+:refs/heads/*',
        'reportTagRevisions': 'true',
        'usernameStyle': 'EMAIL',
        'submoduleCheckout': 'IGNORE',
        'userForTags': 'ci <ci@example.org>',
        'serverSideAutoCrlf': 'true',
        'agentGitPath': '/usr/bin/git',
        'agentCleanPolicy': 'ON_BRANCH_CHANGE',
        'agentCleanFilesPolicy': 'ALL_UNTRACKED',
        'useAlternates': 'true',
        'authMethod': 'PRIVATE_KEY_FILE',
        'username': 'git',
        'secure:password': 'pw',
        'teamcitySshKey': 'deploy-key',
        'privateKeyPath': '/home/ci/.ssh/id_rsa',
        'secure:passphrase': 'phrase',
        'ignoreKnownHosts': 'true',
    }
    assert fully_configured.unknown_parameters() == []


def test_values_read_back(fully_configured):
    assert fully_configured.url == 'https://github.com/gardener/cc-utils'
    assert fully_configured.branch_spec == '+:refs/heads/*'
    assert fully_configured.use_tags_as_branches is True
    assert fully_configured.user_name_style is UserNameStyle.EMAIL
    assert fully_configured.checkout_submodules is CheckoutSubmodules.IGNORE
    assert fully_configured.agent_clean_policy is AgentCleanPolicy.ON_BRANCH_CHANGE
    assert fully_configured.agent_clean_files_policy is AgentCleanFilesPolicy.ALL_UNTRACKED
    assert fully_configured.auth_method is AuthMethod.PRIVATE_KEY_FILE
    assert fully_configured.user_name == 'git'
    assert fully_configured.passphrase == 'phrase'


def test_type_discriminator():
    def init(root):
        root.params['type'] = 'something.else'

    root = examinee.GitVcsRoot(init)

    assert root.type == 'jetbrains.git'
    assert examinee.GitVcsRoot().type == 'jetbrains.git'


def test_fresh_root_is_empty():
    root = examinee.GitVcsRoot()

    assert root.params == {}
    assert root.url is None
    assert root.auth_method is None
    assert root.use_mirrors is False


def test_auth_method():
    root = examinee.GitVcsRoot(auth_method=AuthMethod.TEAMCITY_SSH_KEY)

    assert root.auth_method is AuthMethod.TEAMCITY_SSH_KEY
    assert root.params == {'authMethod': 'TEAMCITY_SSH_KEY'}


def test_use_mirrors_is_stored_as_use_alternates():
    root = examinee.GitVcsRoot(use_mirrors=True)

    assert root.params == {'useAlternates': 'true'}
    assert 'useMirrors' not in root.params


def test_enums_are_reachable_through_root_class():
    assert examinee.GitVcsRoot.AuthMethod is AuthMethod
    assert examinee.GitVcsRoot.AgentCleanPolicy.ALWAYS is AgentCleanPolicy.ALWAYS
    assert [m.name for m in examinee.GitVcsRoot.CheckoutSubmodules] == [
        'SUBMODULES_CHECKOUT',
        'IGNORE',
    ]


def test_unrecognised_enum_value_fails_on_access():
    root = examinee.GitVcsRoot(params={'authMethod': 'ACCESS_TOKEN'})

    with pytest.raises(LookupError):
        root.auth_method

    # other fields remain readable
    root.url = 'https://x'
    assert root.url == 'https://x'


def test_base_is_copied_not_aliased():
    base = examinee.GitVcsRoot(url='https://x')

    seen = []

    def init(root):
        seen.append(root.url)
        root.url = 'https://y'

    root = examinee.GitVcsRoot(init, base=base)

    assert seen == ['https://x']
    assert root.url == 'https://y'
    assert base.url == 'https://x'


def test_empty_string_and_false_read_like_unset():
    root = examinee.GitVcsRoot(branch='', server_side_auto_crlf=False)

    assert root.branch is None
    assert root.server_side_auto_crlf is examinee.GitVcsRoot().server_side_auto_crlf


def test_secure_parameters(fully_configured):
    assert fully_configured.secure_parameters() == ['secure:password', 'secure:passphrase']
    redacted = fully_configured.redacted_params()
    assert redacted['secure:password'] == vcs.base.REDACTED
    assert redacted['username'] == 'git'


@pytest.mark.parametrize('auth_method,expected', [
    (None, False),
    (AuthMethod.ANONYMOUS, False),
    (AuthMethod.PASSWORD, False),
    (AuthMethod.TEAMCITY_SSH_KEY, True),
    (AuthMethod.PRIVATE_KEY_DEFAULT, True),
    (AuthMethod.PRIVATE_KEY_FILE, True),
])
def test_uses_private_key(auth_method, expected):
    root = examinee.GitVcsRoot(auth_method=auth_method)

    assert root.uses_private_key() is expected


def test_effective_push_url():
    root = examinee.GitVcsRoot(url='https://x')
    assert root.effective_push_url() == 'https://x'

    root.push_url = 'ssh://git@x'
    assert root.effective_push_url() == 'ssh://git@x'


def _sample_values(parameter):
    if isinstance(parameter, vcs.base.BooleanParameter):
        return [True, False]
    if isinstance(parameter, vcs.base.EnumParameter):
        return list(parameter.enum_type)
    return [f'{parameter.attribute_name}-value']


@pytest.mark.parametrize('attr,value', [
    (attr, value)
    for attr, parameter in examinee.GitVcsRoot.declared_parameters().items()
    for value in _sample_values(parameter)
])
def test_every_field_reads_back(attr, value):
    root = examinee.GitVcsRoot()

    setattr(root, attr, value)

    assert getattr(root, attr) == value
    assert list(root.params) == [examinee.GitVcsRoot.declared_parameters()[attr].key]
    assert all(isinstance(v, str) for v in root.params.values())


def test_declares_all_fields():
    assert len(examinee.GitVcsRoot.declared_parameters()) == 20


def test_base_of_other_type_is_rejected():
    svn_root = vcs.base.VcsRoot(type_name='svn', params={'url': 'svn://x'})

    with pytest.raises(ValueError):
        examinee.GitVcsRoot(base=svn_root)


def test_string_flag_is_rejected():
    with pytest.raises(TypeError):
        examinee.GitVcsRoot(use_mirrors='false')

    with pytest.raises(TypeError):
        examinee.GitVcsRoot(url=42)
